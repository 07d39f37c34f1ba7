"""
Integration tests for the KairosDB client.

Full exchanges through httpx.Client with httpx.MockTransport, plus optional
checks against a live KairosDB server (skipped when none is running).
"""
