"""
Unit tests for the KairosDB client.

Test individual components in isolation:
- Payload and response models
- Builders
- Response interpreter (status classification, body decoding)
- Retry engine (attempt counting, backoff, exhaustion)
- Client facade with mocked transports
"""
