"""
Test fixtures for the KairosDB client.

Contains sample server bodies:
- query_response.json: successful /api/v1/datapoints/query response
- error_response.json: error envelope returned for an invalid push
"""
