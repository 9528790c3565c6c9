"""API module for spinwheel.

- Validates inputs, reads/writes the history store
- Returns JSON payloads for the wheel UI
- Every response carries permissive CORS headers
"""
