"""
Tracklist Test Suite

Tests are organized into:
- unit/: Storage, schemas and client state in isolation
- integration/: The HTTP API and client views end to end
"""
