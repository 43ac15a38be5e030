"""
Tracklist

Personal tracking service for todos, an anime watch list and books:
- api: FastAPI resource handlers
- storage: SQLAlchemy-backed repositories
- client: local collection state kept in sync with the API
"""

__version__ = "1.0.0"
