"""
Client-side views for Tracklist.

Local collection state synchronized with the API over httpx.
"""

from tracklist.client.state import CollectionState, Record
from tracklist.client.views import (
    ResourceView,
    MutableResourceView,
    TodoView,
    AnimeView,
    BookView,
    create_client,
)

__all__ = [
    "CollectionState",
    "Record",
    "ResourceView",
    "MutableResourceView",
    "TodoView",
    "AnimeView",
    "BookView",
    "create_client",
]
