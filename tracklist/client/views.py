"""
Resource views for Tracklist

Each view owns a CollectionState and keeps it in step with one API
resource:
- refresh() replaces the collection with the server's list
- create/update/delete make one request and merge the returned record
- failures leave local state untouched and set ``last_error``

Design Decisions:
1. Server-assigned ids only: created records are appended as returned
2. Server-authoritative updates: the response record replaces the local
   one, and todo toggles ask the server to invert the flag
3. Recoverable errors: no view method raises on HTTP or transport errors
"""

import os
from typing import Any, Optional

import httpx
from loguru import logger

from .state import CollectionState, Record


DEFAULT_API_URL = "http://127.0.0.1:8000"
DEFAULT_TIMEOUT = 10.0


def create_client(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> httpx.Client:
    """
    Create an HTTP client for the Tracklist API.

    Args:
        base_url: API root. Defaults to TRACKLIST_API_URL.
        timeout: Request timeout in seconds. Defaults to TRACKLIST_CLIENT_TIMEOUT.
    """
    base_url = base_url or os.getenv("TRACKLIST_API_URL", DEFAULT_API_URL)
    if timeout is None:
        timeout = float(os.getenv("TRACKLIST_CLIENT_TIMEOUT", DEFAULT_TIMEOUT))
    return httpx.Client(base_url=base_url, timeout=timeout)


def _diagnostic(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"

    if isinstance(payload, dict) and payload.get("error"):
        message = str(payload["error"])
        if payload.get("detail"):
            message = f"{message}: {payload['detail']}"
        return f"HTTP {response.status_code}: {message}"
    return f"HTTP {response.status_code}"


class ResourceView:
    """Read side of a view: local state plus the list fetch."""

    path: str = ""
    resource: str = "record"

    def __init__(self, client: httpx.Client, path: Optional[str] = None):
        """
        Initialize view.

        Args:
            client: Any httpx.Client pointed at the API root
            path: Resource path, e.g. "/api/todos"
        """
        self.client = client
        if path is not None:
            self.path = path
        self.state = CollectionState()
        self.last_error: Optional[str] = None
        self.loading = False

    @property
    def records(self) -> list[Record]:
        return self.state.records

    def _request(
        self,
        method: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> tuple[bool, Any]:
        """
        Make one request.

        Returns:
            (ok, payload). On failure ``last_error`` holds the diagnostic.
        """
        self.last_error = None
        self.loading = True
        try:
            response = self.client.request(method, self.path, params=params, json=json)
        except httpx.HTTPError as e:
            self.last_error = f"Request failed: {type(e).__name__}: {e}"
            logger.error(f"{method} {self.path} failed: {e}")
            return False, None
        finally:
            self.loading = False

        if not response.is_success:
            self.last_error = _diagnostic(response)
            logger.warning(f"{method} {self.path} -> {self.last_error}")
            return False, None

        try:
            return True, response.json()
        except ValueError:
            self.last_error = f"HTTP {response.status_code}: response was not JSON"
            logger.warning(f"{method} {self.path} returned non-JSON body")
            return False, None

    def refresh(self) -> list[Record]:
        """
        Load the full collection.

        Anything other than a JSON list leaves an empty collection rather
        than stale or malformed state.
        """
        ok, data = self._request("GET")
        if ok and isinstance(data, list):
            self.state.replace(data)
        else:
            if ok:
                self.last_error = f"Expected a list of {self.resource} records"
                logger.error(f"{self.path} returned non-list payload: {type(data).__name__}")
            self.state.replace([])
        return self.records


class MutableResourceView(ResourceView):
    """View over a resource supporting create, partial update and delete."""

    def _accept_record(self, ok: bool, data: Any) -> Optional[Record]:
        if not ok:
            return None
        if not isinstance(data, dict) or "id" not in data:
            self.last_error = f"Expected a {self.resource} record"
            return None
        return data

    def create(self, **fields) -> Optional[Record]:
        """
        Create a record and append the API's copy (with its assigned id).

        Returns:
            The created record, or None on failure.
        """
        ok, data = self._request("POST", json=fields)
        record = self._accept_record(ok, data)
        if record is not None:
            self.state.append(record)
        return record

    def update(self, record_id: int, **fields) -> Optional[Record]:
        """
        Send only the changed fields and substitute the returned record.

        Returns:
            The updated record, or None on failure.
        """
        ok, data = self._request("PATCH", json={"id": record_id, **fields})
        record = self._accept_record(ok, data)
        if record is not None and not self.state.substitute(record):
            # Present on the server but not yet locally
            self.state.insert(record)
        return record

    def delete(self, record_id: int) -> Optional[Record]:
        """
        Delete a record and drop it locally.

        Returns:
            The record as it was before deletion, or None on failure.
        """
        ok, data = self._request("DELETE", params={"id": record_id})
        record = self._accept_record(ok, data)
        if record is not None:
            self.state.remove(record["id"])
        return record


class TodoView(MutableResourceView):
    """Todo list view."""

    path = "/api/todos"
    resource = "todo"

    def add(self, text: str) -> Optional[Record]:
        return self.create(text=text)

    def edit(self, todo_id: int, text: str) -> Optional[Record]:
        return self.update(todo_id, text=text)

    def toggle(self, todo_id: int) -> Optional[Record]:
        """Ask the server to flip ``completed``; the response decides the value."""
        return self.update(todo_id, toggle=True)


class AnimeView(MutableResourceView):
    """Anime watch list view."""

    path = "/api/anime"
    resource = "anime"

    def add(
        self,
        title: str,
        status: str = "plan_to_watch",
        score: Optional[float] = None,
    ) -> Optional[Record]:
        fields: dict[str, Any] = {"title": title, "status": status}
        if score is not None:
            fields["score"] = score
        return self.create(**fields)

    def set_status(self, anime_id: int, status: str) -> Optional[Record]:
        return self.update(anime_id, status=status)

    def set_score(self, anime_id: int, score: float) -> Optional[Record]:
        return self.update(anime_id, score=score)


class BookView(ResourceView):
    """
    Book list view with id lookup and title search.

    Lookups and searches keep their own results and never touch the list.
    """

    path = "/api/books"
    resource = "book"

    def __init__(self, client: httpx.Client, path: Optional[str] = None):
        super().__init__(client, path)
        self.selected: Optional[Record] = None
        self.results: list[Record] = []

    def lookup(self, book_id: int) -> Optional[Record]:
        """Fetch one book by id into ``selected`` (None if not found)."""
        ok, data = self._request("GET", params={"id": book_id})
        self.selected = data if ok and isinstance(data, dict) else None
        return self.selected

    def search(self, title: str) -> list[Record]:
        """Case-insensitive title search into ``results``."""
        title = title.strip()
        if not title:
            self.results = []
            return self.results

        ok, data = self._request("GET", params={"title": title})
        self.results = list(data) if ok and isinstance(data, list) else []
        return self.results
