"""
Integration tests for the client views against the running app.
"""

import httpx
import pytest

from tracklist.client import AnimeView, BookView, TodoView, create_client


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")


class TestTodoView:
    """TodoView against the real API."""

    def test_refresh_empty(self, sync_client):
        view = TodoView(sync_client)

        assert view.refresh() == []
        assert view.last_error is None
        assert view.loading is False

    def test_add_appends_server_record(self, sync_client):
        view = TodoView(sync_client)

        todo = view.add("  Buy milk ")

        assert todo is not None
        assert isinstance(todo["id"], int)
        assert view.records == [todo]
        assert todo["text"] == "Buy milk"

    def test_toggle_uses_server_value(self, sync_client):
        view = TodoView(sync_client)
        todo = view.add("Flip")

        toggled = view.toggle(todo["id"])

        assert toggled["completed"] is True
        assert view.state.get(todo["id"])["completed"] is True
        assert view.toggle(todo["id"])["completed"] is False

    def test_edit_replaces_local_record(self, sync_client):
        view = TodoView(sync_client)
        todo = view.add("Draft")

        view.edit(todo["id"], "Final")

        assert view.records == [{"id": todo["id"], "text": "Final", "completed": False}]

    def test_delete_removes_record(self, sync_client):
        view = TodoView(sync_client)
        keep = view.add("keep")
        gone = view.add("gone")

        deleted = view.delete(gone["id"])

        assert deleted == gone
        assert view.records == [keep]
        assert TodoView(sync_client).refresh() == [keep]

    def test_failed_create_leaves_state(self, sync_client):
        view = TodoView(sync_client)
        view.add("existing")
        before = list(view.records)

        assert view.add("   ") is None

        assert view.records == before
        assert view.last_error.startswith("HTTP 400")

    def test_failed_delete_keeps_record(self, sync_client):
        view = TodoView(sync_client)
        todo = view.add("stay")

        assert view.delete(todo["id"] + 100) is None

        assert view.records == [todo]
        assert "HTTP 404" in view.last_error

    def test_update_adds_unknown_local_record(self, sync_client):
        """A record updated elsewhere but not yet loaded is added."""
        remote = TodoView(sync_client).add("remote")
        view = TodoView(sync_client)

        record = view.toggle(remote["id"])

        assert view.records == [record]

    def test_unknown_record_lands_in_id_order(self, sync_client):
        other = TodoView(sync_client)
        first, middle, last = other.add("a"), other.add("b"), other.add("c")
        view = TodoView(sync_client)
        view.state.replace([first, last])

        view.toggle(middle["id"])

        assert view.state.ids == [first["id"], middle["id"], last["id"]]

    def test_error_cleared_on_success(self, sync_client):
        view = TodoView(sync_client)
        view.add("")
        assert view.last_error is not None

        view.refresh()

        assert view.last_error is None


class TestAnimeView:
    """AnimeView against the real API."""

    def test_add_and_update(self, sync_client):
        view = AnimeView(sync_client)

        entry = view.add("Frieren")
        assert entry["status"] == "plan_to_watch"
        assert entry["score"] is None

        view.set_status(entry["id"], "watching")
        view.set_score(entry["id"], 9)

        record = view.state.get(entry["id"])
        assert record["status"] == "watching"
        assert record["score"] == 9

    def test_invalid_status_sets_error(self, sync_client):
        view = AnimeView(sync_client)
        entry = view.add("Frieren")

        assert view.set_status(entry["id"], "dropped") is None

        assert view.state.get(entry["id"])["status"] == "plan_to_watch"
        assert view.last_error.startswith("HTTP 400")


class TestBookView:
    """BookView lookups and searches."""

    def test_refresh(self, sync_client, seeded_books):
        view = BookView(sync_client)

        assert view.refresh() == seeded_books

    def test_lookup(self, sync_client, seeded_books):
        view = BookView(sync_client)

        assert view.lookup(seeded_books[0]["id"]) == seeded_books[0]
        assert view.selected == seeded_books[0]

    def test_lookup_missing(self, sync_client, seeded_books):
        view = BookView(sync_client)

        assert view.lookup(999) is None
        assert "HTTP 404" in view.last_error

    def test_search(self, sync_client, seeded_books):
        view = BookView(sync_client)

        results = view.search("kind")

        assert [b["title"] for b in results] == ["Kindred"]
        assert view.records == []

    def test_blank_search_skips_request(self):
        def handler(request):
            pytest.fail("no request expected")

        view = BookView(mock_client(handler))

        assert view.search("   ") == []


class TestViewFailures:
    """Transport failures and malformed payloads."""

    def test_non_list_payload_gives_empty_collection(self):
        view = TodoView(mock_client(lambda request: httpx.Response(200, json={"oops": 1})))
        view.state.replace([{"id": 1, "text": "stale", "completed": False}])

        assert view.refresh() == []
        assert view.last_error is not None

    def test_non_json_body(self):
        view = TodoView(mock_client(lambda request: httpx.Response(200, text="<html>")))

        assert view.refresh() == []
        assert "not JSON" in view.last_error

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        view = TodoView(mock_client(handler))

        assert view.add("x") is None
        assert view.records == []
        assert "ConnectError" in view.last_error
        assert view.loading is False

    def test_record_without_id_rejected(self):
        view = TodoView(mock_client(lambda request: httpx.Response(201, json={"text": "x"})))

        assert view.add("x") is None
        assert view.records == []

    def test_delete_sends_id_in_query(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["id"] = request.url.params.get("id")
            return httpx.Response(200, json={"id": 3, "text": "t", "completed": False})

        view = TodoView(mock_client(handler))
        view.delete(3)

        assert seen == {"method": "DELETE", "id": "3"}

    def test_error_payload_diagnostic(self):
        payload = {"error": "Todo not found", "code": "NOT_FOUND", "detail": "No todo with id 9 exists"}
        view = TodoView(mock_client(lambda request: httpx.Response(404, json=payload)))

        view.toggle(9)

        assert view.last_error == "HTTP 404: Todo not found: No todo with id 9 exists"


class TestCreateClient:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TRACKLIST_API_URL", "http://tracklist.local:9000")
        monkeypatch.setenv("TRACKLIST_CLIENT_TIMEOUT", "2.5")

        with create_client() as client:
            assert client.base_url.host == "tracklist.local"
            assert client.base_url.port == 9000
            assert client.timeout.read == 2.5

    def test_explicit_arguments(self):
        with create_client("http://example.test", timeout=1) as client:
            assert client.base_url.host == "example.test"
            assert client.timeout.read == 1
