"""
Unit tests for client collection state.
"""

from tracklist.client.state import CollectionState


def make_state():
    return CollectionState([
        {"id": 1, "text": "a", "completed": False},
        {"id": 2, "text": "b", "completed": False},
    ])


class TestCollectionState:

    def test_replace_copies_records(self):
        source = [{"id": 7, "text": "x"}]
        state = CollectionState()

        state.replace(source)
        source[0]["text"] = "mutated"

        assert state.get(7)["text"] == "x"

    def test_append_keeps_order(self):
        state = make_state()

        state.append({"id": 9, "text": "c", "completed": False})

        assert state.ids == [1, 2, 9]

    def test_substitute(self):
        state = make_state()

        assert state.substitute({"id": 2, "text": "b", "completed": True}) is True
        assert state.get(2)["completed"] is True
        assert state.ids == [1, 2]

    def test_substitute_missing(self):
        state = make_state()

        assert state.substitute({"id": 3, "text": "c"}) is False
        assert len(state) == 2

    def test_remove(self):
        state = make_state()

        assert state.remove(1) is True
        assert state.remove(1) is False
        assert [r["text"] for r in state] == ["b"]

    def test_get_missing(self):
        assert make_state().get(42) is None

    def test_insert_keeps_id_order(self):
        state = CollectionState([{"id": 2}, {"id": 5}, {"id": 9}])

        state.insert({"id": 7})
        state.insert({"id": 1})
        state.insert({"id": 12})

        assert state.ids == [1, 2, 5, 7, 9, 12]
