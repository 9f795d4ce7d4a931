"""Unit tests for the in-memory and file-persisted remote stores."""

import asyncio

import pytest

from hosted_translation.io import InMemoryRemoteStore, JsonFileRemoteStore, is_encodable


@pytest.fixture
def store():
    return InMemoryRemoteStore({"prod": {"translations": {"en-fr": {"a": "1", "b": "2", "c": "3"}}}})


class TestInMemoryRemoteStore:
    """Tests for path-addressed reads and writes."""

    def test_get_resolves_nested_path(self, store):
        assert asyncio.run(store.get("prod/translations/en-fr/b")) == "2"

    def test_get_missing_path_returns_none(self, store):
        assert asyncio.run(store.get("prod/translations/de-fr")) is None

    def test_get_returns_copies(self, store):
        subtree = asyncio.run(store.get("prod/translations"))
        subtree["en-fr"]["a"] = "changed"

        assert asyncio.run(store.get("prod/translations/en-fr/a")) == "1"

    def test_query_limits_from_start_and_end(self, store):
        assert asyncio.run(store.query("prod/translations/en-fr", 2)) == {"a": "1", "b": "2"}
        assert asyncio.run(store.query("prod/translations/en-fr", 2, from_end=True)) == {"b": "2", "c": "3"}

    def test_update_merges_and_deletes_children(self, store):
        asyncio.run(store.update("prod/translations/en-fr", {"a": None, "d": "4"}))

        assert asyncio.run(store.get("prod/translations/en-fr")) == {"b": "2", "c": "3", "d": "4"}

    def test_deleting_last_child_prunes_parents(self):
        store = InMemoryRemoteStore({"prod": {"translations": {"en-fr": {"a": "1"}}}})

        asyncio.run(store.delete("prod/translations/en-fr/a"))

        assert asyncio.run(store.get("prod")) is None

    def test_exists(self, store):
        assert asyncio.run(store.exists("prod/translations/en-fr/a"))
        assert not asyncio.run(store.exists("prod/translations/en-fr/z"))

    def test_calls_are_recorded(self, store):
        asyncio.run(store.get("prod/translations"))
        asyncio.run(store.set("prod/x", "y"))

        assert store.calls == [("get", "prod/translations"), ("set", "prod/x")]


class TestIsEncodable:
    """Tests for JSON-like value validation."""

    def test_accepts_nested_scalars(self):
        assert is_encodable({"a": [1, 2.5, "x", True, None], "b": {"c": "d"}})

    def test_rejects_objects_and_non_string_keys(self):
        assert not is_encodable({"a": object()})
        assert not is_encodable({1: "a"})


class TestJsonFileRemoteStore:
    """Tests for the file-persisted store."""

    def test_missing_file_starts_empty(self, tmp_path):
        store = JsonFileRemoteStore(tmp_path / "store.json")

        assert asyncio.run(store.get("prod")) is None

    def test_writes_are_visible_to_a_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileRemoteStore(path)
        asyncio.run(store.update("prod/translations/en-fr", {"h1": "a–b", "h2": "c–d"}))
        asyncio.run(store.delete("prod/translations/en-fr/h2"))

        reopened = JsonFileRemoteStore(path)

        assert asyncio.run(reopened.get("prod/translations/en-fr")) == {"h1": "a–b"}

    def test_unreadable_file_starts_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonFileRemoteStore(path)

        assert asyncio.run(store.get("prod")) is None
