import pytest

from storage import ALL_ORDERS_KEY
from storage.backends import InMemoryStore, JsonFileStore, StorageCorruptError


def test_in_memory_store_returns_copies():
    store = InMemoryStore()
    store.put("items", [{"id": 1}])

    items = store.get("items")
    items.append({"id": 2})

    assert store.get("items") == [{"id": 1}]
    assert store.get("missing", "fallback") == "fallback"


def test_in_memory_store_rejects_non_json_values():
    store = InMemoryStore()
    with pytest.raises(TypeError):
        store.put("bad", object())


def test_remove_and_reset():
    store = InMemoryStore({"a": 1, "b": 2})
    store.remove("a")
    store.remove("a")  # no-op
    assert store.keys() == ["b"]

    store.reset()
    assert store.keys() == []


def test_json_file_store_is_shared_between_instances(tmp_path):
    path = str(tmp_path / "state.json")
    writer = JsonFileStore(path)
    reader = JsonFileStore(path)

    writer.put(ALL_ORDERS_KEY, [{"id": "ORD-1"}])

    assert reader.get(ALL_ORDERS_KEY) == [{"id": "ORD-1"}]
    assert reader.keys() == [ALL_ORDERS_KEY]


def test_json_file_store_missing_file_is_empty(tmp_path):
    store = JsonFileStore(str(tmp_path / "nothing-here.json"))
    assert store.get(ALL_ORDERS_KEY, []) == []
    assert store.keys() == []


def test_corrupt_file_raises_until_reset(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(str(path))

    with pytest.raises(StorageCorruptError):
        store.get(ALL_ORDERS_KEY)

    store.reset()
    assert store.get(ALL_ORDERS_KEY) is None
    assert not path.exists()
