import pytest

from golutra.contracts import MemoryScope
from golutra.memory.store import MemoryRecord, MemoryStore, MemoryStoreError, storage_key


@pytest.fixture
def store(tmp_path):
    with MemoryStore(tmp_path / "memory.db") as opened:
        yield opened


def make_record(key="k", value="v", scope=MemoryScope.TASK, owner="alice"):
    return MemoryRecord(
        key=key, value=value, scope=scope, owner=owner,
        created_at=10, updated_at=20, access_count=3,
    )


def test_storage_key_format():
    assert storage_key("alice", MemoryScope.GLOBAL, "k") == "glob:alice:k"


def test_put_get_round_trip(store):
    record = make_record()
    store.put(record)
    assert store.get("alice", MemoryScope.TASK, "k") == record


def test_get_missing_returns_none(store):
    assert store.get("alice", MemoryScope.TASK, "nope") is None


def test_scope_is_part_of_the_key(store):
    store.put(make_record(scope=MemoryScope.PRIVATE))
    assert store.get("alice", MemoryScope.GLOBAL, "k") is None


def test_put_replaces_existing(store):
    store.put(make_record(value="old"))
    store.put(make_record(value="new"))
    assert store.get("alice", MemoryScope.TASK, "k").value == "new"
    assert len(store.list_by_scope(MemoryScope.TASK)) == 1


def test_list_by_scope_filters(store):
    store.put(make_record(key="a", scope=MemoryScope.TASK))
    store.put(make_record(key="b", scope=MemoryScope.GLOBAL))
    store.put(make_record(key="c", scope=MemoryScope.TASK, owner="bob"))
    task_keys = sorted(r.key for r in store.list_by_scope(MemoryScope.TASK))
    assert task_keys == ["a", "c"]
    assert [r.key for r in store.list_by_scope(MemoryScope.GLOBAL)] == ["b"]
    assert store.list_by_scope(MemoryScope.PRIVATE) == []


def test_delete_reports_existence(store):
    store.put(make_record())
    assert store.delete("alice", MemoryScope.TASK, "k") is True
    assert store.delete("alice", MemoryScope.TASK, "k") is False
    assert store.get("alice", MemoryScope.TASK, "k") is None


def test_data_persists_across_reopen(tmp_path):
    path = tmp_path / "memory.db"
    record = make_record(value="中文 value")
    with MemoryStore(path) as first:
        first.put(record)
    with MemoryStore(path) as second:
        assert second.get("alice", MemoryScope.TASK, "k") == record


def test_open_directory_fails(tmp_path):
    with pytest.raises(MemoryStoreError):
        MemoryStore(tmp_path)


def test_use_after_close_fails(tmp_path):
    store = MemoryStore(tmp_path / "memory.db")
    store.close()
    with pytest.raises(MemoryStoreError):
        store.get("alice", MemoryScope.TASK, "k")