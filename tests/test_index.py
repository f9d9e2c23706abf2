import pytest

from golutra.contracts import MemoryScope
from golutra.memory.index import MemoryIndex, tokenize
from golutra.memory.store import MemoryRecord, MemoryStore, storage_key


def record(key, value, owner="alice", scope=MemoryScope.TASK):
    return MemoryRecord(key=key, value=value, scope=scope, owner=owner)


def test_tokenize_splits_and_lowercases():
    assert tokenize("Hello,World", "a bc") == ["hello", "world", "bc"]


def test_tokenize_keeps_single_multibyte_char():
    assert tokenize("中", "") == ["中"]


def test_tokenize_drops_short_tokens():
    assert all(len(t.encode()) >= 2 for t in tokenize("a b c-d.e", "x y"))
    assert tokenize("a b", "c") == []


def test_search_ranks_by_match_count():
    index = MemoryIndex()
    both = record("notes", "rust python")
    one = record("other", "rust")
    index.index_record(one)
    index.index_record(both)
    results = index.search("rust python", 10)
    assert results[0] == storage_key("alice", MemoryScope.TASK, "notes")
    assert set(results) == {
        storage_key("alice", MemoryScope.TASK, "notes"),
        storage_key("alice", MemoryScope.TASK, "other"),
    }


def test_search_respects_limit():
    index = MemoryIndex()
    for name in ("one", "two", "three"):
        index.index_record(record(name, "shared word"))
    assert len(index.search("shared", 2)) == 2


def test_search_without_matches_is_empty():
    index = MemoryIndex()
    index.index_record(record("k", "alpha"))
    assert index.search("omega", 5) == []


def test_remove_record_drops_it_from_results():
    index = MemoryIndex()
    rec = record("k", "alpha beta")
    index.index_record(rec)
    index.remove_record(rec)
    assert index.search("alpha beta", 5) == []


@pytest.mark.parametrize("scope", list(MemoryScope))
def test_rebuild_from_store(tmp_path, scope):
    with MemoryStore(tmp_path / "m.db") as store:
        store.put(record("deploy", "staging cluster", scope=scope))
        index = MemoryIndex()
        index.index_record(record("stale", "staging"))
        index.rebuild_from_store(store)
        assert index.search("staging", 5) == [storage_key("alice", scope, "deploy")]