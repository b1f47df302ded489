from code_assistant.domain.conversation import Exchange
from code_assistant.infrastructure.storage.memory_store import InMemoryHistoryStore


def test_memory_store_append_preserves_order():
    store = InMemoryHistoryStore()
    store.append(Exchange(query="q1", response="r1"))
    store.append(Exchange(query="q2", response="r2"))
    assert [ex.query for ex in store.all()] == ["q1", "q2"]
    assert len(store) == 2


def test_memory_store_all_is_read_only_snapshot():
    store = InMemoryHistoryStore()
    store.append(Exchange(query="q1", response="r1"))
    items = store.all()
    assert isinstance(items, tuple)
    store.append(Exchange(query="q2", response="r2"))
    assert len(items) == 1
    assert len(store.all()) == 2
