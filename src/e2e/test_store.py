import pytest

from hit.models import InputPair
from hit.store import MemoryStore


def test_crud():
    store = MemoryStore([InputPair("hello world", "doc1")])
    assert store.count() == 1
    assert store.get("doc1") == "hello world"

    store.put("doc2", "second")
    assert store.put_many([InputPair("replaced", "doc1"), InputPair("third", "doc3")]) == 2
    assert store.get("doc1") == "replaced"
    assert dict(store.get_many(["doc3", "missing", "doc2"])) == {"doc3": "third", "doc2": "second"}

    store.delete("doc2")
    store.delete("doc2")
    assert store.count() == 2
    with pytest.raises(KeyError):
        store.get("doc2")

    store.close()
    assert store.count() == 0
