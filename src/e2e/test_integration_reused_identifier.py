import pytest
from hit.engine import Engine
from hit.models import InputPair, Occurrence, TokenRange

@pytest.mark.e2e
def test_reused_identifier_with_new_text_is_rejected():
    eng = Engine()
    try:
        eng.add([InputPair("SwiftKey rules the world", "r1")])
        with pytest.raises(ValueError):
            eng.add([InputPair("my app", "r1")])
        # nothing from the rejected batch reached the index
        assert eng.lookup("app") is None
        assert eng.occurrences("swiftkey") == [Occurrence("r1", TokenRange(0, 8), "SwiftKey")]
        for occ in eng.occurrences("world"):
            assert occ.text == "world"
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_two_texts_for_one_identifier_in_one_batch_are_rejected():
    eng = Engine()
    try:
        with pytest.raises(ValueError):
            eng.add([("SwiftKey rules", "r1"), ("my app", "r1")])
        assert eng.lookup("swiftkey") is None
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_same_text_again_is_accepted_and_idempotent():
    eng = Engine()
    try:
        eng.add([("SwiftKey rules", "r1")])
        eng.add([("SwiftKey rules", "r1"), ("SwiftKey rules", "r1")])
        assert eng.lookup("swiftkey") == {"r1": [TokenRange(0, 8)]}
        assert [o.text for o in eng.occurrences("swiftkey")] == ["SwiftKey"]
    finally:
        eng.shutdown()
