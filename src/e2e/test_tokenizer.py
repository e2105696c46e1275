import pytest

import hit.config as CFG
from hit.models import TokenRange
from hit.normalize import iter_tokens, normalize_token


def _spans(text: str):
    return [(tok, rng.start, rng.end) for tok, rng, _ in iter_tokens(text, "doc")]


def test_splits_on_spaces_with_exact_ranges():
    assert _spans("Hello world") == [("Hello", 0, 5), ("world", 6, 11)]


def test_empty_string_yields_nothing():
    assert _spans("") == []
    assert _spans("     ") == []


def test_no_separator_is_one_token_spanning_everything():
    assert _spans("SwiftKey!") == [("SwiftKey!", 0, 9)]


def test_leading_trailing_and_repeated_separators_are_dropped():
    assert _spans("  a  b  ") == [("a", 2, 3), ("b", 5, 6)]


def test_only_the_space_character_splits():
    # tabs and newlines stay inside the token
    assert _spans("great!\nYoyo tab\there") == [("great!\nYoyo", 0, 11), ("tab\there", 12, 20)]


def test_ranges_resolve_to_the_original_substring():
    text = "How amazing app this SwiftKey thing!"
    for tok, rng, ident in iter_tokens(text, "review2"):
        assert ident == "review2"
        assert rng.resolve(text) == tok
        assert len(rng) == len(tok)
    assert TokenRange(21, 29).resolve(text) == "SwiftKey"


def test_tokenizer_is_lazy():
    gen = iter_tokens("a b c", "doc")
    assert next(gen).token == "a"


def test_separator_comes_from_config(monkeypatch):
    monkeypatch.setattr(CFG, "TOKEN_SEPARATOR", ",")
    assert _spans("a,,b c") == [("a", 0, 1), ("b c", 3, 6)]


@pytest.mark.parametrize("raw,expected", [
    ("SwiftKey", "swiftkey"),
    ("swiftkey!", "swiftkey!"),
    ("ÉCOLE", "école"),
    ("it's", "it's"),
])
def test_normalize_only_lowercases(raw, expected):
    assert normalize_token(raw) == expected


@pytest.mark.parametrize("start,end", [(5, 3), (-1, 2)])
def test_invalid_ranges_are_rejected(start, end):
    with pytest.raises(ValueError):
        TokenRange(start, end)


def test_empty_range_is_allowed():
    assert len(TokenRange(4, 4)) == 0
    assert TokenRange(4, 4).resolve("abcdef") == ""
