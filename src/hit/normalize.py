from __future__ import annotations
from typing import Iterator

from . import config as CFG
from .models import TokenOccurrence, TokenRange


def normalize_token(token: str) -> str:
    """
    The one normalization applied to every key, on insert and on lookup.
    Rules:
      * lowercase only
      * no accent folding, no punctuation stripping ("swiftkey!" stays as is)
    """
    return token.lower()


def iter_tokens(text: str, identifier: str) -> Iterator[TokenOccurrence]:
    """
    Yield (token, range, identifier) for each maximal run of non-separator
    characters in `text`, left to right.
      - only the separator character splits; tabs/newlines stay inside tokens
      - empty runs (leading, trailing or repeated separators) are dropped
      - the token keeps its original case; callers normalize before use
    """
    sep = CFG.TOKEN_SEPARATOR
    n = len(text)
    start = 0
    while start <= n:
        nxt = text.find(sep, start)
        end = n if nxt == -1 else nxt
        if end > start:
            yield TokenOccurrence(text[start:end], TokenRange(start, end), identifier)
        if nxt == -1:
            return
        start = nxt + len(sep)
