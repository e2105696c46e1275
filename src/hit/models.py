"""
Data models for the token index.

The index itself is built from plain dicts and lists (see the aliases below) so
that merging stays a matter of dict/list union. The small containers here only
give names to the pieces that cross the public API:

- TokenRange: a half-open [start, end) character interval in one source string.
- InputPair: one (text, identifier) pair handed to the indexer.
- TokenOccurrence: a raw token produced by the tokenizer, before normalization.
- TokenIndexPair / ViewTokenCount: rows returned by searches and views.
- Occurrence: a range resolved back against its stored source text.

A range is only meaningful for the exact string it was produced from. The index
never keeps that string; resolving ranges is up to the caller (or the Engine,
which keeps texts in a store).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, NamedTuple


@dataclass(frozen=True, order=True, slots=True)
class TokenRange:
    """
    Half-open [start, end) interval over code-point positions.

    Ordering is by (start, end), which is what keeps a merged range list
    ascending by lower bound with exact duplicates adjacent.
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def resolve(self, text: str) -> str:
        """Return the part of `text` this range covers."""
        return text[self.start:self.end]


# identifier -> ranges, MUST be sorted ascending and duplicate-free
RangeList = List[TokenRange]
TokenIndexData = Dict[str, RangeList]
# token -> identifier -> ranges
IndexData = Dict[str, TokenIndexData]


class InputPair(NamedTuple):
    text: str
    identifier: str


class TokenOccurrence(NamedTuple):
    token: str            # original case, as found in the text
    range: TokenRange
    identifier: str


class TokenIndexPair(NamedTuple):
    token: str
    data: TokenIndexData


class ViewTokenCount(NamedTuple):
    token: str
    count: int


@dataclass(frozen=True)
class Occurrence:
    identifier: str
    range: TokenRange
    text: str             # the covered substring of the stored source text
