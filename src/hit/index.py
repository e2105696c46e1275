"""
Inverted token index.

The index is shaped like this:

    {
        "token1": {
            "identifier1": [range11, range12, ...],
            "identifier2": [range21, ...],
        },
        "token2": {...},
    }

An identifier is whatever lets the caller find the source text again (a review,
a file, a line...). Ranges point into that text, so a hit can be located
directly.

Indexing runs map-reduce style: every token occurrence becomes its own tiny
index, those are merged pairwise (see merge.binary_merge), and only the final
result touches shared state.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from . import config as CFG
from .merge import binary_merge, merge_index_data, reduce_merge
from .models import (
    IndexData, InputPair, TokenIndexData, TokenIndexPair, ViewTokenCount,
)
from .normalize import iter_tokens, normalize_token
from .trie import Trie

log = logging.getLogger(__name__)


class IndexConsistencyError(RuntimeError):
    """The trie and the index disagree about the token set."""


class ViewOrder(Enum):
    TOTAL_OCCURRENCES = "total_occurrences"
    UNIQUE_IDENTIFIERS = "unique_identifiers"


@dataclass(frozen=True)
class _Snapshot:
    index: IndexData
    trie: Trie


def _copy_token_data(data: TokenIndexData) -> TokenIndexData:
    return {identifier: list(ranges) for identifier, ranges in data.items()}


class InvertedIndex:
    """
    Token -> identifier -> sorted ranges, plus a prefix trie over the tokens.

    Public API:
      * index_batch(pairs):   tokenize, merge, publish
      * lookup_exact(token):  data for one token or None
      * prefix_search(p):     all tokens starting with p, shortest first
      * tokens_by_total_occurrences() / tokens_by_unique_identifier_count()

    Index and trie are published together as one immutable snapshot, so a reader
    always sees both from the same batch. Writers are serialized by a lock;
    readers don't take it.
    """

    reduce_merge = staticmethod(reduce_merge)
    binary_merge = staticmethod(binary_merge)

    def __init__(self) -> None:
        self._snapshot = _Snapshot(index={}, trie=Trie())
        self._write_lock = threading.Lock()

    # ------------- query -------------

    def lookup_exact(self, token: str) -> Optional[TokenIndexData]:
        data = self._snapshot.index.get(normalize_token(token))
        return None if data is None else _copy_token_data(data)

    def prefix_search(self, prefix: str, limit: Optional[int] = None) -> List[TokenIndexPair]:
        """
        Tokens starting with `prefix`, sorted by length (shortest match first)
        and then alphabetically, each with its index data.
        Prefixes shorter than MIN_PREFIX_LENGTH return nothing.
        """
        if limit is None:
            limit = CFG.PREFIX_RESULT_LIMIT
        if limit is not None and limit < 0:
            raise ValueError("prefix_search(): limit must be >= 0")

        normalized = normalize_token(prefix)
        if len(normalized) < CFG.MIN_PREFIX_LENGTH:
            return []

        snap = self._snapshot
        matches = snap.trie.strings_matching(normalized)
        matches.sort(key=lambda t: (len(t), t.casefold(), t))
        if limit is not None:
            matches = matches[:limit]

        out: List[TokenIndexPair] = []
        for token in matches:
            data = snap.index.get(token)
            if data is None:
                log.error("Trie returned %r which is missing from the index", token)
                raise IndexConsistencyError(f"token {token!r} is in the trie but not in the index")
            out.append(TokenIndexPair(token, _copy_token_data(data)))
        return out

    # original-style names
    occurrences_of_token = lookup_exact
    occurrences_of_tokens_with_prefix = prefix_search

    # ------------- build -------------

    def create_indices_from_string(self, text: str, identifier: str) -> List[IndexData]:
        """One micro-index per token occurrence in `text`."""
        return [
            {normalize_token(tok): {ident: [rng]}}
            for tok, rng, ident in iter_tokens(text, identifier)
        ]

    def create_index_from_string(self, text: str, identifier: str) -> IndexData:
        return binary_merge(self.create_indices_from_string(text, identifier))

    def create_indices(self, pairs: Iterable[InputPair]) -> List[IndexData]:
        out: List[IndexData] = []
        for text, identifier in pairs:
            out.extend(self.create_indices_from_string(text, identifier))
        return out

    def create_index(self, pairs: Iterable[InputPair]) -> IndexData:
        return binary_merge(self.create_indices(pairs))

    def index_batch(self, pairs: Iterable[InputPair]) -> None:
        """
        Index a batch of (text, identifier) pairs. Returns when done.
        Readers see the index either before or after the whole batch.
        """
        pairs = as_input_pairs(pairs)

        micro = self.create_indices(pairs)
        batch = binary_merge(micro)
        log.info("Indexed batch: pairs=%d occurrences=%d tokens=%d", len(pairs), len(micro), len(batch))
        self._publish(batch)

    update = index_batch

    def _publish(self, batch: IndexData) -> None:
        # build everything off to the side, then swap one reference
        with self._write_lock:
            merged = merge_index_data(self._snapshot.index, batch)
            trie = Trie(merged.keys())
            self._snapshot = _Snapshot(index=merged, trie=trie)
        log.info("Published index: tokens=%d trie_nodes=%d", len(merged), trie.node_count)

    # ------------- views -------------

    def tokens_by_total_occurrences(self) -> List[ViewTokenCount]:
        """Tokens by number of occurrences in total, most frequent first."""
        view = [
            ViewTokenCount(token, sum(len(ranges) for ranges in data.values()))
            for token, data in self._snapshot.index.items()
        ]
        view.sort(key=lambda v: (-v.count, v.token))
        return view

    def tokens_by_unique_identifier_count(self) -> List[ViewTokenCount]:
        """Tokens by number of identifiers mentioning them (repeats in one don't count)."""
        view = [ViewTokenCount(token, len(data)) for token, data in self._snapshot.index.items()]
        view.sort(key=lambda v: (-v.count, v.token))
        return view

    def view(self, order: ViewOrder = ViewOrder.TOTAL_OCCURRENCES) -> List[ViewTokenCount]:
        if order is ViewOrder.TOTAL_OCCURRENCES:
            return self.tokens_by_total_occurrences()
        if order is ViewOrder.UNIQUE_IDENTIFIERS:
            return self.tokens_by_unique_identifier_count()
        raise ValueError(f"Unsupported view order: {order!r}")

    # ---- Getters ----
    def tokens(self) -> List[str]:
        return sorted(self._snapshot.index)

    def snapshot(self) -> IndexData:
        """Deep copy of the current index data."""
        return {token: _copy_token_data(data) for token, data in self._snapshot.index.items()}

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and normalize_token(token) in self._snapshot.index

    def __len__(self) -> int:
        return len(self._snapshot.index)


def as_input_pairs(pairs: Iterable[InputPair]) -> List[InputPair]:
    """Materialize `pairs`, rejecting anything that is not a (str, str) pair."""
    out: List[InputPair] = []
    for i, p in enumerate(pairs):
        if isinstance(p, (str, bytes)) or not hasattr(p, "__len__") or len(p) != 2:
            raise TypeError(f"pair {i} must be a (text, identifier) pair, got {p!r}")
        text, identifier = p
        if not isinstance(text, str) or not isinstance(identifier, str):
            raise TypeError(
                f"pair {i} must be (str, str), "
                f"got ({type(text).__name__}, {type(identifier).__name__})"
            )
        out.append(InputPair(text, identifier))
    return out
