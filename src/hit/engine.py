# hit/engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .index import InvertedIndex, as_input_pairs
from .loader import load_pairs
from .models import InputPair, Occurrence, TokenIndexData, TokenIndexPair
from .store import MemoryStore, TextStore

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the text loader (folders of .txt files -> (text, identifier) pairs),
      - a text store keyed by identifier (so ranges can be resolved again),
      - the inverted index with its prefix trie.

    Public API:
      * build(roots, ...):   load -> store -> index
      * add(pairs):          store and index an arbitrary batch
      * lookup(token):       exact token lookup
      * complete(prefix):    prefix search, shortest tokens first
      * occurrences(token):  every hit of a token with its source substring
      * shutdown():          release the store
    """

    # ------------- lifecycle -------------

    def __init__(self, store: Optional[TextStore] = None) -> None:
        self.index: Optional[InvertedIndex] = InvertedIndex()
        self._store: Optional[TextStore] = store if store is not None else MemoryStore()

    # /* ~~~ Load every text unit under the roots and index it as one batch ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        unit: Optional[str] = None,            # "line" | "paragraph" | "window"
        window_size: Optional[int] = None,
        window_step: Optional[int] = None,
        verbose: bool = False,
    ) -> int:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one root folder is required")

        log.info("Loading texts from %s", roots)
        pairs = list(load_pairs(roots, unit=unit, window_size=window_size,
                                window_step=window_step, verbose=verbose))
        n = self.add(pairs)
        log.info("Engine build() complete: pairs=%d tokens=%d", n, len(self._require_index()))
        return n

    def add(self, pairs: Iterable[InputPair]) -> int:
        """
        Store and index a batch. An identifier may come again only with the
        same text; ranges are resolved against that one text later.
        """
        index = self._require_index()
        store = self._require_store()
        pairs = as_input_pairs(pairs)

        seen = dict(store.get_many({identifier for _, identifier in pairs}))
        for text, identifier in pairs:
            known = seen.setdefault(identifier, text)
            if known != text:
                raise ValueError(f"add(): identifier {identifier!r} is already used for a different text")

        # index first: a rejected batch must not leave texts behind
        index.index_batch(pairs)
        return store.put_many(pairs)

    # ------------- query -------------

    def lookup(self, token: str) -> Optional[TokenIndexData]:
        return self._require_index().lookup_exact(token)

    def complete(self, prefix: str, *, limit: Optional[int] = None) -> List[TokenIndexPair]:
        return self._require_index().prefix_search(prefix, limit=limit)

    def occurrences(self, token: str) -> List[Occurrence]:
        """Every indexed hit of `token`, with the substring it covers in its source text."""
        data = self.lookup(token)
        if not data:
            return []
        store = self._require_store()
        out: List[Occurrence] = []
        for identifier, text in store.get_many(sorted(data)):
            for rng in data[identifier]:
                out.append(Occurrence(identifier=identifier, range=rng, text=rng.resolve(text)))
        return out

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self.index = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_index(self) -> InvertedIndex:
        if self.index is None:
            raise RuntimeError("Engine is shut down")
        return self.index

    def _require_store(self) -> TextStore:
        if self._store is None:
            raise RuntimeError("Engine is shut down")
        return self._store
