from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .normalize import normalize_token


class Trie:
    """
    Character trie over the index's token set.

    Nodes live in an arena (three parallel lists) and are addressed by their
    position; node 0 is the root with an empty fragment. Every other node holds
    exactly one character (no radix compression), an end-of-word flag, and a
    map from next character to child node.

    The trie is a derived view of the index keys: it is rebuilt from scratch
    whenever the key set changes and is never edited after publication.
    """
    ROOT = 0

    def __init__(self, strings: Iterable[str] = ()) -> None:
        self._fragments: List[str] = [""]
        self._ends: List[bool] = [False]
        self._children: List[Dict[str, int]] = [{}]
        self._words = 0
        for s in strings:
            self.insert(s)

    # ---- Build ----
    def _new_node(self, fragment: str) -> int:
        self._fragments.append(fragment)
        self._ends.append(False)
        self._children.append({})
        return len(self._fragments) - 1

    def insert(self, token: str) -> None:
        word = normalize_token(token)
        if not word:
            return
        node = self.ROOT
        for ch in word:
            child = self._children[node].get(ch)
            if child is None:
                child = self._new_node(ch)
                self._children[node][ch] = child
            node = child
        if not self._ends[node]:
            self._ends[node] = True
            self._words += 1

    def merge(self, other: "Trie") -> None:
        """
        Union `other` into this trie: child maps are merged per character and
        end-of-word flags are OR-ed. Subtrees missing here are copied over.
        """
        stack: List[Tuple[int, int]] = [(self.ROOT, other.ROOT)]
        while stack:
            mine, theirs = stack.pop()
            if other._ends[theirs] and not self._ends[mine]:
                self._ends[mine] = True
                self._words += 1
            for ch, their_child in other._children[theirs].items():
                my_child = self._children[mine].get(ch)
                if my_child is None:
                    my_child = self._new_node(ch)
                    self._children[mine][ch] = my_child
                stack.append((my_child, their_child))

    # ---- Query ----
    def find_anchor(self, prefix: str) -> Optional[int]:
        """Node reached after consuming all of `prefix`, or None."""
        if not prefix:
            raise ValueError("find_anchor(): prefix cannot be empty")
        node = self.ROOT
        for ch in prefix:
            nxt = self._children[node].get(ch)
            if nxt is None:
                return None
            node = nxt
        return node

    def _iter_words_from(self, node: int) -> Iterator[str]:
        # depth-first; each entry carries the fragments from `node` down to it
        stack: List[Tuple[int, str]] = [(node, self._fragments[node])]
        while stack:
            cur, path = stack.pop()
            if self._ends[cur]:
                yield path
            for child in self._children[cur].values():
                stack.append((child, path + self._fragments[child]))

    def strings_matching(self, prefix: str) -> List[str]:
        """All stored words starting with `prefix` (unordered)."""
        normalized = normalize_token(prefix)
        if not normalized:
            return []
        anchor = self.find_anchor(normalized)
        if anchor is None:
            return []
        # the anchor already holds the prefix's last character
        head = normalized[:-1]
        return [head + suffix for suffix in self._iter_words_from(anchor)]

    def strings(self) -> List[str]:
        return list(self._iter_words_from(self.ROOT))

    # ---- Getters ----
    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        node = self.find_anchor(normalize_token(token))
        return node is not None and self._ends[node]

    def __len__(self) -> int:
        return self._words

    @property
    def node_count(self) -> int:
        return len(self._fragments)
