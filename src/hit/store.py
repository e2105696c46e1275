from __future__ import annotations
from typing import Dict, Iterable, Iterator, Protocol, Tuple

from .models import InputPair


class TextStore(Protocol):
    """Where the engine keeps source texts so ranges can be resolved later."""
    # Create / Update
    def put(self, identifier: str, text: str) -> None: ...
    def put_many(self, pairs: Iterable[InputPair]) -> int: ...
    # Read
    def get(self, identifier: str) -> str: ...
    def get_many(self, identifiers: Iterable[str]) -> Iterator[Tuple[str, str]]: ...
    def count(self) -> int: ...
    # Delete
    def delete(self, identifier: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


class MemoryStore:
    """Simple in-memory store. A later text for the same identifier replaces the earlier one."""
    def __init__(self, pairs: Iterable[InputPair] = ()) -> None:
        self._rows: Dict[str, str] = {}
        self.put_many(pairs)

    def put(self, identifier: str, text: str) -> None:
        self._rows[identifier] = text

    def put_many(self, pairs: Iterable[InputPair]) -> int:
        n = 0
        for text, identifier in pairs:
            self._rows[identifier] = text; n += 1
        return n

    def get(self, identifier: str) -> str:
        try:
            return self._rows[identifier]
        except KeyError:
            raise KeyError(identifier) from None

    def get_many(self, identifiers: Iterable[str]) -> Iterator[Tuple[str, str]]:
        for identifier in identifiers:
            text = self._rows.get(identifier)
            if text is not None:
                yield identifier, text

    def count(self) -> int:
        return len(self._rows)

    def delete(self, identifier: str) -> None:
        self._rows.pop(identifier, None)

    def close(self) -> None:
        self._rows.clear()
