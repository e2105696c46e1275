from __future__ import annotations
import logging
import os
from typing import Any, Iterable, Iterator, List, Mapping, Optional

from . import config as CFG
from .models import InputPair

log = logging.getLogger(__name__)

UNITS = ("line", "paragraph", "window")


def _iter_text_files(roots: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield (root, path) for matching files recursively under each root, in a stable order."""
    exts = tuple(e.lower() for e in CFG.INCLUDE_EXTS)
    for root in roots:
        root = os.path.abspath(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for fn in sorted(filenames):
                if fn.lower().endswith(exts):
                    yield root, os.path.join(dirpath, fn)


def _rel_to_any_root(path: str, roots_abs: List[str]) -> str:
    """Return the shortest relative path to any of the given absolute roots."""
    best = path
    for r in roots_abs:
        try:
            rel = os.path.relpath(path, r)
            if len(rel) < len(best):
                best = rel
        except ValueError:
            pass
    return best.replace("\\", "/")


def _ident(path_rel: str, line_idx: int) -> str:
    return f"{path_rel}:{line_idx + 1}"


def _line_units(lines: List[str], path_rel: str) -> Iterator[InputPair]:
    for i, raw in enumerate(lines):
        yield InputPair(raw, _ident(path_rel, i))


def _paragraph_units(lines: List[str], path_rel: str) -> Iterator[InputPair]:
    block: List[str] = []
    block_start = 0
    for i, raw in enumerate(lines):
        if raw.strip() == "":
            if block:
                yield InputPair("\n".join(block), _ident(path_rel, block_start))
                block = []
            block_start = i + 1
        else:
            if not block:
                block_start = i
            block.append(raw)
    if block:
        yield InputPair("\n".join(block), _ident(path_rel, block_start))


def _window_units(lines: List[str], path_rel: str, size: int, step: int) -> Iterator[InputPair]:
    size = max(1, int(size))
    step = max(1, int(step))
    i = 0
    while i + size <= len(lines):
        yield InputPair("\n".join(lines[i:i + size]), _ident(path_rel, i))  # first line of the window
        i += step


def load_pairs(roots: Iterable[str],
               unit: Optional[str] = None,
               window_size: Optional[int] = None,
               window_step: Optional[int] = None,
               verbose: Optional[bool] = None) -> Iterator[InputPair]:
    """
    Scan roots for text files and yield one (text, identifier) pair per unit.
    unit: "line" (default), "paragraph", or "window".
    The identifier is "<path relative to its root>:<1-based first line>".
    verbose: log scan progress (defaults to config.VERBOSE).
    """
    roots = list(roots)
    roots_abs = [os.path.abspath(p) for p in roots]

    unit = (unit or CFG.TEXT_UNIT).lower()
    if unit not in UNITS:
        raise ValueError(f"Unsupported text unit: {unit!r} (expected one of {', '.join(UNITS)})")
    wsize = window_size if window_size is not None else CFG.WINDOW_SIZE
    wstep = window_step if window_step is not None else CFG.WINDOW_STEP
    verbose = CFG.VERBOSE if verbose is None else verbose

    file_count = 0
    pair_count = 0
    for _, path in _iter_text_files(roots):
        rel = _rel_to_any_root(path, roots_abs)
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                raw_lines = [ln.rstrip("\r\n") for ln in f]
        except OSError as e:
            log.warning("Skipping unreadable file %s: %s", path, e)
            continue

        if unit == "line":
            gen = _line_units(raw_lines, rel)
        elif unit == "paragraph":
            gen = _paragraph_units(raw_lines, rel)
        else:
            gen = _window_units(raw_lines, rel, wsize, wstep)

        for pair in gen:
            pair_count += 1
            yield pair

        file_count += 1
        if verbose and file_count % CFG.PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%d pairs=%d", file_count, pair_count)

    log.debug("Loaded %d pairs from %d files", pair_count, file_count)


def pairs_from_records(records: Iterable[Mapping[str, Any]],
                       text_key: str = "text",
                       id_key: str = "id") -> List[InputPair]:
    """Turn parsed records (e.g. reviews loaded from JSON) into input pairs."""
    out: List[InputPair] = []
    for rec in records:
        text = rec.get(text_key)
        ident = rec.get(id_key)
        if text is None or ident is None:
            continue
        out.append(InputPair(str(text), str(ident)))
    return out
