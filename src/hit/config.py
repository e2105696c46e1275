from __future__ import annotations
import os
from typing import Optional, Tuple

# Tokenization: split on this character only (no other whitespace classes)
TOKEN_SEPARATOR: str = " "

# Prefix queries shorter than this (after normalization) return nothing
MIN_PREFIX_LENGTH: int = 2

# Default cap on prefix_search results (None = unlimited)
PREFIX_RESULT_LIMIT: Optional[int] = None

# Text unit for the file loader: "line", "paragraph", or "window"
TEXT_UNIT: str = "line"

# Window settings (used when TEXT_UNIT == "window")
WINDOW_SIZE: int = 3     # number of lines per window
WINDOW_STEP: int = 1     # slide by this many lines

# file types picked up by the loader
INCLUDE_EXTS: Tuple[str, ...] = (".txt",)

# Progress logging (set HIT_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("HIT_VERBOSE") == "1"
PROGRESS_EVERY_FILES: int = 500
