"""
Hit: in-process full-text token index

Builds a token-level inverted index from (text, identifier) pairs: every
lowercased word maps to the identifiers it occurs in and the exact character
ranges of each occurrence. A character trie over the indexed tokens serves
prefix search.

Modules:
    normalize   token normalization and the space-splitting tokenizer
    merge       index data merging (sequential fold and binary merge)
    trie        prefix trie over the token set
    index       InvertedIndex: batch indexing, exact and prefix lookup, views
    loader      folders of .txt files -> (text, identifier) pairs
    store       in-memory text store for resolving ranges
    engine      glue: load -> store -> index

Example Usage:
    from hit import InvertedIndex

    index = InvertedIndex()
    index.index_batch([("Hello world how is your app SwiftKey doing?", "review1")])

    index.lookup_exact("swiftkey")   # {"review1": [TokenRange(start=28, end=36)]}
    index.prefix_search("sw")        # [TokenIndexPair(token="swiftkey", data=...)]
"""

from .engine import Engine
from .index import IndexConsistencyError, InvertedIndex, ViewOrder
from .merge import binary_merge, merge_index_data, reduce_merge
from .models import (
    InputPair, Occurrence, TokenIndexPair, TokenOccurrence, TokenRange, ViewTokenCount,
)
from .normalize import iter_tokens, normalize_token
from .trie import Trie

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "IndexConsistencyError",
    "InputPair",
    "InvertedIndex",
    "Occurrence",
    "TokenIndexPair",
    "TokenOccurrence",
    "TokenRange",
    "Trie",
    "ViewOrder",
    "ViewTokenCount",
    "binary_merge",
    "iter_tokens",
    "merge_index_data",
    "normalize_token",
    "reduce_merge",
]
