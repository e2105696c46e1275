"""
Merging of index data.

IndexData values are merged key-wise, all the way down:

    token      -> union, colliding tokens merge their identifier maps
    identifier -> union, colliding identifiers merge their range lists
    ranges     -> concatenate, sort, drop exact duplicates

That last step makes the merge associative and commutative (and idempotent on
repeated ranges), so any grouping of the same inputs gives the same result.
This is what lets `binary_merge` replace the plain left fold.

Range lists that are not involved in a collision are carried over as they are,
so inputs must hold ordered, duplicate-free lists. Micro-indices from the
tokenizer (one range each) always do.

Merges never mutate their inputs. Results may share untouched inner dicts and
lists with the inputs, which is fine as long as nobody edits them in place.
"""

from __future__ import annotations
from typing import List, Sequence

from .models import IndexData, RangeList, TokenIndexData


def merge_range_lists(one: RangeList, two: RangeList) -> RangeList:
    both = sorted(one + two)
    out: RangeList = []
    for r in both:
        if out and out[-1] == r:
            continue
        out.append(r)
    return out


def merge_token_index_data(one: TokenIndexData, two: TokenIndexData) -> TokenIndexData:
    out = dict(one)
    for identifier, ranges in two.items():
        mine = out.get(identifier)
        out[identifier] = ranges if mine is None else merge_range_lists(mine, ranges)
    return out


def merge_index_data(one: IndexData, two: IndexData) -> IndexData:
    # fold the smaller one into a copy of the bigger one
    if len(two) > len(one):
        one, two = two, one
    out = dict(one)
    for token, data in two.items():
        mine = out.get(token)
        out[token] = data if mine is None else merge_token_index_data(mine, data)
    return out


def reduce_merge(indices: Sequence[IndexData]) -> IndexData:
    """
    Left fold from an empty IndexData. Correct, but the accumulator keeps
    growing, so every later merge copies more (roughly quadratic overall).
    """
    acc: IndexData = {}
    for idx in indices:
        acc = merge_index_data(acc, idx)
    return acc


def binary_merge(indices: Sequence[IndexData]) -> IndexData:
    """
    Tournament merge: merge neighbours pairwise into a list about half as long,
    and repeat until one or two items are left. An odd last item is carried to
    the next round unmerged.
    """
    n = len(indices)
    if n == 0:
        return {}
    if n == 1:
        return indices[0]
    if n == 2:
        return merge_index_data(indices[0], indices[1])

    halved: List[IndexData] = [
        merge_index_data(indices[i], indices[i + 1]) for i in range(0, n - 1, 2)
    ]
    if n % 2 == 1:
        halved.append(indices[-1])
    return binary_merge(halved)
