"""
Frontier analysis of prefix codes.

Functions:
    exposed_carets(code)  - Internal nodes whose children are all codewords
    internal_nodes(code)  - Proper prefixes of the codewords
    refines(a, b)         - Refinement order, b is at least as deep as a everywhere
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from prefix_code.constants import EMPTY_WORD
from prefix_code.traversal import internal_nodes as _internal_nodes
from prefix_code.types import AlphabetError, Word

if TYPE_CHECKING:
    from prefix_code.code import PrefixCode


def exposed_carets(code: PrefixCode) -> list[Word]:
    """
    Roots of the carets hanging at the frontier, in dictionary order.

    A parent qualifies when every symbol of the alphabet ends one of its
    child codewords. The trivial code has none.
    """
    alphabet = code.alphabet
    child_symbols: defaultdict[Word, set[str]] = defaultdict(set)
    for word in code.codewords():
        if word == EMPTY_WORD:
            continue
        child_symbols[word[:-1]].add(word[-1])

    return alphabet.sorted(
        parent
        for parent, symbols in child_symbols.items()
        if len(symbols) == len(alphabet)
    )


def internal_nodes(code: PrefixCode) -> frozenset[Word]:
    """Internal nodes of the tree, the empty word being the root."""
    return _internal_nodes(code.codewords())


def refines(a: PrefixCode, b: PrefixCode) -> bool:
    """True if every codeword of `b` has a codeword of `a` as a prefix (a <= b)."""
    if a.alphabet != b.alphabet:
        raise AlphabetError(
            f"Cannot compare codes over {a.alphabet} and {b.alphabet}"
        )
    return all(a.get_prefix_of(word) is not None for word in b.codewords())


__all__ = [
    "exposed_carets",
    "internal_nodes",
    "refines",
]
