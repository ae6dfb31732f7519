"""
Meet and join of prefix codes under the refinement order.

Codes over one alphabet are ordered by refinement, a <= b when every codeword
of b extends a codeword of a. The internal nodes of a code are exactly the
ancestors of its exposed carets, so both lattice operations only need the
carets of their arguments:

- join expands the union of the caret sets, giving the union of the internal nodes,
- meet expands the pairwise longest common prefixes of carets, giving their
  intersection.

Both return fresh, naturally labelled codes.
"""

import logging

from prefix_code.code import PrefixCode
from prefix_code.frontier import exposed_carets
from prefix_code.types import AlphabetError, Word

logger = logging.getLogger(__name__)


def common_prefix(v: Word, w: Word) -> Word:
    """Longest common prefix, symbol by symbol."""
    length = 0
    for a, b in zip(v, w):
        if a != b:
            break
        length += 1
    return v[:length]


def _check_alphabets(a: PrefixCode, b: PrefixCode) -> None:
    if a.alphabet != b.alphabet:
        raise AlphabetError(
            f"Lattice operations need a common alphabet, got {a.alphabet} and {b.alphabet}"
        )


def join(a: PrefixCode, b: PrefixCode) -> PrefixCode:
    """Least upper bound: the coarsest code refining both `a` and `b`."""
    _check_alphabets(a, b)
    result = PrefixCode(a.alphabet)

    for caret in exposed_carets(a):
        result.expand_at(caret)
    for caret in exposed_carets(b):
        result.expand_at(caret)

    logger.debug(f"join: {a} | {b} -> {result}")
    return result


def meet(a: PrefixCode, b: PrefixCode) -> PrefixCode:
    """Greatest lower bound: the finest code refined by both `a` and `b`."""
    _check_alphabets(a, b)
    result = PrefixCode(a.alphabet)

    carets_b = exposed_carets(b)
    # Common prefixes may nest, expand_at skips the internal ones
    # The empty prefix is kept: without it meet({0, 1}, {0, 1}) would be trivial
    common = {common_prefix(v, w) for v in exposed_carets(a) for w in carets_b}
    for word in a.alphabet.sorted(common):
        result.expand_at(word)

    logger.debug(f"meet: {a} & {b} -> {result}")
    return result


__all__ = [
    "common_prefix",
    "join",
    "meet",
]
