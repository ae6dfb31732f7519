"""
Core type definitions for prefix codes.

Types:
    Word        - A codeword or a location in the tree (string of symbols)
    Labelling   - Mapping from codewords to integer labels
    Permutation - Mapping from [0, n) to [0, n)
    Outcome     - Tri-state result of a structural operation

Errors:
    AlphabetError       - Invalid alphabet, or mismatched alphabets
    CodeStructureError  - Mapping that is not a complete prefix code
    MalformedDFSError   - DFS string that does not describe a tree
"""

from collections.abc import Mapping
from enum import Enum
from typing import TypeAlias

Word: TypeAlias = str
Labelling: TypeAlias = Mapping[Word, int]
Permutation: TypeAlias = Mapping[int, int]


class Outcome(Enum):
    """
    Result of an operation that may legitimately have nothing to do.

    Only CHANGED is truthy, so `if code.expand_at(w):` reads as
    "if the expansion happened".
    """

    CHANGED = "changed"  # The code was mutated
    NOOP = "noop"  # Routine nothing-to-do, code untouched
    INVALID = "invalid"  # Bad input, code untouched

    def __bool__(self) -> bool:
        return self is Outcome.CHANGED


class AlphabetError(ValueError):
    """Raised when an alphabet is empty, holds the sentinel, or does not match."""


class CodeStructureError(ValueError):
    """Raised when a mapping violates a prefix code invariant."""


class MalformedDFSError(ValueError):
    """Raised when a DFS string is not a well-formed tree for the alphabet size."""


__all__ = [
    "Word",
    "Labelling",
    "Permutation",
    "Outcome",
    "AlphabetError",
    "CodeStructureError",
    "MalformedDFSError",
]
