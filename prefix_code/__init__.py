"""
Prefix Code: complete prefix codes over a finite ordered alphabet.

A complete prefix code is the leaf set of a finite complete k-ary tree.
Each codeword carries a label in [0, n), and the labelling is an explicit
permutation maintained under every structural change.

The package provides:
- PrefixCode: the leaf map, with expand_at / reduce_at and label bookkeeping
- Frontier analysis: exposed carets and the refinement order
- Lattice operations: meet and join of codes over the same alphabet
- DFS strings: a compact encoding of the shape of a code

Example Usage:
    >>> from prefix_code import PrefixCode, join
    >>> a, b = PrefixCode(), PrefixCode()
    >>> a.expand_at("0001"), b.expand_at("1101")
    (<Outcome.CHANGED: 'changed'>, <Outcome.CHANGED: 'changed'>)
    >>> a <= join(a, b) and b <= join(a, b)
    True
"""

from __future__ import annotations

# Constants and types
from prefix_code.constants import (
    DEFAULT_ALPHABET,
    EMPTY_WORD,
    NOT_FOUND,
)
from prefix_code.types import (
    AlphabetError,
    CodeStructureError,
    Labelling,
    MalformedDFSError,
    Outcome,
    Permutation,
    Word,
)

# Alphabet
from prefix_code.alphabet import (
    Alphabet,
    as_alphabet,
    make_alphabet,
)

# Core
from prefix_code.code import (
    PrefixCode,
    as_prefix_code,
    structure_problem,
)

# Permutations
from prefix_code.permutation import (
    compose,
    identity,
    inverse,
    is_permutation,
    perm_to_string,
)

# Frontier and lattice
from prefix_code.frontier import (
    exposed_carets,
    internal_nodes,
    refines,
)
from prefix_code.lattice import (
    common_prefix,
    join,
    meet,
)

# Serialization
from prefix_code.dfs import (
    decode_dfs,
    encode_dfs,
    is_valid_dfs,
)

__all__ = [
    # Constants and types
    "DEFAULT_ALPHABET",
    "EMPTY_WORD",
    "NOT_FOUND",
    "AlphabetError",
    "CodeStructureError",
    "Labelling",
    "MalformedDFSError",
    "Outcome",
    "Permutation",
    "Word",
    # Alphabet
    "Alphabet",
    "as_alphabet",
    "make_alphabet",
    # Core
    "PrefixCode",
    "as_prefix_code",
    "structure_problem",
    # Permutations
    "compose",
    "identity",
    "inverse",
    "is_permutation",
    "perm_to_string",
    # Frontier and lattice
    "exposed_carets",
    "internal_nodes",
    "refines",
    "common_prefix",
    "join",
    "meet",
    # Serialization
    "decode_dfs",
    "encode_dfs",
    "is_valid_dfs",
]
