"""
DFS bracket strings describing the shape of a prefix code.

A tree is written in preorder with children in alphabet order:
`1` opens an internal node with one child per symbol, `0` is a leaf.
Over "01", the code {0, 10, 11} is written "10100".

Functions:
    is_valid_dfs(alphabet_size, dfs) - Well-formedness check
    decode_dfs(dfs, alphabet)        - DFS string to naturally labelled code
    encode_dfs(code)                 - Code to DFS string
"""

import logging
from collections.abc import Iterable

from prefix_code.alphabet import Alphabet, as_alphabet
from prefix_code.code import PrefixCode
from prefix_code.constants import DFS_LEAF, DFS_NODE
from prefix_code.traversal import children_after, depth_first_preorder, internal_nodes
from prefix_code.types import MalformedDFSError, Word

logger = logging.getLogger(__name__)


def is_valid_dfs(alphabet_size: int, dfs: str) -> bool:
    """
    True if `dfs` describes a complete tree of the given arity.

    Each node marker opens `alphabet_size - 1` more slots than it fills, each
    leaf fills one. The string is well formed when the slots run out exactly
    at its last character.
    """
    if not dfs or not dfs.startswith(DFS_NODE):
        return False
    if set(dfs) - {DFS_NODE, DFS_LEAF}:
        return False

    carets = dfs.count(DFS_NODE)
    leaves = dfs.count(DFS_LEAF)
    if leaves != (alphabet_size - 1) * carets + 1:
        return False

    open_slots = 1
    for position, marker in enumerate(dfs, start=1):
        if marker == DFS_NODE:
            open_slots += alphabet_size - 1
        else:
            open_slots -= 1
        if open_slots == 0 and position < len(dfs):
            return False
    return True


def dfs_leaves(dfs: str, alphabet: Alphabet) -> list[Word]:
    """Leaves of a well-formed DFS string, in preorder."""
    leaves: list[Word] = []
    stack: list[Word] = [""]
    for marker in dfs:
        word = stack.pop()
        if marker == DFS_NODE:
            stack.extend(word + symbol for symbol in reversed(alphabet.symbols))
        else:
            leaves.append(word)
    return leaves


def decode_dfs(
    dfs: str, alphabet: Alphabet | str | Iterable[str] | None = None
) -> PrefixCode:
    """
    Builds the naturally labelled code a DFS string describes.

    The parents of the leaves are caret roots, and expanding a fresh code at
    each of them grows every internal node of the tree.
    """
    alphabet = as_alphabet(alphabet)
    if not is_valid_dfs(len(alphabet), dfs):
        raise MalformedDFSError(
            f"{dfs!r} is not a DFS encoding of a tree over {len(alphabet)} symbols"
        )

    cores = {leaf[:-1] for leaf in dfs_leaves(dfs, alphabet) if leaf}
    code = PrefixCode(alphabet)
    for core in alphabet.sorted(cores):
        code.expand_at(core)

    logger.debug(f"decode_dfs({dfs!r}) -> {code}")
    return code


def encode_dfs(code: PrefixCode) -> str:
    """DFS string of the shape of `code`, labels are not recorded."""
    if code.is_trivial():
        raise ValueError("The trivial code has no DFS encoding")
    internal = internal_nodes(code.codewords())
    after = children_after(code.alphabet, internal)
    return "".join(
        DFS_NODE if node in internal else DFS_LEAF
        for node in depth_first_preorder(after, "")
    )


__all__ = [
    "is_valid_dfs",
    "dfs_leaves",
    "decode_dfs",
    "encode_dfs",
]
