"""
Walks over the implicit k-ary tree of a prefix code.

A code is stored as its leaf set only. The tree is recovered on demand:
the internal nodes are the proper prefixes of codewords, and the children
of an internal node are its one-symbol extensions.

Traversals:
    breadth_first_preorder(after, root) - BFS yielding nodes level by level
    depth_first_preorder(after, root)   - DFS yielding parent before children

Tree views:
    internal_nodes(words)          - Proper prefixes of the given words
    children_after(alphabet, internal) - `after` callable for the traversals
"""

from collections import deque
from collections.abc import Callable, Iterable, Iterator, Set
from typing import TypeVar

from prefix_code.alphabet import Alphabet
from prefix_code.constants import EMPTY_WORD
from prefix_code.types import Word

T = TypeVar("T")


def breadth_first_preorder(
    after: Callable[[T], Iterable[T]], root: T | None
) -> Iterator[T]:
    """Yields nodes level by level, root first."""
    if root is None:
        return
    queue = deque([root])
    while queue:
        current = queue.popleft()
        yield current
        queue.extend(after(current))


def depth_first_preorder(
    after: Callable[[T], Iterable[T]], root: T | None
) -> Iterator[T]:
    """Yields parent before children, depth-first."""
    if root is None:
        return
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        children = list(after(current))
        stack.extend(reversed(children))


def internal_nodes(words: Iterable[Word]) -> frozenset[Word]:
    """All proper prefixes of `words`, the empty word included when any word is non-empty."""
    nodes: set[Word] = set()
    for word in words:
        if word == EMPTY_WORD:
            continue
        nodes.update(word[:i] for i in range(len(word)))
    return frozenset(nodes)


def children_after(
    alphabet: Alphabet, internal: Set[Word]
) -> Callable[[Word], tuple[Word, ...]]:
    """Children of internal nodes in alphabet order, leaves have none."""

    def after(node: Word) -> tuple[Word, ...]:
        if node in internal:
            return alphabet.extensions(node)
        return ()

    return after


__all__ = [
    "breadth_first_preorder",
    "depth_first_preorder",
    "internal_nodes",
    "children_after",
]
