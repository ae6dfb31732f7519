"""
Permutations of [0, n) as carried by the labels of a prefix code.

Permutations are exchanged as plain dicts `index -> image`, and computed on
as dense numpy image arrays.

Functions:
    is_permutation(perm, size) - True if perm is a bijection of [0, size)
    identity(n)                - The identity on [0, n)
    compose(first, then)       - `then` after `first`
    inverse(perm)              - The inverse bijection
    perm_to_string(perm)       - "[index image], ..." in index order
"""

from collections.abc import Iterable

import numpy as np

from prefix_code.types import Permutation


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def is_permutation(perm: Permutation, size: int | None = None) -> bool:
    """True if `perm` maps [0, n) bijectively onto itself (n = `size` when given)."""
    n = len(perm)
    if size is not None and n != size:
        return False
    if not all(_is_index(key) and _is_index(value) for key, value in perm.items()):
        return False
    if not all(0 <= key < n and 0 <= value < n for key, value in perm.items()):
        return False
    keys = np.fromiter(perm.keys(), dtype=np.int64, count=n)
    values = np.fromiter(perm.values(), dtype=np.int64, count=n)
    expected = np.arange(n)
    return bool(
        np.array_equal(np.sort(keys), expected)
        and np.array_equal(np.sort(values), expected)
    )


def as_array(perm: Permutation) -> np.ndarray:
    """Dense image array: `as_array(perm)[i] == perm[i]`."""
    if not is_permutation(perm):
        raise ValueError(f"Not a permutation of [0, {len(perm)}): {dict(perm)}")
    n = len(perm)
    return np.fromiter((perm[i] for i in range(n)), dtype=np.int64, count=n)


def from_array(images: Iterable[int]) -> dict[int, int]:
    return {index: int(image) for index, image in enumerate(images)}


def identity(n: int) -> dict[int, int]:
    return from_array(np.arange(n))


def compose(first: Permutation, then: Permutation) -> dict[int, int]:
    """Applies `first`, then `then`: `compose(f, g)[i] == g[f[i]]`."""
    if len(first) != len(then):
        raise ValueError(
            f"Cannot compose permutations of sizes {len(first)} and {len(then)}"
        )
    return from_array(as_array(then)[as_array(first)])


def inverse(perm: Permutation) -> dict[int, int]:
    return from_array(np.argsort(as_array(perm)))


def perm_to_string(perm: Permutation) -> str:
    """
    Renders a permutation in index order.

    Example:
        >>> perm_to_string({1: 0, 0: 1})
        '[0 1], [1 0]'
    """
    return ", ".join(f"[{index} {image}]" for index, image in sorted(perm.items()))


__all__ = [
    "is_permutation",
    "as_array",
    "from_array",
    "identity",
    "compose",
    "inverse",
    "perm_to_string",
]
