"""
Complete prefix codes with labelled codewords.

A PrefixCode stores the leaves of a finite complete k-ary tree as a mapping
`codeword -> label`. The labels are a bijection onto [0, n) and are kept
consistent under every structural change:

- expand_at grows the minimal subtree making a word an internal node,
- reduce_at collapses the subtree under a word into that word.

The mapping is kept in dictionary order of the codewords by construction,
and a `label -> codeword` list is rebuilt alongside it on every commit.

Example:
    >>> code = PrefixCode()
    >>> code.expand_at("1001")
    <Outcome.CHANGED: 'changed'>
    >>> str(code)
    '[0 0], [1000 1], [10010 2], [10011 3], [101 4], [11 5]'
    >>> code.reduce_at("10")
    <Outcome.CHANGED: 'changed'>
    >>> str(code)
    '[0 0], [10 1], [11 2]'
"""

import logging
from bisect import bisect_left
from collections.abc import Iterable, Iterator, Mapping

from prefix_code.alphabet import Alphabet, as_alphabet
from prefix_code.constants import EMPTY_WORD, NOT_FOUND
from prefix_code.permutation import as_array, is_permutation
from prefix_code.traversal import breadth_first_preorder, children_after, internal_nodes
from prefix_code.types import (
    AlphabetError,
    CodeStructureError,
    Labelling,
    MalformedDFSError,
    Outcome,
    Permutation,
    Word,
)

logger = logging.getLogger(__name__)


def _is_root(word: Word) -> bool:
    return word == "" or word == EMPTY_WORD


def structure_problem(alphabet: Alphabet, words: Iterable[Word]) -> str | None:
    """
    Describes why `words` is not the leaf set of a complete tree over `alphabet`.

    Returns None when the words form a complete prefix code.
    """
    words = set(words)
    if not words:
        return "a code has at least one codeword"
    if EMPTY_WORD in words:
        if len(words) > 1:
            return f"`{EMPTY_WORD}` cannot coexist with other codewords"
        return None
    for word in words:
        if word == "":
            return "the empty string is not a codeword, use the trivial code"
        if not alphabet.is_word(word):
            return f"codeword {word!r} has symbols outside the alphabet {alphabet}"

    internal = internal_nodes(words)
    overlap = words & internal
    if overlap:
        return f"codeword {alphabet.sorted(overlap)[0]!r} is a prefix of another codeword"

    after = children_after(alphabet, internal)
    for node in breadth_first_preorder(after, ""):
        if node not in internal and node not in words:
            return f"internal node {node[:-1]!r} is missing the child {node!r}"
    return None


class PrefixCode:
    """
    Complete prefix code over an ordered alphabet, with a label per codeword.

    Construction:
        PrefixCode()                      - trivial code over "01"
        PrefixCode("ba")                  - raw string, deduplicated and sorted
        PrefixCode.from_symbols("ba")     - explicit symbol order kept
        PrefixCode(alphabet, expanded=True) - one level already grown

    Plain assignment binds the same instance; use `copy()` for an
    independent value.
    """

    __slots__ = ("_alphabet", "_labels", "_leaves")

    def __init__(
        self,
        alphabet: Alphabet | str | Iterable[str] | None = None,
        *,
        expanded: bool = False,
    ) -> None:
        self._alphabet = as_alphabet(alphabet)
        self._labels: dict[Word, int] = {}
        self._leaves: list[Word] = []
        self._commit({EMPTY_WORD: 0})
        if expanded:
            self._materialize_root()

    @classmethod
    def from_symbols(
        cls, symbols: Iterable[str], *, expanded: bool = False
    ) -> "PrefixCode":
        """Code over the symbols in the given order."""
        return cls(Alphabet(tuple(symbols)), expanded=expanded)

    @classmethod
    def from_string(cls, s: str, *, expanded: bool = False) -> "PrefixCode":
        """Code over the distinct characters of `s`, sorted."""
        return cls(Alphabet.from_string(s), expanded=expanded)

    @classmethod
    def from_dfs(
        cls, dfs: str, alphabet: Alphabet | str | Iterable[str] | None = None
    ) -> "PrefixCode":
        """Code with the shape described by a DFS string, naturally labelled."""
        from prefix_code.dfs import decode_dfs

        return decode_dfs(dfs, as_alphabet(alphabet))

    # =========================================================================
    # Storage
    # =========================================================================

    def _commit(self, labels: dict[Word, int]) -> None:
        """Installs a mapping already in codeword order and rebuilds the label index."""
        leaves = [EMPTY_WORD] * len(labels)
        for word, label in labels.items():
            leaves[label] = word
        self._labels = labels
        self._leaves = leaves

    def _materialize_root(self) -> None:
        self._commit({symbol: rank for rank, symbol in enumerate(self._alphabet)})

    def copy(self) -> "PrefixCode":
        clone = PrefixCode.__new__(PrefixCode)
        clone._alphabet = self._alphabet
        clone._labels = dict(self._labels)
        clone._leaves = list(self._leaves)
        return clone

    def __copy__(self) -> "PrefixCode":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "PrefixCode":
        return self.copy()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def size(self) -> int:
        return len(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Word]:
        return iter(list(self._labels))

    def __contains__(self, word: object) -> bool:
        return word in self._labels

    def is_trivial(self) -> bool:
        return EMPTY_WORD in self._labels

    def codewords(self) -> list[Word]:
        """Codewords in dictionary order."""
        return list(self._labels)

    def code(self) -> dict[Word, int]:
        """A copy of the `codeword -> label` mapping."""
        return dict(self._labels)

    def depth(self) -> int:
        """Length of the longest codeword, 0 for the trivial code."""
        if self.is_trivial():
            return 0
        return max(len(word) for word in self._labels)

    def get_prefix_of(self, word: Word) -> Word | None:
        """The codeword that is a prefix of `word`, if any."""
        if self.is_trivial():
            return EMPTY_WORD
        for end in range(min(len(word), self.depth()) + 1):
            if word[:end] in self._labels:
                return word[:end]
        return None

    def label_at_leaf(self, leaf: Word) -> int:
        """Label of `leaf`, or NOT_FOUND if it is not a codeword."""
        return self._labels.get(leaf, NOT_FOUND)

    def leaf_at_label(self, label: int) -> Word | None:
        """Codeword carrying `label`, or None if the label is out of bounds."""
        if not isinstance(label, int) or isinstance(label, bool):
            return None
        if not 0 <= label < len(self._leaves):
            return None
        return self._leaves[label]

    def permutation(self) -> dict[int, int]:
        """Maps the position of each codeword in dictionary order to its label."""
        return dict(enumerate(self._labels.values()))

    def is_prefix_free(self) -> bool:
        if self.is_trivial():
            return True
        return not (set(self._labels) & internal_nodes(self._labels))

    def is_complete(self) -> bool:
        return structure_problem(self._alphabet, self._labels) is None

    def check(self) -> None:
        """Raises CodeStructureError if any invariant is broken."""
        problem = structure_problem(self._alphabet, self._labels)
        if problem is not None:
            raise CodeStructureError(problem)
        if not is_permutation(dict(enumerate(self._labels.values()))):
            raise CodeStructureError(
                f"labels {sorted(self._labels.values())} are not a bijection onto "
                f"[0, {len(self._labels)})"
            )

    def exposed_carets(self) -> list[Word]:
        from prefix_code.frontier import exposed_carets

        return exposed_carets(self)

    # =========================================================================
    # Structural mutations
    # =========================================================================

    def _is_location(self, word: object) -> bool:
        return isinstance(word, str) and (_is_root(word) or self._alphabet.is_word(word))

    def expand_at(self, word: Word) -> Outcome:
        """
        Grows the minimal subtree so that `word` becomes an internal node.

        The codeword p covering `word` is replaced by the siblings of the path
        from p to `word` and by the children of `word`. They take contiguous
        labels from the label of p on, in dictionary order, and later labels
        are shifted up to make room.

        Returns NOOP when no codeword is a prefix of `word`, since `word` is
        then already internal.
        """
        if not self._is_location(word):
            logger.debug(f"expand_at({word!r}): not a word over {self._alphabet}")
            return Outcome.INVALID

        if self.is_trivial():
            self._materialize_root()
            logger.debug(f"expand_at({word!r}): root materialized")
            if _is_root(word):
                return Outcome.CHANGED
        elif _is_root(word):
            return Outcome.NOOP

        prefix = self.get_prefix_of(word)
        if prefix is None:
            logger.debug(f"expand_at({word!r}): shallower than the code, nothing to do")
            return Outcome.NOOP

        spine = word[len(prefix) :]
        branches = [
            spine[:position] + symbol
            for position, step in enumerate(spine)
            for symbol in self._alphabet
            if symbol != step
        ]
        branches.extend(self._alphabet.extensions(spine))
        new_words = self._alphabet.sorted(prefix + branch for branch in branches)

        base = self._labels[prefix]
        growth = len(new_words) - 1
        labels: dict[Word, int] = {}
        for codeword, label in self._labels.items():
            if codeword == prefix:
                for offset, new_word in enumerate(new_words):
                    labels[new_word] = base + offset
            elif label > base:
                labels[codeword] = label + growth
            else:
                labels[codeword] = label
        self._commit(labels)

        logger.debug(
            f"expand_at({word!r}): replaced {prefix!r} by {len(new_words)} codewords"
        )
        return Outcome.CHANGED

    def reduce_at(self, word: Word) -> Outcome:
        """
        Collapses every codeword having `word` as a prefix into `word`.

        `word` takes the smallest label among the collapsed codewords, and the
        remaining labels are compacted back onto [0, n). The empty word (or the
        sentinel) resets the code to the trivial code.

        Returns NOOP when no codeword lies under `word`, or when `word` is
        already a codeword.
        """
        if not self._is_location(word):
            logger.debug(f"reduce_at({word!r}): not a word over {self._alphabet}")
            return Outcome.INVALID

        if _is_root(word):
            if self.is_trivial():
                return Outcome.NOOP
            self._commit({EMPTY_WORD: 0})
            logger.debug("reduce_at(root): reset to the trivial code")
            return Outcome.CHANGED

        covered = [codeword for codeword in self._labels if codeword.startswith(word)]
        if not covered:
            logger.debug(f"reduce_at({word!r}): deeper than the code, nothing to do")
            return Outcome.NOOP
        if covered == [word]:
            return Outcome.NOOP

        removed = sorted(self._labels[codeword] for codeword in covered)
        floor, freed = removed[0], removed[1:]
        labels: dict[Word, int] = {}
        for codeword, label in self._labels.items():
            if codeword == covered[0]:
                labels[word] = floor
            elif not codeword.startswith(word):
                labels[codeword] = label - bisect_left(freed, label)
        self._commit(labels)

        logger.debug(
            f"reduce_at({word!r}): collapsed {len(covered)} codewords into {word!r}"
        )
        return Outcome.CHANGED

    # =========================================================================
    # Label permutation
    # =========================================================================

    def swap_perm_at_keys(self, a: Word, b: Word) -> Outcome:
        """Exchanges the labels carried by codewords `a` and `b`."""
        if a not in self._labels or b not in self._labels:
            logger.debug(f"swap_perm_at_keys({a!r}, {b!r}): codeword not found")
            return Outcome.INVALID
        if a == b:
            return Outcome.NOOP
        labels = dict(self._labels)
        labels[a], labels[b] = labels[b], labels[a]
        self._commit(labels)
        return Outcome.CHANGED

    def apply_perm(self, perm: Permutation) -> Outcome:
        """Relabels every codeword `label -> perm[label]`."""
        if len(perm) != len(self._labels):
            logger.debug(
                f"apply_perm: permutation of size {len(perm)} for code of size "
                f"{len(self._labels)}"
            )
            return Outcome.INVALID
        if not is_permutation(perm):
            logger.debug(f"apply_perm: {dict(perm)} is not a bijection")
            return Outcome.INVALID
        images = as_array(perm)
        self._commit(
            {word: int(images[label]) for word, label in self._labels.items()}
        )
        return Outcome.CHANGED

    # =========================================================================
    # Bulk replacement
    # =========================================================================

    def set_code(self, labelling: Labelling) -> None:
        """Replaces the mapping after checking it is a labelled complete prefix code."""
        problem = structure_problem(self._alphabet, labelling)
        if problem is None and not is_permutation(dict(enumerate(labelling.values()))):
            problem = f"labels {sorted(labelling.values())} are not a bijection"
        if problem is not None:
            raise CodeStructureError(problem)
        self._commit(
            {word: labelling[word] for word in self._alphabet.sorted(labelling)}
        )

    def set_alphabet(self, alphabet: Alphabet | str | Iterable[str]) -> None:
        """Switches to another alphabet the current codewords are complete over."""
        alphabet = as_alphabet(alphabet)
        problem = structure_problem(alphabet, self._labels)
        if problem is not None:
            raise AlphabetError(f"Code does not fit alphabet {alphabet}: {problem}")
        self._alphabet = alphabet
        self._commit({word: self._labels[word] for word in alphabet.sorted(self._labels)})

    def load_dfs(self, dfs: str) -> Outcome:
        """Replaces the shape by the one a DFS string describes, naturally labelled."""
        from prefix_code.dfs import decode_dfs

        try:
            decoded = decode_dfs(dfs, self._alphabet)
        except MalformedDFSError as error:
            logger.debug(f"load_dfs({dfs!r}): {error}")
            return Outcome.INVALID
        if decoded == self:
            return Outcome.NOOP
        self._commit(decoded.code())
        return Outcome.CHANGED

    # =========================================================================
    # Lattice
    # =========================================================================

    def join(self, other: "PrefixCode") -> "PrefixCode":
        from prefix_code.lattice import join

        return join(self, other)

    def meet(self, other: "PrefixCode") -> "PrefixCode":
        from prefix_code.lattice import meet

        return meet(self, other)

    def __le__(self, other: "PrefixCode") -> bool:
        """Refinement order: every codeword of `other` extends a codeword of self."""
        from prefix_code.frontier import refines

        return refines(self, other)

    def __ge__(self, other: "PrefixCode") -> bool:
        from prefix_code.frontier import refines

        return refines(other, self)

    # =========================================================================
    # Comparison and rendering
    # =========================================================================

    def same_shape(self, other: "PrefixCode") -> bool:
        """True if both codes have the same codewords, whatever their labels."""
        return set(self._labels) == set(other._labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrefixCode):
            return NotImplemented
        return self._alphabet == other._alphabet and self._labels == other._labels

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return ", ".join(f"[{word} {label}]" for word, label in self._labels.items())

    def __repr__(self) -> str:
        return f"PrefixCode(alphabet={str(self._alphabet)!r}, code={str(self)!r})"


def as_prefix_code(
    labelling: Mapping[Word, int],
    alphabet: Alphabet | str | Iterable[str] | None = None,
) -> PrefixCode:
    """Builds a code from an explicit labelling, checking every invariant."""
    code = PrefixCode(alphabet)
    code.set_code(labelling)
    return code


__all__ = [
    "PrefixCode",
    "as_prefix_code",
    "structure_problem",
]
