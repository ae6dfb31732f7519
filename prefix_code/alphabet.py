"""
Ordered alphabets over which prefix codes are built.

An alphabet is a non-empty sequence of distinct single-character symbols.
Its order is the order of the sequence, and it induces the dictionary order
on codewords used for rendering, labelling and the permutation projection.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from prefix_code.constants import DEFAULT_ALPHABET, EMPTY_WORD
from prefix_code.types import AlphabetError, Word


def make_alphabet(s: str) -> tuple[str, ...]:
    """Turns a string into its sorted symbols without duplicates."""
    return tuple(sorted(set(s)))


@dataclass(frozen=True)
class Alphabet:
    """
    Ordered set of symbols.

    Example:
        >>> alphabet = Alphabet(("b", "a"))
        >>> alphabet.sort_key("ab") < alphabet.sort_key("ba")
        False
        >>> str(Alphabet.from_string("hello"))
        'ehlo'
    """

    symbols: tuple[str, ...]
    _ranks: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        symbols = tuple(self.symbols)
        if not symbols:
            raise AlphabetError("Empty alphabet forbidden")
        for symbol in symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise AlphabetError(
                    f"Alphabet symbols must be single characters, got {symbol!r}"
                )
            if symbol == EMPTY_WORD:
                raise AlphabetError(f"Forbidden character `{EMPTY_WORD}` in alphabet")
        if len(set(symbols)) != len(symbols):
            raise AlphabetError(f"Duplicate symbols in alphabet {symbols}")

        object.__setattr__(self, "symbols", symbols)
        object.__setattr__(
            self, "_ranks", {symbol: rank for rank, symbol in enumerate(symbols)}
        )

    @classmethod
    def from_string(cls, s: str) -> "Alphabet":
        """Alphabet of the distinct characters of `s`, sorted by code point."""
        return cls(make_alphabet(s))

    @classmethod
    def binary(cls) -> "Alphabet":
        return cls.from_string(DEFAULT_ALPHABET)

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._ranks

    def __str__(self) -> str:
        return "".join(self.symbols)

    def rank(self, symbol: str) -> int:
        """Position of `symbol` in the alphabet order."""
        return self._ranks[symbol]

    def is_word(self, word: Word) -> bool:
        """True if every character of `word` is a symbol. The empty word qualifies."""
        return all(symbol in self._ranks for symbol in word)

    def sort_key(self, word: Word) -> tuple[int, ...]:
        """Key realising the dictionary order induced by the alphabet."""
        if word == EMPTY_WORD:
            return ()
        return tuple(self._ranks[symbol] for symbol in word)

    def sorted(self, words: Iterable[Word]) -> list[Word]:
        return sorted(words, key=self.sort_key)

    def extensions(self, word: Word) -> tuple[Word, ...]:
        """The one-symbol extensions of `word`, in alphabet order."""
        return tuple(word + symbol for symbol in self.symbols)


def as_alphabet(value: "Alphabet | str | Iterable[str] | None") -> Alphabet:
    """
    Coerces the accepted alphabet descriptions.

    - None: the default binary alphabet
    - str: raw string, deduplicated and sorted
    - any other iterable: explicit ordered symbols, kept as given
    """
    if value is None:
        return Alphabet.binary()
    if isinstance(value, Alphabet):
        return value
    if isinstance(value, str):
        return Alphabet.from_string(value)
    return Alphabet(tuple(value))


__all__ = [
    "Alphabet",
    "as_alphabet",
    "make_alphabet",
]
