"""
Command line front end.

Examples:
    prefix-code show --expand 1001 --reduce 10
    prefix-code --alphabet abc carets --dfs 1100000
    prefix-code join 1100100 1011000
"""

import argparse
import logging
from collections.abc import Sequence
from typing import TypeAlias

from prefix_code.alphabet import Alphabet, as_alphabet
from prefix_code.code import PrefixCode
from prefix_code.constants import DEFAULT_ALPHABET
from prefix_code.dfs import encode_dfs
from prefix_code.lattice import join, meet
from prefix_code.permutation import perm_to_string
from prefix_code.types import Outcome

logger = logging.getLogger(__name__)

Step: TypeAlias = tuple[str, str]


def _step(kind: str):
    def parse(word: str) -> Step:
        return kind, word

    return parse


def build_code(alphabet: Alphabet, dfs: str | None, steps: Sequence[Step]) -> PrefixCode:
    """Decodes `dfs` (or starts trivial) and applies the steps in order."""
    code = PrefixCode.from_dfs(dfs, alphabet) if dfs else PrefixCode(alphabet)
    for kind, word in steps:
        if kind == "expand":
            outcome = code.expand_at(word)
        else:
            outcome = code.reduce_at(word)
        if outcome is Outcome.INVALID:
            logger.warning(f"{kind} {word!r}: not a word over {alphabet}")
        else:
            logger.debug(f"{kind} {word!r}: {outcome.value}")
    return code


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prefix-code", description="Manipulate complete prefix codes"
    )
    parser.add_argument(
        "--alphabet",
        default=DEFAULT_ALPHABET,
        help="Alphabet characters, deduplicated and sorted (default: %(default)s)",
    )
    parser.add_argument(
        "--ordered",
        action="store_true",
        help="Keep the alphabet characters in the given order",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    def add_code_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--dfs", help="Start from the code a DFS string describes")
        sub.add_argument(
            "--expand",
            dest="steps",
            action="append",
            type=_step("expand"),
            default=[],
            metavar="WORD",
            help="Expand at WORD (repeatable, applied in order)",
        )
        sub.add_argument(
            "--reduce",
            dest="steps",
            action="append",
            type=_step("reduce"),
            default=[],
            metavar="WORD",
            help="Reduce at WORD (repeatable, applied in order)",
        )

    show = commands.add_parser("show", help="Print a code as [codeword label] pairs")
    add_code_arguments(show)
    show.add_argument(
        "--perm", action="store_true", help="Also print the label permutation"
    )

    carets = commands.add_parser("carets", help="Print the exposed carets of a code")
    add_code_arguments(carets)

    encode = commands.add_parser("encode", help="Print the DFS string of a code")
    add_code_arguments(encode)

    for name, help_text in (("join", "Print the join"), ("meet", "Print the meet")):
        sub = commands.add_parser(name, help=f"{help_text} of two DFS-described codes")
        sub.add_argument("left", help="DFS string of the first code")
        sub.add_argument("right", help="DFS string of the second code")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s | %(message)s",
    )
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.ordered:
            alphabet = Alphabet(tuple(args.alphabet))
        else:
            alphabet = as_alphabet(args.alphabet)

        if args.command in ("join", "meet"):
            left = PrefixCode.from_dfs(args.left, alphabet)
            right = PrefixCode.from_dfs(args.right, alphabet)
            operation = join if args.command == "join" else meet
            print(operation(left, right))
            return 0

        code = build_code(alphabet, args.dfs, args.steps)
        if args.command == "show":
            print(code)
            if args.perm:
                print(perm_to_string(code.permutation()))
        elif args.command == "carets":
            print(" ".join(code.exposed_carets()))
        elif args.command == "encode":
            print(encode_dfs(code))
    except ValueError as error:
        parser.error(str(error))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
