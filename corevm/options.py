"""Command-line argument handling for the virtual machine."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .ops import MAX_PLAYERS


class ArgumentError(Exception):
    """The command line could not be understood."""


@dataclass
class PlayerSpec:
    """A champion file together with its player number."""

    path: str
    number: int


@dataclass
class Options:
    """Settings taken from the command line."""

    players: list[PlayerSpec] = field(default_factory=list)
    dump: int = -1
    verbose: bool = False


_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def is_cor_file(name: str) -> bool:
    """True when everything after the first dot of `name` is exactly "cor"."""
    _, dot, rest = name.partition(".")
    return bool(dot) and rest == "cor"


def next_free_number(players: Iterable[PlayerSpec]) -> int:
    """Smallest player number from 1 to MAX_PLAYERS not yet taken."""
    used = {player.number for player in players}
    return next((n for n in range(1, MAX_PLAYERS + 1) if n not in used), MAX_PLAYERS + 1)


def _value_at(args: Sequence[str], index: int) -> str:
    if index >= len(args):
        raise ArgumentError(f"missing value after {args[index - 1]}")
    return args[index]


def _numbered_player(args: Sequence[str], index: int,
                     players: list[PlayerSpec]) -> tuple[int, bool]:
    """Handle "-n N file.cor" starting at `index`; return the new index and success."""
    index += 1
    number_text = _value_at(args, index)
    number = _atoi(number_text)
    if not (number_text[:1].isascii() and number_text[:1].isdigit() and 1 <= number <= MAX_PLAYERS):
        return index, False
    index += 1
    path = _value_at(args, index)
    if not is_cor_file(path):
        return index, False
    count = len(players) + 1
    taken = next((player for player in players if player.number == number), None)
    if taken is not None:
        taken.number = count
    players.append(PlayerSpec(path, number))
    return index + 1, True


def parse_arguments(argv: Sequence[str]) -> Options:
    """Parse arguments (without the program name) into Options."""
    args = list(argv)
    options = Options()
    players = options.players
    index = 0
    while index < len(args) and len(players) <= MAX_PLAYERS:
        arg = args[index]
        if arg == "-v":
            options.verbose = True
        elif arg == "-dump":
            index += 1
            options.dump = _atoi(_value_at(args, index))
        else:
            accepted = True
            if arg == "-n":
                index, accepted = _numbered_player(args, index, players)
            if accepted and index < len(args) and is_cor_file(args[index]):
                players.append(PlayerSpec(args[index], next_free_number(players)))
        index += 1
    if not players:
        raise ArgumentError("invalid input str")
    return options