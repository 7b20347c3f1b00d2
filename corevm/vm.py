"""Virtual machine state and loading of players into the arena."""

from __future__ import annotations

from dataclasses import dataclass, field

from .arena import Arena
from .champion import Champion, load_champion
from .decoder import Command
from .ops import CYCLE_TO_DIE, MEM_SIZE, REG_NUMBER
from .options import Options


@dataclass(eq=False)
class Carriage:
    """A process executing code in the arena on behalf of a player."""

    number: int
    player: int
    champion: Champion
    pc: int
    carry: bool = False
    registers: list[int] = field(default_factory=lambda: [0] * REG_NUMBER)
    killed: bool = False
    last_live_cycle: int = 0
    command: Command | None = None
    wait: int = 0


@dataclass
class VMState:
    """Everything the machine tracks between cycles."""

    arena: Arena
    carriages: list[Carriage]
    player_count: int = 0
    dump: int = -1
    verbose: bool = False
    cycle: int = 0
    cycles_to_die: int = CYCLE_TO_DIE
    lives: int = 0
    checks_without_change: int = 0
    cycles_since_check: int = 0
    last_alive: Carriage | None = None

    def __post_init__(self) -> None:
        if self.last_alive is None and self.carriages:
            self.last_alive = self.carriages[0]


def start_address(number: int, count: int) -> int:
    """Address where player `number` of `count` players starts."""
    if count < 1:
        raise ValueError("player count must be positive")
    return MEM_SIZE // count * (number - 1)


def load_players(options: Options) -> VMState:
    """Read every player's champion into a fresh arena and create its carriage."""
    count = len(options.players)
    arena = Arena()
    carriages = []
    for index, spec in enumerate(options.players, start=1):
        champion = load_champion(spec.path)
        pc = start_address(spec.number, count)
        arena.load(pc, champion.code)
        carriages.append(Carriage(index, spec.number, champion, pc))
    return VMState(
        arena,
        carriages,
        player_count=count,
        dump=options.dump,
        verbose=options.verbose,
    )