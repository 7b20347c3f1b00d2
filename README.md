# corevm

`corevm` is a small Python library with no dependencies. It provides the parts
of a Corewar virtual machine. Corewar is a programming game in which up to
four *champions*, compiled to bytecode, share a circular memory arena of 4096
bytes. Each champion runs as one or more *carriages* (processes).

## Modules

- **`corevm.ops`**: the machine constants (`MEM_SIZE`, `REG_NUMBER`,
  `CHAMP_MAX_SIZE`, `CYCLE_TO_DIE` and others) and the instruction table
  `OPS`. The table holds `live`, `ld`, `st`, `add`, `sub`, `and`, `or`, `xor`,
  `zjmp`, `ldi`, `sti`, `fork`, `lld`, `lldi`, `lfork` and `aff`.
  - Each instruction is a frozen `Op` with these fields: `name`, `arg_count`,
    `arg_types`, `code`, `cycles`, `description`, `has_type_code` and
    `short_dir`.
  - `ArgType` is a flag enum with the members `REG`, `DIR`, `IND` and `LAB`.
    Its `size` property gives the encoded width of an argument.
  - `op_by_code(code)` looks up an instruction. It raises `ValueError` for an
    unknown code.
  - `arg_type_from_code(code)` maps a two-bit argument code (0 to 3) to an
    `ArgType`.
- **`corevm.arena`**: the circular memory.
  - `Arena` holds `MEM_SIZE` bytes and supports `len()`, indexing with
    wrap-around, and `bytes()`.
  - `Arena.read(address, size)` reads a big-endian signed value.
  - `Arena.write_int(address, value)` stores four big-endian bytes.
  - `Arena.load(address, code)` copies a block of code into memory. It raises
    `ValueError` if the code is larger than the arena.
  - Every address wraps around the end of memory.
  - `bytes_to_int(data)` decodes big-endian bytes into a signed 32-bit value.
    Two-byte values are sign-extended.
- **`corevm.champion`**: reads compiled `.cor` files.
  - The file layout is:
    1. the 4-byte magic number `0xea83f3`;
    2. the name, 128 bytes;
    3. 4 padding bytes;
    4. the 4-byte code size;
    5. the comment, 2048 bytes;
    6. 4 padding bytes;
    7. the code.
  - `parse_champion(data, name)` parses bytes that are already in memory and
    returns a `Champion`. A `Champion` has `name`, `comment`, `code`,
    `file_name` and `size`.
  - `load_champion(path)` reads a file and parses it.
  - Problems raise `ChampionError`. These include a wrong magic number, a
    truncated header, a code size above `CHAMP_MAX_SIZE` (682 bytes), code
    shorter than the header claims, or a file that cannot be opened.
- **`corevm.decoder`**: instruction decoding.
  - `decode_arg_types(byte)` splits an argument-coding byte into three
    `ArgType`s.
  - `decode_command(arena, pc)` decodes the instruction at `pc` and returns a
    `Command`. A `Command` has these members:
    - `op`, `arg_types` and `args`. Register arguments are zero-based.
    - `next_pc`, the address after the instruction.
    - `cycles`, the operation's cycle count minus one.
  - `decode_command` returns `None` in any of these cases:
    - the opcode is unknown;
    - the argument types are not allowed for the instruction;
    - a register number is outside 1 to 16;
    - `pc` is negative.
- **`corevm.options`**: command-line argument parsing.
  - `parse_arguments(argv)` takes the arguments without the program name. It
    accepts `-v`, `-dump N`, `-n N file.cor` and plain `file.cor` arguments.
  - It returns `Options`, which has `players` (a list of `PlayerSpec` with
    `path` and `number`), `dump` (default `-1`) and `verbose`.
  - Players without `-n` receive the lowest free number.
  - A `-n` number that is already taken is moved onto the earlier player.
  - It raises `ArgumentError` in two cases: no champion is given, or `-dump`
    or `-n` is missing its value.
  - `is_cor_file(name)` is true when the text after the first dot is exactly
    `cor`.
  - `next_free_number(players)` returns the lowest player number not yet used.
- **`corevm.vm`**: machine state.
  - `start_address(number, count)` gives player `number` an equal share of
    memory.
  - `load_players(options)` reads every champion and places its code at its
    start address in a fresh `Arena`. It then returns a `VMState` with one
    `Carriage` per player.
  - A `Carriage` holds these fields: `number`, `player`, `champion`, `pc`,
    `carry`, `registers`, `killed`, `last_live_cycle`, `command` and `wait`.
  - A `VMState` holds the arena, the carriages and the cycle counters.
- **`corevm.strutil`**: string helpers.
  - `split(text, sep)` splits on one character and drops empty fields.
  - `trim(text)` strips spaces, commas, newlines and tabs.
  - `exact_sqrt(number)` returns the square root of a perfect square, or 0.
  - `find_within(haystack, needle, limit)` returns an index or `None`.
  - `compare(first, second)`, `compare_n(first, second, count)` and
    `equal_n(first, second, count)` compare strings.
  - `bounded_concat(dst, src, size)` returns the joined string and the full
    length.
  - `read_lines(stream)` yields lines without their newline.
  - `format_int(number)` formats a 32-bit integer. It raises `OverflowError`
    outside that range.

## Example

```python
from corevm.arena import Arena, bytes_to_int
from corevm.champion import parse_champion
from corevm.decoder import decode_command
from corevm.options import parse_arguments
from corevm.vm import start_address

arena = Arena()
arena.write_int(4094, 0x01020304)          # wraps around the end of memory
assert arena.read(4094, 4) == 0x01020304
assert bytes_to_int(b"\xff\xfe") == -2

arena.load(0, bytes([0x01, 0x00, 0x00, 0x00, 0x01]))   # live %1
command = decode_command(arena, 0)
assert command.op.name == "live" and command.args == (1,)
assert command.next_pc == 5

code = bytes([0x01, 0x00, 0x00, 0x00, 0x01])
data = (
    (0xEA83F3).to_bytes(4, "big")
    + b"zork".ljust(128, b"\0")
    + bytes(4)
    + len(code).to_bytes(4, "big")
    + b"just a test".ljust(2048, b"\0")
    + bytes(4)
    + code
)
champion = parse_champion(data, "zork.cor")
assert champion.name == "zork" and champion.size == 5

options = parse_arguments(["-dump", "100", "-n", "2", "zork.cor"])
assert options.dump == 100 and options.players[0].number == 2
assert start_address(2, 2) == 2048
```

`corevm.vm.load_players(options)` reads the files named in `options` from disk.

## What the package does not do

`corevm` has no command-line program. It also does not run a battle:

- There is no cycle loop and no `cycles_to_die` check.
- No instruction is executed. `live`, `ld`, `st`, `fork` and the others are
  described in `OPS` and decoded by `decode_command`, but nothing carries them
  out.
- There is no memory dump output and no winner announcement.

`VMState` and `Carriage` only hold the state that such a loop would work on.

## Running the tests

Install the `test` extra, then run `pytest`.