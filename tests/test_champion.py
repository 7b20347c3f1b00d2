import pytest

from corevm.champion import Champion, ChampionError, load_champion, parse_champion
from corevm.ops import CHAMP_MAX_SIZE, COMMENT_LENGTH, COREWAR_EXEC_MAGIC, PROG_NAME_LENGTH


def build(name=b"zork", comment=b"just a test", code=b"\x01\x00\x00\x00\x01",
          size=None, magic=COREWAR_EXEC_MAGIC):
    size = len(code) if size is None else size
    return (
        magic.to_bytes(4, "big")
        + name.ljust(PROG_NAME_LENGTH, b"\0")
        + bytes(4)
        + size.to_bytes(4, "big")
        + comment.ljust(COMMENT_LENGTH, b"\0")
        + bytes(4)
        + code
    )


def test_parse_valid():
    champ = parse_champion(build(), "zork.cor")
    assert champ == Champion("zork", "just a test", b"\x01\x00\x00\x00\x01", "zork.cor")
    assert champ.size == 5


def test_empty_code_is_allowed():
    champ = parse_champion(build(code=b""), "empty.cor")
    assert champ.code == b""


def test_maximum_size_is_allowed():
    code = bytes(CHAMP_MAX_SIZE)
    assert parse_champion(build(code=code), "big.cor").size == CHAMP_MAX_SIZE


def test_extra_trailing_bytes_are_ignored():
    champ = parse_champion(build(code=b"\x10") + b"\xff\xff", "t.cor")
    assert champ.code == b"\x10"


def test_bad_magic():
    with pytest.raises(ChampionError, match="COREWAR_EXEC_MAGIC of player bad.cor"):
        parse_champion(build(magic=0x123456), "bad.cor")


def test_short_magic():
    with pytest.raises(ChampionError, match="COREWAR_EXEC_MAGIC"):
        parse_champion(COREWAR_EXEC_MAGIC.to_bytes(4, "big")[1:], "x.cor")


def test_truncated_name():
    data = build()[: 4 + PROG_NAME_LENGTH - 1]
    with pytest.raises(ChampionError, match="PROG_NAME_LENGTH"):
        parse_champion(data, "x.cor")


def test_oversized_program():
    with pytest.raises(ChampionError, match="CHAMP_MAX_SIZE"):
        parse_champion(build(code=bytes(CHAMP_MAX_SIZE + 1)), "x.cor")


def test_truncated_comment():
    data = build()[: 4 + PROG_NAME_LENGTH + 8 + 10]
    with pytest.raises(ChampionError, match="invalid COMMENT_LENGTH"):
        parse_champion(data, "x.cor")


def test_truncated_code():
    with pytest.raises(ChampionError, match="prog_size"):
        parse_champion(build(code=b"\x01\x02", size=10), "x.cor")


def test_load_from_file(tmp_path):
    path = tmp_path / "zork.cor"
    path.write_bytes(build(name=b"abc"))
    champ = load_champion(path)
    assert champ.name == "abc"
    assert champ.file_name == str(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(ChampionError, match="invalid fd"):
        load_champion(tmp_path / "missing.cor")