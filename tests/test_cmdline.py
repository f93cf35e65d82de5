from pathlib import Path

import pytest
from conftest import STOREHASH

from storeverity.cmdline import Storehash, read_cmdline


def test_parse_storehash_from_cmdline() -> None:
    storehash = Storehash.from_cmdline(f"storehash={STOREHASH}")
    assert storehash is not None
    assert storehash.value == STOREHASH
    assert str(storehash) == STOREHASH


def test_storehash_found_among_other_parameters() -> None:
    cmdline = f"init=/nix/store/abc-init quiet\tstorehash={STOREHASH}  console=ttyS0\n"
    storehash = Storehash.from_cmdline(cmdline)
    assert storehash == Storehash(STOREHASH)


def test_missing_storehash_returns_none() -> None:
    assert Storehash.from_cmdline("quiet console=ttyS0 root=/dev/vda1") is None
    assert Storehash.from_cmdline("") is None
    assert Storehash.from_cmdline("storehash") is None


def test_value_after_last_equals_sign_is_used() -> None:
    storehash = Storehash.from_cmdline("rd.storehash=a=b=c quiet")
    assert storehash == Storehash("c")


def test_first_matching_token_wins() -> None:
    storehash = Storehash.from_cmdline("storehash=first storehash=second")
    assert storehash == Storehash("first")


def test_empty_value_is_captured_verbatim() -> None:
    assert Storehash.from_cmdline("storehash= quiet") == Storehash("")


def test_only_ascii_whitespace_separates_tokens() -> None:
    storehash = Storehash.from_cmdline("quiet\u00a0storehash=abc")
    assert storehash == Storehash("abc")


@pytest.mark.parametrize(
    ("value", "data_half", "hash_half"),
    [
        (STOREHASH, STOREHASH[:32], STOREHASH[32:]),
        (STOREHASH + "ff", STOREHASH[:32], STOREHASH[32:] + "ff"),
        ("abc", "abc", ""),
    ],
)
def test_split_is_positional(value: str, data_half: str, hash_half: str) -> None:
    storehash = Storehash(value)
    assert storehash.data_half == data_half
    assert storehash.hash_half == hash_half


def test_read_cmdline(tmp_path: Path) -> None:
    path = tmp_path / "cmdline"
    path.write_text(f"quiet storehash={STOREHASH}\n", encoding="utf-8")
    assert read_cmdline(path) == f"quiet storehash={STOREHASH}\n"
