"""Kernel command-line parsing for the ``storehash=`` parameter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

CMDLINE_ARG_NAME = "storehash"
DEFAULT_CMDLINE_PATH = "/proc/cmdline"

# Tokens are separated by ASCII whitespace only.
TOKEN_PATTERN = re.compile(r"[^ \t\n\r\f\v]+")

# Offset where the hash partition UUID starts in the storehash value.
DATA_HALF_LENGTH = 32


@dataclass(frozen=True, slots=True)
class Storehash:
    """Raw ``storehash=`` value exactly as it appeared on the command line."""

    value: str

    @classmethod
    def from_cmdline(cls, cmdline: str) -> Storehash | None:
        """Return the storehash from *cmdline*, or ``None`` when it is absent.

        The first whitespace-separated token containing ``storehash=`` wins and
        everything after the last ``=`` of that token is taken verbatim.
        """
        needle = f"{CMDLINE_ARG_NAME}="
        for token in TOKEN_PATTERN.findall(cmdline):
            if needle in token:
                return cls(token.rsplit("=", 1)[-1])
        return None

    @property
    def data_half(self) -> str:
        return self.value[:DATA_HALF_LENGTH]

    @property
    def hash_half(self) -> str:
        return self.value[DATA_HALF_LENGTH:]

    def __str__(self) -> str:
        return self.value


def read_cmdline(path: str | Path = DEFAULT_CMDLINE_PATH) -> str:
    return Path(path).read_text(encoding="utf-8")
