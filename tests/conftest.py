"""Shared test fixtures."""

from __future__ import annotations

import errno
import io
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from textwrap import dedent

import pytest

from storeverity.observability import KMSG_RECORD_LIMIT

STOREHASH = "94821122dbec8355df07f3670177b0cb147683a355c07da6a2fb85313cc02254"

EXPECTED_SERVICE_FILE = dedent(r"""
    [Unit]
    Description=Integrity Protection Setup for %I
    DefaultDependencies=no
    IgnoreOnIsolate=true
    After=veritysetup-pre.target systemd-udevd-kernel.socket
    Before=blockdev@dev-mapper-%i.target
    Wants=blockdev@dev-mapper-%i.target
    Before=veritysetup.target
    BindsTo=dev-disk-by\x2dpartuuid-94821122\x2ddbec\x2d8355\x2ddf07\x2df3670177b0cb.device dev-disk-by\x2dpartuuid-147683a3\x2d55c0\x2d7da6\x2da2fb\x2d85313cc02254.device
    After=dev-disk-by\x2dpartuuid-94821122\x2ddbec\x2d8355\x2ddf07\x2df3670177b0cb.device dev-disk-by\x2dpartuuid-147683a3\x2d55c0\x2d7da6\x2da2fb\x2d85313cc02254.device
    [Service]
    Type=oneshot
    RemainAfterExit=yes
    ExecStart=systemd-veritysetup attach nix-store /dev/disk/by-partuuid/94821122-dbec-8355-df07-f3670177b0cb /dev/disk/by-partuuid/147683a3-55c0-7da6-a2fb-85313cc02254 94821122dbec8355df07f3670177b0cb147683a355c07da6a2fb85313cc02254
    ExecStop=systemd-veritysetup detach nix-store
""").lstrip("\n")


def unit_escape(text: str) -> str:
    """Escape *text* the way ``systemd-escape`` does without ``--path``."""
    out: list[str] = []
    for index, char in enumerate(text):
        if char == "/":
            out.append("-")
        elif (char.isascii() and char.isalnum()) or char in ":_" or (char == "." and index > 0):
            out.append(char)
        else:
            out.extend(f"\\x{byte:02x}" for byte in char.encode("utf-8"))
    return "".join(out)


@dataclass(slots=True)
class RecordingEscape:
    calls: list[str] = field(default_factory=list)

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        return unit_escape(text)


class KmsgSink(io.BytesIO):
    """Byte sink that rejects records the way ``/dev/kmsg`` does."""

    def __init__(self, *, broken: bool = False) -> None:
        super().__init__()
        self.broken = broken
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:  # type: ignore[override]
        if self.broken or len(data) > KMSG_RECORD_LIMIT:
            raise OSError(errno.EINVAL, "Invalid argument")
        self.writes.append(bytes(data))
        return super().write(data)


@pytest.fixture
def escape() -> RecordingEscape:
    """Provide an in-process stand-in for ``systemd-escape``."""
    return RecordingEscape()


@pytest.fixture
def cmdline_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write a fake ``/proc/cmdline`` and return its path."""

    def write(content: str) -> Path:
        path = tmp_path / "cmdline"
        path.write_text(content + "\n", encoding="utf-8")
        return path

    return write


@pytest.fixture
def escape_script(tmp_path: Path) -> Callable[[str], Path]:
    """Create an executable shell script standing in for ``systemd-escape``."""

    def write(body: str, name: str = "systemd-escape") -> Path:
        path = tmp_path / "bin" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        path.chmod(0o755)
        return path

    return write
