"""Unit-name escaping through ``systemd-escape``.

Unit names are produced by the real ``systemd-escape`` binary rather than a
local reimplementation, so the generated names always agree with the escaping
rules of the systemd running on the machine.  Anything implementing
:class:`EscapeFn` can stand in for it.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Protocol

from storeverity.errors import EscapeError

DEFAULT_SYSTEMD_ESCAPE = "systemd-escape"


class EscapeFn(Protocol):
    def __call__(self, text: str) -> str: ...


@dataclass(frozen=True, slots=True)
class SystemdEscape:
    """Escape strings by running ``systemd-escape <text>``."""

    executable: str = DEFAULT_SYSTEMD_ESCAPE

    def __call__(self, text: str) -> str:
        command = [self.executable, text]
        try:
            completed = subprocess.run(command, capture_output=True, check=False)
        except OSError as exc:
            raise EscapeError(
                f"Failed to run systemd-escape: {self.executable}",
                hint="Set SYSTEMD_ESCAPE_PATH to the systemd-escape binary.",
                context={"argv": " ".join(command)},
            ) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise EscapeError(
                f"systemd-escape failed with exit code {completed.returncode} for {text}",
                context={
                    "argv": " ".join(command),
                    "returncode": str(completed.returncode),
                    "stderr": stderr[:2000],
                },
            )

        stdout = completed.stdout
        # Remove the newline systemd-escape terminates its output with.
        if stdout.endswith(b"\n"):
            stdout = stdout[:-1]
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EscapeError(
                f"Failed to convert systemd-escape output for {text} to a UTF-8 string",
                context={"argv": " ".join(command)},
            ) from exc
