"""Runtime configuration resolved once from the generator's environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, cast

from storeverity.cmdline import DEFAULT_CMDLINE_PATH
from storeverity.errors import ConfigError
from storeverity.escape import DEFAULT_SYSTEMD_ESCAPE
from storeverity.unit import DEFAULT_SYSTEMD_VERITYSETUP

LogTarget = Literal["kmsg", "stderr"]

ESCAPE_PATH_ENV = "SYSTEMD_ESCAPE_PATH"
VERITYSETUP_PATH_ENV = "SYSTEMD_VERITYSETUP_PATH"
CMDLINE_PATH_ENV = "STOREVERITY_CMDLINE_PATH"
LOG_TARGET_ENV = "STOREVERITY_LOG_TARGET"

LOG_TARGETS: tuple[LogTarget, ...] = ("kmsg", "stderr")
DEFAULT_LOG_TARGET: LogTarget = "kmsg"


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    escape_path: str = DEFAULT_SYSTEMD_ESCAPE
    veritysetup_path: str = DEFAULT_SYSTEMD_VERITYSETUP
    cmdline_path: str = DEFAULT_CMDLINE_PATH
    log_target: LogTarget = DEFAULT_LOG_TARGET

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GeneratorConfig:
        """Build a config from *environ* (``os.environ`` when omitted)."""
        env = os.environ if environ is None else environ
        log_target = _read(env, LOG_TARGET_ENV, DEFAULT_LOG_TARGET)
        if log_target not in LOG_TARGETS:
            raise ConfigError(
                f"Unsupported log target {log_target!r}.",
                hint=f"Use one of: {', '.join(LOG_TARGETS)}.",
                context={"variable": LOG_TARGET_ENV},
            )
        return cls(
            escape_path=_read(env, ESCAPE_PATH_ENV, DEFAULT_SYSTEMD_ESCAPE),
            veritysetup_path=_read(env, VERITYSETUP_PATH_ENV, DEFAULT_SYSTEMD_VERITYSETUP),
            cmdline_path=_read(env, CMDLINE_PATH_ENV, DEFAULT_CMDLINE_PATH),
            log_target=cast(LogTarget, log_target),
        )


def _read(env: Mapping[str, str], name: str, default: str) -> str:
    if name not in env:
        return default
    value = env[name]
    if not value:
        raise ConfigError(
            f"{name} must not be empty.",
            hint=f"Unset {name} to use the default {default!r}.",
            context={"variable": name},
        )
    return value
