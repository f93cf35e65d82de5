"""Typed generator error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable error identifiers reported in the kernel log."""

    CONFIG = "E_CONFIG"
    IDENTITY = "E_IDENTITY"
    ESCAPE = "E_ESCAPE"
    PATH_SHAPE = "E_PATH_SHAPE"
    FILESYSTEM = "E_FILESYSTEM"


class GeneratorError(Exception):
    """Base error class; subclasses pick their code through ``error_code``."""

    error_code: ClassVar[ErrorCode]

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = self.error_code.value
        self.hint = hint
        self.context = dict(context or {})

    @property
    def message(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        parts.extend(f"  {k}: {v}" for k, v in self.context.items() if v)
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ConfigError(GeneratorError):
    """Unusable environment, arguments or command-line source."""

    error_code = ErrorCode.CONFIG


class MalformedIdentityError(GeneratorError):
    """A storehash half is not a 32-digit hex partition UUID."""

    error_code = ErrorCode.IDENTITY


class EscapeError(GeneratorError):
    error_code = ErrorCode.ESCAPE


class PathShapeError(GeneratorError):
    error_code = ErrorCode.PATH_SHAPE


class InstallError(GeneratorError):
    """Writing the unit, the requires directory or the symlink failed."""

    error_code = ErrorCode.FILESYSTEM


def format_error_chain(error: BaseException) -> str:
    """Render *error* and every ``__cause__`` behind it on a single line."""
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, GeneratorError):
            text = current.message
        else:
            text = str(current) or type(current).__name__
        messages.append(text)
        current = current.__cause__
    return ": ".join(messages)


__all__ = [
    "ConfigError",
    "ErrorCode",
    "EscapeError",
    "GeneratorError",
    "InstallError",
    "MalformedIdentityError",
    "PathShapeError",
    "format_error_chain",
]
