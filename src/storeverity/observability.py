"""Structured logging for a generator that runs before the journal exists."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Literal

Level = Literal["info", "error"]

KMSG_PATH = "/dev/kmsg"
LOG_TAG = "storeverity"

# /dev/kmsg rejects longer writes with EINVAL.
KMSG_RECORD_LIMIT = 1024

# syslog priorities understood by /dev/kmsg
SYSLOG_PRIORITIES: dict[str, int] = {"error": 3, "info": 6}


@dataclass(slots=True)
class StructuredLogger:
    sink: BinaryIO | None = None
    kernel_priorities: bool = False
    tag: str = LOG_TAG
    owns_sink: bool = False
    records: list[dict[str, Any]] = field(default_factory=list)

    def log(
        self,
        *,
        operation: str,
        message: str,
        level: Level = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        self._emit(level, message)

    def info(self, message: str, *, operation: str, extra: dict[str, Any] | None = None) -> None:
        self.log(operation=operation, message=message, level="info", extra=extra)

    def error(self, message: str, *, operation: str, extra: dict[str, Any] | None = None) -> None:
        self.log(operation=operation, message=message, level="error", extra=extra)

    def close(self) -> None:
        if self.owns_sink and self.sink is not None:
            self.sink.close()
        self.sink = None

    def _emit(self, level: Level, message: str) -> None:
        if self.sink is None:
            return
        prefix = f"<{SYSLOG_PRIORITIES[level]}>" if self.kernel_priorities else ""
        # /dev/kmsg takes one record per write.
        for line in message.splitlines() or [""]:
            record = _truncate_record(f"{prefix}{self.tag}: {line}".encode())
            try:
                self.sink.write(record)
                self.sink.flush()
            except OSError:
                self._fall_back_to_stderr()
                self.sink.write(_truncate_record(f"{self.tag}: {line}".encode()))
                self.sink.flush()

    def _fall_back_to_stderr(self) -> None:
        failed = self.sink
        self.sink = sys.stderr.buffer
        self.kernel_priorities = False
        if self.owns_sink and failed is not None:
            self.owns_sink = False
            failed.close()


def _truncate_record(line: bytes) -> bytes:
    limit = KMSG_RECORD_LIMIT - 1
    if len(line) > limit:
        # Drop a multi-byte character cut in half at the limit.
        line = line[:limit].decode("utf-8", errors="ignore").encode()
    return line + b"\n"


def open_logger(target: Literal["kmsg", "stderr"] = "kmsg") -> StructuredLogger:
    """Return a logger writing to the kernel log, or stderr if that is unavailable."""
    if target == "kmsg":
        try:
            # Unbuffered, so every record is exactly one write(2).
            sink = open(KMSG_PATH, "wb", buffering=0)  # noqa: SIM115
        except OSError:
            return StructuredLogger(sink=sys.stderr.buffer)
        return StructuredLogger(sink=sink, kernel_priorities=True, owns_sink=True)
    return StructuredLogger(sink=sys.stderr.buffer)
