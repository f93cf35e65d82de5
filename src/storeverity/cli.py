"""Command-line entrypoint invoked by systemd as a generator.

Usage:
    storeverity-generator NORMAL_DIR [EARLY_DIR [LATE_DIR]]
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from storeverity.config import GeneratorConfig
from storeverity.errors import ConfigError, GeneratorError, format_error_chain
from storeverity.generator import generate
from storeverity.observability import StructuredLogger, open_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storeverity-generator",
        description="Generate systemd-veritysetup@nix-store.service from storehash=.",
    )
    # Optional here so a missing destination is reported like every other failure.
    parser.add_argument("destination", nargs="?", help="Generator output directory")
    # systemd hands every generator three directories; only the first is used.
    parser.add_argument("early_dir", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("late_dir", nargs="?", help=argparse.SUPPRESS)
    return parser


def main(argv: Sequence[str] | None = None, *, logger: StructuredLogger | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = GeneratorConfig.from_env()
    except GeneratorError as exc:
        log = logger or open_logger()
        log.error(format_error_chain(exc), operation="config", extra=exc.to_dict())
        if logger is None:
            log.close()
        return 1

    log = logger or open_logger(config.log_target)
    try:
        if not args.destination:
            raise ConfigError(
                "No destination directory was provided",
                hint="systemd passes the generator output directory as the first argument.",
            )
        generate(args.destination, config=config, logger=log)
    except GeneratorError as exc:
        log.error(format_error_chain(exc), operation="generate", extra=exc.to_dict())
        return 1
    finally:
        if logger is None:
            log.close()
    return 0
