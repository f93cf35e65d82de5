"""Generate the veritysetup unit for a dm-verity protected Nix store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from storeverity.cmdline import Storehash, read_cmdline
from storeverity.config import GeneratorConfig
from storeverity.devices import resolve_devices
from storeverity.errors import ConfigError
from storeverity.escape import EscapeFn, SystemdEscape
from storeverity.install import InstallResult, install_service
from storeverity.observability import StructuredLogger
from storeverity.unit import device_units, render_service_unit


@dataclass(frozen=True, slots=True)
class GenerateResult:
    storehash: Storehash | None = None
    installed: InstallResult | None = None

    @property
    def generated(self) -> bool:
        return self.installed is not None


def generate(
    destination: str | Path,
    *,
    config: GeneratorConfig | None = None,
    escape: EscapeFn | None = None,
    logger: StructuredLogger | None = None,
) -> GenerateResult:
    """Write ``systemd-veritysetup@nix-store.service`` into *destination*.

    Does nothing when the kernel command line carries no ``storehash=``.
    """
    cfg = config or GeneratorConfig()
    log = logger or StructuredLogger()
    escape_fn = escape or SystemdEscape(cfg.escape_path)

    try:
        cmdline = read_cmdline(cfg.cmdline_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(
            f"Failed to read kernel command line from {cfg.cmdline_path}",
            context={"path": cfg.cmdline_path},
        ) from exc

    storehash = Storehash.from_cmdline(cmdline)
    if storehash is None:
        return GenerateResult()

    devices = resolve_devices(storehash)
    log.info(
        f"Using verity data device {devices.data}, hash device {devices.hash}, "
        f"and hash {storehash} for nix-store.",
        operation="generate",
        extra={"data_device": devices.data, "hash_device": devices.hash},
    )

    units = device_units(devices, escape=escape_fn)
    content = render_service_unit(devices, units, storehash, veritysetup=cfg.veritysetup_path)
    installed = install_service(destination, content)
    return GenerateResult(storehash=storehash, installed=installed)
