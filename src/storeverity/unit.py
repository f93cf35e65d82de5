"""Rendering of the ``systemd-veritysetup@nix-store.service`` unit."""

from __future__ import annotations

from dataclasses import dataclass

from storeverity.cmdline import Storehash
from storeverity.devices import VerityDevices, convert_to_unit, resolve_devices
from storeverity.escape import EscapeFn

SERVICE_NAME = "systemd-veritysetup@nix-store.service"
VERITY_VOLUME_NAME = "nix-store"
DEFAULT_SYSTEMD_VERITYSETUP = "/usr/lib/systemd/systemd-veritysetup"


@dataclass(frozen=True, slots=True)
class DeviceUnits:
    data: str
    hash: str


def device_units(devices: VerityDevices, *, escape: EscapeFn) -> DeviceUnits:
    return DeviceUnits(
        data=convert_to_unit(devices.data, escape=escape),
        hash=convert_to_unit(devices.hash, escape=escape),
    )


def render_service_unit(
    devices: VerityDevices,
    units: DeviceUnits,
    storehash: Storehash,
    *,
    veritysetup: str = DEFAULT_SYSTEMD_VERITYSETUP,
) -> str:
    """Render the veritysetup service that attaches the Nix store volume.

    The ``[Unit]`` section binds the service to both partitions and orders it
    before ``veritysetup.target``; the ``[Service]`` section attaches the
    volume with the storehash as root hash and detaches it on stop.
    """
    device_deps = f"{units.data} {units.hash}"
    unit_lines = (
        "[Unit]",
        "Description=Integrity Protection Setup for %I",
        "DefaultDependencies=no",
        "IgnoreOnIsolate=true",
        "After=veritysetup-pre.target systemd-udevd-kernel.socket",
        "Before=blockdev@dev-mapper-%i.target",
        "Wants=blockdev@dev-mapper-%i.target",
        "Before=veritysetup.target",
        f"BindsTo={device_deps}",
        f"After={device_deps}",
    )
    service_lines = (
        "[Service]",
        "Type=oneshot",
        "RemainAfterExit=yes",
        f"ExecStart={veritysetup} attach {VERITY_VOLUME_NAME} "
        f"{devices.data} {devices.hash} {storehash}",
        f"ExecStop={veritysetup} detach {VERITY_VOLUME_NAME}",
    )
    return "\n".join(unit_lines) + "\n" + "\n".join(service_lines) + "\n"


def create_service_file(
    storehash: Storehash,
    *,
    escape: EscapeFn,
    veritysetup: str = DEFAULT_SYSTEMD_VERITYSETUP,
) -> str:
    devices = resolve_devices(storehash)
    units = device_units(devices, escape=escape)
    return render_service_unit(devices, units, storehash, veritysetup=veritysetup)
