"""Device paths and their systemd ``.device`` unit names."""

from __future__ import annotations

from dataclasses import dataclass

from storeverity.cmdline import Storehash
from storeverity.errors import EscapeError, PathShapeError
from storeverity.escape import EscapeFn
from storeverity.identity import convert_to_device_uuid

PARTUUID_DIR = "/dev/disk/by-partuuid"
DEVICE_UNIT_SUFFIX = ".device"


@dataclass(frozen=True, slots=True)
class VerityDevices:
    data: str
    hash: str


def partuuid_device(device_uuid: str) -> str:
    return f"{PARTUUID_DIR}/{device_uuid}"


def resolve_devices(storehash: Storehash) -> VerityDevices:
    """Resolve the data and hash partitions named by *storehash*."""
    data_uuid = convert_to_device_uuid(storehash.data_half, half="data")
    hash_uuid = convert_to_device_uuid(storehash.hash_half, half="hash")
    return VerityDevices(data=partuuid_device(data_uuid), hash=partuuid_device(hash_uuid))


def convert_to_unit(device_path: str, *, escape: EscapeFn) -> str:
    """Convert a path to a device into a systemd unit name.

    For example ``/dev/vda`` becomes ``dev-vda.device``.
    """
    if not device_path.startswith("/"):
        raise PathShapeError(
            f"Failed to strip '/' from {device_path}",
            context={"device": device_path},
        )
    stripped = device_path[1:]
    try:
        escaped = escape(stripped)
    except EscapeError as exc:
        raise EscapeError(
            f"Failed to convert {device_path} to systemd unit name",
            context={"device": device_path},
        ) from exc
    return f"{escaped}{DEVICE_UNIT_SUFFIX}"
