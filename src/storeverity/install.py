"""Placement of the rendered unit into the generator output directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storeverity.errors import InstallError
from storeverity.unit import SERVICE_NAME

REQUIRES_DIR_NAME = "veritysetup.target.requires"


@dataclass(frozen=True, slots=True)
class InstallResult:
    service_path: Path
    link_path: Path


def install_service(destination: str | Path, content: str) -> InstallResult:
    """Write the unit and pull it into ``veritysetup.target``.

    Nothing is rolled back: if the symlink cannot be created the unit file
    stays in place.
    """
    destination_dir = Path(destination)
    service_path = destination_dir / SERVICE_NAME
    requires_dir = destination_dir / REQUIRES_DIR_NAME
    link_path = requires_dir / SERVICE_NAME

    try:
        service_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise InstallError(
            "Failed to create service file",
            context={"operation": "write", "path": str(service_path)},
        ) from exc

    try:
        requires_dir.mkdir()
    except OSError as exc:
        raise InstallError(
            f"Failed to create {requires_dir}",
            context={"operation": "mkdir", "path": str(requires_dir)},
        ) from exc

    try:
        os.symlink(service_path, link_path)
    except OSError as exc:
        raise InstallError(
            f"Failed to link {link_path} to {service_path}",
            context={"operation": "symlink", "path": str(link_path)},
        ) from exc

    return InstallResult(service_path=service_path, link_path=link_path)
