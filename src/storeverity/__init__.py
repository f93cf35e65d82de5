"""Systemd generator that sets up dm-verity for the Nix store."""

from .cmdline import Storehash
from .config import GeneratorConfig
from .devices import VerityDevices, convert_to_unit, partuuid_device, resolve_devices
from .errors import (
    ConfigError,
    ErrorCode,
    EscapeError,
    GeneratorError,
    InstallError,
    MalformedIdentityError,
    PathShapeError,
    format_error_chain,
)
from .escape import EscapeFn, SystemdEscape
from .generator import GenerateResult, generate
from .identity import convert_to_device_uuid
from .install import InstallResult, install_service
from .unit import SERVICE_NAME, DeviceUnits, create_service_file, render_service_unit

__all__ = [
    "ConfigError",
    "DeviceUnits",
    "ErrorCode",
    "EscapeError",
    "EscapeFn",
    "GenerateResult",
    "GeneratorConfig",
    "GeneratorError",
    "InstallError",
    "InstallResult",
    "MalformedIdentityError",
    "PathShapeError",
    "SERVICE_NAME",
    "Storehash",
    "SystemdEscape",
    "VerityDevices",
    "convert_to_device_uuid",
    "convert_to_unit",
    "create_service_file",
    "format_error_chain",
    "generate",
    "install_service",
    "partuuid_device",
    "render_service_unit",
    "resolve_devices",
]
