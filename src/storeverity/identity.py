"""Partition UUID normalization for the two storehash halves."""

from __future__ import annotations

import re
import uuid
from typing import Literal

from storeverity.errors import MalformedIdentityError

Half = Literal["data", "hash"]

SIMPLE_UUID_PATTERN = re.compile(r"^[0-9A-Fa-f]{32}$")


def convert_to_device_uuid(text: str, *, half: Half) -> str:
    """Convert a simple-form UUID to the hyphenated form udev uses for devices.

    The simple form carries no hyphens while udev creates the links in
    ``/dev/disk/by-partuuid`` with hyphenated, lowercase UUIDs.
    """
    if SIMPLE_UUID_PATTERN.fullmatch(text) is None:
        raise MalformedIdentityError(
            f"Failed to parse {half} half {text!r} as a UUID",
            hint="storehash must start with two 32-digit hex partition UUIDs.",
            context={"half": half, "input": text, "length": str(len(text))},
        )
    return str(uuid.UUID(hex=text))
