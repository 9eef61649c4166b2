"""
Identifier generation: random GUIDs (version 4) and hex IDs.
"""

import uuid
from typing import Optional

from ..utils.secure_buffer import secure_release
from .entropy import EntropySource
from .errors import InvalidArgument
from .integers import get_random_integers

HEX_DIGITS = "0123456789abcdef"
GUID_BYTES = 16


def generate_guid_v4(source: Optional[EntropySource] = None) -> str:
    """
    Generate a random GUID string (RFC 4122 version 4, variant 1).

    How it works:
    1. Draw 16 random bytes (as integers in [0, 255])
    2. Force the version nibble of byte 6 to 0100
    3. Force the top two bits of byte 8 to 10
    4. Render as 8-4-4-4-12 lowercase hex groups
    """
    values = get_random_integers(GUID_BYTES, 0, 255, source=source)
    raw = bytearray(values)
    secure_release(values)
    try:
        raw[6] = (raw[6] & 0x0F) | 0x40
        raw[8] = (raw[8] & 0x3F) | 0x80
        return str(uuid.UUID(bytes=bytes(raw)))
    finally:
        secure_release(raw)


def generate_hex_id(size: int, source: Optional[EntropySource] = None) -> str:
    """Generate a size-character lowercase hex string with no separators."""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidArgument(f"size must be a positive integer, got {size!r}")

    values = get_random_integers(size, 0, 15, source=source)
    try:
        return "".join(HEX_DIGITS[value] for value in values)
    finally:
        secure_release(values)
