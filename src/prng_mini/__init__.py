"""
prng-mini: secure random bytes, bounded integers, identifiers and
checksum-constrained license keys.
"""

from .core import (
    ALPHANUMERIC,
    HEX,
    AllocationFailure,
    ChecksumMismatch,
    EntropyReadIncomplete,
    EntropySource,
    EntropySourceUnavailable,
    InvalidArgument,
    KeyAlphabet,
    PrngMiniError,
    generate_guid_v4,
    generate_hex_id,
    generate_license_key,
    get_random_bytes,
    get_random_integer,
    get_random_integers,
    validate_license_key,
)
from .utils import SecureBuffer, secure_release

__version__ = "0.1.0"

__all__ = [
    'EntropySource',
    'SecureBuffer',
    'secure_release',
    'get_random_bytes',
    'get_random_integer',
    'get_random_integers',
    'generate_guid_v4',
    'generate_hex_id',
    'KeyAlphabet',
    'ALPHANUMERIC',
    'HEX',
    'generate_license_key',
    'validate_license_key',
    'PrngMiniError',
    'InvalidArgument',
    'AllocationFailure',
    'EntropySourceUnavailable',
    'EntropyReadIncomplete',
    'ChecksumMismatch',
]
