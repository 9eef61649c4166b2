"""
Randomness core for prng-mini.
This package turns operating system entropy into bounded integers,
identifiers and checksum-constrained license keys.
"""

from .entropy import EntropySource, get_random_bytes
from .errors import (
    AllocationFailure,
    ChecksumMismatch,
    EntropyReadIncomplete,
    EntropySourceUnavailable,
    InvalidArgument,
    PrngMiniError,
)
from .identifiers import generate_guid_v4, generate_hex_id
from .integers import get_random_integer, get_random_integers
from .license_keys import (
    ALPHANUMERIC,
    HEX,
    KeyAlphabet,
    decode_digits,
    generate_license_key,
    get_alphabet,
    validate_license_key,
)

__all__ = [
    'EntropySource',
    'get_random_bytes',
    'get_random_integer',
    'get_random_integers',
    'generate_guid_v4',
    'generate_hex_id',
    'KeyAlphabet',
    'ALPHANUMERIC',
    'HEX',
    'get_alphabet',
    'decode_digits',
    'generate_license_key',
    'validate_license_key',
    'PrngMiniError',
    'InvalidArgument',
    'AllocationFailure',
    'EntropySourceUnavailable',
    'EntropyReadIncomplete',
    'ChecksumMismatch',
]
