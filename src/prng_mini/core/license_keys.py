"""
License key generation and validation.

A license key is 16 symbols grouped as XXXX-XXXX-XXXX-XXXX. Every symbol
has a numeric value in its alphabet, and a key is valid for a signature
when those values add up to the signature. This is a simple additive
checksum, not a cryptographic signature.
"""

import logging
import string
from dataclasses import dataclass
from typing import List, Optional

from ..utils.secure_buffer import secure_release
from .entropy import EntropySource, default_source
from .errors import AllocationFailure, ChecksumMismatch, InvalidArgument
from .integers import get_random_integer, get_random_integers

logger = logging.getLogger(__name__)

KEY_DIGITS = 16
GROUP_SIZE = 4
KEY_LENGTH = KEY_DIGITS + KEY_DIGITS // GROUP_SIZE - 1  # 19

INFLUENCE_MIN = 1
INFLUENCE_MAX = 4
ADJUSTMENT_DRAWS = 128
REDISTRIBUTION_MIN = 500
REDISTRIBUTION_MAX = 12000


@dataclass(frozen=True)
class KeyAlphabet:
    """
    Mapping between digit values and printable symbols.

    symbols[0] has value low, symbols[1] has value low + 1, and so on.
    The same alphabet must be used to generate and to validate a key.
    """

    name: str
    symbols: str
    low: int

    @property
    def high(self) -> int:
        return self.low + len(self.symbols) - 1

    @property
    def midpoint(self) -> int:
        return (self.low + self.high) // 2

    @property
    def min_signature(self) -> int:
        return KEY_DIGITS * self.low

    @property
    def max_signature(self) -> int:
        return KEY_DIGITS * self.high

    def value_of(self, char: str) -> Optional[int]:
        """Value of a symbol (case-insensitive), or None if it is not in the alphabet."""
        if len(char) != 1 or not char.isascii():
            return None
        index = self.symbols.find(char.upper())
        if index < 0:
            return None
        return self.low + index

    def symbol_for(self, value: int) -> str:
        if not self.low <= value <= self.high:
            raise InvalidArgument(f"{value} is outside the {self.name} alphabet [{self.low}, {self.high}]")
        return self.symbols[value - self.low]


# '0' -> 1, '9' -> 10, 'A' -> 11, 'Z' -> 36
ALPHANUMERIC = KeyAlphabet("alnum", string.digits + string.ascii_uppercase, 1)
# '0' -> 0, 'F' -> 15
HEX = KeyAlphabet("hex", string.digits + "ABCDEF", 0)

ALPHABETS = {alphabet.name: alphabet for alphabet in (ALPHANUMERIC, HEX)}


def get_alphabet(name: str) -> KeyAlphabet:
    try:
        return ALPHABETS[name]
    except (KeyError, TypeError):
        raise InvalidArgument(
            f"Unknown alphabet {name!r}, expected one of: {', '.join(ALPHABETS)}"
        ) from None


def generate_license_key(
    signature: int,
    alphabet: KeyAlphabet = ALPHANUMERIC,
    source: Optional[EntropySource] = None,
) -> str:
    """
    Generate a 16-digit dashed license key whose digit values sum to signature.

    Steps:
    1. Seed every digit with the alphabet midpoint
    2. Directed adjustment: push random digits by random amounts (1-4)
       toward the signature, never past the alphabet bounds
    3. Randomizing redistribution: move single units between random
       digits; the sum never changes, only its spread across positions
    4. Format as XXXX-XXXX-XXXX-XXXX and re-check the checksum

    Signatures outside the achievable range (16..576 for the default
    alphabet) are rejected up front.
    """
    if isinstance(signature, bool) or not isinstance(signature, int):
        raise InvalidArgument(f"signature must be an integer, got {signature!r}")
    if not alphabet.min_signature <= signature <= alphabet.max_signature:
        raise InvalidArgument(
            f"signature {signature} is outside the achievable range "
            f"[{alphabet.min_signature}, {alphabet.max_signature}] for the {alphabet.name} alphabet"
        )
    if source is None:
        source = default_source()

    digits = [alphabet.midpoint] * KEY_DIGITS
    try:
        _adjust(digits, signature - sum(digits), alphabet, source)
        _redistribute(digits, alphabet, source)
        key = _format(digits, alphabet)
    except MemoryError as exc:
        raise AllocationFailure("Cannot allocate license key buffers") from exc
    finally:
        secure_release(digits)

    decoded = decode_digits(key, alphabet)
    if len(decoded) != KEY_DIGITS or sum(decoded) != signature:
        logger.error(
            "Generated key does not match signature %d", signature,
            extra={"event": "license_key.checksum_mismatch"},
        )
        raise ChecksumMismatch(f"Generated key does not add up to signature {signature}")

    logger.debug("Generated %s license key for signature %d", alphabet.name, signature)
    return key


def _adjust(digits: List[int], delta: int, alphabet: KeyAlphabet, source: EntropySource) -> None:
    """
    Move the digit sum by delta without leaving the alphabet bounds.

    A fixed batch of random (influence, index) pairs does most of the work;
    a pair aimed at a digit that is already at the bound is skipped. What
    is left afterwards is spread over the digits by headroom, starting at a
    random position. Total headroom always covers delta for an achievable
    signature, so this finishes in a bounded number of steps.
    """
    if delta == 0:
        return

    step = 1 if delta > 0 else -1
    bound = alphabet.high if delta > 0 else alphabet.low
    remaining = abs(delta)

    draws = min(ADJUSTMENT_DRAWS, remaining)
    influences = get_random_integers(draws, INFLUENCE_MIN, INFLUENCE_MAX, source=source)
    indices = get_random_integers(draws, 0, KEY_DIGITS - 1, source=source)
    try:
        for influence, index in zip(influences, indices):
            if remaining == 0:
                break
            amount = min(influence, remaining, abs(bound - digits[index]))
            digits[index] += step * amount
            remaining -= amount
    finally:
        secure_release(influences)
        secure_release(indices)

    if remaining == 0:
        return

    start = get_random_integer(0, KEY_DIGITS - 1, source=source)
    for offset in range(KEY_DIGITS):
        index = (start + offset) % KEY_DIGITS
        amount = min(remaining, abs(bound - digits[index]))
        digits[index] += step * amount
        remaining -= amount
        if remaining == 0:
            break


def _redistribute(digits: List[int], alphabet: KeyAlphabet, source: EntropySource) -> None:
    """Move one unit from a random donor to a random recipient, many times."""
    repeats = get_random_integer(REDISTRIBUTION_MIN, REDISTRIBUTION_MAX, source=source)
    picks = get_random_integers(2 * repeats, 0, KEY_DIGITS - 1, source=source)
    try:
        pairs = iter(picks)
        for donor, recipient in zip(pairs, pairs):
            if donor == recipient:
                continue
            if digits[donor] <= alphabet.low or digits[recipient] >= alphabet.high:
                continue
            digits[donor] -= 1
            digits[recipient] += 1
    finally:
        secure_release(picks)


def _format(digits: List[int], alphabet: KeyAlphabet) -> str:
    symbols = []
    for position, value in enumerate(digits):
        if not alphabet.low <= value <= alphabet.high:
            raise ChecksumMismatch(f"Digit {position} left the alphabet bounds: {value}")
        if position and position % GROUP_SIZE == 0:
            symbols.append("-")
        symbols.append(alphabet.symbol_for(value))
    return "".join(symbols)


def decode_digits(key: str, alphabet: KeyAlphabet = ALPHANUMERIC) -> List[int]:
    """Decode the alphabet symbols of key into values, skipping anything else (dashes)."""
    values = []
    for char in key:
        value = alphabet.value_of(char)
        if value is not None:
            values.append(value)
    return values


def validate_license_key(key, signature: int, alphabet: KeyAlphabet = ALPHANUMERIC) -> bool:
    """
    Check that the digit values of key add up to signature.

    Characters outside the alphabet (the dashes) are ignored. A missing or
    non-string key is simply invalid; this never raises.
    """
    if not isinstance(key, str):
        return False
    return sum(decode_digits(key, alphabet)) == signature
