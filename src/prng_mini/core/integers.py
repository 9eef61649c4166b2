"""
Bounded random integers built on top of the entropy source.
"""

import logging
import struct
from typing import List, Optional

from .. import config
from ..utils.secure_buffer import secure_release
from .entropy import EntropySource, default_source
from .errors import AllocationFailure, InvalidArgument

logger = logging.getLogger(__name__)

INT_SIZE = 4
SIGN_MASK = 0x7FFFFFFF
RAW_SPAN = SIGN_MASK + 1  # 2**31 possible values after masking


def _check_bound(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")


def _masked_values(source: EntropySource, count: int) -> List[int]:
    """
    Draw count non-negative 31-bit values.

    Each value is assembled from 4 big-endian bytes with the sign bit
    cleared. The raw byte buffer is wiped before returning.
    """
    with source.get_random_bytes(count * INT_SIZE) as raw:
        return [value & SIGN_MASK for (value,) in struct.iter_unpack(">I", raw.data)]


def get_random_integers(
    count: int,
    min_value: int,
    max_value: int,
    source: Optional[EntropySource] = None,
    unbiased: Optional[bool] = None,
) -> List[int]:
    """
    Generate count integers in the inclusive range [min_value, max_value].

    Steps:
    1. Request count * 4 bytes from the entropy source
    2. Assemble each 4-byte group big-endian and clear the sign bit
    3. Reduce into the range with min + value % range

    The masked modulo is slightly biased when the range does not divide
    2**31. With unbiased=True, values falling in the excess tail above the
    largest multiple of the range are redrawn (rejection sampling).
    """
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidArgument(f"count must be a positive integer, got {count!r}")
    _check_bound("min_value", min_value)
    _check_bound("max_value", max_value)
    if min_value > max_value:
        raise InvalidArgument(f"min_value ({min_value}) is greater than max_value ({max_value})")

    if source is None:
        source = default_source()
    if unbiased is None:
        unbiased = config.unbiased()

    span = max_value - min_value + 1

    values = None
    try:
        values = _masked_values(source, count)
        if unbiased and span < RAW_SPAN:
            values = _reject_tail(source, values, span)
        return [min_value + value % span for value in values]
    except MemoryError as exc:
        raise AllocationFailure(f"Cannot allocate {count} integers") from exc
    finally:
        secure_release(values)


def _reject_tail(source: EntropySource, values: List[int], span: int) -> List[int]:
    """Replace values in the biased tail with fresh draws until none remain."""
    limit = RAW_SPAN - RAW_SPAN % span
    rejected = [i for i, value in enumerate(values) if value >= limit]
    while rejected:
        logger.debug("Redrawing %d values above %d", len(rejected), limit)
        fresh = _masked_values(source, len(rejected))
        still_rejected = []
        for index, value in zip(rejected, fresh):
            if value >= limit:
                still_rejected.append(index)
            else:
                values[index] = value
        rejected = still_rejected
    return values


def get_random_integer(
    min_value: int,
    max_value: int,
    source: Optional[EntropySource] = None,
    unbiased: Optional[bool] = None,
) -> int:
    """Generate a single integer in [min_value, max_value]."""
    return get_random_integers(1, min_value, max_value, source=source, unbiased=unbiased)[0]
