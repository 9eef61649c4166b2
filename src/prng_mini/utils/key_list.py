"""
Key list files: plain text, one license key per line.
"""

import logging
from typing import Iterable, List, Tuple

from ..core.license_keys import ALPHANUMERIC, KeyAlphabet, validate_license_key

logger = logging.getLogger(__name__)


def write_key_list(path, keys: Iterable[str]) -> int:
    """Write keys to path, one per line. Returns the number of keys written."""
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for key in keys:
            f.write(f"{key}\n")
            count += 1
    logger.info("Wrote %d keys to %s", count, path)
    return count


def read_key_list(path) -> List[str]:
    """Read the non-empty, stripped lines of a key list file."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def validate_key_list(
    path, signature: int, alphabet: KeyAlphabet = ALPHANUMERIC
) -> List[Tuple[str, bool]]:
    """Validate every key of a key list file against signature."""
    results = [
        (key, validate_license_key(key, signature, alphabet))
        for key in read_key_list(path)
    ]
    invalid = sum(1 for _, ok in results if not ok)
    if invalid:
        logger.warning("%d of %d keys in %s failed validation", invalid, len(results), path)
    return results
