"""
Signature derivation utilities.
"""

from cryptography.hazmat.primitives import hashes

from ..core.errors import InvalidArgument
from ..core.license_keys import ALPHANUMERIC, KeyAlphabet


def derive_signature(product: str, alphabet: KeyAlphabet = ALPHANUMERIC) -> int:
    """
    Map a product name onto a license key signature.

    The name is hashed with SHA-256 and the digest is reduced into the
    range of sums the alphabet can reach, so every product gets a stable
    signature that generate_license_key accepts:
    1. Hash the UTF-8 encoded name
    2. Read the digest as a big-endian integer
    3. Reduce it into [min_signature, max_signature]
    """
    if not isinstance(product, str) or not product.strip():
        raise InvalidArgument("product name is required")

    digest = hashes.Hash(hashes.SHA256())
    digest.update(product.strip().encode("utf-8"))
    value = int.from_bytes(digest.finalize(), "big")

    span = alphabet.max_signature - alphabet.min_signature + 1
    return alphabet.min_signature + value % span
