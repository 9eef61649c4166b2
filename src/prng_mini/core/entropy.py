"""
Entropy source module.
Reads cryptographically secure random bytes from the operating system.
"""

import logging
import os
from typing import Optional

from .. import config
from ..utils.secure_buffer import SecureBuffer
from .errors import EntropyReadIncomplete, EntropySourceUnavailable, InvalidArgument

logger = logging.getLogger(__name__)


class EntropySource:
    """
    Operating system random byte source.

    Two backends are supported:
    - a random device file (/dev/urandom on Linux, macOS, BSD, Android...)
      read with a single unbuffered read
    - os.urandom, which uses the system preferred RNG (BCryptGenRandom on
      Windows, getrandom() where available)

    Failures are reported immediately; nothing is retried here.
    """

    def __init__(self, device: Optional[str] = None):
        if device is None:
            device = config.entropy_device()
        self.device = device

    @property
    def backend(self) -> str:
        return self.device or "os.urandom"

    def get_random_bytes(self, length: int) -> SecureBuffer:
        """
        Return a SecureBuffer holding exactly length random bytes.

        The caller owns the buffer and must release it (or use it in a
        with block) once the bytes have been consumed.
        """
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise InvalidArgument(f"length must be a positive integer, got {length!r}")

        logger.debug("Reading %d random bytes from %s", length, self.backend)

        buffer = SecureBuffer(length)
        try:
            received = self._fill(buffer.data)
            if received != length:
                logger.warning(
                    "Short entropy read from %s: %d of %d bytes",
                    self.backend, received, length,
                    extra={"event": "entropy.short_read"},
                )
                raise EntropyReadIncomplete(length, received)
        except BaseException:
            buffer.release()
            raise
        return buffer

    def _fill(self, buffer: bytearray) -> int:
        """Fill buffer from the backend and return the number of bytes written."""
        if not self.device:
            return self._fill_from_urandom(buffer)
        return self._fill_from_device(buffer)

    def _fill_from_device(self, buffer: bytearray) -> int:
        try:
            device = open(self.device, "rb", buffering=0)
        except OSError as exc:
            logger.warning(
                "Cannot open entropy device %s: %s", self.device, exc,
                extra={"event": "entropy.unavailable"},
            )
            raise EntropySourceUnavailable(
                f"Cannot open entropy device {self.device}: {exc}"
            ) from exc

        with device:
            try:
                received = device.readinto(buffer)
            except OSError as exc:
                raise EntropySourceUnavailable(
                    f"Cannot read entropy device {self.device}: {exc}"
                ) from exc
        return received or 0

    def _fill_from_urandom(self, buffer: bytearray) -> int:
        try:
            random_bytes = os.urandom(len(buffer))
        except (OSError, NotImplementedError) as exc:
            logger.warning(
                "os.urandom is unavailable: %s", exc,
                extra={"event": "entropy.unavailable"},
            )
            raise EntropySourceUnavailable(f"os.urandom is unavailable: {exc}") from exc

        buffer[:len(random_bytes)] = random_bytes
        return len(random_bytes)


def default_source() -> EntropySource:
    """Entropy source configured from the current environment."""
    return EntropySource()


def get_random_bytes(length: int, source: Optional[EntropySource] = None) -> SecureBuffer:
    """Get length secure random bytes from the given or the default source."""
    if source is None:
        source = default_source()
    return source.get_random_bytes(length)
