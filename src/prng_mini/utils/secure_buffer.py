"""
Secure buffer utilities.

Random bytes may be used to derive secrets, so every buffer that held them
is overwritten with zeros before it is dropped.
"""

from typing import Optional


def secure_release(buffer, size: Optional[int] = None) -> None:
    """
    Zero a mutable buffer in place.

    Works on bytearray, writable memoryview and lists of integers.
    When size is given only the first size elements are wiped.
    A None buffer is ignored.
    """
    if buffer is None:
        return

    length = len(buffer) if size is None else min(size, len(buffer))
    if isinstance(buffer, list):
        buffer[:length] = [0] * length
    else:
        buffer[:length] = bytes(length)


class SecureBuffer:
    """
    Owned, fixed-length byte buffer that is wiped when released.

    Use it as a context manager so the wipe happens on every exit path:

        with source.get_random_bytes(16) as buf:
            value = int.from_bytes(buf.data[:4], "big")
    """

    def __init__(self, length: int):
        self._data = bytearray(length)
        self.released = False

    @property
    def data(self) -> bytearray:
        if self.released:
            raise ValueError("SecureBuffer has already been released")
        return self._data

    def release(self) -> None:
        """Zero the memory and drop it. Safe to call more than once."""
        if self.released:
            return
        secure_release(self._data)
        self._data = bytearray()
        self.released = True

    def hex(self) -> str:
        return self.data.hex()

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __enter__(self) -> "SecureBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self):
        if not getattr(self, "released", True):
            self.release()
