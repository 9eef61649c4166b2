"""
Shared pytest fixtures: entropy sources with predictable behaviour.
"""

import pytest

from prng_mini.core.entropy import EntropySource


class FixedEntropySource(EntropySource):
    """Entropy source that replays a fixed byte pattern."""

    def __init__(self, pattern: bytes):
        super().__init__(device="")
        self.pattern = pattern

    def _fill(self, buffer):
        repeated = (self.pattern * (len(buffer) // len(self.pattern) + 1))[:len(buffer)]
        buffer[:] = repeated
        return len(buffer)


class RecordingEntropySource(EntropySource):
    """Real os.urandom source that keeps a reference to every buffer it hands out."""

    def __init__(self):
        super().__init__(device="")
        self.handed_out = []

    def get_random_bytes(self, length):
        buffer = super().get_random_bytes(length)
        self.handed_out.append(buffer.data)
        return buffer


@pytest.fixture
def fixed_source():
    return FixedEntropySource


@pytest.fixture
def recording_source():
    return RecordingEntropySource()
