"""
Unit tests for bounded integer generation.
"""

import random

import pytest

from prng_mini.core.errors import AllocationFailure, EntropySourceUnavailable, InvalidArgument
from prng_mini.core.entropy import EntropySource
from prng_mini.core.integers import get_random_integer, get_random_integers


class TestRangeReduction:
    """Tests for the byte-to-integer conversion with a fixed byte pattern."""

    def test_big_endian_masked_modulo(self, fixed_source):
        """Test that 4 bytes are read big-endian, sign bit cleared, then reduced."""
        # 0x80000005 -> 5 after masking, 5 % 10 == 5
        source = fixed_source(b"\x80\x00\x00\x05")
        assert get_random_integers(3, 0, 9, source=source, unbiased=False) == [5, 5, 5]

    def test_min_offset(self, fixed_source):
        """Test that the reduced value is shifted by min."""
        # 0xFFFFFFFF -> 0x7FFFFFFF == 2147483647, % 10 == 7
        source = fixed_source(b"\xff\xff\xff\xff")
        assert get_random_integer(-5, 4, source=source, unbiased=False) == 2

    def test_each_group_used_once(self, fixed_source):
        """Test that consecutive 4-byte groups map to consecutive integers."""
        source = fixed_source(b"\x00\x00\x00\x01\x00\x00\x00\x02")
        assert get_random_integers(4, 0, 100, source=source, unbiased=False) == [1, 2, 1, 2]

    def test_unbiased_redraws_tail(self):
        """Test that rejection sampling redraws values in the biased tail."""

        class TailThenValue(EntropySource):
            def __init__(self):
                super().__init__(device="")
                self.calls = 0

            def _fill(self, buffer):
                self.calls += 1
                # First draw is 0x7FFFFFFF, inside the tail for a range of 3
                value = b"\x7f\xff\xff\xff" if self.calls == 1 else b"\x00\x00\x00\x04"
                buffer[:] = value * (len(buffer) // 4)
                return len(buffer)

        source = TailThenValue()
        assert get_random_integer(0, 2, source=source, unbiased=True) == 1
        assert source.calls == 2


class TestBounds:
    """Tests for the range guarantee."""

    def test_random_pairs_stay_in_range(self):
        """Test 10,000 random (min, max) pairs, including min == max."""
        rng = random.Random(1234)
        for i in range(10000):
            low = rng.randint(-2**31, 2**31 - 1)
            high = low if i % 10 == 0 else rng.randint(low, 2**31 - 1)
            value = get_random_integer(low, high)
            assert low <= value <= high

    def test_count_and_range(self):
        """Test that count values are returned, each in range."""
        for count in (1, 2, 17, 1000):
            values = get_random_integers(count, -3, 3)
            assert len(values) == count
            assert all(-3 <= value <= 3 for value in values)

    def test_min_equals_max(self):
        """Test the degenerate single-value range."""
        assert get_random_integers(5, 42, 42) == [42] * 5

    def test_unbiased_stays_in_range(self):
        """Test that rejection sampling keeps the same range guarantee."""
        values = get_random_integers(2000, 0, 2, unbiased=True)
        assert set(values) <= {0, 1, 2}
        assert set(values) == {0, 1, 2}

    def test_unbiased_from_environment(self, monkeypatch):
        """Test that PRNG_MINI_UNBIASED switches the default mode."""
        monkeypatch.setenv("PRNG_MINI_UNBIASED", "1")
        calls = []

        class CountingSource(EntropySource):
            def __init__(self):
                super().__init__(device="")

            def _fill(self, buffer):
                calls.append(len(buffer))
                # 0x7FFFFFFF on the first draw lands in the tail of range 3
                value = b"\x7f\xff\xff\xff" if len(calls) == 1 else b"\x00\x00\x00\x00"
                buffer[:] = value * (len(buffer) // 4)
                return len(buffer)

        assert get_random_integer(0, 2, source=CountingSource()) == 0
        assert len(calls) == 2

    def test_unrelated_bad_setting_ignored(self, monkeypatch):
        """Test that a malformed default signature variable does not affect integers."""
        monkeypatch.setenv("PRNG_MINI_DEFAULT_SIGNATURE", "abc")
        assert 1 <= get_random_integer(1, 6) <= 6


class TestValidation:
    """Tests for argument checking."""

    @pytest.mark.parametrize("count", [0, -1, 2.0, None])
    def test_invalid_count(self, count):
        """Test that count must be a positive integer."""
        with pytest.raises(InvalidArgument):
            get_random_integers(count, 0, 1)

    def test_min_greater_than_max(self):
        """Test that min > max is rejected."""
        with pytest.raises(InvalidArgument):
            get_random_integer(10, 1)

    def test_non_integer_bounds(self):
        """Test that float bounds are rejected."""
        with pytest.raises(InvalidArgument):
            get_random_integer(1.0, 2)

    def test_invalid_argument_is_value_error(self):
        """Test that InvalidArgument can be caught as ValueError."""
        with pytest.raises(ValueError):
            get_random_integer(3, 2)


class TestFailures:
    """Tests for error propagation and buffer hygiene."""

    def test_entropy_error_propagates(self, tmp_path):
        """Test that entropy failures reach the caller unchanged."""
        source = EntropySource(device=str(tmp_path / "missing"))
        with pytest.raises(EntropySourceUnavailable):
            get_random_integers(4, 0, 10, source=source)

    def test_memory_error_becomes_allocation_failure(self, fixed_source, monkeypatch):
        """Test that a MemoryError is reported as AllocationFailure."""
        import prng_mini.core.integers as integers

        def exhausted(source, count):
            raise MemoryError()

        monkeypatch.setattr(integers, "_masked_values", exhausted)
        with pytest.raises(AllocationFailure) as excinfo:
            get_random_integers(4, 0, 10, source=fixed_source(b"\x00"))
        assert excinfo.value.code == -2

    def test_raw_bytes_wiped(self, recording_source):
        """Test that the intermediate raw byte buffer is zeroed before returning."""
        get_random_integers(64, 0, 1000, source=recording_source, unbiased=False)
        assert len(recording_source.handed_out) == 1
        raw = recording_source.handed_out[0]
        assert len(raw) == 64 * 4
        assert not any(raw)
