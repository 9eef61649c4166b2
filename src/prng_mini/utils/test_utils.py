"""
Unit tests for signature derivation, key list files and the histogram report.
"""

import pytest

from prng_mini.core.errors import InvalidArgument
from prng_mini.core.license_keys import ALPHANUMERIC, HEX, generate_license_key
from prng_mini.utils.histogram import build_histogram, sample_histogram
from prng_mini.utils.key_list import read_key_list, validate_key_list, write_key_list
from prng_mini.utils.signatures import derive_signature


class TestDeriveSignature:
    """Tests for mapping product names to signatures."""

    def test_stable_and_in_range(self):
        """Test that the same name always gives the same achievable signature."""
        first = derive_signature("Acme Editor")
        assert first == derive_signature("Acme Editor")
        assert ALPHANUMERIC.min_signature <= first <= ALPHANUMERIC.max_signature

    def test_hex_range(self):
        """Test that hex signatures stay within 0..240."""
        for name in ("a", "b", "c", "product-x", "product-y"):
            assert 0 <= derive_signature(name, HEX) <= 240

    def test_names_differ(self):
        """Test that different names spread over several signatures."""
        signatures = {derive_signature(f"product-{i}") for i in range(50)}
        assert len(signatures) > 10

    def test_derived_signature_generates_keys(self):
        """Test that a derived signature is accepted by the generator."""
        signature = derive_signature("Acme Editor")
        key = generate_license_key(signature)
        assert len(key) == 19

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_empty_name_rejected(self, name):
        """Test that a product name is required."""
        with pytest.raises(InvalidArgument):
            derive_signature(name)


class TestKeyList:
    """Tests for newline-separated key list files."""

    def test_write_and_read(self, tmp_path):
        """Test that keys are written one per line and read back in order."""
        path = tmp_path / "list.txt"
        keys = [generate_license_key(210) for _ in range(5)]
        assert write_key_list(path, keys) == 5
        assert path.read_text(encoding="utf-8") == "\n".join(keys) + "\n"
        assert read_key_list(path) == keys

    def test_read_skips_blank_lines(self, tmp_path):
        """Test that blank lines and surrounding whitespace are ignored."""
        path = tmp_path / "list.txt"
        path.write_text("\n  0000-0000-0000-0000  \n\nZZZZ-ZZZZ-ZZZZ-ZZZZ\n", encoding="utf-8")
        assert read_key_list(path) == ["0000-0000-0000-0000", "ZZZZ-ZZZZ-ZZZZ-ZZZZ"]

    def test_validate_key_list(self, tmp_path):
        """Test validating a file that mixes good and bad keys."""
        path = tmp_path / "list.txt"
        good = [generate_license_key(210) for _ in range(3)]
        write_key_list(path, good + ["0000-0000-0000-0000"])
        results = validate_key_list(path, 210)
        assert [ok for _, ok in results] == [True, True, True, False]

    def test_missing_file(self, tmp_path):
        """Test that I/O errors are not swallowed."""
        with pytest.raises(OSError):
            read_key_list(tmp_path / "missing.txt")


class TestHistogram:
    """Tests for the randomness histogram report."""

    def test_build_histogram_counts(self):
        """Test counts, expected value and deviations."""
        report = build_histogram([0, 0, 1, 2, 2, 2], 0, 2)
        assert [entry.count for entry in report.entries] == [2, 1, 3]
        assert report.expected == 2
        assert [entry.deviation for entry in report.entries] == [0, -1, 1]
        assert report.rejected == 0

    def test_out_of_range_samples_rejected(self):
        """Test that out-of-range samples are counted but not binned."""
        report = build_histogram([0, 5, -1, 1], 0, 1)
        assert report.total == 2
        assert report.rejected == 2

    def test_sorted_by_deviation(self):
        """Test that the most biased values come first."""
        report = build_histogram([0] * 10 + [1] * 4 + [2] * 7, 0, 2)
        assert [entry.value for entry in report.sorted_by_deviation()] == [0, 1, 2]

    def test_render(self):
        """Test the text report layout."""
        report = build_histogram([0] * 50 + [1] * 50, 0, 1)
        text = report.render()
        assert text.splitlines()[0] == "Randomness Histogram [100 samples in range 0-1]:"
        assert " 0:     50 " + "*" * 50 in text
        assert "Sorted Randomness Deviation (most biased first):" in text
        assert "(Deviation: +0)" in text

    def test_sample_histogram(self):
        """Test a real sample: every value appears and totals add up."""
        report = sample_histogram(20000, 0, 19)
        assert report.total == 20000
        assert len(report.entries) == 20
        assert all(entry.count > 0 for entry in report.entries)
        # 1000 expected per bin; a healthy source stays well within 20%
        assert all(abs(entry.deviation) < 200 for entry in report.entries)

    def test_invalid_range(self):
        """Test that an inverted range is rejected."""
        with pytest.raises(InvalidArgument):
            build_histogram([], 5, 1)

    def test_oversized_range_rejected(self):
        """Test that a huge range is refused before any bins or samples are allocated."""
        with pytest.raises(InvalidArgument, match="limited to"):
            build_histogram([], 0, 10**12)
        with pytest.raises(InvalidArgument, match="limited to"):
            sample_histogram(10, 0, 10**12)
