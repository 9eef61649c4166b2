"""
Randomness quality report: a histogram of bounded integer samples.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.entropy import EntropySource
from ..core.errors import InvalidArgument
from ..core.integers import get_random_integers

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = 100000
DEFAULT_MIN = 0
DEFAULT_MAX = 19
MAX_BINS = 1000000


@dataclass
class HistogramEntry:
    value: int
    count: int
    deviation: int  # count - expected


@dataclass
class HistogramReport:
    """Sample counts per value in [min_value, max_value]."""

    min_value: int
    max_value: int
    entries: List[HistogramEntry] = field(default_factory=list)
    rejected: int = 0

    @property
    def total(self) -> int:
        return sum(entry.count for entry in self.entries)

    @property
    def expected(self) -> int:
        return self.total // len(self.entries) if self.entries else 0

    def sorted_by_deviation(self) -> List[HistogramEntry]:
        """Entries ordered from the most to the least biased."""
        return sorted(self.entries, key=lambda entry: abs(entry.deviation), reverse=True)

    def render(self) -> str:
        """
        Text report: one star bar per value, scaled so that one star is
        1% of all samples, followed by the entries sorted by deviation.
        """
        total = self.total
        scale = max(total // 100, 1)
        lines = [
            f"Randomness Histogram [{total} samples in range {self.min_value}-{self.max_value}]:"
        ]
        for entry in self.entries:
            lines.append(f"{entry.value:2d}: {entry.count:6d} " + "*" * (entry.count // scale))

        lines.append("")
        lines.append("Sorted Randomness Deviation (most biased first):")
        for entry in self.sorted_by_deviation():
            lines.append(f"{entry.value:2d}: {entry.count:6d} (Deviation: {entry.deviation:+d})")

        if self.rejected:
            lines.append(f"Rejected {self.rejected} out-of-range samples")
        return "\n".join(lines)


def _check_range(min_value: int, max_value: int) -> None:
    if min_value > max_value:
        raise InvalidArgument(f"min_value ({min_value}) is greater than max_value ({max_value})")
    if max_value - min_value + 1 > MAX_BINS:
        raise InvalidArgument(f"Histogram range is limited to {MAX_BINS} values, got {max_value - min_value + 1}")


def build_histogram(samples: Iterable[int], min_value: int, max_value: int) -> HistogramReport:
    """Count samples per value. Samples outside the range are counted as rejected."""
    _check_range(min_value, max_value)

    counts = [0] * (max_value - min_value + 1)
    rejected = 0
    for sample in samples:
        if min_value <= sample <= max_value:
            counts[sample - min_value] += 1
        else:
            rejected += 1

    if rejected:
        logger.warning("%d samples fell outside [%d, %d]", rejected, min_value, max_value)

    expected = sum(counts) // len(counts)
    entries = [
        HistogramEntry(value=min_value + i, count=count, deviation=count - expected)
        for i, count in enumerate(counts)
    ]
    return HistogramReport(min_value, max_value, entries, rejected)


def sample_histogram(
    samples: int = DEFAULT_SAMPLES,
    min_value: int = DEFAULT_MIN,
    max_value: int = DEFAULT_MAX,
    unbiased: bool = False,
    source: Optional[EntropySource] = None,
) -> HistogramReport:
    """Draw samples bounded integers and build their histogram."""
    _check_range(min_value, max_value)
    values = get_random_integers(samples, min_value, max_value, source=source, unbiased=unbiased)
    return build_histogram(values, min_value, max_value)
