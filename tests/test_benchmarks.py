"""
Unit tests for industry benchmark positioning.
"""

import pytest

from evaluators.benchmarks import benchmark_position, percentile_for, percentile_label
from models.enums import BENCHMARKS, Archetype


class TestPercentile:
    """Tests for percentile_for (SaaS anchors: p25=42, median=58, p75=74, top10=85)."""

    @pytest.mark.parametrize("score,expected", [
        (0, 0),
        (42, 25),
        (50, 38),
        (58, 50),
        (74, 75),
        (85, 90),
        (100, 99),
    ])
    def test_anchor_points(self, score, expected):
        """Anchors map to their percentile and midpoints interpolate."""
        assert percentile_for(score, Archetype.SAAS_API) == expected

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_monotonic(self, archetype):
        """A higher score never has a lower percentile."""
        values = [percentile_for(score, archetype) for score in range(101)]
        assert values == sorted(values)
        assert 0 <= values[0] and values[-1] <= 99

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_median_is_fiftieth(self, archetype):
        """Scoring exactly the median lands on the 50th percentile."""
        assert percentile_for(BENCHMARKS[archetype]["median"], archetype) == 50


class TestLabels:
    """Tests for percentile_label and benchmark_position."""

    def test_top_label(self):
        """Upper half uses a Top N% label."""
        assert percentile_label(75, Archetype.SAAS_API) == "Top 25% of SaaS sites"

    def test_lower_half_label(self):
        """Lower half uses a Better than N% label."""
        assert percentile_label(38, Archetype.LOCAL_BUSINESS) == "Better than 38% of local businesses"

    def test_position_carries_anchors(self):
        """The position includes the archetype median and top-10% score."""
        position = benchmark_position(58, Archetype.SAAS_API)
        assert position.percentile == 50
        assert position.median == 58
        assert position.top10 == 85
        assert position.label == "Top 50% of SaaS sites"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
