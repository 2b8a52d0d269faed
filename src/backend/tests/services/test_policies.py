"""
Tests for rounding, tie-break and bucketing policies.
"""

import pytest

from services.policies import (
    bucket_count_for,
    bucket_index_for,
    bucket_width_for,
    complement_percentage,
    first_max_index,
    first_min_index,
    format_bucket_label,
    format_count,
    format_number,
    lower_median,
    parse_bucket_label,
    percentage_of,
    round_half_up,
    round_to_tenth,
)


@pytest.mark.unit
class TestRounding:
    """Tests for percentage rounding."""

    def test_halves_round_up(self) -> None:
        """Banker's rounding would give 2 here."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(2.49) == 2

    def test_percentage_of(self) -> None:
        assert percentage_of(2, 3) == 67
        assert percentage_of(1, 3) == 33
        assert percentage_of(1, 8) == 13  # 12.5 rounds up

    def test_percentage_of_empty_total(self) -> None:
        assert percentage_of(0, 0) == 0

    def test_complement_keeps_pair_at_100(self) -> None:
        for part in range(0, 8):
            majority = percentage_of(part, 7)
            assert majority + complement_percentage(majority) == 100

    def test_round_to_tenth(self) -> None:
        assert round_to_tenth(2.25) == pytest.approx(2.3)
        assert round_to_tenth(3.0) == 3.0


@pytest.mark.unit
class TestTieBreaks:
    """Tests for median and first-occurrence rules."""

    def test_lower_median_even(self) -> None:
        assert lower_median([1, 2, 3, 4]) == 2

    def test_lower_median_odd(self) -> None:
        assert lower_median([1, 2, 3]) == 2

    def test_lower_median_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            lower_median([])

    def test_first_max_wins(self) -> None:
        assert first_max_index([3, 3, 1]) == 0
        assert first_max_index([1, 4, 4]) == 1

    def test_first_min_wins(self) -> None:
        assert first_min_index([2, 1, 1]) == 1


@pytest.mark.unit
class TestBuckets:
    """Tests for numeric bucketing."""

    @pytest.mark.parametrize(
        "sample_size,expected",
        [(1, 5), (10, 5), (26, 6), (49, 7), (100, 10), (10_000, 10)],
    )
    def test_bucket_count_is_clamped_sqrt(self, sample_size, expected) -> None:
        assert bucket_count_for(sample_size) == expected

    def test_zero_width_range_uses_one(self) -> None:
        assert bucket_width_for(7, 7, 5) == 1.0

    def test_maximum_lands_in_last_bucket(self) -> None:
        assert bucket_index_for(100, 0, 20, 5) == 4

    def test_values_outside_range_are_clamped(self) -> None:
        assert bucket_index_for(-10, 0, 20, 5) == 0
        assert bucket_index_for(250, 0, 20, 5) == 4

    def test_lower_edge_belongs_to_upper_bucket(self) -> None:
        assert bucket_index_for(20, 0, 20, 5) == 1

    def test_label_round_trip(self) -> None:
        label = format_bucket_label(80, 100)
        assert label == "80.0-100.0"
        assert parse_bucket_label(label) == (80.0, 100.0)

    def test_negative_labels_parse(self) -> None:
        assert parse_bucket_label("-10.0--5.0") == (-10.0, -5.0)

    def test_non_range_label(self) -> None:
        assert parse_bucket_label("Yes") is None


@pytest.mark.unit
class TestDisplay:
    """Tests for number rendering."""

    def test_integral_floats_drop_decimal(self) -> None:
        assert format_number(55.0) == "55"

    def test_fractions_kept(self) -> None:
        assert format_number(66.7) == "66.7"

    def test_count_has_thousands_separator(self) -> None:
        assert format_count(1800) == "1,800"
