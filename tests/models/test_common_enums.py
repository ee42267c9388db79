"""Tests for shared enums and the hours → labour banding."""

import pytest

from euromatch.models.common import Labour, labour_from_hours


class TestLabourFromHours:
    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (0, Labour.ZERO),
            (5, Labour.ZERO),
            (5.5, Labour.TEN),
            (15, Labour.TEN),
            (16, Labour.TWENTY),
            (25, Labour.TWENTY),
            (30, Labour.THIRTY),
            (35, Labour.THIRTY),
            (36, Labour.FORTY),
            (60, Labour.FORTY),
        ],
    )
    def test_band_boundaries(self, hours: float, expected: Labour) -> None:
        assert labour_from_hours(hours) == expected

    def test_category_hours(self) -> None:
        assert [labour.hours for labour in Labour] == [0, 20, 30, 36, 40]
