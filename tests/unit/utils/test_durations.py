"""Unit tests for Go-style duration formatting."""

from __future__ import annotations

from datetime import timedelta

import pytest

from flux_bootstrap.utils.durations import format_duration


@pytest.mark.unit
class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (timedelta(0), "0s"),
            (timedelta(seconds=30), "30s"),
            (timedelta(minutes=1), "1m0s"),
            (timedelta(minutes=3), "3m0s"),
            (timedelta(seconds=90), "1m30s"),
            (timedelta(hours=1), "1h0m0s"),
            (timedelta(hours=1, minutes=30), "1h30m0s"),
            (timedelta(days=1), "24h0m0s"),
            (timedelta(milliseconds=500), "500ms"),
            (timedelta(microseconds=250), "250µs"),
            (timedelta(microseconds=1500), "1.5ms"),
            (timedelta(microseconds=1001), "1.001ms"),
            (timedelta(microseconds=999), "999µs"),
            (timedelta(seconds=1, milliseconds=500), "1.5s"),
            (timedelta(minutes=2, microseconds=1), "2m0.000001s"),
            (timedelta(seconds=-5), "-5s"),
        ],
    )
    def test_format(self, value: timedelta, expected: str) -> None:
        assert format_duration(value) == expected
