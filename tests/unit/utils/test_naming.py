"""Unit tests for name sanitization."""

from __future__ import annotations

import pytest

from flux_bootstrap.utils.naming import (
    DNS1123_LABEL_MAX_LENGTH,
    is_dns1123_label,
    sanitize_name,
)

FALLBACK = "flux-workloads"

SAMPLES = [
    "k8s",
    "workloads/env/prod",
    " ../My Workloads  ",
    "UPPER_case.Name",
    "--leading-and-trailing--",
    "a" * 100,
    "x" * 62 + "/y",
    "émoji 🚀 path",
    "",
    "   ",
    "///",
    "ünïcödé",
]


@pytest.mark.unit
class TestSanitizeName:
    """Tests for sanitize_name."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("k8s", "k8s"),
            ("workloads/env/prod", "workloads-env-prod"),
            (" ../My Workloads  ", "my-workloads"),
            ("UPPER_case.Name", "upper-case-name"),
            ("a  --  b", "a-b"),
            ("--leading-and-trailing--", "leading-and-trailing"),
            ("émoji 🚀 path", "moji-path"),
        ],
    )
    def test_sanitizes(self, value: str, expected: str) -> None:
        """Disallowed runs collapse to one hyphen and edges are trimmed."""
        assert sanitize_name(value, FALLBACK) == expected

    @pytest.mark.parametrize("value", ["", "   ", "///", "é-ü_ö", "🚀"])
    def test_empty_or_invalid_returns_fallback(self, value: str) -> None:
        """Input with no usable characters yields the fallback unchanged."""
        assert sanitize_name(value, FALLBACK) == FALLBACK

    def test_truncates_to_label_length(self) -> None:
        """Long names are cut to the label limit."""
        result = sanitize_name("a" * 100, FALLBACK)

        assert len(result) == DNS1123_LABEL_MAX_LENGTH
        assert is_dns1123_label(result)

    def test_truncation_retrims_trailing_hyphen(self) -> None:
        """A hyphen left at the cut point is removed."""
        result = sanitize_name("x" * 62 + "/y", FALLBACK)

        assert result == "x" * 62

    @pytest.mark.parametrize("value", SAMPLES)
    def test_always_valid(self, value: str) -> None:
        """The result is always a valid label."""
        assert is_dns1123_label(sanitize_name(value, FALLBACK))

    @pytest.mark.parametrize("value", SAMPLES)
    def test_idempotent(self, value: str) -> None:
        """Sanitizing a sanitized name changes nothing."""
        once = sanitize_name(value, FALLBACK)

        assert sanitize_name(once, FALLBACK) == once


@pytest.mark.unit
class TestIsDns1123Label:
    """Tests for is_dns1123_label."""

    @pytest.mark.parametrize("value", ["a", "a-b", "0abc9", "x" * 63])
    def test_valid(self, value: str) -> None:
        assert is_dns1123_label(value)

    @pytest.mark.parametrize("value", ["", "-a", "a-", "A", "a_b", "a.b", "x" * 64])
    def test_invalid(self, value: str) -> None:
        assert not is_dns1123_label(value)
