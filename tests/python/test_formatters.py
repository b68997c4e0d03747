"""Tests for the display formatting helpers."""

from __future__ import annotations

import math

import pytest

from packages.stats_panel.formatters import (
    LocaleNumberFormatter,
    ceil_millis,
    format_bytes,
    format_integer,
    plain_number,
    round_to_millis,
)


@pytest.mark.parametrize(
    ("num_bytes", "precision", "expected"),
    [
        (0, 2, "0 B"),
        (512, 2, "512 B"),
        (1023, 2, "1023 B"),
        (1024, 2, "1.00 KB"),
        (1536, 1, "1.5 KB"),
        (1048576, 2, "1.00 MB"),
        (3 * 1024**3, 2, "3.00 GB"),
        (1048576, 0, "1 MB"),
    ],
)
def test_format_bytes_scales_to_largest_unit(num_bytes: int, precision: int, expected: str) -> None:
    assert format_bytes(num_bytes, precision) == expected


def test_format_bytes_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        format_bytes(-1, 2)


@pytest.mark.parametrize(
    ("locale", "value", "expected"),
    [
        ("en-US", 1234567, "1,234,567"),
        ("en-GB", 999, "999"),
        ("de-DE", 1234567, "1.234.567"),
        ("de-CH", 1234567, "1\u2019234\u2019567"),
        ("fr-FR", 1234567, "1\u202f234\u202f567"),
        ("es-ES", 12345, "12.345"),
        ("en-IN", 1234567, "12,34,567"),
        ("hi-IN", 123456789, "12,34,56,789"),
        ("en_US", 1234, "1,234"),
        ("xx-YY", 1234, "1,234"),
    ],
)
def test_format_integer_uses_locale_grouping(locale: str, value: int, expected: str) -> None:
    assert format_integer(value, locale) == expected


def test_format_integer_rounds_half_away_from_zero() -> None:
    formatter = LocaleNumberFormatter("en-US")
    assert formatter.format_integer(2.5) == "3"
    assert formatter.format_integer(2.4) == "2"
    assert formatter.format_integer(-1234.5) == "-1,235"


def test_locale_formatter_accepts_underscore_tags() -> None:
    assert LocaleNumberFormatter("de_DE").separator == "."


def test_round_to_millis_never_rounds_down() -> None:
    assert round_to_millis(0.0235) == 24
    assert round_to_millis(0.0001) == 1
    assert round_to_millis(0.5) == 500
    assert round_to_millis(0) == 0


def test_ceil_millis_and_plain_number() -> None:
    assert ceil_millis(4.2) == 5
    assert ceil_millis(41) == 41
    assert plain_number(60.0) == "60"
    assert plain_number(29.97) == "29.97"
    assert plain_number(4500) == "4500"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (math.nan, "NaN"),
        (math.inf, "∞"),
        (-math.inf, "-∞"),
        (10**30, "1,000,000,000,000,000,000,000,000,000,000"),
        (1e30, "1,000,000,000,000,000,000,000,000,000,000"),
    ],
)
def test_format_integer_handles_non_finite_and_wide_values(value: float, expected: str) -> None:
    assert format_integer(value, "en-US") == expected


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (math.nan, "NaN"),
        (math.inf, "∞ YB"),
        (1024**9, "1024.00 YB"),
    ],
)
def test_format_bytes_handles_non_finite_and_huge_counts(num_bytes: float, expected: str) -> None:
    assert format_bytes(num_bytes, 2) == expected


def test_unknown_locale_falls_back_to_language() -> None:
    assert LocaleNumberFormatter("de-XX").format_integer(1234567) == "1.234.567"
