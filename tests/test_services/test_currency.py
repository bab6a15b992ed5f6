"""Tests for CLP formatting."""

from __future__ import annotations

import pytest

from services.currency import format_clp, parse_clp


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(0, "$0"), (990, "$990"), (20000, "$20.000"), (1234567, "$1.234.567"), (4299.5, "$4.300")],
)
def test_format_clp(amount: float, expected: str) -> None:
    assert format_clp(amount) == expected


def test_format_negative() -> None:
    assert format_clp(-3500) == "-$3.500"


def test_parse_clp() -> None:
    assert parse_clp("$20.000") == 20000
    assert parse_clp(" -$3.500 ") == -3500


def test_parse_rejects_text_without_digits() -> None:
    with pytest.raises(ValueError):
        parse_clp("gratis")


@pytest.mark.parametrize("amount", [0, 7, 1000, 987654321])
def test_round_trip_is_stable(amount: int) -> None:
    assert format_clp(parse_clp(format_clp(amount))) == format_clp(amount)
