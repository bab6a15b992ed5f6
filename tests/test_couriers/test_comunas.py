"""Tests for comuna name normalization."""

from __future__ import annotations

from couriers.comunas import normalize_comuna


class TestNormalizeComuna:
    def test_strips_case_and_diacritics(self) -> None:
        assert normalize_comuna("  Ñuñoa ") == "nunoa"
        assert normalize_comuna("Concepción") == "concepcion"

    def test_upper_convention(self) -> None:
        assert normalize_comuna("Viña del Mar", upper=True) == "VINA DEL MAR"

    def test_collapses_internal_whitespace(self) -> None:
        assert normalize_comuna("Las   \t Condes") == "las condes"

    def test_is_total(self) -> None:
        assert normalize_comuna("") == ""
        assert normalize_comuna(None) == ""
        assert normalize_comuna("   ") == ""
