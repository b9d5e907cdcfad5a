"""Pruebas del formato de resultados y de unidades."""

import math

import pytest

from result_formatter import ERROR_TEXT, PLACEHOLDER_TEXT, format_result, format_units, to_display


class TestFormatResult:
    """Formato de resultados de la calculadora."""

    def test_integers_have_no_decimal_point(self) -> None:
        assert format_result(5.0) == "5"
        assert format_result(120) == "120"

    def test_rounds_to_twelve_decimals_and_strips_zeros(self) -> None:
        assert format_result(0.1 + 0.2) == "0.3"
        assert format_result(-2.5) == "-2.5"
        assert format_result(2 * math.pi) == "6.28318530718"

    def test_zero_and_negative_zero(self) -> None:
        assert format_result(0.0) == "0"
        assert format_result(-0.0) == "0"

    def test_large_values_use_exponential_notation(self) -> None:
        assert format_result(1e12) == "1.00000000e+12"
        assert format_result(-1e12) == "-1.00000000e+12"

    def test_small_values_use_exponential_notation(self) -> None:
        assert format_result(9.99e-7) == "9.99000000e-7"

    def test_values_inside_the_range_stay_fixed(self) -> None:
        assert format_result(999999999999) == "999999999999"
        assert format_result(1e-6) == "0.000001"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "5", None])
    def test_non_finite_or_non_numeric_is_error(self, value) -> None:
        assert format_result(value) == ERROR_TEXT

    @pytest.mark.parametrize("value", [0.1, 2.5, 1234.5678, -0.000123, 3.14159, 1 / 3])
    def test_formatted_text_parses_back(self, value: float) -> None:
        assert float(format_result(value)) == round(value, 12)


class TestFormatUnits:
    """Formato de conversiones de unidades."""

    def test_six_decimals_with_label(self) -> None:
        assert format_units(1.5, "m") == "1.5 m"
        assert format_units(1 / 3) == "0.333333"
        assert format_units(2) == "2"

    def test_accepts_numeric_strings(self) -> None:
        assert format_units("273.15", "K") == "273.15 K"

    @pytest.mark.parametrize("value", ["abc", float("inf"), float("nan"), None])
    def test_invalid_input_gives_placeholder(self, value) -> None:
        assert format_units(value, "m") == PLACEHOLDER_TEXT


class TestToDisplay:
    """Localización en el paso de pantalla."""

    def test_first_point_becomes_comma(self) -> None:
        assert to_display("3.75") == "3,75"
        assert to_display("M: 2.5") == "M: 2,5"

    def test_text_without_point_is_unchanged(self) -> None:
        assert to_display("Error") == "Error"
        assert to_display("42") == "42"
