"""Unit tests for CLI output formatters."""

from decimal import Decimal

import click

from src.cli.utils.formatters import (
    format_currency,
    format_error,
    format_info,
    format_success,
    format_table,
    format_warning,
)


class TestMessageFormatters:
    def test_symbols(self):
        assert click.unstyle(format_success("ok")) == "✓ ok"
        assert click.unstyle(format_error("bad")) == "✗ bad"
        assert click.unstyle(format_warning("careful")) == "⚠ careful"
        assert click.unstyle(format_info("note")) == "ℹ note"


class TestFormatCurrency:
    def test_two_decimals_and_euro_sign(self):
        assert format_currency(Decimal("302.5")) == "302.50 €"

    def test_zero(self):
        assert format_currency(Decimal("0")) == "0.00 €"


class TestFormatTable:
    def test_columns_are_padded_to_widest_cell(self):
        table = format_table(["Nombre", "DNI"], [["Ana", "00000001R"], ["Lucía Ferrer", ""]])
        lines = table.splitlines()

        assert lines[0] == lines[2] == lines[-1]
        assert "| Nombre       | DNI       |" in lines
        assert "| Lucía Ferrer |           |" in lines

    def test_no_rows_prints_header_only(self):
        table = format_table(["ID", "Evento"], [])
        assert len(table.splitlines()) == 3
        assert "Evento" in table

    def test_no_headers(self):
        assert format_table([], [["x"]]) == ""

    def test_long_cells_are_truncated(self):
        table = format_table(["Notas"], [["x" * 100]], max_width=10)
        assert "x" * 11 not in table
        assert "| xxxxxxxxxx |" in table

    def test_short_rows_are_filled(self):
        table = format_table(["A", "B"], [["1"]])
        assert "| 1 |   |" in table
