"""Unit tests for the billing report generator."""

from src.aggregators.billing_aggregator import aggregate_technicians
from src.writers.billing_report_generator import (
    DETAIL_COLUMNS,
    SUMMARY_COLUMNS,
    BillingReportGenerator,
    format_display_date,
)


class TestFormatDisplayDate:
    def test_iso_date(self):
        assert format_display_date("2024-03-15") == "15/03/2024"

    def test_iso_datetime(self):
        assert format_display_date("2024-03-15T10:00:00") == "15/03/2024"

    def test_unparsable_left_alone(self):
        assert format_display_date("pronto") == "pronto"
        assert format_display_date("") == ""


class TestBillingReportGenerator:
    def test_summary(self, sample_events):
        report = BillingReportGenerator(aggregate_technicians(sample_events, "ALL")).generate()

        summary = report.summary
        assert list(summary.columns) == SUMMARY_COLUMNS
        assert summary["DNI"].tolist() == ["11111111H", "22222222J", "33333333P"]
        assert summary["Servicios"].tolist() == [2, 1, 1]
        assert summary["Total"].tolist() == [242.0, 120.0, 0.0]
        assert summary["Faltan Facturas"].tolist() == ["Sí", "No", "No"]

    def test_detail(self, sample_events):
        report = BillingReportGenerator(aggregate_technicians(sample_events, "ALL")).generate()

        detail = report.detail
        assert list(detail.columns) == DETAIL_COLUMNS
        assert len(detail) == 4
        first = detail.iloc[0]
        assert first["Nombre"] == "Lucía Prieto"
        assert first["Fecha"] == "10/05/2024"
        assert first["Tipo"] == "Autonomo"
        assert first["Nº Factura"] == ""
        assert first["Importe"] == 0.0
        assert detail.iloc[1]["Nº Factura"] == "F-77"

    def test_empty(self):
        report = BillingReportGenerator([]).generate()

        assert report.summary.empty
        assert list(report.summary.columns) == SUMMARY_COLUMNS
        assert report.detail.empty
