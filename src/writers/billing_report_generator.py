"""Billing report generator for creating finance DataFrames.

This module turns the per-technician billing aggregation into two tables:
a summary with one row per technician and a detail table with one row per
billed shift, ready to be written to an Excel workbook.
"""

import datetime as dt
from dataclasses import dataclass
from typing import List

import pandas as pd

from src.aggregators.billing_aggregator import AggregatedTechnician

SUMMARY_COLUMNS = ["Nombre", "DNI", "Servicios", "Total", "Faltan Facturas"]
DETAIL_COLUMNS = [
    "Nombre",
    "DNI",
    "Fecha",
    "Evento",
    "Rol",
    "Tipo",
    "Nº Factura",
    "Importe",
]


@dataclass
class BillingReportData:
    """Container for the billing report DataFrames.

    Attributes:
        summary: One row per technician
        detail: One row per billed shift
    """

    summary: pd.DataFrame
    detail: pd.DataFrame


def format_display_date(iso_date: str) -> str:
    """Format an ISO date as dd/mm/yyyy, leaving unparsable values as they are.

    Example:
        >>> format_display_date("2024-03-15")
        '15/03/2024'
    """
    try:
        return dt.date.fromisoformat(iso_date[:10]).strftime("%d/%m/%Y")
    except ValueError:
        return iso_date


class BillingReportGenerator:
    """Generate billing report DataFrames from aggregated technicians.

    Example:
        >>> technicians = aggregate_technicians(events, "INVOICE_ONLY")
        >>> report = BillingReportGenerator(technicians).generate()
        >>> list(report.summary.columns)
        ['Nombre', 'DNI', 'Servicios', 'Total', 'Faltan Facturas']
    """

    def __init__(self, technicians: List[AggregatedTechnician]):
        self.technicians = technicians

    def generate(self) -> BillingReportData:
        return BillingReportData(
            summary=self._generate_summary(), detail=self._generate_detail()
        )

    def _generate_summary(self) -> pd.DataFrame:
        rows = [
            {
                "Nombre": tech.person_name,
                "DNI": tech.dni,
                "Servicios": len(tech.shifts),
                "Total": float(tech.total_amount),
                "Faltan Facturas": "Sí" if tech.has_missing_invoices else "No",
            }
            for tech in self.technicians
        ]
        return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)

    def _generate_detail(self) -> pd.DataFrame:
        rows = []
        for tech in self.technicians:
            for shift in sorted(tech.shifts, key=lambda s: s.date):
                rows.append(
                    {
                        "Nombre": tech.person_name,
                        "DNI": tech.dni,
                        "Fecha": format_display_date(shift.date),
                        "Evento": shift.event_name,
                        "Rol": shift.role,
                        "Tipo": shift.payment_type,
                        "Nº Factura": shift.invoice_number or "",
                        "Importe": float(shift.amount),
                    }
                )
        return pd.DataFrame(rows, columns=DETAIL_COLUMNS)
