"""Writers module for generating Excel reports.

This module builds billing and crew tables as pandas DataFrames and writes
them to formatted Excel workbooks.
"""

from src.writers.billing_report_generator import BillingReportData, BillingReportGenerator
from src.writers.crew_sheet_generator import (
    EXPORT_COLUMNS,
    CrewSheetData,
    CrewSheetGenerator,
    event_crew_frame,
)
from src.writers.excel_writer import ExcelWorkbookWriter

__all__ = [
    "BillingReportData",
    "BillingReportGenerator",
    "CrewSheetData",
    "CrewSheetGenerator",
    "EXPORT_COLUMNS",
    "event_crew_frame",
    "ExcelWorkbookWriter",
]
