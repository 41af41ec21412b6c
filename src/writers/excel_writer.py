"""Excel workbook writer for billing reports and crew sheets.

Workbooks are written with pandas ``ExcelWriter`` on the openpyxl engine;
formatting (column widths, bold headers, merged event titles) is applied to
the openpyxl worksheets before the file is closed.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from src.writers.billing_report_generator import BillingReportData
from src.writers.crew_sheet_generator import (
    CREW_COLUMN_WIDTHS,
    CREW_HEADER,
    CREW_SHEET_NAME,
    CrewSheetData,
)

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="FFEEEEEE", end_color="FFEEEEEE", fill_type="solid")


def timestamped_filename(
    prefix: str, extension: str = "xlsx", now: Optional[datetime] = None
) -> str:
    """Build ``<prefix>_YYYYMMDD_HHMM.<extension>``."""
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y%m%d_%H%M')}.{extension}"


class ExcelWorkbookWriter:
    """Write DataFrames and row lists to an ``.xlsx`` file.

    Example:
        >>> writer = ExcelWorkbookWriter("exports")
        >>> path = writer.write_billing_report(report, "Facturacion")
        >>> path.suffix
        '.xlsx'
    """

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def _target(self, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / filename

    def write_frames(
        self,
        frames: Dict[str, pd.DataFrame],
        filename: str,
        column_widths: Optional[Dict[str, Sequence[int]]] = None,
    ) -> Path:
        """Write one sheet per DataFrame, with bold headers.

        Args:
            frames: Sheet name to DataFrame, in sheet order
            filename: Output file name inside the output directory
            column_widths: Optional widths per sheet; sheets without an entry
                are sized from their content

        Returns:
            Path of the written workbook
        """
        path = self._target(filename)
        column_widths = column_widths or {}

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, df in frames.items():
                df.to_excel(writer, index=False, sheet_name=sheet_name)
                worksheet = writer.sheets[sheet_name]
                for cell in worksheet[1]:
                    cell.font = Font(bold=True)
                widths = column_widths.get(sheet_name) or self._content_widths(df)
                self._apply_widths(worksheet, widths)

        logger.info(f"Wrote {len(frames)} sheet(s) to {path}")
        return path

    def write_billing_report(self, report: BillingReportData, prefix: str = "Facturacion") -> Path:
        return self.write_frames(
            {"Summary": report.summary, "Detail": report.detail},
            timestamped_filename(prefix),
        )

    def write_crew_sheet(self, data: CrewSheetData, prefix: str = "Produccion") -> Path:
        """Write the all-events crew sheet.

        Event titles are bold, merged across the crew columns; column header
        rows are bold on a light grey background.
        """
        path = self._target(timestamped_filename(prefix))
        df = pd.DataFrame(data.rows, columns=None) if data.rows else pd.DataFrame()

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, header=False, sheet_name=CREW_SHEET_NAME)
            worksheet = writer.sheets[CREW_SHEET_NAME]

            last_column = get_column_letter(len(CREW_HEADER))
            for row_index in data.title_rows:
                excel_row = row_index + 1
                title_cell = worksheet.cell(row=excel_row, column=1)
                title_cell.font = Font(bold=True, size=14)
                worksheet.merge_cells(f"A{excel_row}:{last_column}{excel_row}")

            for row_index in data.header_rows:
                for column in range(1, len(CREW_HEADER) + 1):
                    cell = worksheet.cell(row=row_index + 1, column=column)
                    cell.font = Font(bold=True)
                    cell.fill = HEADER_FILL

            self._apply_widths(worksheet, CREW_COLUMN_WIDTHS)

        logger.info(f"Wrote crew sheet with {len(data.title_rows)} events to {path}")
        return path

    def _content_widths(self, df: pd.DataFrame) -> List[int]:
        widths = []
        for column in df.columns:
            values = [str(column)] + [str(v) for v in df[column].tolist()]
            widths.append(min(max(len(v) for v in values) + 2, 60))
        return widths

    def _apply_widths(self, worksheet, widths: Sequence[int]) -> None:
        for index, width in enumerate(widths, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width
