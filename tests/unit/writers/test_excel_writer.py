"""Unit tests for the Excel workbook writer."""

from datetime import datetime

import pandas as pd
import pytest
from openpyxl import load_workbook

from src.aggregators.billing_aggregator import aggregate_technicians
from src.writers.billing_report_generator import BillingReportGenerator
from src.writers.crew_sheet_generator import CREW_SHEET_NAME, CrewSheetGenerator
from src.writers.excel_writer import ExcelWorkbookWriter, timestamped_filename


@pytest.fixture
def writer(tmp_path):
    return ExcelWorkbookWriter(tmp_path / "exports")


class TestTimestampedFilename:
    def test_default_extension(self):
        name = timestamped_filename("Facturacion", now=datetime(2024, 3, 15, 9, 5))
        assert name == "Facturacion_20240315_0905.xlsx"

    def test_custom_extension(self):
        name = timestamped_filename("Backup", "json", datetime(2024, 3, 15, 9, 5))
        assert name == "Backup_20240315_0905.json"


class TestWriteFrames:
    def test_write_frames(self, writer, tmp_path):
        frames = {
            "Equipo": pd.DataFrame([["Cámara", "Ana"]], columns=["Puesto", "Nombre"]),
            "Otro": pd.DataFrame({"A": [1, 2]}),
        }

        path = writer.write_frames(frames, "crew.xlsx")

        assert path == tmp_path / "exports" / "crew.xlsx"
        workbook = load_workbook(path)
        assert workbook.sheetnames == ["Equipo", "Otro"]
        sheet = workbook["Equipo"]
        assert [c.value for c in sheet[1]] == ["Puesto", "Nombre"]
        assert sheet["A1"].font.bold
        assert sheet["B2"].value == "Ana"

    def test_column_widths(self, writer):
        frame = pd.DataFrame([["x" * 100, "y"]], columns=["Largo", "Corto"])

        path = writer.write_frames({"Hoja": frame}, "w.xlsx")
        sheet = load_workbook(path)["Hoja"]
        assert sheet.column_dimensions["A"].width == 60
        assert sheet.column_dimensions["B"].width == 7

        path = writer.write_frames({"Hoja": frame}, "w2.xlsx", column_widths={"Hoja": [12, 30]})
        sheet = load_workbook(path)["Hoja"]
        assert sheet.column_dimensions["A"].width == 12
        assert sheet.column_dimensions["B"].width == 30


class TestWriteBillingReport:
    def test_billing_workbook(self, writer, sample_events):
        report = BillingReportGenerator(aggregate_technicians(sample_events, "ALL")).generate()

        path = writer.write_billing_report(report)

        assert path.name.startswith("Facturacion_")
        summary = pd.read_excel(path, sheet_name="Summary", engine="openpyxl")
        detail = pd.read_excel(path, sheet_name="Detail", engine="openpyxl")
        assert summary["Total"].tolist() == [242.0, 120.0, 0.0]
        assert len(detail) == 4


class TestWriteCrewSheet:
    def test_crew_workbook(self, writer, sample_events):
        data = CrewSheetGenerator(sample_events, []).generate()

        path = writer.write_crew_sheet(data)

        assert path.name.startswith("Produccion_")
        sheet = load_workbook(path)[CREW_SHEET_NAME]
        assert sheet["A1"].value == "Gala Benéfica (02/06/2024)"
        assert sheet["A1"].font.bold
        assert sheet["A1"].font.size == 14
        assert "A1:G1" in [str(r) for r in sheet.merged_cells.ranges]
        assert sheet["A2"].value == "Puesto"
        assert sheet["G2"].font.bold
        assert sheet["G2"].fill.fgColor.rgb == "FFEEEEEE"
        assert sheet["B3"].value == "Lucía Prieto"
        assert sheet["A6"].value == "Festival de Otoño (10/05/2024)"
        assert sheet.column_dimensions["B"].width == 35
        assert sheet.column_dimensions["F"].width == 40
