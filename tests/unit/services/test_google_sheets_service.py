"""
Unit tests for the Google Sheets service wrapper.
"""

from unittest.mock import MagicMock, Mock, patch

import pandas as pd
import pytest
from googleapiclient.errors import HttpError

from src.services.google_sheets_service import DEFAULT_SCOPES, GoogleSheetsService
from src.services.retry_handler import RetryHandler


@pytest.fixture
def mock_build():
    with patch("src.services.google_sheets_service.build") as build, patch(
        "google.auth.default", return_value=(Mock(), "test-project")
    ):
        build.return_value = MagicMock()
        yield build


@pytest.fixture
def sheets(mock_build):
    return GoogleSheetsService(retry_handler=RetryHandler(max_retries=0))


def values_api(mock_build):
    return mock_build.return_value.spreadsheets.return_value.values.return_value


class TestServiceCreation:
    def test_uses_application_default_credentials(self, mock_build):
        GoogleSheetsService()

        mock_build.assert_called_once()
        args, kwargs = mock_build.call_args
        assert args == ("sheets", "v4")
        assert kwargs["cache_discovery"] is False

    def test_uses_service_account_when_configured(self, mock_build):
        info = {"client_email": "svc@test.iam.gserviceaccount.com"}
        with patch(
            "src.services.google_sheets_service.service_account.Credentials"
            ".from_service_account_info"
        ) as from_info:
            GoogleSheetsService(credentials=info)

        from_info.assert_called_once_with(info, scopes=DEFAULT_SCOPES)
        assert mock_build.call_args.kwargs["credentials"] is from_info.return_value

    def test_build_failure_propagates(self):
        with patch("google.auth.default", side_effect=RuntimeError("no credentials")):
            with pytest.raises(RuntimeError):
                GoogleSheetsService()


class TestReadSheet:
    def test_read_sheet_returns_dataframe(self, sheets, mock_build):
        values_api(mock_build).get.return_value.execute.return_value = {
            "values": [["id", "document"], ["e1", "{}"], ["e2"]]
        }

        df = sheets.read_sheet("sheet-1", "events!A:B")

        assert list(df.columns) == ["id", "document"]
        assert df["id"].tolist() == ["e1", "e2"]
        assert df["document"].tolist() == ["{}", ""]
        values_api(mock_build).get.assert_called_with(
            spreadsheetId="sheet-1",
            range="events!A:B",
            valueRenderOption="UNFORMATTED_VALUE",
        )

    def test_read_empty_range(self, sheets, mock_build):
        values_api(mock_build).get.return_value.execute.return_value = {}
        assert sheets.read_sheet("sheet-1", "events!A:B").empty

    def test_http_error_propagates(self, sheets, mock_build):
        error = HttpError(resp=Mock(status=404, reason="Not Found"), content=b"")
        values_api(mock_build).get.return_value.execute.side_effect = error

        with pytest.raises(HttpError):
            sheets.read_sheet("sheet-1", "events!A:B")


class TestWriteSheet:
    def test_write_sheet_with_headers(self, sheets, mock_build):
        values_api(mock_build).update.return_value.execute.return_value = {"updatedCells": 4}
        df = pd.DataFrame([["e1", '{"id": "e1"}']], columns=["id", "document"])

        result = sheets.write_sheet("sheet-1", "events!A1", df)

        assert result == {"updatedCells": 4}
        kwargs = values_api(mock_build).update.call_args.kwargs
        assert kwargs["valueInputOption"] == "RAW"
        assert kwargs["body"]["values"] == [["id", "document"], ["e1", '{"id": "e1"}']]

    def test_write_sheet_without_headers(self, sheets, mock_build):
        values_api(mock_build).update.return_value.execute.return_value = {}
        df = pd.DataFrame([[1, 2.5]], columns=["a", "b"])

        sheets.write_sheet("sheet-1", "tab!A2", df, include_headers=False)

        kwargs = values_api(mock_build).update.call_args.kwargs
        assert kwargs["body"]["values"] == [["1", "2.5"]]

    def test_clear_sheet_range(self, sheets, mock_build):
        sheets.clear_sheet_range("sheet-1", "events!A:B")
        values_api(mock_build).clear.assert_called_once_with(
            spreadsheetId="sheet-1", range="events!A:B", body={}
        )


class TestSheetTabs:
    def test_get_sheet_titles(self, sheets, mock_build):
        spreadsheets = mock_build.return_value.spreadsheets.return_value
        spreadsheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "events"}}, {"properties": {"title": "staff"}}]
        }

        assert sheets.get_sheet_titles("sheet-1") == ["events", "staff"]

    def test_ensure_sheets_creates_missing_tabs(self, sheets, mock_build):
        spreadsheets = mock_build.return_value.spreadsheets.return_value
        spreadsheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "events"}}]
        }

        sheets.ensure_sheets("sheet-1", ["events", "staff", "users"])

        created = [
            c.kwargs["body"]["requests"][0]["addSheet"]["properties"]["title"]
            for c in spreadsheets.batchUpdate.call_args_list
        ]
        assert created == ["staff", "users"]
