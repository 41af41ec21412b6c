"""
Google Sheets service used as the remote document store backend.
"""

import logging
from typing import Any, Dict, List, Optional

import google.auth
import pandas as pd
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from src.services.retry_handler import RetryHandler

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsService:
    """
    Thin wrapper around the Sheets v4 API.

    Authenticates with service-account credentials when they are configured
    and with Application Default Credentials otherwise. Every request runs
    through a RetryHandler.
    """

    def __init__(
        self,
        credentials: Optional[Dict[str, Any]] = None,
        retry_handler: Optional[RetryHandler] = None,
        scopes: Optional[List[str]] = None,
    ):
        """
        Initialize the service.

        Args:
            credentials: Service account info from
                ``CrewBillingConfig.get_google_service_account_info()``;
                None falls back to ADC
            retry_handler: Retry handler shared by all requests
            scopes: OAuth scopes
        """
        self.credentials_info = credentials
        self.retry_handler = retry_handler or RetryHandler()
        self.scopes = scopes or DEFAULT_SCOPES
        self._service = self._create_service()

    def _create_service(self):
        try:
            if self.credentials_info:
                credentials = service_account.Credentials.from_service_account_info(
                    self.credentials_info, scopes=self.scopes
                )
                logger.info(
                    f"Sheets service using service account "
                    f"{self.credentials_info.get('client_email', 'unknown')}"
                )
            else:
                credentials, project = google.auth.default(scopes=self.scopes)
                logger.info(f"Sheets service using ADC for project: {project}")

            return build("sheets", "v4", credentials=credentials, cache_discovery=False)

        except Exception as e:
            logger.error(f"Failed to initialize Google Sheets service: {e}")
            raise

    def _execute(self, request_factory, description: str):
        try:
            return self.retry_handler.execute_with_retry(
                lambda: request_factory().execute()
            )
        except HttpError as e:
            logger.error(f"Sheets API error while {description}: {e}")
            raise

    def read_sheet(self, spreadsheet_id: str, range_name: str) -> pd.DataFrame:
        """
        Read a range as a DataFrame, using the first row as headers.

        Short rows are padded with empty strings. An empty range yields an
        empty DataFrame.

        Raises:
            HttpError: If the API request fails with a non-retryable error
        """
        result = self._execute(
            lambda: self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueRenderOption="UNFORMATTED_VALUE",
            ),
            f"reading {range_name}",
        )
        values = result.get("values", [])
        if not values:
            logger.debug(f"No data found in range {range_name}")
            return pd.DataFrame()

        headers = values[0]
        rows = [row + [""] * (len(headers) - len(row)) for row in values[1:]]
        df = pd.DataFrame(rows, columns=headers)
        logger.debug(f"Read {len(df)} rows from {range_name}")
        return df

    def write_sheet(
        self,
        spreadsheet_id: str,
        range_name: str,
        data: pd.DataFrame,
        include_headers: bool = True,
    ) -> Dict[str, Any]:
        """
        Write a DataFrame to a range, starting at its top-left cell.

        Values are sent RAW so JSON documents are stored untouched.
        """
        values = [data.columns.tolist()] if include_headers else []
        values.extend(row.astype(str).tolist() for _, row in data.iterrows())

        result = self._execute(
            lambda: self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption="RAW",
                body={"values": values},
            ),
            f"writing {range_name}",
        )
        logger.info(
            f"Wrote {len(values)} rows to {range_name} "
            f"({result.get('updatedCells', 0)} cells)"
        )
        return result

    def clear_sheet_range(self, spreadsheet_id: str, range_name: str) -> Dict[str, Any]:
        """Clear all values in a range."""
        result = self._execute(
            lambda: self._service.spreadsheets()
            .values()
            .clear(spreadsheetId=spreadsheet_id, range=range_name, body={}),
            f"clearing {range_name}",
        )
        logger.debug(f"Cleared range {range_name}")
        return result

    def get_sheet_titles(self, spreadsheet_id: str) -> List[str]:
        """Titles of all tabs in a spreadsheet."""
        metadata = self._execute(
            lambda: self._service.spreadsheets().get(
                spreadsheetId=spreadsheet_id, fields="sheets.properties.title"
            ),
            "reading spreadsheet metadata",
        )
        return [
            sheet.get("properties", {}).get("title", "")
            for sheet in metadata.get("sheets", [])
        ]

    def create_sheet(self, spreadsheet_id: str, sheet_title: str) -> Dict[str, Any]:
        """Add a tab to an existing spreadsheet."""
        body = {"requests": [{"addSheet": {"properties": {"title": sheet_title}}}]}
        result = self._execute(
            lambda: self._service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id, body=body
            ),
            f"creating sheet '{sheet_title}'",
        )
        logger.info(f"Created sheet '{sheet_title}'")
        return result

    def ensure_sheets(self, spreadsheet_id: str, sheet_titles: List[str]) -> None:
        """Create any of ``sheet_titles`` that do not exist yet."""
        existing = set(self.get_sheet_titles(spreadsheet_id))
        for title in sheet_titles:
            if title not in existing:
                self.create_sheet(spreadsheet_id, title)
