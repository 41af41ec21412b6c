"""Select the document store configured for this installation."""

import logging

from src.config.settings import CrewBillingConfig
from src.repositories.base import DataRepository
from src.repositories.local_repository import LocalJsonRepository
from src.repositories.sheets_repository import SheetsDocumentRepository
from src.services.google_sheets_service import GoogleSheetsService
from src.services.retry_handler import RetryHandler

logger = logging.getLogger(__name__)


def create_sheets_repository(config: CrewBillingConfig) -> SheetsDocumentRepository:
    """
    Connect to the spreadsheet store and make sure its tabs exist.

    Raises:
        Exception: Any authentication or API error from the connection attempt
    """
    retry_handler = RetryHandler(
        max_retries=config.max_retries, base_delay=config.retry_delay
    )
    service = GoogleSheetsService(
        credentials=config.get_google_service_account_info(),
        retry_handler=retry_handler,
        scopes=config.google_scopes,
    )
    repository = SheetsDocumentRepository(service, config.data_spreadsheet_id)
    repository.ensure_tabs()
    return repository


def create_repository(config: CrewBillingConfig) -> DataRepository:
    """
    Build the repository selected by ``STORAGE_BACKEND``.

    If the spreadsheet store cannot be reached the local JSON store is used
    instead, so the tool stays usable offline.
    """
    if config.storage_backend == "sheets":
        try:
            repository = create_sheets_repository(config)
            logger.info(f"Using spreadsheet store {config.data_spreadsheet_id}")
            return repository
        except Exception as e:
            logger.error(
                f"Spreadsheet store unavailable ({type(e).__name__}: {e}); "
                f"falling back to local data in {config.local_data_dir}"
            )

    logger.debug(f"Using local store in {config.local_data_dir}")
    return LocalJsonRepository(config.local_data_dir)
