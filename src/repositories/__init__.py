"""
Document stores for events, staff and users.
"""

from .base import DataRepository
from .factory import create_repository, create_sheets_repository
from .local_repository import LocalJsonRepository
from .sheets_repository import SheetsDocumentRepository

__all__ = [
    "DataRepository",
    "LocalJsonRepository",
    "SheetsDocumentRepository",
    "create_repository",
    "create_sheets_repository",
]
