"""Google Drive and Sheets helpers for listing, de-duplicating and moving files."""

from .drive_client import DriveClient
from .exceptions import (
    AuthenticationError,
    DownloadError,
    DriveOperationError,
    GDriveSyncError,
    InvalidReferenceError,
    SheetsOperationError,
    UploadError,
)
from .models import FilePage, RemoteFile, ValueRange
from .references import get_folder_id, get_spreadsheet_id
from .sheets_client import SheetsClient

__version__ = "1.0.0"

__all__ = [
    "DriveClient",
    "SheetsClient",
    "RemoteFile",
    "FilePage",
    "ValueRange",
    "get_folder_id",
    "get_spreadsheet_id",
    "GDriveSyncError",
    "AuthenticationError",
    "InvalidReferenceError",
    "DriveOperationError",
    "UploadError",
    "DownloadError",
    "SheetsOperationError",
]
