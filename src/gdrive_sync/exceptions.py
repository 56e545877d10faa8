"""Custom exceptions for the Google Drive sync helpers."""


class GDriveSyncError(Exception):
    """Base exception for the Google Drive sync application."""
    pass


class AuthenticationError(GDriveSyncError):
    """Raised when Google API authentication fails."""
    pass


class InvalidReferenceError(GDriveSyncError):
    """Raised when a folder or spreadsheet URL has no ID segment."""
    pass


class DriveOperationError(GDriveSyncError):
    """Raised when a Google Drive API call fails."""
    pass


class UploadError(DriveOperationError):
    """Raised when a file upload fails."""
    pass


class DownloadError(DriveOperationError):
    """Raised when a file download fails."""
    pass


class SheetsOperationError(GDriveSyncError):
    """Raised when a Google Sheets API call fails."""
    pass
