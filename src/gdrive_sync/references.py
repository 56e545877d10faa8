"""Resolution of Drive folder and Sheets spreadsheet references to IDs."""

import re

from .config import FOLDER_URL_MARKER, SPREADSHEET_URL_MARKER
from .exceptions import InvalidReferenceError

_URL_SCHEMES: tuple = ('http://', 'https://')
_ID_TERMINATORS = re.compile(r'[/?#]')


def is_url(reference: str) -> bool:
    """Check if a reference is an HTTP(S) URL rather than a bare ID."""
    return reference.lower().startswith(_URL_SCHEMES)


def _extract_id(reference: str, marker: str) -> str:
    if not is_url(reference):
        return reference

    _, found, tail = reference.partition(marker)
    resource_id = _ID_TERMINATORS.split(tail, maxsplit=1)[0]
    if not found or not resource_id:
        raise InvalidReferenceError(
            f"No ID found after '{marker}' in URL: {reference}")
    return resource_id


def get_folder_id(reference: str) -> str:
    """Resolve a folder reference to a Drive folder ID.

    Args:
        reference: Either a bare folder ID or a Drive URL such as
            https://drive.google.com/drive/u/0/folders/<ID>.

    Returns:
        The folder ID. Non-URL input is returned unchanged.

    Raises:
        InvalidReferenceError: If a URL has no 'folders/' segment.
    """
    return _extract_id(reference, FOLDER_URL_MARKER)


def get_spreadsheet_id(reference: str) -> str:
    """Resolve a spreadsheet reference to a Sheets spreadsheet ID.

    Args:
        reference: Either a bare spreadsheet ID or a URL such as
            https://docs.google.com/spreadsheets/d/<ID>/edit.

    Returns:
        The spreadsheet ID. Non-URL input is returned unchanged.

    Raises:
        InvalidReferenceError: If a URL has no '/d/' segment.
    """
    return _extract_id(reference, SPREADSHEET_URL_MARKER)
