"""Pytest configuration and fixtures."""

import logging
import tempfile
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from main import AppConfig
from src.gdrive_sync.config import FOLDER_MIME_TYPE


class FakeRequest:
    """Stands in for an HttpRequest: runs the stored callable on execute()."""

    def __init__(self, func: Callable[[], Any]):
        self._func = func

    def execute(self) -> Any:
        return self._func()


class FakeFilesResource:
    """In-memory implementation of the Drive v3 files() resource."""

    def __init__(self, page_size: int):
        self.page_size = page_size
        self.store: Dict[str, Dict[str, Any]] = {}
        self.trash: List[str] = []
        self.list_tokens: List[Optional[str]] = []
        self._counter = 0

    def add(self, name: str, mime_type: str, parent_id: str) -> Dict[str, Any]:
        self._counter += 1
        entry = {
            "id": f"id-{self._counter}",
            "name": name,
            "mimeType": mime_type,
            "parents": [parent_id],
        }
        self.store[entry["id"]] = entry
        return dict(entry)

    def children(self, parent_id: str) -> List[Dict[str, Any]]:
        return [f for f in self.store.values() if parent_id in f["parents"]]

    def list(self, q: str, pageToken: Optional[str] = None, **kwargs) -> FakeRequest:
        parent_id = q.split("'")[1]

        def run():
            self.list_tokens.append(pageToken)
            children = self.children(parent_id)
            start = int(pageToken or 0)
            end = start + self.page_size
            response = {"files": [dict(f) for f in children[start:end]]}
            if end < len(children):
                response["nextPageToken"] = str(end)
            return response

        return FakeRequest(run)

    def create(self, body: Dict[str, Any], media_body: Any = None, **kwargs) -> FakeRequest:
        return FakeRequest(lambda: self.add(
            body["name"],
            body.get("mimeType", "application/octet-stream"),
            body["parents"][0],
        ))

    def copy(self, fileId: str, body: Dict[str, Any], **kwargs) -> FakeRequest:
        source = self.store[fileId]
        return FakeRequest(lambda: self.add(
            body["name"], source["mimeType"], body["parents"][0]))

    def update(self, fileId: str, body: Dict[str, Any], addParents: str = "",
               removeParents: str = "", **kwargs) -> FakeRequest:
        def run():
            entry = self.store[fileId]
            entry["parents"] = [p for p in entry["parents"] if p != removeParents]
            entry["parents"].append(addParents)
            return dict(entry)

        return FakeRequest(run)

    def delete(self, fileId: str, **kwargs) -> FakeRequest:
        return FakeRequest(lambda: self.store.pop(fileId) and "")

    def emptyTrash(self) -> FakeRequest:
        return FakeRequest(lambda: self.trash.clear() or "")

    def get_media(self, fileId: str) -> FakeRequest:
        return FakeRequest(lambda: b"")


class FakeDriveService:
    """Minimal Drive v3 service backed by FakeFilesResource."""

    def __init__(self, page_size: int = 2):
        self.files_resource = FakeFilesResource(page_size)

    def files(self) -> FakeFilesResource:
        return self.files_resource


class FakeDownloader:
    """Replaces MediaIoBaseDownload; writes fixed content in one chunk."""

    content = b"remote-bytes"

    def __init__(self, fh, request, chunksize=None):
        self._fh = fh

    def next_chunk(self):
        self._fh.write(self.content)
        return None, True


@pytest.fixture
def app_config(temp_directory):
    """Create a test configuration."""
    return AppConfig(
        command="drive",
        parent_folder_url="https://drive.google.com/drive/u/0/folders/parent-id",
        other_folder_url="other-id",
        spreadsheet_url="https://docs.google.com/spreadsheets/d/sheet-id/edit",
        download_folder=temp_directory,
        log_level=logging.DEBUG,
        empty_trash=True,
    )


@pytest.fixture
def test_logger():
    """Create a test logger."""
    logger = logging.getLogger("test_logger")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def temp_directory():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def mock_drive_service():
    """Create a mock Drive v3 service."""
    return Mock()


@pytest.fixture
def mock_sheets_service():
    """Create a mock Sheets v4 service."""
    return Mock()


@pytest.fixture
def fake_drive_service():
    """Create an in-memory Drive service with a two-item page size."""
    return FakeDriveService(page_size=2)


@pytest.fixture
def fake_downloader():
    """MediaIoBaseDownload replacement writing FakeDownloader.content."""
    return FakeDownloader


@pytest.fixture
def make_http_error():
    """Factory for googleapiclient HttpError instances."""
    def _make(status: int = 500, content: bytes = b"backend error") -> HttpError:
        return HttpError(httplib2.Response({"status": str(status)}), content)
    return _make


@pytest.fixture
def folder_entry():
    """Raw API payload for a folder."""
    return {
        "id": "folder-1",
        "name": "Reports",
        "mimeType": FOLDER_MIME_TYPE,
        "parents": ["parent-id"],
    }
