"""Integration tests for the Drive client and workflow against an in-memory service."""

import os
from unittest.mock import patch

import pytest

from main import DriveSyncApplication
from src.gdrive_sync.config import FOLDER_MIME_TYPE, SPREADSHEET_MIME_TYPE
from src.gdrive_sync.drive_client import DriveClient
from src.gdrive_sync.models import RemoteFile

pytestmark = pytest.mark.integration

PARENT_URL = "https://drive.google.com/drive/u/0/folders/parent-id"


@pytest.fixture
def files_resource(fake_drive_service):
    return fake_drive_service.files_resource


@pytest.fixture
def drive_client(fake_drive_service, test_logger):
    return DriveClient(service=fake_drive_service, logger=test_logger)


class TestPagination:
    """Listing across several pages of the fake service."""

    def test_all_entries_returned_once(self, drive_client, files_resource):
        for i in range(5):
            files_resource.add(f"file-{i}.txt", "text/plain", "parent-id")
        files_resource.add("elsewhere.txt", "text/plain", "other-id")

        files = drive_client.list_folder(PARENT_URL)

        assert [f.name for f in files] == [f"file-{i}.txt" for i in range(5)]
        assert len({f.id for f in files}) == 5
        assert files_resource.list_tokens == [None, "2", "4"]

    def test_exact_page_multiple(self, drive_client, files_resource):
        for i in range(4):
            files_resource.add(f"file-{i}.txt", "text/plain", "parent-id")

        assert len(drive_client.list_folder("parent-id")) == 4
        assert files_resource.list_tokens == [None, "2"]


class TestIdempotentCreation:
    """Duplicate guard behaviour across repeated calls."""

    def test_create_folder_twice_returns_same_id(self, drive_client, files_resource):
        for i in range(3):
            files_resource.add(f"file-{i}.txt", "text/plain", "parent-id")

        first = drive_client.create_folder("Reports", PARENT_URL)
        second = drive_client.create_folder("Reports", "parent-id")

        assert first.id == second.id
        folders = [f for f in files_resource.children("parent-id")
                   if f["mimeType"] == FOLDER_MIME_TYPE]
        assert len(folders) == 1

    def test_same_name_other_type_is_created(self, drive_client, files_resource):
        files_resource.add("Reports", SPREADSHEET_MIME_TYPE, "parent-id")

        folder = drive_client.create_folder("Reports", "parent-id")

        assert folder.mime_type == FOLDER_MIME_TYPE
        assert len(files_resource.children("parent-id")) == 2

    def test_copy_twice_creates_one_copy(self, drive_client, files_resource):
        source = RemoteFile.model_validate(
            files_resource.add("grades.pdf", "application/pdf", "parent-id"))

        first = drive_client.copy_file(source, "dest-id")
        second = drive_client.copy_file(source, "dest-id")

        assert first.id == second.id
        assert len(files_resource.children("dest-id")) == 1


class TestDriveWorkflow:
    """End-to-end run of DriveSyncApplication."""

    def test_run(self, app_config, drive_client, files_resource, test_logger, fake_downloader):
        files_resource.add("Final Grades", "application/pdf", "parent-id")
        files_resource.add("Captura 01.png", "image/png", "parent-id")
        files_resource.add("notes.txt", "text/plain", "parent-id")
        app = DriveSyncApplication(app_config, drive_client, test_logger)

        with patch('src.gdrive_sync.drive_client.MediaIoBaseDownload', fake_downloader):
            app.run()
            app.run()

        parent_names = sorted(f["name"] for f in files_resource.children("parent-id"))
        assert parent_names == ["MyNewFolder", "notes.txt"]

        work_folder = next(f for f in files_resource.store.values()
                           if f["name"] == "MyNewFolder")
        work_names = sorted(f["name"] for f in files_resource.children(work_folder["id"]))
        assert work_names == ["Final Grades", "My Spreadsheet"]

        moved = [f["name"] for f in files_resource.children("other-id")]
        assert moved == ["Final Grades"]

        downloaded = os.path.join(app_config.download_folder, "Final Grades.pdf")
        with open(downloaded, 'rb') as f:
            assert f.read() == fake_downloader.content
