"""Google Drive client for folder and file operations."""

import io
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload, MediaIoBaseDownload

from .auth import build_service
from .config import (
    DOWNLOAD_CHUNK_SIZE,
    FILE_FIELDS,
    FOLDER_MIME_TYPE,
    LIST_FIELDS,
    PAGE_SIZE,
)
from .exceptions import DownloadError, DriveOperationError, UploadError
from .models import FilePage, RemoteFile
from .references import get_folder_id


def _escape_query_value(value: str) -> str:
    """Escape a value for use inside a quoted Drive query string."""
    return value.replace('\\', '\\\\').replace("'", "\\'")


def _local_file_name(name: str) -> str:
    """Turn a remote file name into a single local path component."""
    for sep in (os.sep, os.altsep):
        if sep:
            name = name.replace(sep, '_')
    if name in ('', '.', '..'):
        name = name.replace('.', '_') or '_'
    return name


class DriveClient:
    """Google Drive client for folder and file operations.

    Wraps a single Drive v3 service handle. Build it once and pass it to
    whatever needs Drive access.
    """

    def __init__(
        self,
        service: Any = None,
        credentials: Optional[Credentials] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the Drive client.

        Args:
            service: An already built Drive v3 service. Built from
                credentials when omitted.
            credentials: Credentials used to build the service.
            logger: Logger for operation messages.
        """
        self.service = service or build_service('drive', 'v3', credentials)
        self.logger = logger or logging.getLogger(__name__)

    def _execute(self, request: Any, action: str,
                 error_cls: type = DriveOperationError) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as error:
            self.logger.error(f"Failed to {action}: {error}")
            raise error_cls(f"Failed to {action}: {error}") from error

    # Listing

    def list_page(self, folder_ref: str, page_token: Optional[str] = None) -> FilePage:
        """Fetch one page of the children of a folder.

        Args:
            folder_ref: Folder URL or ID.
            page_token: Continuation token from a previous page.

        Returns:
            FilePage: The files on this page and the next page token.

        Raises:
            DriveOperationError: If the API request fails.
        """
        folder_id = get_folder_id(folder_ref)
        params: Dict[str, Any] = {
            'q': f"'{_escape_query_value(folder_id)}' in parents and trashed = false",
            'pageSize': PAGE_SIZE,
            'fields': LIST_FIELDS,
            'supportsAllDrives': True,
            'includeItemsFromAllDrives': True,
        }
        if page_token:
            params['pageToken'] = page_token

        response = self._execute(
            self.service.files().list(**params),
            f"list folder {folder_id}")
        return FilePage.model_validate(response)

    def list_folder(self, folder_ref: str) -> List[RemoteFile]:
        """List every file in a folder, following all result pages.

        Args:
            folder_ref: Folder URL or ID.

        Returns:
            List[RemoteFile]: All children of the folder.

        Raises:
            DriveOperationError: If any page request fails.
        """
        folder_id = get_folder_id(folder_ref)
        files: List[RemoteFile] = []
        page_token: Optional[str] = None

        while True:
            page = self.list_page(folder_id, page_token)
            files.extend(page.files)
            page_token = page.next_page_token
            if not page_token:
                break

        self.logger.debug(f"Listed {len(files)} files in folder {folder_id}")
        return files

    # Duplicate guard

    def find_duplicate(self, candidate: RemoteFile, folder_ref: str) -> Optional[RemoteFile]:
        """Find a file in a folder with the same name and MIME type.

        Args:
            candidate: File whose name and MIME type are looked up.
            folder_ref: Folder URL or ID to search.

        Returns:
            The first matching file, or None when there is no match.
        """
        for existing in self.list_folder(folder_ref):
            if existing.is_duplicate_of(candidate):
                return existing
        return None

    def has_duplicate(self, candidate: RemoteFile, folder_ref: str) -> bool:
        """Check if a folder already holds a file with the same name and MIME type."""
        return self.find_duplicate(candidate, folder_ref) is not None

    # Create / copy / move

    def create_folder(self, name: str, parent_ref: str) -> RemoteFile:
        """Create a folder inside a parent unless one with that name exists.

        Args:
            name: Name of the new folder.
            parent_ref: Parent folder URL or ID.

        Returns:
            RemoteFile: The created folder, or the existing one.

        Raises:
            DriveOperationError: If the API request fails.
        """
        parent_id = get_folder_id(parent_ref)
        new_folder = RemoteFile(name=name, mime_type=FOLDER_MIME_TYPE, parents=[parent_id])

        existing = self.find_duplicate(new_folder, parent_id)
        if existing is not None:
            self.logger.info(f"Folder '{name}' already exists in {parent_id}: {existing.id}")
            return existing

        response = self._execute(
            self.service.files().create(body=new_folder.to_body(), fields=FILE_FIELDS),
            f"create folder '{name}'")
        self.logger.info(f"Created folder '{name}' in {parent_id}: {response.get('id')}")
        return RemoteFile.model_validate(response)

    def create_file(self, file: RemoteFile) -> RemoteFile:
        """Create a metadata-only file inside its parents.

        Each parent is checked for a duplicate first; the first match is
        returned instead of creating a new file.

        Args:
            file: File to create. Its parents may be URLs or IDs.

        Returns:
            RemoteFile: The created file, or the existing duplicate.

        Raises:
            DriveOperationError: If the API request fails.
        """
        parent_ids = [get_folder_id(parent) for parent in file.parents]
        new_file = file.model_copy(update={'parents': parent_ids})

        for parent_id in parent_ids:
            existing = self.find_duplicate(new_file, parent_id)
            if existing is not None:
                self.logger.info(
                    f"File '{file.name}' ({file.mime_type}) already exists in {parent_id}: {existing.id}")
                return existing

        response = self._execute(
            self.service.files().create(body=new_file.to_body(), fields=FILE_FIELDS),
            f"create file '{file.name}'")
        self.logger.info(f"Created file '{file.name}': {response.get('id')}")
        return RemoteFile.model_validate(response)

    def copy_file(self, file: RemoteFile, destination_ref: str) -> RemoteFile:
        """Copy a file into a folder unless a duplicate is already there.

        Args:
            file: File to copy.
            destination_ref: Destination folder URL or ID.

        Returns:
            RemoteFile: The copy, or the existing duplicate.

        Raises:
            DriveOperationError: If the API request fails.
        """
        destination_id = get_folder_id(destination_ref)

        existing = self.find_duplicate(file, destination_id)
        if existing is not None:
            self.logger.info(f"File '{file.name}' already exists in {destination_id}: {existing.id}")
            return existing

        response = self._execute(
            self.service.files().copy(
                fileId=file.id,
                body={'name': file.name, 'parents': [destination_id]},
                fields=FILE_FIELDS,
            ),
            f"copy file '{file.name}'")
        self.logger.info(f"Copied '{file.name}' to {destination_id}: {response.get('id')}")
        return RemoteFile.model_validate(response)

    def move_file(self, file: RemoteFile, source_ref: str, target_ref: str) -> RemoteFile:
        """Move a file from one folder to another.

        No duplicate check is made; a file with the same name in the
        target folder is left alone.

        Raises:
            DriveOperationError: If the API request fails.
        """
        source_id = get_folder_id(source_ref)
        target_id = get_folder_id(target_ref)

        response = self._execute(
            self.service.files().update(
                fileId=file.id,
                body={},
                addParents=target_id,
                removeParents=source_id,
                fields=FILE_FIELDS,
            ),
            f"move file '{file.name}'")
        self.logger.info(f"Moved '{file.name}' from {source_id} to {target_id}")
        return RemoteFile.model_validate(response)

    # Transfer

    def upload_file(self, local_path: str, target_ref: str,
                    mime_type: Optional[str] = None) -> RemoteFile:
        """Upload a local file into a Drive folder.

        Always creates a new remote file, even if one with the same name
        exists.

        Args:
            local_path: Path of the file to upload.
            target_ref: Destination folder URL or ID.
            mime_type: MIME type of the content. Guessed from the
                extension when omitted.

        Returns:
            RemoteFile: The uploaded file.

        Raises:
            UploadError: If the local file is missing or the upload fails.
        """
        path = Path(local_path)
        if not path.is_file():
            raise UploadError(f"Local file not found: {local_path}")

        target_id = get_folder_id(target_ref)
        media = MediaFileUpload(str(path), mimetype=mime_type, resumable=True)
        response = self._execute(
            self.service.files().create(
                body={'name': path.name, 'parents': [target_id]},
                media_body=media,
                fields=FILE_FIELDS,
            ),
            f"upload {local_path}",
            error_cls=UploadError)
        self.logger.info(f"Uploaded {local_path} to {target_id}: {response.get('id')}")
        return RemoteFile.model_validate(response)

    def download_file(self, file: RemoteFile, local_dir: str,
                      file_format: Optional[str] = None,
                      export_mime_type: Optional[str] = None) -> str:
        """Download a Drive file into a local folder.

        Args:
            file: File to download.
            local_dir: Destination folder, created if needed.
            file_format: Extension appended to the file name, e.g. 'pdf'.
            export_mime_type: Export Google-native documents to this
                MIME type instead of fetching raw bytes.

        Returns:
            str: Path of the downloaded file.

        Raises:
            DownloadError: If the download fails.
        """
        file_name = _local_file_name(file.name)
        if file_format:
            file_name = f"{file_name}.{file_format}"
        file_path = os.path.join(local_dir, file_name)
        created = False

        try:
            if export_mime_type:
                request = self.service.files().export_media(
                    fileId=file.id, mimeType=export_mime_type)
            else:
                request = self.service.files().get_media(fileId=file.id)

            os.makedirs(local_dir, exist_ok=True)
            with io.FileIO(file_path, 'wb') as fh:
                created = True
                downloader = MediaIoBaseDownload(fh, request, chunksize=DOWNLOAD_CHUNK_SIZE)
                done = False
                while not done:
                    status, done = downloader.next_chunk()
                    if status:
                        self.logger.debug(
                            f"Downloading {file_name}: {int(status.progress() * 100)}%")

        except (HttpError, OSError) as error:
            if created and os.path.exists(file_path):
                os.remove(file_path)
            self.logger.error(f"Failed to download {file.name}: {error}")
            raise DownloadError(f"Failed to download {file.name}: {error}") from error

        self.logger.info(f"Downloaded '{file.name}' to {file_path}")
        return file_path

    # Deletion

    def delete_file(self, file_id: str) -> None:
        """Permanently delete a file, skipping the trash.

        Raises:
            DriveOperationError: If the API request fails.
        """
        self._execute(
            self.service.files().delete(fileId=file_id, supportsAllDrives=True),
            f"delete file {file_id}")
        self.logger.info(f"Permanently deleted file {file_id}")

    def empty_trash(self) -> None:
        """Permanently delete every file in the trash.

        Raises:
            DriveOperationError: If the API request fails.
        """
        self._execute(self.service.files().emptyTrash(), "empty trash")
        self.logger.info("Emptied trash")
