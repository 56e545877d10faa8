"""Entry point for the Google Drive sync application."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, NoReturn, Optional

from dotenv import load_dotenv

from src.gdrive_sync import config as settings
from src.gdrive_sync.drive_client import DriveClient
from src.gdrive_sync.exceptions import AuthenticationError, GDriveSyncError
from src.gdrive_sync.models import RemoteFile, ValueRange
from src.gdrive_sync.sheets_client import SheetsClient

# Constants
LOGGER_NAME: str = "gdrive_sync"
COMMANDS: tuple = ("drive", "sheets")
USAGE: str = "Usage: python main.py <drive|sheets>"
DEFAULT_FOLDER_NAME: str = "MyNewFolder"
DEFAULT_FILE_NAME: str = "My Spreadsheet"
DEFAULT_SHEET_RANGE: str = "Class Data!A2:E"


@dataclass
class AppConfig:
    """Application configuration."""
    command: str
    parent_folder_url: str = ""
    other_folder_url: str = ""
    file_path: str = ""
    spreadsheet_url: str = ""
    sheet_range: str = DEFAULT_SHEET_RANGE
    download_folder: str = settings.DOWNLOAD_FOLDER
    download_format: str = "pdf"
    copy_match: str = "grade"
    delete_match: str = "captura"
    new_folder_name: str = DEFAULT_FOLDER_NAME
    new_file_name: str = DEFAULT_FILE_NAME
    empty_trash: bool = True
    log_level: int = logging.INFO


class ResultDisplayer:
    """Handles console output of operation results."""

    @staticmethod
    def display_message(*messages: str) -> None:
        """Print each message inside a separator block."""
        for message in messages:
            print(f"\n{'-'*40}")
            print(message)
            print(f"{'-'*40}")

    @staticmethod
    def display_error(error: Exception) -> None:
        print(f"\n{'='*40}")
        print("The following error occurred:")
        print(error)
        print(f"{'='*40}")

    @staticmethod
    def display_files(files: List[RemoteFile]) -> None:
        """Print an indexed listing of remote files.

        Args:
            files: Files to list.
        """
        if not files:
            print("No files found.")
            return
        for index, remote_file in enumerate(files):
            print(f"[{index}] {remote_file.name} ({remote_file.id})")

    @staticmethod
    def display_rows(value_range: ValueRange) -> None:
        """Print the rows of a spreadsheet range.

        Args:
            value_range: Values read from the spreadsheet.
        """
        if not value_range.values:
            print("No data found.")
            return
        print(f"Range: {value_range.range}")
        for row in value_range.values:
            print(", ".join(str(cell) for cell in row))

    @staticmethod
    def display_value_ranges(value_ranges: List[ValueRange]) -> None:
        for range_num, value_range in enumerate(value_ranges):
            print(f"Range {range_num}: {value_range.range}")
            for index, row in enumerate(value_range.values):
                print(f"  Index: {index} - {row}")


class DriveSyncApplication:
    """Runs the Drive workflow: create, upload, list, copy, move, download and delete."""

    def __init__(self, config: AppConfig, drive_client: DriveClient,
                 logger: logging.Logger):
        self.config = config
        self.drive_client = drive_client
        self.logger = logger
        self.result_displayer = ResultDisplayer()

    def _report_error(self, step: str, error: GDriveSyncError) -> None:
        self.logger.error(f"{step} failed: {error}")
        self.result_displayer.display_error(error)

    def create_working_folder(self) -> Optional[RemoteFile]:
        try:
            folder = self.drive_client.create_folder(
                self.config.new_folder_name, self.config.parent_folder_url)
        except GDriveSyncError as e:
            self._report_error("Create folder", e)
            return None
        self.result_displayer.display_message(f"Folder ID: {folder.id}")
        return folder

    def create_spreadsheet_file(self, folder: RemoteFile) -> Optional[RemoteFile]:
        try:
            created = self.drive_client.create_file(RemoteFile(
                name=self.config.new_file_name,
                mime_type=settings.SPREADSHEET_MIME_TYPE,
                parents=[folder.id],
            ))
        except GDriveSyncError as e:
            self._report_error("Create file", e)
            return None
        self.result_displayer.display_message(f"Created File ID: {created.id}")
        return created

    def upload_local_file(self) -> Optional[RemoteFile]:
        if not self.config.file_path:
            self.logger.info("No file path configured, skipping upload")
            return None
        try:
            uploaded = self.drive_client.upload_file(
                self.config.file_path, self.config.parent_folder_url)
        except GDriveSyncError as e:
            self._report_error("Upload", e)
            return None
        self.result_displayer.display_message(f"File Uploaded: {uploaded.name}")
        return uploaded

    def process_matching_file(self, remote_file: RemoteFile,
                              folder: Optional[RemoteFile]) -> None:
        """Copy, move and download a file selected by the copy filter.

        Args:
            remote_file: File listed in the parent folder.
            folder: Working folder receiving the copy, if it was created.
        """
        try:
            if folder is not None:
                copied = self.drive_client.copy_file(remote_file, folder.id)
                self.result_displayer.display_message(f"This is the copied file: {copied.id}")

            if self.config.other_folder_url:
                moved = self.drive_client.move_file(
                    remote_file, self.config.parent_folder_url, self.config.other_folder_url)
                self.result_displayer.display_message(f"This is the moved file: {moved.id}")

            path = self.drive_client.download_file(
                remote_file, self.config.download_folder, self.config.download_format)
            self.result_displayer.display_message(f"Downloaded to: {path}")
        except GDriveSyncError as e:
            self._report_error(f"Processing '{remote_file.name}'", e)

    def run(self) -> None:
        """Run the Drive workflow against the configured parent folder."""
        self.logger.info("Starting Google Drive sync workflow")

        folder = self.create_working_folder()
        if folder is not None:
            self.create_spreadsheet_file(folder)
        self.upload_local_file()

        try:
            files = self.drive_client.list_folder(self.config.parent_folder_url)
        except GDriveSyncError as e:
            self._report_error("List folder", e)
            return
        self.result_displayer.display_files(files)

        copy_match = self.config.copy_match.lower()
        delete_match = self.config.delete_match.lower()
        for remote_file in files:
            name = remote_file.name.lower()
            if copy_match and copy_match in name:
                self.process_matching_file(remote_file, folder)
            if delete_match and delete_match in name:
                try:
                    self.drive_client.delete_file(remote_file.id)
                except GDriveSyncError as e:
                    self._report_error(f"Delete '{remote_file.name}'", e)

        if self.config.empty_trash:
            try:
                self.drive_client.empty_trash()
            except GDriveSyncError as e:
                self._report_error("Empty trash", e)

        self.logger.info("Google Drive sync workflow completed")


class SheetsReportApplication:
    """Reads a spreadsheet range and prints it."""

    def __init__(self, config: AppConfig, sheets_client: SheetsClient,
                 logger: logging.Logger):
        self.config = config
        self.sheets_client = sheets_client
        self.logger = logger
        self.result_displayer = ResultDisplayer()

    def run(self) -> None:
        """Print the configured range, then the same range through a batch read.

        Raises:
            GDriveSyncError: If reading the spreadsheet fails.
        """
        self.logger.info(f"Reading {self.config.sheet_range}")
        value_range = self.sheets_client.get_values(
            self.config.spreadsheet_url, self.config.sheet_range)
        self.result_displayer.display_rows(value_range)

        value_ranges = self.sheets_client.batch_get_values(
            self.config.spreadsheet_url, self.config.sheet_range)
        self.result_displayer.display_value_ranges(value_ranges)


def setup_logging(log_level: int) -> logging.Logger:
    """Set up logging configuration.

    Returns:
        Configured application logger.
    """
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    return logger


def _parse_log_level(value: Optional[str]) -> int:
    level = logging.getLevelName((value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def create_config_from_args(argv: Optional[List[str]] = None) -> AppConfig:
    """Create application configuration from command line arguments.

    Environment variables are read after loading the optional .env file.

    Args:
        argv: Command line arguments, sys.argv by default.

    Returns:
        Application configuration.

    Raises:
        SystemExit: If arguments are invalid or a required variable is missing.
    """
    argv = sys.argv if argv is None else argv
    if len(argv) != 2 or argv[1] not in COMMANDS:
        print(USAGE)
        sys.exit(1)

    load_dotenv(settings.ENV_FILE)
    command = argv[1]

    app_config = AppConfig(
        command=command,
        parent_folder_url=os.getenv(settings.ENV_PARENT_FOLDER_URL, ""),
        other_folder_url=os.getenv(settings.ENV_OTHER_FOLDER_URL, ""),
        file_path=os.getenv(settings.ENV_FILE_PATH, ""),
        spreadsheet_url=os.getenv(settings.ENV_SPREADSHEET_URL, ""),
        sheet_range=os.getenv(settings.ENV_SHEET_RANGE, DEFAULT_SHEET_RANGE),
        download_folder=os.getenv(settings.ENV_DOWNLOAD_FOLDER, settings.DOWNLOAD_FOLDER),
        download_format=os.getenv(settings.ENV_DOWNLOAD_FORMAT, "pdf"),
        copy_match=os.getenv(settings.ENV_COPY_MATCH, "grade"),
        delete_match=os.getenv(settings.ENV_DELETE_MATCH, "captura"),
        log_level=_parse_log_level(os.getenv(settings.ENV_LOG_LEVEL)),
    )

    if command == "drive" and not app_config.parent_folder_url:
        print(f"Error: {settings.ENV_PARENT_FOLDER_URL} environment variable not set")
        sys.exit(1)
    if command == "sheets" and not app_config.spreadsheet_url:
        print(f"Error: {settings.ENV_SPREADSHEET_URL} environment variable not set")
        sys.exit(1)

    return app_config


def run_app(app_config: AppConfig, logger: logging.Logger) -> None:
    """Build the API client for the selected command and run it."""
    if app_config.command == "drive":
        DriveSyncApplication(app_config, DriveClient(logger=logger), logger).run()
    else:
        SheetsReportApplication(app_config, SheetsClient(logger=logger), logger).run()


def main() -> NoReturn:
    """Main entry point for the Google Drive sync application."""
    app_config = create_config_from_args()
    logger = setup_logging(app_config.log_level)
    try:
        run_app(app_config, logger)
    except AuthenticationError as e:
        logger.error(f"Authentication failed: {e}")
        print(f"Authentication error: {e}")
        sys.exit(1)
    except GDriveSyncError as e:
        logger.error(f"Application error: {e}")
        print(f"Application error: {e}")
        sys.exit(1)
    sys.exit(0)


if __name__ == '__main__':
    main()
