"""Configuration settings for the Google Drive sync application."""

from typing import List

# Google API settings
SCOPES: List[str] = [
    'https://www.googleapis.com/auth/drive',
    'https://www.googleapis.com/auth/spreadsheets',
]

# File paths
TOKEN_FILE: str = './credentials/token.json'
CLIENT_SECRET_FILE: str = './credentials/creds.json'
DOWNLOAD_FOLDER: str = './downloads'
ENV_FILE: str = '.env'

# API settings
PAGE_SIZE: int = 100
LOCAL_SERVER_PORT: int = 0
DOWNLOAD_CHUNK_SIZE: int = 1024 * 1024

FOLDER_MIME_TYPE: str = 'application/vnd.google-apps.folder'
SPREADSHEET_MIME_TYPE: str = 'application/vnd.google-apps.spreadsheet'

FILE_FIELDS: str = 'id, name, mimeType, parents'
LIST_FIELDS: str = f'nextPageToken, files({FILE_FIELDS})'

# URL markers that precede the ID in Drive and Sheets links
FOLDER_URL_MARKER: str = 'folders/'
SPREADSHEET_URL_MARKER: str = '/d/'

# Environment variables read by the console application
ENV_PARENT_FOLDER_URL: str = 'PARENT_FOLDER_URL'
ENV_OTHER_FOLDER_URL: str = 'OTHER_FOLDER_URL'
ENV_FILE_PATH: str = 'FILE_PATH'
ENV_SPREADSHEET_URL: str = 'SPREADSHEET_URL'
ENV_SHEET_RANGE: str = 'SHEET_RANGE'
ENV_DOWNLOAD_FOLDER: str = 'DOWNLOAD_FOLDER'
ENV_DOWNLOAD_FORMAT: str = 'DOWNLOAD_FORMAT'
ENV_COPY_MATCH: str = 'COPY_MATCH'
ENV_DELETE_MATCH: str = 'DELETE_MATCH'
ENV_LOG_LEVEL: str = 'LOG_LEVEL'
