"""Google API authentication module."""

import os
from typing import Any, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from .config import SCOPES, TOKEN_FILE, CLIENT_SECRET_FILE, LOCAL_SERVER_PORT
from .exceptions import AuthenticationError


def get_credentials(
    scopes: Optional[List[str]] = None,
    token_file: str = TOKEN_FILE,
    client_secret_file: str = CLIENT_SECRET_FILE,
) -> Credentials:
    """Get valid Google API credentials, reusing the cached token when possible.

    Args:
        scopes: OAuth scopes to request. Defaults to Drive and Sheets.
        token_file: Where the authorized user token is cached.
        client_secret_file: OAuth client secrets downloaded from Google Cloud.

    Returns:
        Credentials: Valid Google API credentials.

    Raises:
        AuthenticationError: If authentication fails.
    """
    scopes = scopes or SCOPES
    creds: Optional[Credentials] = None

    if os.path.exists(token_file):
        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes)
        except Exception as e:
            raise AuthenticationError(
                f"Failed to load existing credentials: {e}") from e

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except Exception as e:
            raise AuthenticationError(
                f"Failed to refresh credentials: {e}") from e
    else:
        if not os.path.exists(client_secret_file):
            raise AuthenticationError(
                f"Client secret file not found: {client_secret_file}")
        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                client_secret_file, scopes
            )
            creds = flow.run_local_server(port=LOCAL_SERVER_PORT)
        except Exception as e:
            raise AuthenticationError(
                f"Failed to obtain new credentials: {e}") from e

    save_credentials(creds, token_file)
    return creds


def save_credentials(creds: Credentials, token_file: str = TOKEN_FILE) -> None:
    """Cache credentials so later runs skip the browser flow.

    Raises:
        AuthenticationError: If the token file cannot be written.
    """
    try:
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)
        with open(token_file, 'w') as token:
            token.write(creds.to_json())
        os.chmod(token_file, 0o600)
    except OSError as e:
        raise AuthenticationError(f"Failed to save credentials: {e}") from e


def build_service(api_name: str, version: str, credentials: Optional[Credentials] = None) -> Any:
    """Build an authorized Google API service handle.

    Args:
        api_name: API name, e.g. 'drive' or 'sheets'.
        version: API version, e.g. 'v3' or 'v4'.
        credentials: Credentials to use; obtained via get_credentials() when omitted.

    Returns:
        The discovery-based service resource.
    """
    if credentials is None:
        credentials = get_credentials()
    return build(api_name, version, credentials=credentials, cache_discovery=False)
