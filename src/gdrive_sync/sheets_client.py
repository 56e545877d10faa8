"""Google Sheets client for reading and updating spreadsheet data."""

import logging
from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError

from .auth import build_service
from .exceptions import SheetsOperationError
from .models import ValueRange
from .references import get_spreadsheet_id

DEFAULT_VALUE_INPUT_OPTION: str = 'USER_ENTERED'


class SheetsClient:
    """Google Sheets client wrapping a single Sheets v4 service handle."""

    def __init__(
        self,
        service: Any = None,
        credentials: Optional[Credentials] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the Sheets client.

        Args:
            service: An already built Sheets v4 service. Built from
                credentials when omitted.
            credentials: Credentials used to build the service.
            logger: Logger for operation messages.
        """
        self.service = service or build_service('sheets', 'v4', credentials)
        self.logger = logger or logging.getLogger(__name__)

    def _execute(self, request: Any, action: str) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as error:
            self.logger.error(f"Failed to {action}: {error}")
            raise SheetsOperationError(f"Failed to {action}: {error}") from error

    def _batch_update(self, spreadsheet_id: str, requests: List[Dict[str, Any]],
                      action: str) -> Dict[str, Any]:
        return self._execute(
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id, body={'requests': requests}),
            action)

    # Reading

    def get_values(self, spreadsheet_ref: str, read_range: str) -> ValueRange:
        """Read the values of a single range.

        Args:
            spreadsheet_ref: Spreadsheet URL or ID.
            read_range: A1 range such as 'Class Data!A2:E'.

        Returns:
            ValueRange: The cell values, row by row.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        response = self._execute(
            self.service.spreadsheets().values().get(
                spreadsheetId=spreadsheet_id, range=read_range),
            f"read {read_range} from {spreadsheet_id}")
        return ValueRange.model_validate(response)

    def batch_get_values(self, spreadsheet_ref: str, *ranges: str) -> List[ValueRange]:
        """Read several ranges in one request.

        Returns:
            List[ValueRange]: One entry per requested range, in order.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        response = self._execute(
            self.service.spreadsheets().values().batchGet(
                spreadsheetId=spreadsheet_id, ranges=list(ranges)),
            f"batch read {len(ranges)} ranges from {spreadsheet_id}")
        return [ValueRange.model_validate(vr) for vr in response.get('valueRanges', [])]

    def get_sheet_id(self, spreadsheet_ref: str, title: str) -> int:
        """Look up the numeric ID of a sheet tab by its title.

        Raises:
            SheetsOperationError: If the request fails or no tab has that title.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        response = self._execute(
            self.service.spreadsheets().get(
                spreadsheetId=spreadsheet_id, fields='sheets.properties'),
            f"read sheets of {spreadsheet_id}")

        for sheet in response.get('sheets', []):
            properties = sheet.get('properties', {})
            if properties.get('title') == title:
                return properties['sheetId']
        raise SheetsOperationError(f"Sheet '{title}' not found in {spreadsheet_id}")

    # Structure

    def create_spreadsheet(self, title: str,
                           sheet_titles: Optional[List[str]] = None) -> Dict[str, Any]:
        """Create a new spreadsheet.

        Args:
            title: Spreadsheet title.
            sheet_titles: Titles of the initial tabs. Sheets creates a
                single default tab when omitted.

        Returns:
            Dict[str, Any]: 'spreadsheetId' and 'spreadsheetUrl' of the new file.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        body: Dict[str, Any] = {'properties': {'title': title}}
        if sheet_titles:
            body['sheets'] = [{'properties': {'title': t}} for t in sheet_titles]

        response = self._execute(
            self.service.spreadsheets().create(
                body=body, fields='spreadsheetId,spreadsheetUrl'),
            f"create spreadsheet '{title}'")
        self.logger.info(f"Created spreadsheet '{title}': {response.get('spreadsheetId')}")
        return response

    def add_sheet(self, spreadsheet_ref: str, title: str) -> int:
        """Add an empty tab and return its sheet ID."""
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        response = self._batch_update(
            spreadsheet_id,
            [{'addSheet': {'properties': {'title': title}}}],
            f"add sheet '{title}' to {spreadsheet_id}")
        sheet_id = response['replies'][0]['addSheet']['properties']['sheetId']
        self.logger.info(f"Added sheet '{title}' ({sheet_id}) to {spreadsheet_id}")
        return sheet_id

    def duplicate_sheet(self, spreadsheet_ref: str, source_sheet_id: int, new_title: str,
                        insert_index: Optional[int] = None) -> int:
        """Duplicate a tab inside the same spreadsheet.

        Args:
            spreadsheet_ref: Spreadsheet URL or ID.
            source_sheet_id: Sheet ID of the tab to copy.
            new_title: Title of the copy.
            insert_index: Position of the copy. Sheets picks one when omitted.

        Returns:
            int: Sheet ID of the copy.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        request: Dict[str, Any] = {
            'sourceSheetId': source_sheet_id,
            'newSheetName': new_title,
        }
        if insert_index is not None:
            request['insertSheetIndex'] = insert_index

        response = self._batch_update(
            spreadsheet_id,
            [{'duplicateSheet': request}],
            f"duplicate sheet {source_sheet_id} in {spreadsheet_id}")
        sheet_id = response['replies'][0]['duplicateSheet']['properties']['sheetId']
        self.logger.info(f"Duplicated sheet {source_sheet_id} as '{new_title}' ({sheet_id})")
        return sheet_id

    def delete_sheet(self, spreadsheet_ref: str, sheet_id: int) -> None:
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        self._batch_update(
            spreadsheet_id,
            [{'deleteSheet': {'sheetId': sheet_id}}],
            f"delete sheet {sheet_id} from {spreadsheet_id}")
        self.logger.info(f"Deleted sheet {sheet_id} from {spreadsheet_id}")

    # Writing

    def update_values(self, spreadsheet_ref: str, target_range: str, values: List[List[Any]],
                      value_input_option: str = DEFAULT_VALUE_INPUT_OPTION) -> int:
        """Write values into a single range.

        Returns:
            int: Number of cells updated.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        response = self._execute(
            self.service.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=target_range,
                valueInputOption=value_input_option,
                body={'values': values},
            ),
            f"update {target_range} in {spreadsheet_id}")
        updated = response.get('updatedCells', 0)
        self.logger.info(f"Updated {updated} cells in {target_range}")
        return updated

    def batch_update_values(self, spreadsheet_ref: str, data: Dict[str, List[List[Any]]],
                            value_input_option: str = DEFAULT_VALUE_INPUT_OPTION) -> int:
        """Write values into several ranges in one request.

        Args:
            spreadsheet_ref: Spreadsheet URL or ID.
            data: Mapping of A1 range to the rows written there.
            value_input_option: 'USER_ENTERED' or 'RAW'.

        Returns:
            int: Total number of cells updated.

        Raises:
            SheetsOperationError: If the API request fails.
        """
        spreadsheet_id = get_spreadsheet_id(spreadsheet_ref)
        body = {
            'valueInputOption': value_input_option,
            'data': [{'range': r, 'values': v} for r, v in data.items()],
        }
        response = self._execute(
            self.service.spreadsheets().values().batchUpdate(
                spreadsheetId=spreadsheet_id, body=body),
            f"batch update {len(data)} ranges in {spreadsheet_id}")
        updated = response.get('totalUpdatedCells', 0)
        self.logger.info(f"Updated {updated} cells across {len(data)} ranges")
        return updated
