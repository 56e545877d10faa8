"""Typed views of the Drive and Sheets API payloads."""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import FOLDER_MIME_TYPE


class RemoteFile(BaseModel):
    """A file or folder stored in Google Drive."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str
    mime_type: str = Field(default="", alias="mimeType")
    parents: List[str] = Field(default_factory=list)

    @property
    def duplicate_key(self) -> Tuple[str, str]:
        return (self.name, self.mime_type)

    @property
    def is_folder(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE

    def is_duplicate_of(self, other: "RemoteFile") -> bool:
        """Check if both files share the same name and MIME type.

        The comparison is exact and case-sensitive; IDs, dates and
        content are ignored.
        """
        return self.duplicate_key == other.duplicate_key

    def to_body(self) -> Dict[str, Any]:
        """Build the request body used to create this file."""
        body: Dict[str, Any] = {"name": self.name}
        if self.mime_type:
            body["mimeType"] = self.mime_type
        if self.parents:
            body["parents"] = list(self.parents)
        return body


class FilePage(BaseModel):
    """One page of a folder listing."""

    model_config = ConfigDict(populate_by_name=True)

    files: List[RemoteFile] = Field(default_factory=list)
    next_page_token: str = Field(default="", alias="nextPageToken")


class ValueRange(BaseModel):
    """Cell values read from a spreadsheet range."""

    model_config = ConfigDict(populate_by_name=True)

    range: str = ""
    major_dimension: str = Field(default="ROWS", alias="majorDimension")
    values: List[List[Any]] = Field(default_factory=list)
