"""
Google Drive Schemas - Data structures for Drive file operations.

Reference: https://developers.google.com/drive/api/reference/rest/v3/files
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class RemoteFileHandle(BaseModel):
    """
    Identifies one file in the user's Drive (here: the layout file in the
    appDataFolder).
    """
    id: str = Field(..., description="Drive file ID")
    name: str = Field(..., description="File name")


class DriveFile(BaseModel):
    """A file from the user's general Drive listing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mime_type: Optional[str] = Field(None, alias="mimeType")
    web_view_link: Optional[str] = Field(None, alias="webViewLink")
    modified_time: Optional[datetime] = Field(None, alias="modifiedTime")


class DriveFileList(BaseModel):
    """Response of files.list; only the fields the dashboard requests."""
    files: List[DriveFile] = Field(default_factory=list)
