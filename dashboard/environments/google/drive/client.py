"""
Google Drive API Client - recent files and the appDataFolder layout file.

Two unrelated jobs share this client:
1. Listing the user's most recently modified files for the Drive panel
2. Reading and writing a single JSON file in the private appDataFolder,
   which is where the dashboard layout lives

App-data upload protocol:
=========================
Create and update both use a multipart/related upload: part 1 is the file
metadata (name + appDataFolder parent), part 2 the JSON payload. The boundary
is a fixed string and the payload is not escaped, so a payload containing the
boundary line would corrupt the request.

API Reference:
==============
- Files: https://developers.google.com/drive/api/reference/rest/v3/files
- Multipart upload: https://developers.google.com/drive/api/guides/manage-uploads#multipart
"""

import json
import logging
from typing import List

from pydantic import ValidationError

from dashboard.environments.base import APIError, EnvironmentService
from dashboard.environments.google.drive.schemas import (
    DriveFile,
    DriveFileList,
    RemoteFileHandle,
)


logger = logging.getLogger("dashboard.environments.google.drive")


APP_DATA_FOLDER = "appDataFolder"
MULTIPART_BOUNDARY = "-------314159265358979323846"


def build_multipart_body(metadata: dict, payload: str, boundary: str = MULTIPART_BOUNDARY) -> str:
    """
    Assemble a two-part multipart/related body (metadata, then JSON payload).

    Lines are CRLF separated and the closing delimiter ends the body.
    """
    parts = [
        f"--{boundary}",
        "Content-Type: application/json; charset=UTF-8",
        "",
        json.dumps(metadata),
        f"--{boundary}",
        "Content-Type: application/json",
        "",
        payload,
        f"--{boundary}--",
    ]
    return "\r\n".join(parts)


def _quote_query_value(value: str) -> str:
    """Escape a literal for the Drive `q` search syntax."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


class GoogleDriveClient(EnvironmentService):
    """
    Google Drive API client.

    Example:
        client = GoogleDriveClient(access_token="ya29.xxx")
        handles = await client.find_app_data_files("layout.json")
        raw = await client.download_file(handles[0].id)
    """

    service_name = "drive"
    required_scopes = [
        "https://www.googleapis.com/auth/drive.appdata",
        "https://www.googleapis.com/auth/drive.readonly",
    ]

    BASE_URL = "https://www.googleapis.com/drive/v3"
    UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3"

    # -------------------------------------------------------------------------
    # RECENT FILES
    # -------------------------------------------------------------------------

    async def list_recent_files(self, page_size: int = 10) -> List[DriveFile]:
        """
        List the user's most recently modified files.

        Args:
            page_size: Number of files to return

        Returns:
            Files ordered newest first
        """
        params = {
            "pageSize": page_size,
            "orderBy": "modifiedTime desc",
            "fields": "files(id,name,webViewLink,mimeType,modifiedTime)",
        }

        data = await self._make_request("GET", "/files", params=params)
        try:
            files = DriveFileList(**data).files
        except (ValidationError, TypeError) as e:
            raise APIError(f"Unexpected {self.service_name} file listing: {e}", response=data)

        logger.info(f"Fetched {len(files)} recent Drive files")

        return files

    # -------------------------------------------------------------------------
    # APP DATA FOLDER
    # -------------------------------------------------------------------------

    async def find_app_data_files(self, name: str) -> List[RemoteFileHandle]:
        """
        Find non-trashed appDataFolder files with exactly this name.

        The order of the returned list is the order the API returned.
        """
        params = {
            "q": f"name='{_quote_query_value(name)}' and trashed=false",
            "spaces": APP_DATA_FOLDER,
            "fields": "files(id,name)",
        }

        data = await self._make_request("GET", "/files", params=params)
        try:
            return [RemoteFileHandle(**item) for item in data.get("files") or []]
        except (ValidationError, AttributeError, TypeError) as e:
            raise APIError(f"Unexpected {self.service_name} file listing: {e}", response=data)

    async def download_file(self, file_id: str) -> bytes:
        """Download a file's raw content (alt=media)."""
        response = await self._send("GET", f"/files/{file_id}", params={"alt": "media"})
        return response.content

    async def create_app_data_file(self, name: str, payload: str) -> str:
        """
        Create a new appDataFolder file holding `payload`.

        Returns:
            ID of the created file
        """
        data = await self._upload("POST", f"{self.UPLOAD_URL}/files", name, payload)
        logger.info("Created app data file", extra={"file_name": name, "file_id": data.get("id")})
        return data.get("id")

    async def update_app_data_file(self, file_id: str, name: str, payload: str) -> str:
        """
        Replace the whole content of an existing appDataFolder file.

        Metadata (name, parent) is sent again even though it rarely changes.
        """
        data = await self._upload("PATCH", f"{self.UPLOAD_URL}/files/{file_id}", name, payload)
        logger.info("Updated app data file", extra={"file_name": name, "file_id": data.get("id")})
        return data.get("id")

    async def _upload(self, method: str, url: str, name: str, payload: str) -> dict:
        metadata = {"name": name, "parents": [APP_DATA_FOLDER]}
        body = build_multipart_body(metadata, payload)
        return await self._make_request(
            method,
            url,
            params={"uploadType": "multipart", "fields": "id"},
            content=body,
            headers={"Content-Type": f"multipart/related; boundary={MULTIPART_BOUNDARY}"},
        )
