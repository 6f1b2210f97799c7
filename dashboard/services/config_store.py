"""
ConfigStore - persists the dashboard layout in the Drive appDataFolder.

Exactly one LayoutDocument per signed-in user, addressed by a fixed file name
in the application's private Drive space (not visible in the user's file
list).

Protocol:
=========
load():
    list name='<file>' → none: absent
                       → one or more: download the FIRST listed, parse
save(doc):
    list name='<file>' → found: multipart PATCH of the first match
                       → none:  multipart POST (create)

Both operations are best-effort. Without a token they do nothing and make no
network calls. Upstream, download and parse failures are logged and never
raised: load() returns None and the caller falls back to the default layout,
save() returns False and the edit is simply not persisted. Nothing is retried.

save() resolves the file with a fresh listing every time. Two overlapping
saves for the same user can therefore both see "no file" and both create
one; LayoutSaver keeps saves from overlapping within a session. When
duplicates do exist, the first entry of the listing wins for load and save
alike and the rest are left alone.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from dashboard.core.config import settings
from dashboard.environments.base import APIError
from dashboard.environments.google.drive import GoogleDriveClient, RemoteFileHandle
from dashboard.schemas.layout import LayoutDocument
from dashboard.services.authenticator import Authenticator


logger = logging.getLogger("dashboard.services.config_store")


class ConfigStore:
    """
    Load/save of the single layout file for the session's Google identity.

    Attributes:
        authenticator: Source of the bearer token; read on every call
        filename: Well-known name of the layout file
    """

    def __init__(
        self,
        authenticator: Authenticator,
        filename: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.authenticator = authenticator
        self.filename = filename or settings.DRIVE_CONFIG_FILENAME
        self._transport = transport

    def _drive(self, access_token: str) -> GoogleDriveClient:
        return GoogleDriveClient(access_token, transport=self._transport)

    async def _find_config_file(self, drive: GoogleDriveClient) -> Optional[RemoteFileHandle]:
        """
        Resolve the layout file. Raises APIError if the listing fails.
        """
        handles = await drive.find_app_data_files(self.filename)
        if not handles:
            return None
        if len(handles) > 1:
            logger.warning(
                f"Found {len(handles)} files named {self.filename}; using the first",
                extra={"file_ids": [h.id for h in handles]},
            )
        return handles[0]

    # -------------------------------------------------------------------------
    # LOAD
    # -------------------------------------------------------------------------

    async def load(self) -> Optional[LayoutDocument]:
        """
        Fetch the saved layout.

        Returns:
            The saved LayoutDocument, or None when signed out, when no file
            exists, or when anything goes wrong on the way
        """
        access_token = self.authenticator.access_token
        if access_token is None:
            return None

        drive = self._drive(access_token)

        try:
            handle = await self._find_config_file(drive)
        except APIError as e:
            logger.error(f"Drive list failed: {e}", extra={"status_code": e.status_code})
            return None

        if handle is None:
            logger.info("No saved layout found")
            return None

        try:
            raw = await drive.download_file(handle.id)
        except APIError as e:
            logger.error(f"Layout download failed: {e}", extra={"file_id": handle.id})
            return None

        try:
            document = LayoutDocument.model_validate_json(raw)
        except ValidationError as e:
            logger.error(
                f"Saved layout is not a valid layout document: {e.error_count()} errors",
                extra={"file_id": handle.id},
            )
            return None

        logger.info(
            f"Loaded layout with {len(document.layout)} items",
            extra={"file_id": handle.id},
        )
        return document

    # -------------------------------------------------------------------------
    # SAVE
    # -------------------------------------------------------------------------

    async def save(self, document: LayoutDocument) -> bool:
        """
        Overwrite (or create) the layout file with `document`.

        Returns:
            True if Drive acknowledged the write
        """
        access_token = self.authenticator.access_token
        if access_token is None:
            logger.warning("No token: not saving")
            return False

        drive = self._drive(access_token)
        payload = document.to_json()

        try:
            handle = await self._find_config_file(drive)
            if handle is not None:
                file_id = await drive.update_app_data_file(handle.id, self.filename, payload)
            else:
                file_id = await drive.create_app_data_file(self.filename, payload)
        except APIError as e:
            logger.error(f"Layout save failed: {e}", extra={"status_code": e.status_code})
            return False

        logger.info(
            f"Saved layout with {len(document.layout)} items",
            extra={"file_id": file_id, "file_created": handle is None},
        )
        return True
