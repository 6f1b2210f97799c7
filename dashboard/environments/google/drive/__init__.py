"""
Google Drive Module - recent files and appDataFolder storage.
"""

from dashboard.environments.google.drive.client import (
    GoogleDriveClient,
    build_multipart_body,
    APP_DATA_FOLDER,
    MULTIPART_BOUNDARY,
)
from dashboard.environments.google.drive.schemas import DriveFile, RemoteFileHandle

__all__ = [
    "GoogleDriveClient",
    "build_multipart_body",
    "APP_DATA_FOLDER",
    "MULTIPART_BOUNDARY",
    "DriveFile",
    "RemoteFileHandle",
]
