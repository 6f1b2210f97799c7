"""
Google Environment Module - Google Workspace Integration

Architecture:
=============
google/
├── __init__.py           # Module exports
├── auth/                 # Shared OAuth authentication
│   ├── client.py         # Google OAuth implementation
│   └── schemas.py        # Scopes, token and userinfo models
├── drive/                # Google Drive API
│   ├── client.py         # Recent files + appDataFolder storage
│   └── schemas.py
└── classroom/            # Google Classroom API
    ├── client.py         # Courses and coursework
    └── schemas.py

All services share the one access token obtained by the dashboard's single
consent prompt.
"""

from dashboard.environments.google.auth import GoogleAuthClient, DASHBOARD_SCOPES
from dashboard.environments.google.drive import GoogleDriveClient, RemoteFileHandle
from dashboard.environments.google.classroom import GoogleClassroomClient

__all__ = [
    "GoogleAuthClient",
    "GoogleDriveClient",
    "GoogleClassroomClient",
    "RemoteFileHandle",
    "DASHBOARD_SCOPES",
]
