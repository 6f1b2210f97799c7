"""
Google Auth Module - OAuth 2.0 Authentication for Google Services

One consent prompt covers every Google service the dashboard reads
(Drive, Classroom, Gmail) plus the user's profile.
"""

from dashboard.environments.google.auth.client import GoogleAuthClient
from dashboard.environments.google.auth.schemas import (
    GoogleTokenResponse,
    GoogleUserInfo,
    CLASSROOM_SCOPES,
    DASHBOARD_SCOPES,
    DRIVE_SCOPES,
    GMAIL_SCOPES,
    PROFILE_SCOPES,
)

__all__ = [
    "GoogleAuthClient",
    "GoogleTokenResponse",
    "GoogleUserInfo",
    "CLASSROOM_SCOPES",
    "DASHBOARD_SCOPES",
    "DRIVE_SCOPES",
    "GMAIL_SCOPES",
    "PROFILE_SCOPES",
]
