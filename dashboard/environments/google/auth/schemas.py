"""
Google OAuth Schemas - Data structures for Google authentication.

Scope constants and the Pydantic models for Google's token and userinfo
responses.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, List
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# OAUTH SCOPE CONSTANTS
# ---------------------------------------------------------------------------
# Reference: https://developers.google.com/identity/protocols/oauth2/scopes

# Profile scopes - basic user information
PROFILE_SCOPES = [
    "https://www.googleapis.com/auth/userinfo.profile",  # Name, picture
    "https://www.googleapis.com/auth/userinfo.email",    # User's email
]

# Drive scopes - private app-data read/write plus read-only file listing
DRIVE_SCOPES = [
    "https://www.googleapis.com/auth/drive.appdata",
    "https://www.googleapis.com/auth/drive.readonly",
]

# Classroom scopes - the user's own coursework and course announcements
CLASSROOM_SCOPES = [
    "https://www.googleapis.com/auth/classroom.coursework.me.readonly",
    "https://www.googleapis.com/auth/classroom.announcements.readonly",
]

# Gmail scopes - read-only access to emails
GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
]

# Everything the dashboard asks for in its single consent prompt
DASHBOARD_SCOPES = DRIVE_SCOPES + CLASSROOM_SCOPES + GMAIL_SCOPES + PROFILE_SCOPES


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class GoogleTokenResponse(BaseModel):
    """
    Response from Google's token endpoint.

    Example response from Google:
    {
        "access_token": "ya29.a0AfB_byC...",
        "expires_in": 3599,
        "scope": "https://www.googleapis.com/auth/drive.appdata ...",
        "token_type": "Bearer"
    }
    """
    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="Bearer", description="Token type (usually Bearer)")
    expires_in: Optional[int] = Field(None, description="Seconds until expiration")
    scope: Optional[str] = Field(None, description="Space-separated scopes granted")
    id_token: Optional[str] = Field(None, description="JWT with user info (OpenID)")

    def get_scopes_list(self) -> List[str]:
        """Convert space-separated scope string to list."""
        if self.scope:
            return self.scope.split()
        return []

    def get_expires_at(self) -> Optional[datetime]:
        """Calculate expiration datetime from expires_in seconds."""
        if self.expires_in:
            return datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return None


# ---------------------------------------------------------------------------
# USER INFO
# ---------------------------------------------------------------------------

class GoogleUserInfo(BaseModel):
    """
    User information from Google's userinfo endpoint.

    Example:
    {
        "sub": "123456789",
        "email": "user@gmail.com",
        "name": "Jane Doe",
        "picture": "https://lh3.googleusercontent.com/a/..."
    }
    """
    sub: str = Field(..., description="Unique Google user ID")
    email: Optional[str] = Field(None, description="User's email address")
    email_verified: Optional[bool] = Field(None, description="Is email verified?")
    name: Optional[str] = Field(None, description="User's display name")
    picture: Optional[str] = Field(None, description="Profile picture URL")
