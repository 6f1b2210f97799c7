"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export GOOGLE_CLIENT_ID=1234-abc.apps.googleusercontent.com
        export DRIVE_CONFIG_FILENAME=my-dashboard-config.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and on the dashboard header
    APP_NAME: str = "Workspace Dashboard"

    # DEBUG: Enable debug mode (more verbose errors)
    DEBUG: bool = False

    # LOG_LEVEL: Root level for the "dashboard" logger hierarchy
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # GOOGLE OAUTH SETTINGS
    # ---------------------------------------------------------------------------
    # Google Cloud Console: https://console.cloud.google.com/apis/credentials
    #
    # Setup Instructions:
    # 1. Enable the Drive API and the Classroom API
    # 2. Configure OAuth consent screen (External, add test users)
    # 3. Create OAuth 2.0 Client ID (Web application)
    # 4. Add authorized redirect URI: http://localhost:8000/auth/google/callback
    # 5. Copy Client ID and Client Secret to .env file
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = "http://localhost:8000/auth/google/callback"

    # ---------------------------------------------------------------------------
    # LAYOUT PERSISTENCE
    # ---------------------------------------------------------------------------
    # DRIVE_CONFIG_FILENAME: Well-known name of the layout file kept in the
    # user's Drive appDataFolder. Shared by every instance of a deployment.
    DRIVE_CONFIG_FILENAME: str = "gwrk-dashboard-config.json"

    # SAVE_DEBOUNCE_SECONDS: Quiescence window before a queued layout save is
    # flushed. 0 disables the wait (saves still never overlap).
    SAVE_DEBOUNCE_SECONDS: float = 0.0

    # ---------------------------------------------------------------------------
    # OUTGOING HTTP
    # ---------------------------------------------------------------------------
    # HTTP_TIMEOUT: Seconds before any upstream API call is abandoned
    HTTP_TIMEOUT: float = 30.0

    # ---------------------------------------------------------------------------
    # GITHUB
    # ---------------------------------------------------------------------------
    # GITHUB_TOKEN: Optional personal access token used as the default for new
    # sessions. Users can still paste their own from the GitHub panel.
    GITHUB_TOKEN: str = ""

    # ---------------------------------------------------------------------------
    # SESSIONS
    # ---------------------------------------------------------------------------
    # SESSION_COOKIE_NAME: Cookie that ties a browser to its in-memory session
    SESSION_COOKIE_NAME: str = "dashboard_session"

    # SESSION_IDLE_MINUTES: In-memory sessions unused for this long are dropped
    # (the browser then starts over signed out)
    SESSION_IDLE_MINUTES: int = 120


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from dashboard.core.config import settings
settings = Settings()
