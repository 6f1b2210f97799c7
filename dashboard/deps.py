"""
Dependencies module - reusable FastAPI dependencies for route handlers.

The session cookie is issued by the middleware in dashboard.main, which puts
its value on request.state.session_id before any route runs.
"""

from fastapi import Depends, HTTPException, Request, status

from dashboard.environments.google.auth import GoogleAuthClient
from dashboard.services.session_manager import (
    DashboardSession,
    SessionManager,
    session_manager,
)


def get_session_manager() -> SessionManager:
    """Overridden in tests with a manager whose clients use a mock transport."""
    return session_manager


def get_dashboard_session(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> DashboardSession:
    """
    The DashboardSession of the calling browser.

    Raises:
        500: If the session middleware did not run
    """
    session_id = getattr(request.state, "session_id", None)
    if not session_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Session middleware not installed",
        )
    return manager.get_or_create(session_id)


def get_google_auth_client() -> GoogleAuthClient:
    return GoogleAuthClient()
