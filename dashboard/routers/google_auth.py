"""
Google Auth Router - sign-in and sign-out for the dashboard session.

Endpoints:
==========
- GET  /auth/google/login    → Redirect to Google's consent screen
- GET  /auth/google/callback → Finish sign-in, back to the dashboard
- POST /auth/google/signout  → Forget the session's token
- GET  /auth/status          → Current token state and profile

OAuth Flow:
===========
1. User clicks "Sign in with Google" on the dashboard
2. Browser goes to GET /auth/google/login
3. Backend redirects to Google's consent screen (always prompted)
4. Google redirects to /auth/google/callback with a code, or with an error
   if the user declined
5. Backend exchanges the code and keeps the token in memory
6. Browser lands on "/" again and the grid is re-seeded from Drive
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import RedirectResponse

from dashboard.deps import get_dashboard_session, get_google_auth_client
from dashboard.environments.google.auth import GoogleAuthClient
from dashboard.services.session_manager import DashboardSession


logger = logging.getLogger("dashboard.routers.google_auth")


router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/google/login")
async def google_login(
    session: DashboardSession = Depends(get_dashboard_session),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
):
    """
    Start the interactive consent flow.

    Returns:
        RedirectResponse to Google's OAuth consent screen
    """
    if not auth_client.client_id:
        logger.error("Google OAuth not configured - missing GOOGLE_CLIENT_ID")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google OAuth is not configured. Please set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET.",
        )

    auth_url = session.authenticator.begin_sign_in(auth_client)
    return RedirectResponse(url=auth_url)


@router.get("/google/callback")
async def google_callback(
    code: Optional[str] = Query(None, description="Authorization code from Google"),
    state: Optional[str] = Query(None, description="CSRF state token"),
    error: Optional[str] = Query(None, description="Error from Google"),
    session: DashboardSession = Depends(get_dashboard_session),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
):
    """
    Handle Google's redirect after the consent screen.

    A declined consent or a failed exchange leaves the session exactly as it
    was; either way the browser is sent back to the dashboard.
    """
    if error:
        logger.info(f"Google consent not granted: {error}")
        session.authenticator.cancel_sign_in()
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)

    if not code or not session.authenticator.expects_state(state):
        logger.warning("Invalid OAuth callback: missing code or unknown state")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired sign-in request. Please try again.",
        )

    if await session.authenticator.complete_sign_in(auth_client, code):
        session.on_signed_in()

    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.post("/google/signout")
async def google_signout(session: DashboardSession = Depends(get_dashboard_session)):
    """Discard the in-memory token. The token is not revoked at Google."""
    session.sign_out()
    return {"state": session.authenticator.state.value}


@router.get("/status")
async def auth_status(session: DashboardSession = Depends(get_dashboard_session)):
    authenticator = session.authenticator
    user = authenticator.user if authenticator.is_authenticated else None
    return {
        "state": authenticator.state.value,
        "email": user.email if user else None,
        "name": user.name if user else None,
    }
