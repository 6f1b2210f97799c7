"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn dashboard.main:app --reload
"""

import logging
import secrets

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from dashboard.core.config import settings
from dashboard.renderers import DashboardPageRenderer
from dashboard.routers import google_auth, layout, widgets


# ---------------------------------------------------------------------------
# LOGGING
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logging.getLogger("dashboard").setLevel(settings.LOG_LEVEL.upper())

logger = logging.getLogger("dashboard.main")


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# SESSION COOKIE
# ---------------------------------------------------------------------------
# Every browser gets an opaque random session id. The id only indexes the
# in-memory SessionManager; it carries no data of its own.
@app.middleware("http")
async def attach_session(request: Request, call_next):
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    is_new = not session_id
    if is_new:
        session_id = secrets.token_urlsafe(32)
    request.state.session_id = session_id

    response = await call_next(request)

    if is_new:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return response


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# google_auth.router: /auth/google/login, /auth/google/callback, /auth/google/signout, /auth/status
# layout.router: /layout (GET seed, PUT change report)
# widgets.router: /widgets panels and the GitHub token
app.include_router(google_auth.router)
app.include_router(layout.router)
app.include_router(widgets.router)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
def dashboard_page():
    """The single-page dashboard."""
    return HTMLResponse(content=DashboardPageRenderer(title=settings.APP_NAME).render())


@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
