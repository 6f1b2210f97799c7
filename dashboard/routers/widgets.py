"""
Widgets Router - rendered panel HTML for the dashboard grid.

Endpoints:
==========
- GET    /widgets              → {"classroom": html, "drive": html, "github": html}
- GET    /widgets/{name}       → One panel as HTML
- POST   /widgets/github/token → Store a GitHub personal access token
- DELETE /widgets/github/token → Forget it

Panels are loaded once per sign-in and cached on the session; ?refresh=true
loads them again.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from dashboard.deps import get_dashboard_session
from dashboard.services.session_manager import DashboardSession


logger = logging.getLogger("dashboard.routers.widgets")


router = APIRouter(prefix="/widgets", tags=["widgets"])


class GitHubTokenBody(BaseModel):
    token: str = Field(..., min_length=1, description="GitHub personal access token")


@router.get("")
async def get_widgets(
    refresh: bool = Query(False, description="Reload every panel"),
    session: DashboardSession = Depends(get_dashboard_session),
):
    return await session.load_widgets(refresh=refresh)


@router.post("/github/token")
async def set_github_token(
    body: GitHubTokenBody,
    session: DashboardSession = Depends(get_dashboard_session),
):
    session.set_github_token(body.token)
    return {"connected": True}


@router.delete("/github/token")
async def clear_github_token(session: DashboardSession = Depends(get_dashboard_session)):
    session.set_github_token(None)
    return {"connected": False}


@router.get("/{name}", response_class=HTMLResponse)
async def get_widget(
    name: str,
    refresh: bool = Query(False, description="Reload every panel"),
    session: DashboardSession = Depends(get_dashboard_session),
):
    panels = await session.load_widgets(refresh=refresh)
    if name not in panels:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown widget '{name}'")
    return HTMLResponse(content=panels[name])
