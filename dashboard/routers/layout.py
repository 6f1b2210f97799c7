"""
Layout Router - seed and report the dashboard grid.

Endpoints:
==========
- GET /layout → Items to build the grid from (saved layout or the default)
- PUT /layout → The grid's full item list after a change; persisted to Drive

Persistence is best-effort. A PUT from a signed-out session, or one whose
save fails upstream, still succeeds; "persisted" tells the page whether the
layout reached Drive.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.deps import get_dashboard_session
from dashboard.schemas.layout import LayoutError, LayoutUpdate
from dashboard.services.session_manager import DashboardSession


logger = logging.getLogger("dashboard.routers.layout")


router = APIRouter(prefix="/layout", tags=["layout"])


@router.get("")
async def get_layout(session: DashboardSession = Depends(get_dashboard_session)):
    items = await session.initialize_grid()
    return {
        "layout": [item.model_dump() for item in items],
        "source": session.layout_source,
    }


@router.put("")
async def put_layout(
    update: LayoutUpdate,
    session: DashboardSession = Depends(get_dashboard_session),
):
    try:
        persisted = await session.apply_layout(update.layout)
    except LayoutError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return {
        "layout": [item.model_dump() for item in session.grid.snapshot()],
        "persisted": bool(persisted),
    }
