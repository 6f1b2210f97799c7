"""
Session Manager - per-browser dashboard state.

Each browser session (identified by a cookie) gets its own DashboardSession,
which wires the pieces together:

    Authenticator ──token──▶ ConfigStore ◀──save── LayoutSaver
                                  │                     ▲
                                load                 submit
                                  ▼                     │
                            GridController ──change─────┘

Everything is kept in memory. Restarting the server signs every session out;
saved layouts survive because they live in each user's Drive.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

import httpx

from dashboard.core.config import settings
from dashboard.schemas.layout import GridItem, LayoutDocument, default_layout
from dashboard.services.authenticator import Authenticator
from dashboard.services.config_store import ConfigStore
from dashboard.services.grid_controller import GridController
from dashboard.services.layout_saver import LayoutSaver
from dashboard.services.widget_loaders import build_loaders, load_user_widgets


logger = logging.getLogger("dashboard.services.session_manager")


class DashboardSession:
    """
    One browser's dashboard: token, grid, persistence and panel cache.

    Attributes:
        layout_source: "saved" if the grid was seeded from Drive,
            "default" if the built-in layout was used
        panels: Rendered widget panels, None until loaded
    """

    def __init__(
        self,
        session_id: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session_id = session_id
        self._transport = transport
        self.last_seen = datetime.now(timezone.utc)

        self.authenticator = Authenticator()
        self.config_store = ConfigStore(self.authenticator, transport=transport)
        self.saver = LayoutSaver(self.config_store)
        self.grid = GridController()
        self.grid.on_change(self._on_grid_change)

        self.github_token: Optional[str] = settings.GITHUB_TOKEN or None
        self.layout_source = "default"
        self.panels: Optional[Dict[str, str]] = None

    def _on_grid_change(self, items: List[GridItem]) -> None:
        self.saver.submit(LayoutDocument.from_items(items))

    # -------------------------------------------------------------------------
    # GRID
    # -------------------------------------------------------------------------

    async def initialize_grid(self) -> List[GridItem]:
        """
        Seed the grid on first use: the saved layout, else the default one.
        """
        if not self.grid.initialized:
            document = await self.config_store.load()
            if document is not None:
                self.grid.initialize(document.layout)
                self.layout_source = "saved"
            else:
                self.grid.initialize(default_layout())
                self.layout_source = "default"
            logger.info(
                f"Session grid seeded from {self.layout_source} layout",
                extra={"items": len(self.grid.snapshot())},
            )
        return self.grid.snapshot()

    async def apply_layout(self, items: List[GridItem]) -> Optional[bool]:
        """
        Take a grid change reported by the browser and wait for it to be saved.

        Returns:
            Whether the newest snapshot reached Drive
        """
        self.grid.replace_items(items)
        return await self.saver.flush()

    # -------------------------------------------------------------------------
    # WIDGETS
    # -------------------------------------------------------------------------

    async def load_widgets(self, refresh: bool = False) -> Dict[str, str]:
        if self.panels is None or refresh:
            loaders = build_loaders(
                self.authenticator.access_token,
                self.github_token,
                transport=self._transport,
            )
            self.panels = await load_user_widgets(loaders)
        return self.panels

    def set_github_token(self, token: Optional[str]) -> None:
        self.github_token = token or None
        self.panels = None

    # -------------------------------------------------------------------------
    # AUTH TRANSITIONS
    # -------------------------------------------------------------------------

    def on_signed_in(self) -> None:
        """A new identity may have a different saved layout."""
        self.grid.reset()
        self.panels = None

    def sign_out(self) -> None:
        self.authenticator.sign_out()
        self.saver.discard()
        self.grid.reset()
        self.panels = None


class SessionManager:
    """
    In-memory registry of dashboard sessions, keyed by session cookie.

    Sessions idle for longer than `idle_timeout` are dropped the next time
    any session is looked up. A dropped session's browser simply gets a
    fresh, signed-out session; its saved layout is still in Drive.

    Single-process only; with several workers each one has its own registry.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        idle_timeout: Optional[timedelta] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._sessions: Dict[str, DashboardSession] = {}
        self._transport = transport
        self.idle_timeout = (
            idle_timeout if idle_timeout is not None
            else timedelta(minutes=settings.SESSION_IDLE_MINUTES)
        )
        self._clock = clock

    def get_or_create(self, session_id: str) -> DashboardSession:
        self.cleanup_expired()

        session = self._sessions.get(session_id)
        if session is None:
            session = DashboardSession(session_id, transport=self._transport)
            self._sessions[session_id] = session
            logger.info(f"New dashboard session. Total sessions: {len(self._sessions)}")
        session.last_seen = self._clock()
        return session

    def cleanup_expired(self) -> int:
        """
        Drop every session idle for longer than idle_timeout.

        Returns:
            Number of sessions removed
        """
        cutoff = self._clock() - self.idle_timeout
        expired = [
            session_id for session_id, session in self._sessions.items()
            if session.last_seen < cutoff
        ]

        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(
                f"Dropped {len(expired)} idle sessions",
                extra={"remaining": len(self._sessions)},
            )
        return len(expired)

    @property
    def session_count(self) -> int:
        return len(self._sessions)


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
# Usage: from dashboard.services.session_manager import session_manager
session_manager = SessionManager()
