"""
Widget Loaders - fetch-and-render for the Classroom, Drive and GitHub panels.

Loaders share nothing: each builds its own API client, and a failure in one
only turns that one panel into an error message. load_user_widgets() runs
them concurrently and always returns a panel for every loader.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx

from dashboard.environments.base import APIError
from dashboard.environments.github import GitHubClient
from dashboard.environments.google.classroom import GoogleClassroomClient
from dashboard.environments.google.drive import GoogleDriveClient
from dashboard.renderers.widgets import WidgetRenderer


logger = logging.getLogger("dashboard.services.widget_loaders")


class WidgetLoader(ABC):
    """
    Base class for one dashboard panel.

    Subclasses implement _load(); load() wraps it so that it never raises.
    """

    # Panel key, matching WIDGET_PANELS in the layout schemas
    name: str = ""
    error_message: str = "Could not load this panel."

    def __init__(
        self,
        renderer: Optional[WidgetRenderer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.renderer = renderer or WidgetRenderer()
        self._transport = transport

    @abstractmethod
    async def _load(self) -> str:
        pass

    async def load(self) -> str:
        """Panel HTML; an error panel if the upstream call failed."""
        try:
            return await self._load()
        except APIError as e:
            logger.error(
                f"{self.name} widget failed: {e}",
                extra={"status_code": e.status_code},
            )
            return self.renderer.render_error(self.error_message)


class GoogleWidgetLoader(WidgetLoader):
    """A panel backed by the session's Google token."""

    def __init__(self, access_token: Optional[str], **kwargs):
        super().__init__(**kwargs)
        self.access_token = access_token

    async def load(self) -> str:
        if not self.access_token:
            return self.renderer.render_signed_out()
        return await super().load()


class ClassroomWidgetLoader(GoogleWidgetLoader):
    name = "classroom"
    error_message = "Classroom list failed."

    async def _load(self) -> str:
        client = GoogleClassroomClient(self.access_token, transport=self._transport)
        courses = await client.list_courses_with_work()
        return self.renderer.render_classroom(courses)


class DriveWidgetLoader(GoogleWidgetLoader):
    name = "drive"
    error_message = "Drive list failed."

    async def _load(self) -> str:
        client = GoogleDriveClient(self.access_token, transport=self._transport)
        files = await client.list_recent_files(page_size=10)
        return self.renderer.render_drive(files)


class GitHubWidgetLoader(WidgetLoader):
    """Uses a GitHub personal access token, not the Google token."""

    name = "github"
    error_message = "GitHub API error"

    def __init__(self, github_token: Optional[str], **kwargs):
        super().__init__(**kwargs)
        self.github_token = github_token

    async def load(self) -> str:
        if not self.github_token:
            return self.renderer.render_github_connect()
        return await super().load()

    async def _load(self) -> str:
        client = GitHubClient(self.github_token, transport=self._transport)
        repos = await client.list_recent_repos(per_page=10)
        return self.renderer.render_github(repos)


def build_loaders(
    access_token: Optional[str],
    github_token: Optional[str],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[WidgetLoader]:
    renderer = WidgetRenderer()
    return [
        ClassroomWidgetLoader(access_token, renderer=renderer, transport=transport),
        DriveWidgetLoader(access_token, renderer=renderer, transport=transport),
        GitHubWidgetLoader(github_token, renderer=renderer, transport=transport),
    ]


async def load_user_widgets(loaders: List[WidgetLoader]) -> Dict[str, str]:
    """
    Run every loader concurrently.

    Returns:
        Panel HTML keyed by loader name
    """
    results = await asyncio.gather(*(loader.load() for loader in loaders), return_exceptions=True)

    panels = {}
    for loader, result in zip(loaders, results):
        if isinstance(result, Exception):
            logger.error(f"{loader.name} widget crashed", exc_info=result)
            result = loader.renderer.render_error(loader.error_message)
        panels[loader.name] = result
    return panels
