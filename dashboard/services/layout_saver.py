"""
LayoutSaver - coalesces grid change events into non-overlapping saves.

A burst of grid edits would otherwise start one save per edit, each doing
its own list-then-create-or-update against Drive; two of those running at
once can both create the file. The saver keeps at most one save in flight.
Snapshots submitted meanwhile replace each other, so only the newest one is
written once the running save finishes.

An optional quiescence window delays each flush so a drag that fires many
change events ends in a single write.
"""

import asyncio
import logging
from typing import Optional

from dashboard.core.config import settings
from dashboard.schemas.layout import LayoutDocument
from dashboard.services.config_store import ConfigStore


logger = logging.getLogger("dashboard.services.layout_saver")


class LayoutSaver:
    """
    Single-flight, latest-wins save queue in front of a ConfigStore.

    Attributes:
        last_result: Outcome of the most recent completed save
            (None until one has run)
    """

    def __init__(self, store: ConfigStore, debounce_seconds: Optional[float] = None):
        self.store = store
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else settings.SAVE_DEBOUNCE_SECONDS
        )
        self._pending: Optional[LayoutDocument] = None
        self._task: Optional[asyncio.Task] = None
        self.last_result: Optional[bool] = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, document: LayoutDocument) -> None:
        """
        Queue `document` for saving, superseding anything still queued.

        Must be called from inside the running event loop.
        """
        if self._pending is not None:
            logger.debug("Superseding queued layout snapshot")
        self._pending = document
        if not self.busy:
            self._task = asyncio.get_running_loop().create_task(self._drain())

    async def flush(self) -> Optional[bool]:
        """Wait until every queued snapshot has been written (or dropped)."""
        while self.busy:
            await asyncio.shield(self._task)
        return self.last_result

    def discard(self) -> None:
        """Drop the queued snapshot, e.g. when the session signs out."""
        self._pending = None

    async def _drain(self) -> None:
        while self._pending is not None:
            if self.debounce_seconds > 0:
                await asyncio.sleep(self.debounce_seconds)
            document, self._pending = self._pending, None
            if document is None:
                break
            self.last_result = await self.store.save(document)
