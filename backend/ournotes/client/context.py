"""
OurNotes — Notes Context
==========================

What:  The object a client UI is handed: the three NoteCaches plus the shared
       status fields (error, is_loading, is_edit_mode) and the local
       snapshot channel.
How:   Constructed explicitly (create_context()) and populated by an
       explicit `await initialize()`, which refreshes the three caches
       concurrently. The caches are independent of each other; they only
       share this context's status fields and snapshot store.

Snapshots:
    persist()  writes all three collections (keys shoppingNotes, mapNotes,
               calendarNotes), called after every local mutation
    restore()  reads each of the three keys independently; an absent key
               leaves that collection as it is
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple

import httpx
from pydantic import ValidationError as PayloadError

from ournotes.client.api import NotesApiClient
from ournotes.client.cache import NoteCache
from ournotes.client.local_store import LocalStore
from ournotes.config import ClientSettings, client_settings
from ournotes.kinds import CALENDAR, KINDS_BY_SLUG, MAP, SHOPPING

logger = logging.getLogger(__name__)


class NotesContext:
    """
    Client state for the three note collections.

    Attributes:
        shopping_notes, map_notes, calendar_notes: the NoteCaches
        error:        last recorded failure message (None when clear)
        is_edit_mode: UI toggle, see toggle_edit_mode()
    """

    def __init__(self, api: NotesApiClient, store: LocalStore):
        self.api = api
        self.store = store
        self.error: Optional[str] = None
        self.is_edit_mode = False
        self._in_flight = 0

        self.shopping_notes = NoteCache(SHOPPING, api, self)
        self.map_notes = NoteCache(MAP, api, self)
        self.calendar_notes = NoteCache(CALENDAR, api, self)

    @property
    def caches(self) -> Tuple[NoteCache, ...]:
        return (self.shopping_notes, self.map_notes, self.calendar_notes)

    def cache_for(self, slug: str) -> NoteCache:
        """Look a cache up by kind slug ("map-notes")."""
        kind = KINDS_BY_SLUG[slug]
        return next(cache for cache in self.caches if cache.kind is kind)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Fetch all three collections (falling back to snapshots per cache)."""
        await asyncio.gather(*(cache.refresh() for cache in self.caches))

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "NotesContext":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ── Status ────────────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @asynccontextmanager
    async def loading(self) -> AsyncIterator[None]:
        """Mark a refresh/update as in flight for the duration of the block."""
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    def record_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def toggle_edit_mode(self) -> bool:
        self.is_edit_mode = not self.is_edit_mode
        return self.is_edit_mode

    # ── Local snapshots ───────────────────────────────────────────────────

    async def persist(self) -> None:
        """Overwrite the three local snapshots with the current collections."""
        try:
            for cache in self.caches:
                await self.store.set_item(cache.kind.storage_key, cache.snapshot())
        except OSError as e:
            logger.error("Failed to save notes locally: %s", str(e))
            self.record_error("Failed to save notes locally")

    async def restore(self) -> None:
        """Load every snapshot that exists; skip absent or unreadable ones."""
        for cache in self.caches:
            key = cache.kind.storage_key
            try:
                raw = await self.store.get_item(key)
            except OSError as e:
                logger.warning("Could not read snapshot %s: %s", key, str(e))
                continue
            if raw is None:
                continue
            try:
                cache.load_snapshot(raw)
            except PayloadError as e:
                logger.warning("Ignoring unreadable snapshot %s: %s", key, str(e))


def create_context(
    settings: ClientSettings = client_settings,
    http: Optional[httpx.AsyncClient] = None,
) -> NotesContext:
    """
    Build a NotesContext from client settings.

    The API base URL follows settings.mode (production/development); the
    snapshots live under settings.storage_dir.
    """
    api = NotesApiClient(settings.base_url, http=http)
    store = LocalStore(settings.storage_dir)
    return NotesContext(api, store)
