"""
OurNotes — Local Key-Value Store
==================================

What:  The client's offline persistence channel: string values stored under
       string keys, one file per key (<root>/<key>.json).
How:   Async file I/O with aiofiles. A write goes to a uniquely named temp
       file that then replaces the target, so readers see either the old or
       the new snapshot, never half of one. Concurrent writers: last
       replace wins.
Who:   NotesContext.persist() / restore().
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Union

import aiofiles

logger = logging.getLogger(__name__)


class LocalStore:
    """Directory-backed key-value store with localStorage-style methods."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key was never written."""
        path = self._path(key)
        if not path.exists():
            return None
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    async def set_item(self, key: str, value: str) -> None:
        """
        Store `value` under `key`, replacing any previous value.

        Raises:
            OSError: directory not writable, disk full, etc.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = self.root / f".{key}.{uuid.uuid4().hex}.tmp"

        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(value)
        os.replace(tmp_path, path)
        logger.debug("Stored %s (%d chars)", key, len(value))

    async def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            os.remove(path)
