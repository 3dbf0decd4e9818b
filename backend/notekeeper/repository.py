"""
NoteKeeper Backend — Note Repository (in-memory map + JSON file mirror)
=========================================================================

What:  Owns every note. Holds them in a dict keyed by id and mirrors the
       whole dict to a single pretty-printed JSON file.
How:   load() runs once at startup. Every mutation rewrites the full file:
       the change is applied to a copy of the map, the copy is written to
       `<file>.tmp` and renamed over the target, and only then does the copy
       replace the live map. A failed write therefore leaves memory and disk
       as they were and raises StorageError.
Who:   Created by the application factory; used by NoteService.

Concurrency:
    Everything runs on one event loop. Mutations are serialized by an
    asyncio.Lock so the copy/write/swap sequence never interleaves; reads
    see whichever map is current and take no lock.

File format:
    {
      "<id>": {"id": "<id>", "title": "...", "content": "...",
               "createdAt": 1700000000000, "updatedAt": 1700000000000},
      ...
    }
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional

import aiofiles

from notekeeper.exceptions import StorageError
from notekeeper.models.note import Note, now_millis

logger = logging.getLogger(__name__)


class NoteRepository:
    """
    Write-through note store backed by one JSON file.

    Args:
        storage_path: Location of the backing file. Parent directories are
                      created on first write.
        clock:        Returns epoch milliseconds; tests pass a fake.
    """

    def __init__(self, storage_path: str, clock: Optional[Callable[[], int]] = None):
        self.storage_path = Path(storage_path)
        self.clock = clock or now_millis
        self._notes: Dict[str, Note] = {}
        self._lock = asyncio.Lock()

    # ══════════════════════════════════════════════════════════════════════
    # Load / Persist
    # ══════════════════════════════════════════════════════════════════════

    async def load(self) -> None:
        """
        Populate the map from the backing file.

        A missing file means an empty store. An unreadable or malformed file
        raises StorageError so the service refuses to start on bad data.
        """
        if not self.storage_path.exists():
            logger.info("No note file at %s, starting empty", self.storage_path.resolve())
            self._notes = {}
            return

        try:
            async with aiofiles.open(self.storage_path, "r", encoding="utf-8") as f:
                raw = json.loads(await f.read())
            notes = {note_id: Note.from_dict(item) for note_id, item in raw.items()}
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load notes from %s: %s", self.storage_path, e)
            raise StorageError(
                message="Could not load the note file.",
                context={"path": str(self.storage_path), "error": str(e)},
            ) from e

        self._notes = notes
        logger.info("Loaded %d notes from %s", len(notes), self.storage_path.resolve())

    async def _persist(self, notes: Dict[str, Note]) -> None:
        """
        Rewrite the backing file from `notes` (temp file + atomic rename).

        Any failure, including text that cannot be encoded as UTF-8, raises
        StorageError and removes the partial temp file.
        """
        tmp_path = self.storage_path.with_suffix(self.storage_path.suffix + ".tmp")
        try:
            payload = json.dumps(
                {note_id: note.to_dict() for note_id, note in notes.items()},
                ensure_ascii=False,
                indent=2,
            ).encode("utf-8")
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload)
                await f.flush()
            os.replace(tmp_path, self.storage_path)
        except (OSError, ValueError) as e:
            logger.error("Failed to persist notes to %s: %s", self.storage_path, e)
            tmp_path.unlink(missing_ok=True)
            raise StorageError(
                message="Could not save notes. Please try again.",
                context={"path": str(self.storage_path), "error": str(e)},
            ) from e
        logger.debug("Persisted %d notes to %s", len(notes), self.storage_path)

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    async def list_notes(self) -> List[Note]:
        return list(self._notes.values())

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        return self._notes.get(note_id)

    async def find_by_title_or_content(
        self, title: Optional[str], content: Optional[str]
    ) -> List[Note]:
        """Notes whose title or content contains the given term, ignoring case."""
        return [note for note in self._notes.values() if note.matches(title, content)]

    async def count(self) -> int:
        return len(self._notes)

    # ══════════════════════════════════════════════════════════════════════
    # Mutations (copy → persist → swap)
    # ══════════════════════════════════════════════════════════════════════

    async def create(self, note: Note) -> Note:
        async with self._lock:
            notes = dict(self._notes)
            notes[note.id] = note
            await self._persist(notes)
            self._notes = notes
        logger.info("Note created: %s", note.id)
        return note

    async def update(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Note]:
        """
        Replace the provided fields of an existing note.

        Returns None when the id is unknown (nothing is written). Otherwise
        refreshes updated_at from the clock and persists.
        """
        async with self._lock:
            existing = self._notes.get(note_id)
            if existing is None:
                return None
            updated = existing.with_changes(title=title, content=content, now=self.clock())
            notes = dict(self._notes)
            notes[note_id] = updated
            await self._persist(notes)
            self._notes = notes
        logger.info("Note updated: %s", note_id)
        return updated

    async def delete(self, note_id: str) -> Optional[Note]:
        async with self._lock:
            if note_id not in self._notes:
                return None
            notes = dict(self._notes)
            removed = notes.pop(note_id)
            await self._persist(notes)
            self._notes = notes
        logger.info("Note deleted: %s", note_id)
        return removed
