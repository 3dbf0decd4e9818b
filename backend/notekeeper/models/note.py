"""
NoteKeeper Backend — Note Domain Model
========================================

What:  The single domain entity, a frozen dataclass.
How:   Notes are never mutated in place; `with_changes()` returns a
       replacement that the repository swaps into its map.
Who:   Built by NoteService via `Note.create()`, stored by NoteRepository,
       rendered by the NoteResponse schema.

Field notes:
    - id: UUID4 text, generated on creation
    - content: nullable; a note may carry only a title
    - created_at / updated_at: epoch milliseconds, updated_at >= created_at

On-disk form uses the same camelCase keys as the HTTP API:
    {"id": ..., "title": ..., "content": ..., "createdAt": ..., "updatedAt": ...}
"""

import time
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: Optional[str]
    created_at: int
    updated_at: int

    @classmethod
    def create(cls, title: str, content: Optional[str], now: Optional[int] = None) -> "Note":
        """Factory for a brand-new note; both timestamps start equal."""
        timestamp = now if now is not None else now_millis()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def with_changes(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        now: Optional[int] = None,
    ) -> "Note":
        """
        Return a replacement note with the given fields merged in.

        A None argument keeps the existing value. updated_at never moves
        backwards, even if the clock does.
        """
        timestamp = now if now is not None else now_millis()
        return replace(
            self,
            title=title if title is not None else self.title,
            content=content if content is not None else self.content,
            updated_at=max(timestamp, self.updated_at),
        )

    def matches(self, title: Optional[str], content: Optional[str]) -> bool:
        """Case-insensitive substring match on title OR content; None never matches."""
        if title is not None and title.lower() in self.title.lower():
            return True
        if content is not None and self.content is not None:
            return content.lower() in self.content.lower()
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Note":
        """
        Rebuild a note from its stored form.

        Raises:
            KeyError:  a required key is missing
            TypeError: title is not a string, or content is neither a string nor null
        """
        title = raw["title"]
        content = raw.get("content")
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, got {type(title).__name__}")
        if content is not None and not isinstance(content, str):
            raise TypeError(f"content must be a string or null, got {type(content).__name__}")
        return cls(
            id=str(raw["id"]),
            title=title,
            content=content,
            created_at=int(raw["createdAt"]),
            updated_at=int(raw["updatedAt"]),
        )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', updated_at={self.updated_at})>"
