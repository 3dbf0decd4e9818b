"""
NoteKeeper Backend — Note Service
===================================

What:  Business layer between the routes and the repository.
How:   Every operation delegates straight to NoteRepository. update_note()
       first asks a FaultInjector whether to fail, which lets the error
       path of PATCH be exercised on demand.
Who:   Built once by the application factory and handed to routes through
       the get_note_service dependency.

Missing notes come back as None; turning that into a 404 with an
operation-specific message is the route's job.
"""

import logging
import random
from typing import List, Optional

from fastapi import Request

from notekeeper.exceptions import InjectedFaultError
from notekeeper.models.note import Note
from notekeeper.repository import NoteRepository

logger = logging.getLogger(__name__)


class FaultInjector:
    """
    Decides whether an operation should fail on purpose.

    Args:
        failure_rate: Probability in [0, 1]. 0 never fails, 1 always fails.
        rng:          Random source; tests pass a seeded random.Random.
    """

    def __init__(self, failure_rate: float = 0.0, rng: Optional[random.Random] = None):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be between 0 and 1, got {failure_rate}")
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    def should_fail(self) -> bool:
        if self.failure_rate <= 0.0:
            return False
        if self.failure_rate >= 1.0:
            return True
        return self._rng.random() < self.failure_rate


class NoteService:
    """
    Thin pass-through to the repository.

    Responsibilities:
        - create_note(): build a Note via the factory and store it
        - list_notes(), get_note(), search_notes(), delete_note(): delegate
        - update_note(): consult the fault injector, then delegate
    """

    def __init__(self, repository: NoteRepository, fault_injector: Optional[FaultInjector] = None):
        self.repository = repository
        self.fault_injector = fault_injector or FaultInjector()

    async def create_note(self, title: str, content: Optional[str]) -> Note:
        note = Note.create(title=title, content=content, now=self.repository.clock())
        return await self.repository.create(note)

    async def list_notes(self) -> List[Note]:
        return await self.repository.list_notes()

    async def get_note(self, note_id: str) -> Optional[Note]:
        return await self.repository.find_by_id(note_id)

    async def search_notes(self, title: Optional[str], content: Optional[str]) -> List[Note]:
        return await self.repository.find_by_title_or_content(title, content)

    async def update_note(
        self,
        note_id: str,
        title: Optional[str],
        content: Optional[str],
    ) -> Optional[Note]:
        """
        Update a note unless the fault injector fires.

        Raises:
            InjectedFaultError: the injector decided this call fails (→ 500)
        """
        if self.fault_injector.should_fail():
            logger.warning("Injected failure on update of note %s", note_id)
            raise InjectedFaultError(context={"note_id": note_id})
        return await self.repository.update(note_id, title=title, content=content)

    async def delete_note(self, note_id: str) -> Optional[Note]:
        return await self.repository.delete(note_id)


def get_note_service(request: Request) -> NoteService:
    """FastAPI dependency returning the service the factory attached to app.state."""
    return request.app.state.note_service
