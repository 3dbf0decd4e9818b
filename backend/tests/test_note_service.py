"""
NoteKeeper Backend — Note Service Unit Tests
===============================================

What:  Tests for NoteService delegation and the FaultInjector seam.
How:   The repository is an AsyncMock; no files are touched.
"""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from notekeeper.exceptions import InjectedFaultError
from notekeeper.models.note import Note
from notekeeper.services.note_service import FaultInjector, NoteService


def _mock_repository():
    repo = MagicMock()
    repo.clock = MagicMock(return_value=42)
    repo.create = AsyncMock(side_effect=lambda note: note)
    repo.list_notes = AsyncMock(return_value=[])
    repo.find_by_id = AsyncMock(return_value=None)
    repo.find_by_title_or_content = AsyncMock(return_value=[])
    repo.update = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=None)
    return repo


class TestFaultInjector:

    def test_zero_rate_never_fails(self):
        injector = FaultInjector(0.0)
        assert not any(injector.should_fail() for _ in range(100))

    def test_full_rate_always_fails(self):
        injector = FaultInjector(1.0)
        assert all(injector.should_fail() for _ in range(100))

    def test_seeded_rng_is_reproducible(self):
        first = FaultInjector(0.4, rng=random.Random(7))
        second = FaultInjector(0.4, rng=random.Random(7))
        assert [first.should_fail() for _ in range(20)] == [second.should_fail() for _ in range(20)]

    def test_rate_is_roughly_honoured(self):
        injector = FaultInjector(0.4, rng=random.Random(1234))
        failures = sum(injector.should_fail() for _ in range(10_000))
        assert 3_500 < failures < 4_500

    @pytest.mark.parametrize("rate", [-0.1, 1.5])
    def test_rate_out_of_range_rejected(self, rate):
        with pytest.raises(ValueError):
            FaultInjector(rate)


class TestNoteServiceDelegation:

    def setup_method(self):
        self.repo = _mock_repository()
        self.service = NoteService(self.repo, FaultInjector(0.0))

    @pytest.mark.asyncio
    async def test_create_builds_note_with_repository_clock(self):
        note = await self.service.create_note("Title", None)

        assert note.title == "Title"
        assert note.content is None
        assert note.created_at == note.updated_at == 42
        self.repo.create.assert_awaited_once_with(note)

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing(self):
        assert await self.service.get_note("nope") is None
        self.repo.find_by_id.assert_awaited_once_with("nope")

    @pytest.mark.asyncio
    async def test_search_passes_terms_through(self):
        await self.service.search_notes("a", None)
        self.repo.find_by_title_or_content.assert_awaited_once_with("a", None)

    @pytest.mark.asyncio
    async def test_update_delegates_when_injector_quiet(self):
        updated = Note("id", "T", "C", 1, 2)
        self.repo.update.return_value = updated

        assert await self.service.update_note("id", "T", None) is updated
        self.repo.update.assert_awaited_once_with("id", title="T", content=None)

    @pytest.mark.asyncio
    async def test_delete_delegates(self):
        await self.service.delete_note("id")
        self.repo.delete.assert_awaited_once_with("id")


class TestNoteServiceFaultInjection:

    @pytest.mark.asyncio
    async def test_update_raises_and_skips_repository_when_injector_fires(self):
        repo = _mock_repository()
        service = NoteService(repo, FaultInjector(1.0))

        with pytest.raises(InjectedFaultError, match="error devil"):
            await service.update_note("id", "T", None)
        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_operations_ignore_injector(self):
        repo = _mock_repository()
        service = NoteService(repo, FaultInjector(1.0))

        await service.create_note("T", "C")
        await service.list_notes()
        await service.delete_note("id")
        repo.create.assert_awaited_once()
