"""
NoteKeeper Backend — Repository Tests
=======================================

What:  Tests for NoteRepository against a real file in tmp_path.

What we test:
    ✅ Load from missing, valid and corrupt files
    ✅ Every mutation rewrites the file; reads never do
    ✅ Notes survive a restart (fresh repository, same file)
    ✅ Search semantics (case-insensitive, OR, null terms)
    ✅ Partial update keeps createdAt and advances updatedAt
    ✅ A failed write leaves memory untouched and raises StorageError
    ✅ Unencodable text and mistyped stored fields surface as StorageError
"""

import json
from unittest.mock import patch

import pytest

from notekeeper.exceptions import StorageError
from notekeeper.models.note import Note
from notekeeper.repository import NoteRepository


class TestLoad:

    @pytest.mark.asyncio
    async def test_missing_file_starts_empty(self, repository, storage_path):
        await repository.load()
        assert await repository.list_notes() == []
        assert not storage_path.exists()

    @pytest.mark.asyncio
    async def test_loads_existing_file(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps({
            "n1": {"id": "n1", "title": "T", "content": "C", "createdAt": 1, "updatedAt": 2},
        }), encoding="utf-8")

        repo = NoteRepository(str(storage_path))
        await repo.load()

        assert await repo.find_by_id("n1") == Note("n1", "T", "C", 1, 2)

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_storage_error(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            await NoteRepository(str(storage_path)).load()

    @pytest.mark.asyncio
    async def test_wrong_shape_raises_storage_error(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps({"n1": {"title": "no id"}}), encoding="utf-8")

        with pytest.raises(StorageError):
            await NoteRepository(str(storage_path)).load()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, value", [("title", None), ("title", 7), ("content", 5)])
    async def test_wrong_field_type_raises_storage_error(self, storage_path, field, value):
        item = {"id": "n1", "title": "T", "content": "C", "createdAt": 1, "updatedAt": 2}
        item[field] = value
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps({"n1": item}), encoding="utf-8")

        with pytest.raises(StorageError):
            await NoteRepository(str(storage_path)).load()


class TestPersistence:

    @pytest.mark.asyncio
    async def test_create_writes_pretty_printed_map(self, repository, storage_path):
        await repository.load()
        note = await repository.create(Note.create("T", "C", now=5))

        text = storage_path.read_text(encoding="utf-8")
        assert "\n  " in text  # indented
        assert json.loads(text) == {note.id: note.to_dict()}

    @pytest.mark.asyncio
    async def test_no_temp_file_left_behind(self, repository, storage_path):
        await repository.load()
        await repository.create(Note.create("T", "C", now=5))
        assert [p.name for p in storage_path.parent.iterdir()] == ["notes.json"]

    @pytest.mark.asyncio
    async def test_notes_survive_restart(self, repository, storage_path):
        await repository.load()
        kept = await repository.create(Note.create("Keep", "me", now=1))
        gone = await repository.create(Note.create("Drop", "me", now=2))
        await repository.update(kept.id, content="edited")
        await repository.delete(gone.id)

        restarted = NoteRepository(str(storage_path))
        await restarted.load()

        notes = await restarted.list_notes()
        assert [n.id for n in notes] == [kept.id]
        assert notes[0].content == "edited"

    @pytest.mark.asyncio
    async def test_failed_write_keeps_memory_unchanged(self, repository):
        await repository.load()
        existing = await repository.create(Note.create("T", "C", now=1))

        with patch.object(repository, "_persist", side_effect=StorageError()):
            with pytest.raises(StorageError):
                await repository.create(Note.create("New", None, now=2))
            with pytest.raises(StorageError):
                await repository.update(existing.id, title="Changed")
            with pytest.raises(StorageError):
                await repository.delete(existing.id)

        assert await repository.list_notes() == [existing]

    @pytest.mark.asyncio
    async def test_os_error_becomes_storage_error(self, tmp_path):
        # A directory where the file should be makes the final rename fail
        target = tmp_path / "notes.json"
        target.mkdir()
        repo = NoteRepository(str(target))

        with pytest.raises(StorageError):
            await repo.create(Note.create("T", "C", now=1))
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_unencodable_title_becomes_storage_error(self, repository, storage_path):
        await repository.load()
        kept = await repository.create(Note.create("T", "C", now=1))
        before = storage_path.read_text(encoding="utf-8")

        with pytest.raises(StorageError):
            await repository.create(Note.create("bad \ud800", None, now=2))

        assert [p.name for p in storage_path.parent.iterdir()] == ["notes.json"]
        assert storage_path.read_text(encoding="utf-8") == before
        assert await repository.list_notes() == [kept]


class TestQueries:

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, repository):
        await repository.load()
        assert await repository.find_by_id("does-not-exist") is None

    @pytest.mark.asyncio
    async def test_list_keeps_insertion_order(self, repository):
        await repository.load()
        first = await repository.create(Note.create("a", None, now=1))
        second = await repository.create(Note.create("b", None, now=2))
        assert [n.id for n in await repository.list_notes()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_search_title_or_content(self, repository):
        await repository.load()
        shopping = await repository.create(Note.create("Shopping", "milk, eggs", now=1))
        meeting = await repository.create(Note.create("Meeting", "Discuss MILK prices", now=2))
        await repository.create(Note.create("Ideas", None, now=3))

        by_content = await repository.find_by_title_or_content(None, "milk")
        assert {n.id for n in by_content} == {shopping.id, meeting.id}

        by_title = await repository.find_by_title_or_content("SHOP", None)
        assert [n.id for n in by_title] == [shopping.id]

        assert await repository.find_by_title_or_content(None, None) == []


class TestMutations:

    @pytest.mark.asyncio
    async def test_update_merges_and_advances_timestamp(self, repository, clock):
        await repository.load()
        note = await repository.create(Note.create("Title", "Body", now=clock()))

        updated = await repository.update(note.id, content="New body")

        assert updated.title == "Title"
        assert updated.content == "New body"
        assert updated.created_at == note.created_at
        assert updated.updated_at > note.updated_at
        assert await repository.find_by_id(note.id) == updated

    @pytest.mark.asyncio
    async def test_update_missing_returns_none_without_writing(self, repository, storage_path):
        await repository.load()
        assert await repository.update("missing", title="x") is None
        assert not storage_path.exists()

    @pytest.mark.asyncio
    async def test_delete_returns_removed_note_once(self, repository):
        await repository.load()
        note = await repository.create(Note.create("T", "C", now=1))

        assert await repository.delete(note.id) == note
        assert await repository.delete(note.id) is None
        assert await repository.count() == 0
