# Services package init
"""
NoteKeeper Backend — Services Layer
=====================================

What:  Business layer sitting between routes (HTTP) and the repository.

Service Inventory:
    - NoteService:   delegates CRUD/search to NoteRepository
    - FaultInjector: configurable failure seam used by NoteService.update_note
"""
