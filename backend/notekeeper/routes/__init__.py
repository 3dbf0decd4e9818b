# Routes package init
"""
NoteKeeper Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   POST/GET /notes, GET /notes/search,
                  GET/PATCH/DELETE /notes/{id}
    - health.py:  GET /health

Routes handle HTTP concerns only (input presence checks, status codes,
envelopes) and delegate everything else to NoteService.
"""
