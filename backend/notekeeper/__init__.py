"""
NoteKeeper Backend — Application Package Initializer
====================================================

What: Marks the `notekeeper` directory as a Python package.
Who:  Used by uvicorn (`notekeeper.main:app`), pytest and the console script.

Architecture Note:
    The backend is split into three layers plus the ambient modules:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP resources)      │  ← validation, status codes, envelopes
    ├─────────────────────────────────────┤
    │         Services (delegation)       │  ← fault-injection seam on update
    ├─────────────────────────────────────┤
    │     Repository (map + JSON file)    │  ← load-on-start, write-through
    └─────────────────────────────────────┘

    Config, exceptions, middleware and schemas are shared by all layers.
"""

__version__ = "1.0.0"
