"""
OurNotes — Client Note Cache
==============================

What:  The client side of OurNotes: an in-memory copy of each note collection
       that talks to the Note Service over HTTP and keeps working offline by
       mirroring itself into a local key-value store.
How:   Build a NotesContext (create_context()), await initialize() once, then
       call add/update/delete/refresh on its caches.

Usage:
    async with create_context() as notes:
        await notes.initialize()
        await notes.shopping_notes.add("milk")
        print([n.text for n in notes.shopping_notes.notes])

Modules:
    api.py          httpx wrapper raising NetworkError
    local_store.py  directory-backed key-value store (aiofiles)
    models.py       client-side record shapes + snapshot codecs
    cache.py        NoteCache: per-kind refresh/add/delete/update
    context.py      NotesContext: the three caches, persist/restore, status
"""

from ournotes.client.context import NotesContext, create_context

__all__ = ["NotesContext", "create_context"]
