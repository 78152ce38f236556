"""Note ORM models (see note.py)."""
