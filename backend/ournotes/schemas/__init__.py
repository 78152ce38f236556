"""Pydantic request/response schemas (see note.py)."""
