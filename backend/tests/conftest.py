"""
OurNotes — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── test_client: HTTPX AsyncClient over ASGITransport, backed by a
    │                freshly created SQLite schema
    ├── local_store: LocalStore in a temp directory
    └── fake_service: In-memory stand-in for the Note Service, served to the
                      client package through httpx.MockTransport
"""

import json
import os
import tempfile
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before ournotes.config is imported anywhere
_db_dir = tempfile.mkdtemp(prefix="ournotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# Note Service fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = MagicMock(rowcount=0)
        with pytest.raises(NotFoundError):
            await service.delete_note(mock_db_session, "missing")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    The three note tables are created before the test and dropped after it;
    the engine is disposed so no pooled connection outlives the test's
    event loop.
    """
    from ournotes.database import Base, create_tables, engine
    from ournotes.main import app

    await create_tables()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Client fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def local_store(tmp_path):
    from ournotes.client.local_store import LocalStore
    return LocalStore(tmp_path / "local")


class FakeNoteService:
    """
    Minimal in-memory Note Service for client tests.

    Set `offline = True` to make every request fail at the transport level,
    or put a status code in `fail_with` to answer every request with it.
    `calls` records (method, path, json) for each request received.
    """

    def __init__(self):
        self.rows: Dict[str, List[Dict[str, Any]]] = {
            "shopping-notes": [],
            "map-notes": [],
            "calendar-notes": [],
        }
        self.offline = False
        self.fail_with: Optional[int] = None
        self.calls: List[tuple] = []

    def seed(self, slug: str, text: str, **extra: Any) -> Dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "text": text,
            "created_at": datetime.now(timezone.utc).isoformat(),
            **extra,
        }
        self.rows[slug].append(row)
        return row

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = None
        if request.content:
            body = json.loads(request.content)
        self.calls.append((request.method, request.url.path, body))

        if self.offline:
            raise httpx.ConnectError("service unreachable", request=request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "Injected failure"})

        parts = request.url.path.strip("/").split("/")  # ["api", slug, (id)]
        slug = parts[1]
        rows = self.rows[slug]

        if request.method == "GET":
            return httpx.Response(200, json=list(reversed(rows)))
        if request.method == "POST":
            row = self.seed(slug, **body)
            return httpx.Response(201, json=row)

        note_id = parts[2]
        match = [row for row in rows if row["id"] == note_id]
        if not match:
            return httpx.Response(404, json={"error": "Note not found"})
        if request.method == "PUT":
            match[0].update(body)
            return httpx.Response(200, json={"id": note_id, **body, "success": True})
        rows.remove(match[0])
        return httpx.Response(200, json={"success": True})


@pytest.fixture
def fake_service():
    return FakeNoteService()


@pytest_asyncio.fixture
async def notes_context(fake_service, local_store):
    """NotesContext wired to FakeNoteService and a temp-dir LocalStore."""
    from ournotes.client.api import NotesApiClient
    from ournotes.client.context import NotesContext

    http = httpx.AsyncClient(
        transport=httpx.MockTransport(fake_service.handler),
        base_url="http://notes.test",
    )
    context = NotesContext(NotesApiClient("http://notes.test", http=http), local_store)
    yield context
    await context.aclose()
