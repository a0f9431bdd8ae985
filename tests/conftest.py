"""
Root conftest.py for doc-library tests.

Provides:
1. Marker registration
2. Fresh record store / storage backend / service per test
3. FastAPI app and async client wired to those collaborators
4. Sample catalogue and PDF payload helpers
"""

from __future__ import annotations

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from doc_library.api import create_app
from doc_library.app.settings import LibrarySettings
from doc_library.documents import DemoMetrics, DocumentService
from doc_library.documents.seed import SAMPLE_DOCUMENTS, minimal_pdf
from doc_library.records import DocumentCreate, RecordStore
from doc_library.storage import LocalBackend, MemoryBackend


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up
    for name, desc in [
        ("records", "Record store tests"),
        ("storage", "Storage backend tests"),
        ("documents", "Document service tests"),
        ("api", "HTTP API tests"),
        ("acceptance", "End-to-end API behaviour"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# CORE FIXTURES
# =============================================================================


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def memory_storage() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def local_storage(tmp_path) -> LocalBackend:
    return LocalBackend(tmp_path / "uploads")


@pytest.fixture(params=["memory", "local"])
def any_storage(request, tmp_path):
    """Run a test once per storage backend."""
    if request.param == "memory":
        return MemoryBackend()
    return LocalBackend(tmp_path / "uploads")


@pytest.fixture
def service(store, memory_storage) -> DocumentService:
    return DocumentService(store, memory_storage)


@pytest.fixture
def pdf_bytes() -> bytes:
    return minimal_pdf("Test")


@pytest.fixture
def catalog(store):
    """The sample catalogue recorded straight into the store (no files)."""
    docs = []
    for i, data in enumerate(SAMPLE_DOCUMENTS):
        docs.append(
            store.create_document(
                DocumentCreate.model_validate(data),
                f"file-{i}.pdf",
                f"/uploads/file-{i}.pdf",
                1000 + i,
            )
        )
    return docs


# =============================================================================
# FASTAPI APP FIXTURES
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> LibrarySettings:
    return LibrarySettings(storage_root=str(tmp_path / "uploads"), _env_file=None)


@pytest.fixture
def app(settings, store, local_storage):
    return create_app(
        settings,
        store=store,
        storage=local_storage,
        demo_metrics=DemoMetrics(random.Random(7)),
    )


@pytest_asyncio.fixture
async def client(app) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
