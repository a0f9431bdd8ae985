import random

import pytest

from doc_library.documents import DemoMetrics, collect_stats, seed_sample_data
from doc_library.documents.seed import SAMPLE_DOCUMENTS, SAMPLE_USERS, minimal_pdf
from doc_library.documents.stats import human_size, storage_used


@pytest.mark.documents
@pytest.mark.parametrize(
    "num_bytes,expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
        (3 * 1024**3, "3.0 GB"),
    ],
)
def test_human_size(num_bytes, expected):
    assert human_size(num_bytes) == expected


@pytest.mark.documents
def test_demo_downloads_in_range():
    demo = DemoMetrics(random.Random(1))
    values = [demo.today_downloads() for _ in range(200)]
    assert all(100 <= v <= 599 for v in values)


@pytest.mark.documents
class TestCollectStats:
    def test_empty_library(self, store):
        stats = collect_stats(store, DemoMetrics(random.Random(3)))

        assert stats.total_users == 0
        assert stats.total_documents == 0
        assert stats.storage == "0 B"

    def test_counts_and_storage(self, store, catalog):
        stats = collect_stats(store)

        assert stats.total_documents == len(catalog)
        assert stats.storage == storage_used(catalog)
        assert stats.storage == human_size(sum(1000 + i for i in range(len(catalog))))

    def test_serialises_camel_case(self, store):
        body = collect_stats(store, DemoMetrics(random.Random(3))).model_dump(by_alias=True)
        assert set(body) == {"totalUsers", "totalDocuments", "todayDownloads", "storage"}


@pytest.mark.documents
def test_minimal_pdf_shape():
    data = minimal_pdf("Hola (mundo)")

    assert data.startswith(b"%PDF-1.4")
    assert data.rstrip().endswith(b"%%EOF")
    assert b"\\(mundo\\)" in data
    assert b"startxref" in data


@pytest.mark.documents
@pytest.mark.asyncio
async def test_seed_uploads_every_sample(service, store, memory_storage):
    await seed_sample_data(service, random.Random(0))

    users = store.list_users()
    documents = store.list_documents()
    assert len(users) == len(SAMPLE_USERS) == 3
    assert len(documents) == len(SAMPLE_DOCUMENTS) == 8

    user_ids = {u.id for u in users}
    names = await memory_storage.list_names()
    for doc in documents:
        assert doc.uploaded_by in user_ids
        assert doc.file_name in names
        assert doc.file_size == len(await memory_storage.read_bytes(doc.file_name))

    assert {d.title for d in store.search_documents("borges")} == {"El Aleph", "Ficciones"}
