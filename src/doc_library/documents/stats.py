from __future__ import annotations

import random
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from doc_library.records import Document, RecordStore


class LibraryStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_users: int
    total_documents: int
    today_downloads: int
    storage: str


class DemoMetrics:
    """Illustrative figures for the admin dashboard.

    Nothing here is tracked. ``today_downloads`` is a random number so the
    dashboard has something to render; do not test it beyond its range.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def today_downloads(self) -> int:
        return self._rng.randint(100, 599)


def human_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f} {unit}"


def storage_used(documents: Iterable[Document]) -> str:
    return human_size(sum(doc.file_size for doc in documents))


def collect_stats(store: RecordStore, demo: Optional[DemoMetrics] = None) -> LibraryStats:
    demo = demo or DemoMetrics()
    documents = store.list_documents()
    return LibraryStats(
        total_users=store.count_users(),
        total_documents=len(documents),
        today_downloads=demo.today_downloads(),
        storage=storage_used(documents),
    )
