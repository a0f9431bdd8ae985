from fastapi import APIRouter, Depends

from doc_library.api.deps import get_demo_metrics, get_record_store
from doc_library.documents import DemoMetrics, LibraryStats, collect_stats
from doc_library.records import RecordStore

ROUTER_PREFIX = "/stats"
ROUTER_TAG = "Stats"

router = APIRouter()


@router.get("", response_model=LibraryStats)
async def get_stats(
    store: RecordStore = Depends(get_record_store),
    demo: DemoMetrics = Depends(get_demo_metrics),
) -> LibraryStats:
    """Dashboard summary. ``todayDownloads`` is illustrative only."""
    return collect_stats(store, demo)
