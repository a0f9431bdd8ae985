"""File-backed document service: uploads, downloads, deletes and stats."""

from .seed import seed_sample_data
from .service import PDF_CONTENT_TYPE, DocumentService
from .stats import DemoMetrics, LibraryStats, collect_stats

__all__ = [
    "PDF_CONTENT_TYPE",
    "DemoMetrics",
    "DocumentService",
    "LibraryStats",
    "collect_stats",
    "seed_sample_data",
]
