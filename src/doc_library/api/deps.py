"""FastAPI dependencies resolving per-app collaborators from ``app.state``."""

from fastapi import Request

from doc_library.documents import DemoMetrics, DocumentService
from doc_library.records import RecordStore


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.documents


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_demo_metrics(request: Request) -> DemoMetrics:
    return request.app.state.demo_metrics
