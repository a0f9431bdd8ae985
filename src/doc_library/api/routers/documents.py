from __future__ import annotations

import re
import unicodedata
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from doc_library.api.deps import get_document_service
from doc_library.documents import PDF_CONTENT_TYPE, DocumentService
from doc_library.exceptions import ValidationError
from doc_library.records import Document

ROUTER_PREFIX = "/documents"
ROUTER_TAG = "Documents"

router = APIRouter()

_UNSAFE_HEADER_CHARS = re.compile(r'[\r\n"\\]')


def attachment_disposition(title: str) -> str:
    """``attachment`` header naming the download ``<title>.pdf``.

    Latin titles keep an ASCII fallback in ``filename``; the exact title goes
    in the RFC 5987 ``filename*`` parameter.
    """
    filename = _UNSAFE_HEADER_CHARS.sub("", f"{title}.pdf")
    fallback = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    fallback = fallback if fallback.strip(" .") and fallback != ".pdf" else "document.pdf"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.post("", response_model=Document)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    keywords: Optional[str] = Form(None),
    uploaded_by: Optional[str] = Form(None, alias="uploadedBy"),
    service: DocumentService = Depends(get_document_service),
) -> Document:
    """Upload a PDF with catalogue metadata (multipart/form-data).

    Example:
        ```bash
        curl -X POST http://localhost:8000/api/documents \\
          -F "title=El Aleph" -F "author=Jorge Luis Borges" -F "category=cuento" \\
          -F "file=@aleph.pdf;type=application/pdf"
        ```
    """
    if file is None:
        raise ValidationError("No file uploaded")
    metadata = {
        "title": title,
        "author": author,
        "category": category,
        "year": year,
        "description": description,
        "keywords": keywords,
        "uploadedBy": uploaded_by,
    }
    return await service.upload(
        {k: v for k, v in metadata.items() if v is not None},
        file,
        filename=file.filename,
        content_type=file.content_type,
        size=file.size,
    )


@router.get("", response_model=list[Document])
async def list_documents(
    search: Optional[str] = None,
    category: Optional[str] = None,
    service: DocumentService = Depends(get_document_service),
) -> list[Document]:
    """List the catalogue, optionally filtered.

    ``search`` is a case-insensitive substring of title, author, keywords or
    description; ``category`` must match exactly.
    """
    return service.search(search, category)


@router.get("/{document_id}", response_model=Document)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Document:
    return service.get_document(document_id)


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    document, stream = await service.open_download(document_id)
    return StreamingResponse(
        stream,
        media_type=PDF_CONTENT_TYPE,
        headers={
            "Content-Disposition": attachment_disposition(document.title),
            "Content-Length": str(document.file_size),
        },
    )


@router.delete("/{document_id}")
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    if await service.delete(document_id):
        return JSONResponse({"message": "Document deleted successfully"})
    return JSONResponse(status_code=500, content={"message": "Failed to delete document"})
