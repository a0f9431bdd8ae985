"""Raw access to stored uploads by generated file name.

No record lookup and no access control: names are unguessable, not secret.
"""

import mimetypes

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from doc_library.api.deps import get_document_service
from doc_library.documents import DocumentService

router = APIRouter(prefix="/uploads", tags=["Files"])


@router.get("/{filename}")
async def serve_stored_file(
    filename: str,
    service: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    stream = await service.open_stored_file(filename)
    media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return StreamingResponse(stream, media_type=media_type)
