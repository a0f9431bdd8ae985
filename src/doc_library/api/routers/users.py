from fastapi import APIRouter, Depends

from doc_library.api.deps import get_document_service
from doc_library.documents import DocumentService
from doc_library.records import User, UserCreate

ROUTER_PREFIX = "/users"
ROUTER_TAG = "Users"

router = APIRouter()


@router.post("", response_model=User, status_code=201)
async def register_user(
    payload: UserCreate,
    service: DocumentService = Depends(get_document_service),
) -> User:
    """Register a user. Emails are unique (exact match)."""
    return service.register_user(payload)


@router.get("", response_model=list[User])
async def list_users(service: DocumentService = Depends(get_document_service)) -> list[User]:
    return service.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, service: DocumentService = Depends(get_document_service)) -> User:
    return service.get_user(user_id)
