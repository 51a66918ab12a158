"""Legal document endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import AdminUser, DatabaseSession, log_action
from app.schemas.base import (
    MessageResponse,
    PaginatedResponse,
    SuccessResponse,
    build_pagination,
)
from app.schemas.legal import (
    Language,
    LegalDocumentCreate,
    LegalDocumentResponse,
    LegalDocumentUpdate,
    LegalKey,
)
from app.services.legal_service import LegalService

router = APIRouter()

LegalServiceDep = Annotated[LegalService, Depends(LegalService)]
SingleDocument = SuccessResponse[LegalDocumentResponse]


@router.get("/kvkk/current", response_model=SingleDocument)
async def current_kvkk(
    db: DatabaseSession,
    service: LegalServiceDep,
    language: Language = Query("tr"),
):
    """The KVKK text users consent to at registration."""
    document = await service.get_active(db, "kvkk", language)
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.get("/admin/all", response_model=PaginatedResponse[LegalDocumentResponse])
async def list_legal_documents(
    db: DatabaseSession,
    service: LegalServiceDep,
    admin: AdminUser,
    key: LegalKey | None = Query(None),
    language: Language | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """Every document version."""
    items, total = await service.list_documents(
        db, page=page, limit=limit, key=key, language=language
    )
    return PaginatedResponse[LegalDocumentResponse](
        items=[LegalDocumentResponse.model_validate(d) for d in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.get("/admin/{document_id}", response_model=SingleDocument)
async def get_legal_document(
    document_id: int, db: DatabaseSession, service: LegalServiceDep, admin: AdminUser
):
    """Get a document version by ID."""
    document = await service.get_document(db, document_id)
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.get("/{key}", response_model=SingleDocument)
async def get_active_document(
    key: str,
    db: DatabaseSession,
    service: LegalServiceDep,
    language: Language = Query("tr"),
):
    """
    Active version of a document.

    - **key**: kvkk, privacy or terms
    """
    document = await service.get_active(db, key, language)
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.post(
    "/",
    response_model=SingleDocument,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_LEGAL_DOCUMENT"))],
)
async def create_legal_document(
    data: LegalDocumentCreate, db: DatabaseSession, service: LegalServiceDep, admin: AdminUser
):
    """Create a document version. An active version replaces the current one."""
    document = await service.create_document(db, data, created_by=admin["id"])
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.put(
    "/{document_id}",
    response_model=SingleDocument,
    dependencies=[Depends(log_action("UPDATE_LEGAL_DOCUMENT"))],
)
async def update_legal_document(
    document_id: int,
    data: LegalDocumentUpdate,
    db: DatabaseSession,
    service: LegalServiceDep,
    admin: AdminUser,
):
    """Edit a document version."""
    document = await service.update_document(db, document_id, data)
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.patch(
    "/{document_id}/activate",
    response_model=SingleDocument,
    dependencies=[Depends(log_action("ACTIVATE_LEGAL_DOCUMENT"))],
)
async def activate_legal_document(
    document_id: int, db: DatabaseSession, service: LegalServiceDep, admin: AdminUser
):
    """Make a version the active one for its key and language."""
    document = await service.activate_document(db, document_id)
    return SingleDocument(data=LegalDocumentResponse.model_validate(document))


@router.delete(
    "/{document_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_LEGAL_DOCUMENT"))],
)
async def delete_legal_document(
    document_id: int, db: DatabaseSession, service: LegalServiceDep, admin: AdminUser
):
    """Delete a document version."""
    await service.delete_document(db, document_id)
    return MessageResponse(message="Legal document deleted successfully")
