"""JSON documents router."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from backend.core.dependencies import get_document_store, get_principal, http_error
from backend.core.documents import DOCUMENT_NOT_FOUND, DocumentStore
from backend.core.errors import JsonStudioError
from backend.core.identity import Principal
from backend.core.timestamps import as_utc
from backend.models.json_document import JsonDocument
from backend.schemas.document import (
    DocumentCreate,
    DocumentCreatedResponse,
    DocumentResponse,
    DocumentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _to_response(document: JsonDocument) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        owner_id=document.owner_id,
        name=document.name,
        content=document.content,
        description=document.description,
        created_at=as_utc(document.created_at).isoformat(),
        updated_at=as_utc(document.updated_at).isoformat(),
    )


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    principal: Annotated[Principal | None, Depends(get_principal)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> list[DocumentResponse]:
    """List the caller's documents, newest first.

    Unauthenticated callers get an empty list rather than an error.
    """
    return [_to_response(document) for document in store.list(principal)]


@router.post("", response_model=DocumentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    principal: Annotated[Principal | None, Depends(get_principal)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentCreatedResponse:
    """Create a new document.

    Args:
        document_data: Name, JSON content and optional description
        principal: Resolved caller
        store: Document store

    Returns:
        DocumentCreatedResponse: Id of the created document

    Raises:
        HTTPException: 401 if the caller is not authenticated
    """
    try:
        document_id = store.create(
            principal,
            name=document_data.name,
            content=document_data.content,
            description=document_data.description,
        )
    except JsonStudioError as e:
        raise http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return DocumentCreatedResponse(id=document_id)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: UUID,
    principal: Annotated[Principal | None, Depends(get_principal)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentResponse:
    """Get one document.

    Raises:
        HTTPException: 404 if the document is missing, belongs to another user,
            or the caller is not authenticated
    """
    document = store.get(principal, document_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)
    return _to_response(document)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: UUID,
    document_data: DocumentUpdate,
    principal: Annotated[Principal | None, Depends(get_principal)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentResponse:
    """Partially update a document.

    Only keys present in the request body are changed.

    Raises:
        HTTPException: 401 if unauthenticated, 404 if missing or not owned
    """
    try:
        store.update(principal, document_id, document_data.to_patch())
    except JsonStudioError as e:
        raise http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return _to_response(store.get(principal, document_id))


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    principal: Annotated[Principal | None, Depends(get_principal)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> None:
    """Delete a document permanently.

    Raises:
        HTTPException: 401 if unauthenticated, 404 if missing or not owned
    """
    try:
        store.remove(principal, document_id)
    except JsonStudioError as e:
        raise http_error(e) from e
