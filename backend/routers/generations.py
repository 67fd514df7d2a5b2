"""JSON generation router."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from backend.core.dependencies import (
    get_document_store,
    get_generation_tracker,
    get_principal,
    http_error,
)
from backend.core.documents import DocumentStore
from backend.core.errors import JsonStudioError
from backend.core.generations import GenerationTracker
from backend.core.identity import Principal
from backend.core.json_generation import JsonGenerationOrchestrator
from backend.core.llm_provider import LLMProvider
from backend.core.providers import get_llm_provider
from backend.core.timestamps import as_utc
from backend.models.generation import Generation
from backend.schemas.generation import (
    GenerationComplete,
    GenerationCreate,
    GenerationCreatedResponse,
    GenerationFail,
    GenerationRecordResponse,
    GenerationRunRequest,
    GenerationRunResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generations", tags=["generations"])


def _to_response(generation: Generation) -> GenerationRecordResponse:
    return GenerationRecordResponse(
        id=generation.id,
        owner_id=generation.owner_id,
        prompt=generation.prompt,
        status=generation.status,
        result=generation.result,
        error=generation.error,
        created_at=as_utc(generation.created_at).isoformat(),
    )


@router.get("", response_model=list[GenerationRecordResponse])
async def list_generations(
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
) -> list[GenerationRecordResponse]:
    """List the caller's most recent generations, newest first.

    Unauthenticated callers get an empty list rather than an error.
    """
    return [_to_response(generation) for generation in tracker.list(principal)]


@router.post("", response_model=GenerationCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_generation(
    generation_request: GenerationCreate,
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
) -> GenerationCreatedResponse:
    """Open a pending generation record for a client-side generation.

    The client calls the provider itself and then reports back through
    ``/complete`` or ``/error``.

    Raises:
        HTTPException: 401 if the caller is not authenticated
    """
    try:
        generation_id = tracker.create(principal, generation_request.prompt)
    except JsonStudioError as e:
        raise http_error(e) from e

    return GenerationCreatedResponse(id=generation_id)


@router.post("/run", response_model=GenerationRunResponse, status_code=status.HTTP_201_CREATED)
async def run_generation(
    run_request: GenerationRunRequest,
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
    store: Annotated[DocumentStore, Depends(get_document_store)],
    provider: Annotated[LLMProvider, Depends(get_llm_provider)],
) -> GenerationRunResponse:
    """Generate JSON on the server and record the outcome.

    Failures are recorded on the generation before the error is returned:
    502 when the provider fails, 422 when it returns text that is not JSON.

    Raises:
        HTTPException: 401 if unauthenticated, 422 or 502 on generation failure
    """
    orchestrator = JsonGenerationOrchestrator(tracker=tracker, documents=store, provider=provider)
    try:
        outcome = await orchestrator.run(
            principal,
            run_request.prompt,
            save=run_request.save,
            instructions=run_request.instructions,
        )
    except JsonStudioError as e:
        raise http_error(e) from e

    return GenerationRunResponse(
        generation_id=outcome.generation_id,
        status=outcome.status,
        result=outcome.result,
        model=outcome.model,
        tokens_used=outcome.total_tokens,
        document_id=outcome.document_id,
    )


@router.get("/{generation_id}", response_model=GenerationRecordResponse)
async def get_generation(
    generation_id: UUID,
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
) -> GenerationRecordResponse:
    """Get one generation record.

    Raises:
        HTTPException: 404 if missing, not owned, or unauthenticated
    """
    generation = tracker.get(principal, generation_id)
    if generation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Generation not found")
    return _to_response(generation)


@router.post("/{generation_id}/complete", response_model=GenerationRecordResponse)
async def complete_generation(
    generation_id: UUID,
    completion: GenerationComplete,
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
) -> GenerationRecordResponse:
    """Record the result of a pending generation.

    Raises:
        HTTPException: 401 if unauthenticated, 404 if missing or not owned,
            409 if the generation already finished
    """
    try:
        tracker.complete(principal, generation_id, completion.result)
    except JsonStudioError as e:
        raise http_error(e) from e

    return _to_response(tracker.get(principal, generation_id))


@router.post("/{generation_id}/error", response_model=GenerationRecordResponse)
async def fail_generation(
    generation_id: UUID,
    failure: GenerationFail,
    principal: Annotated[Principal | None, Depends(get_principal)],
    tracker: Annotated[GenerationTracker, Depends(get_generation_tracker)],
) -> GenerationRecordResponse:
    """Record the failure of a pending generation.

    Raises:
        HTTPException: 401 if unauthenticated, 404 if missing or not owned,
            409 if the generation already finished
    """
    try:
        tracker.set_error(principal, generation_id, failure.error)
    except JsonStudioError as e:
        raise http_error(e) from e

    return _to_response(tracker.get(principal, generation_id))
