"""JSON generation orchestration.

Sequence for one request:

1. open a pending record (committed before the provider is contacted),
2. call the provider,
3. strip one layer of code fences and validate the text as JSON,
4. close the record with exactly one of ``complete`` / ``set_error``,
5. optionally store the JSON as a new document.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from backend.core.documents import DocumentStore
from backend.core.errors import ExternalServiceFailure, InvalidGeneratedContent
from backend.core.generations import GenerationTracker
from backend.core.identity import Principal
from backend.core.llm_provider import LLMConfig, LLMProvider, LLMProviderError
from backend.core.prompt_templates import get_json_generation_system_prompt
from backend.core.timestamps import Clock, utcnow
from backend.models.generation import STATUS_COMPLETED

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Generated content is not valid JSON. Please try again with a clearer prompt."


def strip_code_fences(text: str) -> str:
    """Remove a single leading ```json / ``` fence and a trailing ``` fence."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def validate_json_text(text: str) -> str:
    """Return the text unchanged if it parses as strict JSON.

    NaN, Infinity and -Infinity are rejected.

    Raises:
        InvalidGeneratedContent: If the text is empty or not valid JSON
    """
    try:
        json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError) as e:
        raise InvalidGeneratedContent(INVALID_JSON_MESSAGE) from e
    return text


def generated_document_name(moment: datetime) -> str:
    """Name used when a generated result is saved: ``generated-<unix ms>.json``."""
    return f"generated-{int(moment.timestamp() * 1000)}.json"


@dataclass
class GenerationOutcome:
    """Result of a successful orchestrated generation."""

    generation_id: UUID
    status: str
    result: str
    model: str
    total_tokens: int
    document_id: Optional[UUID] = None


class JsonGenerationOrchestrator:
    """Runs a prompt through the provider and records the outcome."""

    def __init__(
        self,
        tracker: GenerationTracker,
        documents: DocumentStore,
        provider: LLMProvider,
        clock: Clock = utcnow,
        config: Optional[LLMConfig] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            tracker: Generation tracker bound to the request session
            documents: Document store bound to the request session
            provider: Text generation provider
            clock: Source of the current UTC time, used for saved document names
            config: Optional generation parameters passed to the provider
        """
        self.tracker = tracker
        self.documents = documents
        self.provider = provider
        self._clock = clock
        self.config = config

    async def run(
        self,
        principal: Principal | None,
        prompt: str,
        save: bool = False,
        instructions: Optional[str] = None,
    ) -> GenerationOutcome:
        """Generate JSON for a prompt and record the attempt.

        Args:
            principal: Resolved caller, or None
            prompt: Description of the JSON to generate
            save: Store the generated JSON as a document when it succeeds
            instructions: Optional extra guidance for the system prompt

        Returns:
            GenerationOutcome: The completed generation (and saved document id)

        Raises:
            Unauthenticated: If there is no principal (nothing is recorded)
            ExternalServiceFailure: If the provider fails (recorded as error)
            InvalidGeneratedContent: If the provider output is not JSON (recorded as error)
        """
        generation_id = self.tracker.create(principal, prompt)

        try:
            response = await self.provider.generate_async(
                prompt=prompt,
                system_prompt=get_json_generation_system_prompt(instructions),
                config=self.config,
            )
        except LLMProviderError as e:
            logger.error(f"Provider call failed for generation {generation_id}: {e}")
            self.tracker.set_error(principal, generation_id, str(e))
            raise ExternalServiceFailure(str(e)) from e
        except Exception as e:
            logger.exception(f"Unexpected error in provider call for generation {generation_id}: {e}")
            message = f"Unexpected error: {e}"
            self.tracker.set_error(principal, generation_id, message)
            raise ExternalServiceFailure(message) from e

        cleaned = strip_code_fences(response.text)
        try:
            validate_json_text(cleaned)
        except InvalidGeneratedContent as e:
            logger.warning(f"Generation {generation_id} produced invalid JSON ({len(cleaned)} chars)")
            self.tracker.set_error(principal, generation_id, str(e))
            raise

        self.tracker.complete(principal, generation_id, cleaned)

        document_id = None
        if save:
            document_id = self.documents.create(
                principal,
                name=generated_document_name(self._clock()),
                content=cleaned,
            )
            logger.info(f"Saved generation {generation_id} as document {document_id}")

        return GenerationOutcome(
            generation_id=generation_id,
            status=STATUS_COMPLETED,
            result=cleaned,
            model=response.model,
            total_tokens=response.total_tokens,
            document_id=document_id,
        )
