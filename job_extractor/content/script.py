"""Content-script orchestrator.

Bridges a loaded page and the host runtime's messaging channel. On start
it announces itself with ``CONTENT_SCRIPT_READY``. For each
``EXTRACT_JOB_DETAILS`` request it resolves an extractor for the page URL,
runs it against the page and answers with either a ``JobDetails`` record
or an ``ErrorResponse``. Other message types get no response so that
other listeners can handle them.

States: IDLE -> EXTRACTING -> IDLE. The script stays EXTRACTING while any
request is in flight and always returns to IDLE, whatever the outcome.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from job_extractor.content.channel import MessageChannel, NullMessageChannel
from job_extractor.middleware.error_handler import (
    ExtractionFailedError,
    NoExtractorFoundError,
    UnexpectedExtractionError,
)
from job_extractor.models.job_details import JobDetails
from job_extractor.models.messages import ErrorResponse, Message, MessageType
from job_extractor.models.validation import validate_job_details

if TYPE_CHECKING:
    from playwright.async_api import Page

    from job_extractor.extractors.registry import ExtractorRegistry

logger = logging.getLogger(__name__)


class ScriptState(str, Enum):
    """Lifecycle state of a content script."""

    IDLE = "idle"
    EXTRACTING = "extracting"


class ContentScript:
    """Message-driven extraction entry point for one loaded page.

    Parameters
    ----------
    registry:
        Extractor registry, fully populated before the script starts.
    page:
        The loaded page the script runs in. Never mutated.
    channel:
        Host messaging channel for outbound notifications.
    """

    def __init__(
        self,
        registry: "ExtractorRegistry",
        page: "Page",
        channel: MessageChannel | None = None,
    ) -> None:
        self._registry = registry
        self._page = page
        self._channel = channel or NullMessageChannel()
        self._in_flight = 0

    @property
    def state(self) -> ScriptState:
        return ScriptState.EXTRACTING if self._in_flight else ScriptState.IDLE

    async def start(self) -> None:
        """Announce readiness to the host runtime.

        Fire-and-forget: a failed notification is logged and otherwise
        ignored.
        """
        logger.info(
            "Content script loaded on %s with extractors %s",
            self._page.url,
            [e.id for e in self._registry],
            extra={"target_url": self._page.url},
        )
        try:
            await self._channel.send(Message(type=MessageType.CONTENT_SCRIPT_READY.value))
        except Exception as exc:
            logger.info(
                "Could not notify host that the content script is ready: %s",
                exc,
            )

    async def handle_message(
        self, message: Message | dict[str, Any]
    ) -> JobDetails | ErrorResponse | None:
        """Dispatch an inbound message.

        Returns ``None`` for any message this script does not handle,
        including malformed envelopes.
        """
        if not isinstance(message, Message):
            try:
                message = Message.model_validate(message)
            except PydanticValidationError:
                logger.debug("Ignoring malformed message %r", message)
                return None

        if message.type != MessageType.EXTRACT_JOB_DETAILS.value:
            logger.debug("Ignoring message with type '%s'", message.type)
            return None

        return await self.extract_job_details()

    async def respond(self, message: Message | dict[str, Any]) -> dict | None:
        """Like :meth:`handle_message`, serialized for the message channel."""
        result = await self.handle_message(message)
        if result is None:
            return None
        return result.to_message()

    async def extract_job_details(self) -> JobDetails | ErrorResponse:
        """Extract job details from the page, normalizing every failure."""
        self._in_flight += 1
        try:
            return await self._run_extraction()
        finally:
            self._in_flight -= 1

    async def _run_extraction(self) -> JobDetails | ErrorResponse:
        url = self._page.url
        started = time.monotonic()

        extractor = self._registry.find_extractor(url)
        if extractor is None:
            error = NoExtractorFoundError()
            logger.error(error.message, extra={"target_url": url})
            return error.to_response()

        log_extra = {"target_url": url, "extractor_id": extractor.id}
        logger.info("Extracting with '%s'", extractor.id, extra=log_extra)

        try:
            details = await extractor.extract(self._page)
        except Exception as exc:
            error = UnexpectedExtractionError.from_exception(exc)
            logger.error(
                "Extractor '%s' raised during extraction",
                extractor.id,
                exc_info=True,
                extra={**log_extra, "error_reason": error.message},
            )
            return error.to_response()

        if details is None:
            error = ExtractionFailedError()
            logger.warning(
                "Extractor '%s' found no job details",
                extractor.id,
                extra={**log_extra, "error_reason": error.message},
            )
            return error.to_response()

        validation = validate_job_details(details)
        if not validation.valid:
            logger.info(
                "Extracted job details need manual completion: %s",
                [e.field for e in validation.errors],
                extra=log_extra,
            )

        logger.info(
            "Extraction complete",
            extra={
                **log_extra,
                "platform": details.platform,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
                "fields_extracted": _count_fields(details),
            },
        )
        return details


def _count_fields(details: JobDetails) -> int:
    values = (details.title, details.company, details.location, details.description)
    return sum(1 for value in values if value) + (1 if details.skills else 0)
