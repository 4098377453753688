"""Extraction endpoints.

- POST /api/v1/extract: open a URL, run the content script, return job details
- GET  /api/v1/extractors: registered extractors in priority order
- POST /api/v1/extractors/resolve: which extractor would handle a URL
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter

from job_extractor.content.channel import MessageChannel
from job_extractor.content.script import ContentScript
from job_extractor.middleware.error_handler import (
    ExtractionFailedError,
    NoExtractorFoundError,
    UnexpectedExtractionError,
    ValidationError,
    error_envelope,
)
from job_extractor.models.job_details import JobDetails
from job_extractor.models.messages import Message, MessageType
from job_extractor.models.requests import ExtractRequest, ResolveRequest
from job_extractor.models.responses import ApiResponse, ExtractorInfo, ResolveResult
from job_extractor.models.validation import validate_job_details
from job_extractor.validators.url_validator import validate_url

if TYPE_CHECKING:
    from job_extractor.extractors.registry import ExtractorRegistry

# HTTP status for each content-script error type
_ERROR_STATUS = {
    cls.error_type: cls.status_code
    for cls in (NoExtractorFoundError, ExtractionFailedError, UnexpectedExtractionError)
}


def create_extract_router(
    *,
    registry: "ExtractorRegistry",
    browser_session: Any,
    channel: MessageChannel | None = None,
) -> APIRouter:
    """Factory that creates the extraction router with injected dependencies.

    Parameters
    ----------
    registry:
        Populated extractor registry shared by every request.
    browser_session:
        ``BrowserSession`` used to open pages.
    channel:
        Host messaging channel for ``CONTENT_SCRIPT_READY`` notifications.
    """
    extract_router = APIRouter(prefix="/api/v1", tags=["extract"])

    @extract_router.post("/extract")
    async def extract(body: ExtractRequest) -> Any:
        """Load *url* and answer an ``EXTRACT_JOB_DETAILS`` request for it."""
        if not await validate_url(body.url):
            raise ValidationError("URL must be a public http(s) address", url=body.url)

        async with browser_session.open_page(body.url, wait_ms=body.wait_ms) as page:
            script = ContentScript(registry, page, channel)
            await script.start()
            result = await script.handle_message(
                Message(type=MessageType.EXTRACT_JOB_DETAILS.value)
            )

        if isinstance(result, JobDetails):
            return ApiResponse(
                success=True,
                data=result.to_message(),
                meta={"validation": validate_job_details(result).to_dict()},
            ).model_dump()

        return error_envelope(
            _ERROR_STATUS.get(result.error_type, 500),
            result.message,
            meta={"error_type": result.error_type},
        )

    @extract_router.get("/extractors")
    async def list_extractors() -> dict:
        """List registered extractors in priority order."""
        return ApiResponse[list[ExtractorInfo]](
            success=True,
            data=[
                ExtractorInfo(
                    id=e.id,
                    name=e.name,
                    url_patterns=[p.pattern for p in e.url_patterns],
                )
                for e in registry
            ],
        ).model_dump()

    @extract_router.post("/extractors/resolve")
    async def resolve(body: ResolveRequest) -> dict:
        """Return the id of the extractor that would handle *url*."""
        extractor = registry.find_extractor(body.url)
        if extractor is None:
            raise NoExtractorFoundError(url=body.url)
        return ApiResponse[ResolveResult](
            success=True,
            data=ResolveResult(extractor_id=extractor.id, name=extractor.name),
        ).model_dump()

    return extract_router
