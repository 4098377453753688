"""Unit tests for the ContentScript message orchestrator."""

from __future__ import annotations

import asyncio
import re

import pytest
from fakes import FakeElement, FakePage

from job_extractor.content.channel import MessageChannel
from job_extractor.content.script import ContentScript, ScriptState
from job_extractor.extractors.base import BaseExtractor
from job_extractor.extractors.registry import ExtractorRegistry
from job_extractor.models.job_details import JobDetails
from job_extractor.models.messages import ErrorResponse, Message, MessageType

_LINKEDIN_URL = "https://www.linkedin.com/jobs/view/3791234567"
_OTHER_URL = "https://careers.example.com/jobs/42"

_EXTRACT = {"type": "EXTRACT_JOB_DETAILS"}


class _RecordingChannel(MessageChannel):
    def __init__(self) -> None:
        self.sent: list[Message] = []

    async def send(self, message: Message) -> None:
        self.sent.append(message)


class _BrokenChannel(MessageChannel):
    async def send(self, message: Message) -> None:
        raise ConnectionError("Receiving end does not exist")


class _RaisingExtractor(BaseExtractor):
    id = "raising"
    name = "Raising"
    url_patterns = (re.compile(r"^https?://"),)

    def __init__(self, exc: BaseException) -> None:
        super().__init__()
        self._exc = exc

    async def extract(self, page):
        raise self._exc


class _EmptyExtractor(BaseExtractor):
    id = "empty"
    name = "Empty"
    url_patterns = (re.compile(r"^https?://"),)

    async def extract(self, page):
        return None


class _BlockingExtractor(BaseExtractor):
    id = "blocking"
    name = "Blocking"
    url_patterns = (re.compile(r"^https?://"),)

    def __init__(self) -> None:
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def extract(self, page):
        self.entered.set()
        await self.release.wait()
        return self.build_details(page.url, title="Engineer")


def _single(extractor: BaseExtractor) -> ExtractorRegistry:
    registry = ExtractorRegistry()
    registry.register(extractor)
    return registry


def _linkedin_page() -> FakePage:
    return FakePage(
        _LINKEDIN_URL,
        {
            ".topcard__title": FakeElement("Senior Engineer"),
            ".topcard__org-name-link": FakeElement("Acme Co"),
            ".description__text": FakeElement("Design and build distributed systems."),
        },
    )


class TestStart:
    @pytest.mark.asyncio
    async def test_announces_ready(self, registry: ExtractorRegistry):
        channel = _RecordingChannel()
        script = ContentScript(registry, FakePage(_OTHER_URL), channel)

        await script.start()

        assert [m.type for m in channel.sent] == [MessageType.CONTENT_SCRIPT_READY.value]
        assert channel.sent[0].to_message() == {"type": "CONTENT_SCRIPT_READY"}

    @pytest.mark.asyncio
    async def test_ready_failure_is_swallowed(self, registry: ExtractorRegistry):
        script = ContentScript(registry, FakePage(_OTHER_URL), _BrokenChannel())

        await script.start()

        assert script.state is ScriptState.IDLE

    @pytest.mark.asyncio
    async def test_defaults_to_null_channel(self, registry: ExtractorRegistry):
        await ContentScript(registry, FakePage(_OTHER_URL)).start()


class TestHandleMessage:
    @pytest.mark.asyncio
    async def test_linkedin_page_extracts_job_details(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, JobDetails)
        assert result.title == "Senior Engineer"
        assert result.company == "Acme Co"
        assert result.platform == "linkedin"
        assert result.url == _LINKEDIN_URL

    @pytest.mark.asyncio
    async def test_accepts_message_models(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        result = await script.handle_message(
            Message(type=MessageType.EXTRACT_JOB_DETAILS.value)
        )

        assert isinstance(result, JobDetails)

    @pytest.mark.asyncio
    async def test_unmatched_url_falls_back_to_manual(self, registry: ExtractorRegistry):
        page = FakePage(_OTHER_URL, title="Backend Developer at Example")
        script = ContentScript(registry, page)

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, JobDetails)
        assert result.platform == "manual"
        assert result.is_manual is True
        assert result.title == "Backend Developer at Example"

    @pytest.mark.asyncio
    async def test_fallback_on_bare_page_is_empty_record(self, registry: ExtractorRegistry):
        script = ContentScript(registry, FakePage(_OTHER_URL))

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, JobDetails)
        assert result.platform == "manual"
        assert result.title == ""
        assert result.company == ""

    @pytest.mark.asyncio
    async def test_no_extractor_found(self):
        script = ContentScript(ExtractorRegistry(), FakePage(_OTHER_URL))

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, ErrorResponse)
        assert result.error_type == "NoExtractorFound"
        assert result.message == "No suitable extractor found for this page"

    @pytest.mark.asyncio
    async def test_extractor_returning_none_is_extraction_failed(self):
        script = ContentScript(_single(_EmptyExtractor()), FakePage(_OTHER_URL))

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, ErrorResponse)
        assert result.error_type == "ExtractionFailed"
        assert result.message == "Failed to extract job details from the page"

    @pytest.mark.asyncio
    async def test_thrown_message_is_preserved(self):
        registry = _single(_RaisingExtractor(RuntimeError("DOM detached")))
        script = ContentScript(registry, FakePage(_OTHER_URL))

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, ErrorResponse)
        assert result.message == "DOM detached"
        assert result.error_type == "UnexpectedExtractionError"

    @pytest.mark.asyncio
    async def test_thrown_without_message_uses_default(self):
        registry = _single(_RaisingExtractor(RuntimeError()))
        script = ContentScript(registry, FakePage(_OTHER_URL))

        result = await script.handle_message(_EXTRACT)

        assert isinstance(result, ErrorResponse)
        assert result.message == "Unknown error during job extraction"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            {"type": "SOMETHING_ELSE"},
            {"type": "CONTENT_SCRIPT_READY"},
            {"type": "extract_job_details"},
            {"payload": {"x": 1}},
            {},
        ],
    )
    async def test_other_messages_get_no_response(
        self, registry: ExtractorRegistry, message: dict
    ):
        page = _linkedin_page()
        script = ContentScript(registry, page)

        assert await script.handle_message(message) is None
        assert page.queries == []

    @pytest.mark.asyncio
    async def test_payload_is_ignored(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        result = await script.handle_message(
            {"type": "EXTRACT_JOB_DETAILS", "payload": {"url": "https://ignored"}}
        )

        assert isinstance(result, JobDetails)
        assert result.url == _LINKEDIN_URL


class TestState:
    @pytest.mark.asyncio
    async def test_idle_before_and_after_success(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        assert script.state is ScriptState.IDLE
        await script.handle_message(_EXTRACT)
        assert script.state is ScriptState.IDLE

    @pytest.mark.asyncio
    async def test_idle_after_failure(self):
        script = ContentScript(
            _single(_RaisingExtractor(ValueError("bad"))), FakePage(_OTHER_URL)
        )

        await script.handle_message(_EXTRACT)

        assert script.state is ScriptState.IDLE

    @pytest.mark.asyncio
    async def test_extracting_while_in_flight(self):
        extractor = _BlockingExtractor()
        script = ContentScript(_single(extractor), FakePage(_OTHER_URL))

        first = asyncio.create_task(script.handle_message(_EXTRACT))
        second = asyncio.create_task(script.handle_message(_EXTRACT))
        await extractor.entered.wait()
        assert script.state is ScriptState.EXTRACTING

        extractor.release.set()
        results = await asyncio.gather(first, second)

        assert all(isinstance(r, JobDetails) for r in results)
        assert results[0].id != results[1].id
        assert script.state is ScriptState.IDLE


class TestRespond:
    @pytest.mark.asyncio
    async def test_serializes_job_details(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        response = await script.respond(_EXTRACT)

        assert response is not None
        assert response["title"] == "Senior Engineer"
        assert response["platform"] == "linkedin"
        assert response["isManual"] is False
        assert "extractedAt" in response

    @pytest.mark.asyncio
    async def test_serializes_error(self):
        script = ContentScript(ExtractorRegistry(), FakePage(_OTHER_URL))

        response = await script.respond(_EXTRACT)

        assert response == {
            "error": True,
            "message": "No suitable extractor found for this page",
            "errorType": "NoExtractorFound",
        }

    @pytest.mark.asyncio
    async def test_unhandled_message_is_none(self, registry: ExtractorRegistry):
        script = ContentScript(registry, _linkedin_page())

        assert await script.respond({"type": "PING"}) is None
