"""Host messaging channels.

The content script talks to its host runtime only through a
``MessageChannel``: outbound notifications such as ``CONTENT_SCRIPT_READY``
are sent with ``send``. The channel is a thin transport; it does not
retry and it raises on delivery failure so the caller decides whether
the failure matters.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from job_extractor.models.messages import Message

logger = logging.getLogger(__name__)


class MessageChannel(ABC):
    """Outbound side of the host runtime's messaging channel."""

    @abstractmethod
    async def send(self, message: Message) -> None:
        """Deliver *message* to the host runtime."""
        ...


class NullMessageChannel(MessageChannel):
    """Channel with no listener; messages are dropped."""

    async def send(self, message: Message) -> None:
        logger.debug("No message listener configured, dropping '%s'", message.type)


class HttpMessageChannel(MessageChannel):
    """POSTs message envelopes as JSON to a callback URL.

    Parameters
    ----------
    url:
        Endpoint of the host runtime's message listener.
    timeout_seconds:
        HTTP timeout per delivery (default 5).
    """

    def __init__(self, url: str, timeout_seconds: float = 5.0) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds

    async def send(self, message: Message) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self._url,
                json=message.to_message(),
                timeout=self._timeout_seconds,
            )
        response.raise_for_status()
        logger.debug(
            "Delivered '%s' to %s (status %d)",
            message.type,
            self._url,
            response.status_code,
        )
