"""Message envelopes exchanged with the host runtime."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class MessageType(str, Enum):
    """Message types handled or emitted by the content script."""

    EXTRACT_JOB_DETAILS = "EXTRACT_JOB_DETAILS"
    CONTENT_SCRIPT_READY = "CONTENT_SCRIPT_READY"


class Message(BaseModel):
    """Envelope sent across the process boundary: ``{type, payload?}``."""

    type: str
    payload: Any | None = None

    def to_message(self) -> dict:
        data: dict = {"type": self.type}
        if self.payload is not None:
            data["payload"] = self.payload
        return data


class ErrorResponse(BaseModel):
    """Error-shaped response returned instead of a ``JobDetails`` record."""

    message: str
    error_type: str

    def to_message(self) -> dict:
        return {"error": True, "message": self.message, "errorType": self.error_type}
