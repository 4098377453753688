"""Content script: message-driven extraction for a loaded page."""

from job_extractor.content.channel import (
    HttpMessageChannel,
    MessageChannel,
    NullMessageChannel,
)
from job_extractor.content.script import ContentScript, ScriptState

__all__ = [
    "ContentScript",
    "HttpMessageChannel",
    "MessageChannel",
    "NullMessageChannel",
    "ScriptState",
]
