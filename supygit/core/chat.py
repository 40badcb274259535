"""
Chat history used as context for commit-message generation.

Messages follow the session JSONL format written by supyagent, so a saved
session file can be loaded directly.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

_ROLE_FOR_TYPE = {
    "user": "user",
    "assistant": "assistant",
    "system": "system",
    "tool_result": "tool",
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ChatMessage(BaseModel):
    """A single message in the conversation."""

    type: Literal["user", "assistant", "tool_result", "system"]
    content: str | None = None
    tool_calls: list[dict[str, Any]] | None = None
    tool_call_id: str | None = None
    name: str | None = None
    ts: datetime = Field(default_factory=_utcnow)


class ChatHistory:
    """In-memory conversation, oldest message first."""

    def __init__(self, messages: list[ChatMessage] | None = None):
        self.messages: list[ChatMessage] = list(messages or [])

    def add(self, message_type: str, content: str | None, **kwargs: Any) -> ChatMessage:
        message = ChatMessage(type=message_type, content=content, **kwargs)
        self.messages.append(message)
        return message

    def current_message(self) -> ChatMessage | None:
        """
        The most recent assistant reply, if any.

        Commit messages are only generated when the agent has actually
        responded in this conversation.
        """
        for message in reversed(self.messages):
            if message.type == "assistant":
                return message
        return None

    def to_llm_messages(self) -> list[dict[str, Any]]:
        """
        Convert to LLM message dicts.

        Tool calls and tool results are left out: the generation request is
        sent without tools, and providers reject tool results that have no
        matching call.
        """
        llm_messages = []
        for message in self.messages:
            if message.type == "tool_result" or not message.content:
                continue
            llm_messages.append({"role": _ROLE_FOR_TYPE[message.type], "content": message.content})
        return llm_messages

    @classmethod
    def load(cls, path: str | Path) -> "ChatHistory":
        """
        Load a session JSONL file.

        The meta line and lines that fail to parse are skipped.
        """
        messages: list[ChatMessage] = []
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                    if data.get("type") == "meta":
                        continue
                    messages.append(ChatMessage(**data))
                except (json.JSONDecodeError, ValidationError, AttributeError, TypeError) as e:
                    logger.warning("Skipping unreadable history line in %s: %s", path, e)
        return cls(messages)
