"""
Commit message resolution.

An explicit message always wins. Otherwise the LLM is asked to describe the
changes using the tail of the conversation; any problem with that falls
back to a fixed default so a commit never fails for lack of a message.
"""

from __future__ import annotations

import logging

from supygit.core.chat import ChatHistory
from supygit.core.llm import LLMClient, LLMError
from supygit.core.output import AgentOutput
from supygit.models.config import DEFAULT_COMMIT_PROMPT

logger = logging.getLogger(__name__)

TAG = "git/commit"

# Messages kept in the generation request: last conversation turn + instruction
REQUEST_MESSAGE_LIMIT = 2


class CommitMessageGenerator:
    """Resolves the message for a commit."""

    def __init__(
        self,
        llm: LLMClient | None,
        chat: ChatHistory,
        output: AgentOutput,
        default_message: str,
        prompt: str = DEFAULT_COMMIT_PROMPT,
    ):
        self.llm = llm
        self.chat = chat
        self.output = output
        self.default_message = default_message
        self.prompt = prompt

    def build_request(self) -> list[dict[str, str]]:
        """Build the generation request: the instruction after the latest turn."""
        messages = self.chat.to_llm_messages()
        messages.append({"role": "user", "content": self.prompt})
        return messages[-REQUEST_MESSAGE_LIMIT:]

    def resolve(self, message: str | None = None) -> str:
        if message and message.strip():
            self.output.info_line(f"[{TAG}] Using provided commit message.")
            return message

        if self.chat.current_message() is None or self.llm is None:
            self.output.warning_line(
                f"[{TAG}] No chat response to describe, using default commit message."
            )
            return self.default_message

        self.output.info_line(f"[{TAG}] Asking the model to generate a git commit message...")
        try:
            generated = self.llm.complete_text(self.build_request()).strip()
        except LLMError as e:
            logger.warning("Commit message generation failed: %s", e)
            self.output.warning_line(f"[{TAG}] Commit message generation failed ({e}), using default.")
            return self.default_message

        if not generated:
            self.output.warning_line(f"[{TAG}] AI did not provide a commit message, using default.")
            return self.default_message

        return generated
