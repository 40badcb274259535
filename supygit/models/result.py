"""
Structured result model for git operations.

Every operator, the /git command and the tool-call surface return a
CommandResult instead of raising, so callers handle one shape.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

# Error classifications
USAGE = "usage"
PRECONDITION = "precondition"
SUBPROCESS = "subprocess"


class CommandResult(BaseModel):
    """Outcome of a git operation: a success value or a classified failure."""

    ok: bool = Field(..., description="Whether the operation succeeded")
    data: str | None = Field(None, description="Human-readable result (if ok=True)")
    error: str | None = Field(None, description="Error message (if ok=False)")
    error_type: str | None = Field(
        None, description="Error classification: usage, precondition or subprocess"
    )

    def to_llm_content(self) -> str:
        """Serialize for passing back to the LLM as tool result content."""
        if self.ok:
            return self.data or ""
        return json.dumps({"error": self.error, "error_type": self.error_type})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def success(cls, data: str) -> "CommandResult":
        """Create a success result."""
        return cls(ok=True, data=data)

    @classmethod
    def fail(cls, error: str, error_type: str | None = None) -> "CommandResult":
        """Create a failure result."""
        return cls(ok=False, error=error, error_type=error_type)
