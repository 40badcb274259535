"""
Request models for the three git operations.

The same models validate /git command lines (after tokenizing) and
structured tool-call arguments coming from the LLM.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter


class BranchAction(Enum):
    """Branch operation selector."""

    LIST = "list"
    CURRENT = "current"
    CREATE = "create"
    SWITCH = "switch"
    DELETE = "delete"

    @property
    def needs_name(self) -> bool:
        return self in (BranchAction.CREATE, BranchAction.SWITCH, BranchAction.DELETE)


BRANCH_ACTIONS = [action.value for action in BranchAction]


class CommitRequest(BaseModel):
    """Commit all changes, with an explicit or generated message."""

    kind: Literal["commit"] = "commit"
    message: str | None = Field(
        default=None,
        description=(
            "Optional commit message. If not provided, a message will be "
            "generated based on the chat context."
        ),
    )


class RollbackRequest(BaseModel):
    """Hard-reset to a commit hash or a number of commits back."""

    kind: Literal["rollback"] = "rollback"
    commit: str | None = Field(default=None, description="The commit hash to rollback to")
    steps: int | None = Field(
        default=None, ge=1, description="Number of commits to roll back"
    )


class BranchRequest(BaseModel):
    """List, show, create, switch or delete branches."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["branch"] = "branch"
    action: BranchAction | None = Field(
        default=None, description="The branch action to perform"
    )
    name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("name", "branchName"),
        description="The name of the branch (required for create, switch, and delete actions)",
    )


OperationRequest = Annotated[
    Union[CommitRequest, RollbackRequest, BranchRequest],
    Field(discriminator="kind"),
]

_request_adapter: TypeAdapter[Any] = TypeAdapter(OperationRequest)


def parse_request(data: dict[str, Any]) -> CommitRequest | RollbackRequest | BranchRequest:
    """Validate a dict carrying a ``kind`` key into the matching request model."""
    return _request_adapter.validate_python(data)
