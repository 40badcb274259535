"""Data models for supygit."""

from supygit.models.config import ModelConfig, PluginConfig, SuiteConfig, load_config
from supygit.models.requests import (
    BranchAction,
    BranchRequest,
    CommitRequest,
    OperationRequest,
    RollbackRequest,
)
from supygit.models.result import CommandResult

__all__ = [
    "BranchAction",
    "BranchRequest",
    "CommandResult",
    "CommitRequest",
    "ModelConfig",
    "OperationRequest",
    "PluginConfig",
    "RollbackRequest",
    "SuiteConfig",
    "load_config",
]
