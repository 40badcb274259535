"""
Plugin configuration.

Configuration lives in .supygit/config.yaml inside the repository and
defines the committer identity, commit-message generation and the test
suites that gate automatic commits.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = ".supygit"
CONFIG_FILE = "config.yaml"

DEFAULT_COMMIT_PROMPT = (
    "Please create a git commit message for the set of changes you recently made. "
    "The message should be a short description of the changes you made. "
    "Only output the exact git commit message. Do not include any other text."
)


class ModelConfig(BaseModel):
    """LLM model configuration for commit-message generation."""

    provider: str = Field(
        default="anthropic/claude-sonnet-4-5-20250929",
        description="LiteLLM model identifier (e.g., 'openai/gpt-4o-mini')",
    )
    temperature: float = Field(default=0.2, ge=0, le=2)
    max_tokens: int = Field(default=256, gt=0)
    max_retries: int = Field(default=2, ge=0, description="Max retries on transient LLM errors")
    retry_delay: float = Field(default=1.0, gt=0, description="Initial retry delay in seconds")
    retry_backoff: float = Field(default=2.0, gt=1, description="Exponential backoff multiplier")
    fallback: list[str] = Field(
        default_factory=list, description="Fallback models tried in order"
    )


class SuiteConfig(BaseModel):
    """A test suite that must pass before changes are committed automatically."""

    name: str
    command: list[str] = Field(..., min_length=1, description="argv of the test command")
    timeout: float = Field(default=600, gt=0, description="Seconds before the suite is killed")


class PluginConfig(BaseModel):
    """Configuration stored in .supygit/config.yaml."""

    committer_name: str = "Supygit Coder"
    committer_email: str = "coder@supygit.dev"
    default_commit_message: str = "Supygit Coder Automatic Checkin"
    commit_prompt: str = DEFAULT_COMMIT_PROMPT
    git_timeout: float = Field(default=30, gt=0, description="Seconds before a git call is aborted")

    model: ModelConfig = Field(default_factory=ModelConfig)
    test_suites: list[SuiteConfig] = Field(default_factory=list)


def config_path(root: Path | None = None) -> Path:
    """Get the config.yaml path for a repository root."""
    return (root or Path.cwd()) / CONFIG_DIR / CONFIG_FILE


def load_config(path: Path | None = None, root: Path | None = None) -> PluginConfig:
    """
    Load plugin configuration.

    Reads ``path`` if given, otherwise .supygit/config.yaml under ``root``.
    Returns the default config if the file doesn't exist or can't be parsed.
    """
    path = path or config_path(root)
    if not path.exists():
        return PluginConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return PluginConfig(**data)
    except (yaml.YAMLError, OSError, TypeError, ValidationError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return PluginConfig()


def save_config(config: PluginConfig, root: Path | None = None) -> Path:
    """Save configuration to .supygit/config.yaml."""
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

    return path
