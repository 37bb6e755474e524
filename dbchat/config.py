"""Configuration loading and management."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from dbchat.constants import (
    DEFAULT_DATASET,
    DEFAULT_LOG_DIR,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL,
    SUPPORTED_MODELS,
)
from dbchat.datasets import is_valid_dataset_type


@dataclass
class Config:
    """dbchat configuration.

    Loads from .env and optionally .dbchat/config.json
    """

    # API Keys
    anthropic_api_key: Optional[str] = None

    # Model settings
    default_model: str = DEFAULT_MODEL
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS

    # Workflow settings
    simulate_delays: bool = True
    default_dataset: str = DEFAULT_DATASET

    # Logging
    log_dir: str = DEFAULT_LOG_DIR

    # Extra context sent to the model (from .dbchat/config.json)
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> "Config":
        """Load configuration from environment and project-specific config.

        Args:
            project_root: Project root directory (for .dbchat/config.json)

        Returns:
            Config instance
        """
        # Load .env file
        load_dotenv()

        config = cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            default_model=os.getenv("DBCHAT_DEFAULT_MODEL", DEFAULT_MODEL),
            max_output_tokens=int(
                os.getenv("DBCHAT_MAX_OUTPUT_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS)
            ),
            simulate_delays=os.getenv("DBCHAT_SIMULATE_DELAYS", "true").lower() != "false",
            default_dataset=os.getenv("DBCHAT_DEFAULT_DATASET", DEFAULT_DATASET),
            log_dir=os.getenv("DBCHAT_LOG_DIR", DEFAULT_LOG_DIR),
        )

        # Load project-specific config if available
        if project_root:
            project_config_path = project_root / DEFAULT_LOG_DIR / "config.json"
            if project_config_path.exists():
                try:
                    with open(project_config_path) as f:
                        project_config = json.load(f)
                    config.context = project_config.get("context", {})
                except (json.JSONDecodeError, IOError):
                    pass  # Ignore invalid config

        return config

    def validate(self, require_api_key: bool = True) -> list[str]:
        """Validate configuration and return list of errors.

        Args:
            require_api_key: Whether a live model is needed

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if require_api_key and not self.anthropic_api_key:
            errors.append("No API key found. Set ANTHROPIC_API_KEY")

        if self.default_model not in SUPPORTED_MODELS:
            errors.append(f"Unsupported model: {self.default_model}")

        if self.max_output_tokens <= 0:
            errors.append("max_output_tokens must be positive")

        if not is_valid_dataset_type(self.default_dataset):
            errors.append(f"Unknown dataset: {self.default_dataset}")

        return errors

    def to_dict(self) -> dict:
        """Convert config to dictionary (for logging/display)."""
        return {
            "default_model": self.default_model,
            "max_output_tokens": self.max_output_tokens,
            "simulate_delays": self.simulate_delays,
            "default_dataset": self.default_dataset,
            "log_dir": self.log_dir,
            "context": self.context,
            "has_anthropic_key": bool(self.anthropic_api_key),
        }
