"""
AppConfig: Immutable application configuration.

This module contains ONLY static configuration that doesn't change while a
session is running. Chat state belongs in ConversationState (see llm.py) and
query state belongs in the Dashboard (see dashboard.py).

Design principles:
- Frozen dataclasses prevent accidental mutation
- Configuration loaded once at startup
- Environment variables override config file values
"""

import os
import json
from dataclasses import dataclass, field

from logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "anthropic/claude-sonnet-4"

DEFAULT_CATEGORIES = (
    "AI Video Generation",
    "AI Video Editing",
    "AI Avatars",
    "AI Image Generation",
    "AI Audio Generation",
    "AI Development Tools",
    "AI Productivity",
)


@dataclass(frozen=True)
class PathConfig:
    """Immutable path configuration."""
    root_dir: str
    src_dir: str
    data_path: str
    log_dir: str

    @classmethod
    def from_defaults(cls, root_dir: str | None = None) -> "PathConfig":
        """Create PathConfig with default paths based on root directory."""
        src_dir = os.path.dirname(os.path.abspath(__file__))
        if root_dir is None:
            root_dir = os.path.dirname(src_dir)

        return cls(
            root_dir=root_dir,
            src_dir=src_dir,
            data_path=os.path.join(root_dir, "data", "evaluations.json"),
            log_dir=os.path.join(root_dir, "logs"),
        )


@dataclass(frozen=True)
class LLMConfig:
    """Immutable LLM configuration."""
    base_url: str
    model: str
    api_key: str = ""
    max_tokens: int = 1000
    temperature: float = 0.7
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "LLMConfig":
        """Create LLMConfig from environment variables."""
        return cls(
            base_url=os.environ.get("OPENAI_BASE_URL", "https://openrouter.ai/api/v1"),
            model=os.environ.get("TOOLEVAL_MODEL") or DEFAULT_MODEL,
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            max_tokens=int(os.environ.get("TOOLEVAL_MAX_TOKENS", "1000")),
            temperature=float(os.environ.get("TOOLEVAL_TEMPERATURE", "0.7")),
            timeout=float(os.environ.get("TOOLEVAL_TIMEOUT", "60")),
        )


@dataclass(frozen=True)
class AppConfig:
    """
    Complete immutable application configuration.

    Create once at startup and pass to the functions that need it.
    """
    paths: PathConfig
    llm: LLMConfig
    default_categories: tuple[str, ...] = field(default=DEFAULT_CATEGORIES)
    llm_log_enabled: bool = False


def load_config(config_path: str | None = None) -> AppConfig:
    """
    Load configuration from JSON file and environment variables.

    Priority: Environment variables > Config file > Defaults

    Args:
        config_path: Path to JSON config file. If None, uses default location.

    Returns:
        Immutable AppConfig instance.
    """
    paths = PathConfig.from_defaults()

    if config_path is None:
        config_path = os.path.join(paths.root_dir, "inputs", "tooleval_config.json")

    config_data = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")

    # Config file values only fill in what the environment leaves unset
    _set_env_if_not_exists("OPENAI_API_KEY", config_data.get("OPENAI_API_KEY", ""))
    _set_env_if_not_exists("OPENAI_BASE_URL", config_data.get("OPENAI_BASE_URL", ""))
    _set_env_if_not_exists("TOOLEVAL_MODEL", config_data.get("model", ""))
    _set_env_if_not_exists("TOOLEVAL_MAX_TOKENS", str(config_data.get("max_tokens", "")))
    _set_env_if_not_exists("TOOLEVAL_TEMPERATURE", str(config_data.get("temperature", "")))

    data_path = os.environ.get("TOOLEVAL_DATA_PATH") or config_data.get("data_path") or paths.data_path

    paths = PathConfig(
        root_dir=paths.root_dir,
        src_dir=paths.src_dir,
        data_path=data_path,
        log_dir=config_data.get("log_dir", paths.log_dir),
    )

    categories = config_data.get("default_categories")

    return AppConfig(
        paths=paths,
        llm=LLMConfig.from_env(),
        default_categories=tuple(categories) if categories else DEFAULT_CATEGORIES,
        llm_log_enabled=bool(config_data.get("llm_log_enabled", False)),
    )


def _set_env_if_not_exists(key: str, value: str) -> None:
    """Set environment variable only if not already set and value is non-empty."""
    if key not in os.environ or not os.environ[key]:
        if value:
            os.environ[key] = value
