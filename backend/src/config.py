import os
import re
from pathlib import Path
from typing import Any

import toml
from pydantic import BaseModel, Field, ValidationError, model_validator

from errors import ConfigurationError

DEFAULT_CHUNK_SIZE = 4000
DEFAULT_CHUNK_OVERLAP = 200
DEFAULT_TOP_K = 5
DEFAULT_QUESTION_COUNT = 10
MAX_QUESTION_COUNT = 20
DEFAULT_MAX_UPLOAD_MB = 25


class ProcessingSettings(BaseModel):
    """Typed view over the processing-related configuration sections.

    Attributes:
        chunk_size: Maximum characters per chunk.
        chunk_overlap: Characters shared by consecutive chunks.
        top_k: Number of chunks handed to the model as chat context.
        question_count: Default number of generated questions.
        max_upload_mb: Upload size limit in megabytes.
    """

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    chunk_overlap: int = Field(default=DEFAULT_CHUNK_OVERLAP, ge=0)
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT, ge=1, le=MAX_QUESTION_COUNT
    )
    max_upload_mb: int = Field(default=DEFAULT_MAX_UPLOAD_MB, gt=0)

    @model_validator(mode="after")
    def _check_overlap(self) -> "ProcessingSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def resolve_path(path: str | Path, config_path: Path) -> Path:
    """Resolve a path relative to the config file's parent directory.

    If the path is absolute, return it as-is.
    If the path is relative, resolve it relative to the config file's parent.

    Args:
        path: The path to resolve (absolute or relative).
        config_path: Path to the configuration file.

    Returns:
        Resolved absolute path.
    """
    path = Path(path)
    if path.is_absolute():
        return path
    return (config_path.parent / path).resolve()


def find_config_path(explicit_path: Path | None = None) -> Path:
    """Centralized config path resolution."""
    if explicit_path:
        return explicit_path
    # Try common locations
    candidates = [
        Path("config.toml"),
        Path(__file__).parent.parent.parent / "config.toml",
    ]
    for path in candidates:
        if path.exists():
            return path
    raise FileNotFoundError("config.toml not found")


def load_config(config_path: Path = Path("config.toml")) -> dict[str, Any]:
    """Load configuration from TOML file with environment variable substitution.

    Supports ${ENV_VAR} and ${ENV_VAR:-default} syntax.

    Args:
        config_path: Path to the TOML configuration file.

    Returns:
        Dictionary with configuration values.
    """
    config = toml.load(config_path)
    return _substitute_env_vars(config)


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in config values."""
    if isinstance(value, str):
        return _substitute_string(value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def _substitute_string(value: str) -> str:
    """Substitute environment variables in a string.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

    def replacer(match):
        var_name = match.group(1)
        default = match.group(2) or ""
        return os.environ.get(var_name, default)

    return re.sub(pattern, replacer, value)


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """Get a nested config value using dot notation.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated path (e.g., "chunking.chunk_size").
        default: Default value if key not found.

    Returns:
        The config value or default.
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def load_settings(config: dict[str, Any]) -> ProcessingSettings:
    """Build validated processing settings from a configuration dictionary.

    Raises:
        ConfigurationError: If any value is out of range, including an
            overlap that is not smaller than the chunk size.
    """
    values = {
        "chunk_size": get_config_value(
            config, "chunking.chunk_size", DEFAULT_CHUNK_SIZE
        ),
        "chunk_overlap": get_config_value(
            config, "chunking.chunk_overlap", DEFAULT_CHUNK_OVERLAP
        ),
        "top_k": get_config_value(config, "retrieval.top_k", DEFAULT_TOP_K),
        "question_count": get_config_value(
            config, "questions.default_count", DEFAULT_QUESTION_COUNT
        ),
        "max_upload_mb": get_config_value(
            config, "upload.max_size_mb", DEFAULT_MAX_UPLOAD_MB
        ),
    }
    try:
        return ProcessingSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def get_settings_path(config: dict, config_path: Path) -> Path:
    """Get the settings store file path from configuration.

    Args:
        config: Configuration dictionary.
        config_path: Path to the configuration file.

    Returns:
        Resolved absolute path to the settings JSON file.
    """
    settings_path = config.get("settings", {}).get("path", "storage/settings.json")
    return resolve_path(settings_path, config_path)
