"""Configuration management for mcupload.

Supports YAML profiles and environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from mcupload.core.exceptions import ConfigurationError, ProfileNotFoundError
from mcupload.core.validation import (
    validate_chunk_size,
    validate_max_concurrent_chunks,
    validate_server_url,
    validate_timeout,
)

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "mcupload"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_SERVER_URL = "http://localhost:1352"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MiB
DEFAULT_TIMEOUT = 30
DEFAULT_UPLOADER_ID = "MaterialsCommonsResumableUpload"

# Environment variable names
ENV_URL = "MC_URL"
ENV_API_KEY = "MC_API_KEY"
ENV_CHUNK_SIZE = "MC_CHUNK_SIZE"
ENV_PROFILE = "MC_PROFILE"
ENV_VERIFY_SSL = "MC_VERIFY_SSL"
ENV_TIMEOUT = "MC_TIMEOUT"


# =============================================================================
# Uploader Options
# =============================================================================


@dataclass
class UploaderOptions:
    """Options recognized by the resumable uploader."""

    api_key: Optional[str] = None
    server_url: str = DEFAULT_SERVER_URL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    id: str = DEFAULT_UPLOADER_ID
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    max_concurrent_chunks: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate and normalize option values."""
        self.server_url = validate_server_url(self.server_url)
        validate_chunk_size(self.chunk_size)
        validate_timeout(self.timeout)
        validate_max_concurrent_chunks(self.max_concurrent_chunks)

    def require_api_key(self) -> str:
        """Return the API key or fail if none is configured."""
        if not self.api_key:
            raise ConfigurationError(
                f"API key is required. Set {ENV_API_KEY} or pass --api-key.",
                field="api_key",
            )
        return self.api_key


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Configuration profile for a Materials Commons server."""

    url: str = DEFAULT_SERVER_URL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "url": self.url,
            "chunk_size": self.chunk_size,
            "timeout": self.timeout,
            "verify_ssl": self.verify_ssl,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            url=data.get("url", DEFAULT_SERVER_URL),
            chunk_size=data.get("chunk_size", DEFAULT_CHUNK_SIZE),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            verify_ssl=data.get("verify_ssl", True),
        )

    def to_options(self, api_key: Optional[str] = None, **overrides: Any) -> UploaderOptions:
        """Build uploader options from this profile.

        Args:
            api_key: Credential presented on every request.
            **overrides: Any other UploaderOptions field.

        Returns:
            Validated UploaderOptions.
        """
        values: dict[str, Any] = {
            "api_key": api_key,
            "server_url": self.url,
            "chunk_size": self.chunk_size,
            "timeout": self.timeout,
            "verify_ssl": self.verify_ssl,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return UploaderOptions(**values)


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")
                config.output_format = data.get("output_format", "table")

                for name, pdata in (data.get("profiles") or {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except (OSError, yaml.YAMLError, AttributeError) as e:
                raise ConfigurationError(f"Failed to load config: {e}") from e

        if url := os.getenv(ENV_URL):
            verify_ssl = os.getenv(ENV_VERIFY_SSL, "true").lower() in ("true", "1", "yes")
            try:
                timeout = int(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)))
                chunk_size = int(os.getenv(ENV_CHUNK_SIZE, str(DEFAULT_CHUNK_SIZE)))
            except ValueError as e:
                raise ConfigurationError(f"Invalid numeric environment value: {e}") from e

            config.profiles["default"] = Profile(
                url=url,
                chunk_size=chunk_size,
                timeout=timeout,
                verify_ssl=verify_ssl,
            )

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (never includes the API key).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        name = name or self.default_profile
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        return self.profiles[name]

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""
        return name in self.profiles

    def add_profile(
        self,
        name: str,
        url: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: int = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ) -> Profile:
        """Add or update a profile."""
        profile = Profile(
            url=validate_server_url(url),
            chunk_size=validate_chunk_size(chunk_size),
            timeout=validate_timeout(timeout),
            verify_ssl=verify_ssl,
        )
        self.profiles[name] = profile
        return profile


def get_api_key() -> Optional[str]:
    """Get the API key from the environment.

    Returns:
        API key if set, None otherwise.
    """
    return os.getenv(ENV_API_KEY)
