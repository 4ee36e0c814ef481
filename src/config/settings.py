# src/config/settings.py — v2
"""Typed configuration loaded from environment / .env via pydantic-settings.

Single source of truth for cipher, naming and logging settings.
Every variable is prefixed with SYMPASS_ (e.g. SYMPASS_GPG_BINARY).
"""

from __future__ import annotations

import string
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from the environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="SYMPASS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cipher backend ===
    cipher_backend: Literal["gpg"] = "gpg"
    gpg_binary: str = "gpg"
    cipher_algo: str = "AES256"
    gpg_no_symkey_cache: bool = True

    # === Naming ===
    encrypted_suffix: str = ".gpg"
    strip_suffixes: str = ".enc,.gpg"
    decrypted_marker: str = "-decrypted"
    random_name_length: int = 8
    random_name_alphabet: str = string.ascii_letters + string.digits

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("random_name_length")
    @classmethod
    def validate_random_name_length(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("random_name_length must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.random_name_alphabet:
            errors.append("RANDOM_NAME_ALPHABET must not be empty")
        elif any(c in self.random_name_alphabet for c in "/\\."):
            errors.append("RANDOM_NAME_ALPHABET must not contain '/', '\\' or '.'")

        if not self.encrypted_suffix.startswith(".") or len(self.encrypted_suffix) < 2:
            errors.append("ENCRYPTED_SUFFIX must start with '.'")
        elif self.encrypted_suffix not in self.strip_suffixes_list:
            errors.append("ENCRYPTED_SUFFIX must be listed in STRIP_SUFFIXES")

        if not self.decrypted_marker:
            errors.append("DECRYPTED_MARKER must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def strip_suffixes_list(self) -> list[str]:
        """Parse comma-separated suffixes removed from decrypted names."""
        return [s.strip() for s in self.strip_suffixes.split(",") if s.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
