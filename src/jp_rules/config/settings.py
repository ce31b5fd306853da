"""
jp_rules Settings Configuration

This module provides centralized configuration management using Pydantic settings.
Configuration is loaded from .env by default; alternative YAML loading is supported.
"""

import codecs
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENCODING = "UTF-8"

# mbstring encoding names that Python's codec registry does not know
_ENCODING_ALIASES: Dict[str, str] = {
    "euc": "euc_jp",
    "eucjp-win": "euc_jp",
    "sjis-win": "cp932",
}


def normalize_encoding(name: str) -> str:
    """Return the codec name for ``name``; raise ValueError if it is unknown."""
    key = name.strip()
    key = _ENCODING_ALIASES.get(key.lower(), key)
    try:
        return codecs.lookup(key).name
    except LookupError:
        raise ValueError(f"Unknown text encoding: {name!r}") from None


class RuleSettings(BaseSettings):
    """
    Rule configuration: the text encoding used to count characters in byte
    values for the length rules. Frozen once built.
    """

    model_config = SettingsConfigDict(env_prefix="RULES_", extra="ignore", frozen=True)

    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Encoding used to decode byte values before counting characters",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        if not v or not v.strip():
            return normalize_encoding(DEFAULT_ENCODING)
        return normalize_encoding(v)


class LoggingSettings(BaseSettings):
    """Logging configuration: level and format (json/console)."""

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_format: str = Field(default="console", description="Format: 'json' or 'console'")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = ("json", "console")
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = v.upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u


class Settings(BaseSettings):
    """
    Root settings class. Loads from .env by default; supports creation from YAML.

    Nested models: rules, logging.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    rules: RuleSettings = Field(default_factory=RuleSettings, description="Rule config")
    logging: LoggingSettings = Field(default_factory=LoggingSettings, description="Logging config")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Create Settings from a YAML file. Top-level keys should match
        nested model names (rules, logging).
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        kwargs: dict[str, Any] = {}
        for name, model_class in [
            ("rules", RuleSettings),
            ("logging", LoggingSettings),
        ]:
            if name in data and isinstance(data[name], dict):
                kwargs[name] = model_class.model_validate(data[name])
        return cls(**kwargs)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance (loads from .env)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
