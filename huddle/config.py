"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from huddle.utils.platform import get_config_dir


class ComposerConfig(BaseModel):
    restore_focus: bool = True


class ClassifierConfig(BaseModel):
    # Extra shortcodes, merged over the built-in table
    emoji: dict[str, str] = Field(default_factory=dict)
    ascii_emoticons: bool = True
    trim_link_punctuation: bool = False

    @field_validator("emoji")
    @classmethod
    def _no_empty_codes(cls, value: dict[str, str]) -> dict[str, str]:
        for code, glyph in value.items():
            if not code.strip():
                raise ValueError("emoji shortcode must not be empty")
            if any(ch.isspace() for ch in code):
                raise ValueError(f"emoji shortcode {code!r} must not contain whitespace")
            if not glyph:
                raise ValueError(f"emoji shortcode {code!r} has no glyph")
        return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HUDDLE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    composer: ComposerConfig = Field(default_factory=ComposerConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    roster: list[str] = Field(default_factory=list)
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            raise ValueError(f"unknown log level: {value}")
        return value.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Env vars win over values passed in (the YAML file)
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("HUDDLE_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)
