from __future__ import annotations

"""Configuration utilities for specpress.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the codec defaults, analysis options,
output location and logging level.  Instances can be populated from
environment variables (``SPECPRESS_AUDIO__FREQ_CUTOFF=4000``) or from
YAML/JSON files with matching nested keys.

The codecs never read these settings themselves; the command line resolves
them and passes explicit values to the codec entry points.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

import yaml


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class AudioSettings(SectionModel):
    """Defaults for WAV compression."""

    freq_cutoff: float = Field(default=3000.0, ge=0.0)
    extension: str = ".cmp"


class ImageSettings(SectionModel):
    """Defaults for bitmap compression."""

    compression_level: float = Field(default=2.0, gt=1.0)
    extension: str = ".cmpi"


class AnalysisSettings(SectionModel):
    """Options for the spectrum plots."""

    log_factor: float = Field(default=0.2, gt=0.0)
    figure_name: str = "analysis.png"


class OutputSettings(SectionModel):
    """Where generated files are written."""

    directory: str = "."


class LoggingSettings(SectionModel):
    """Logging level for the command line."""

    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, value: Any) -> Any:
        if isinstance(value, int):
            return logging.getLevelName(value)
        if isinstance(value, str):
            name = value.strip().upper()
            if not isinstance(logging.getLevelName(name), int):
                raise ValueError(f"unknown logging level: {value}")
            return name
        return value


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    audio: AudioSettings = Field(default_factory=AudioSettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="SPECPRESS_",
        env_nested_delimiter="__",
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
