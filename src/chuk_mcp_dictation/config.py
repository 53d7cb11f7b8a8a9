"""
Server settings - defaults for new sessions and exports.

Settings come from an optional YAML file; anything missing falls back to
the model defaults. The musical rules themselves (rest probability,
octave range, supported keys) are fixed in constants and core.scale.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from chuk_mcp_dictation.constants import (
    DEFAULT_MEASURES,
    DEFAULT_TEMPO,
    MAX_MEASURES,
    MAX_TEMPO,
    MIN_TEMPO,
)
from chuk_mcp_dictation.core.scale import Scale
from chuk_mcp_dictation.exceptions import UnknownScaleError

logger = logging.getLogger(__name__)


class DictationSettings(BaseModel):
    """Defaults applied to new sessions and MIDI exports."""

    default_key: str = Field("C Major", description="Key for new sessions (e.g., 'A Minor')")
    measures: int = Field(
        DEFAULT_MEASURES, ge=1, le=MAX_MEASURES, description="Exercise length in bars"
    )
    tempo: int = Field(DEFAULT_TEMPO, ge=MIN_TEMPO, le=MAX_TEMPO, description="Playback tempo")
    output_dir: Path = Field(Path("output"), description="Directory for exported MIDI files")
    seed: int | None = Field(None, description="Seed for reproducible exercises")

    model_config = {"extra": "forbid"}

    @field_validator("default_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate the default key is supported and normalise its name."""
        try:
            return Scale.parse(v).name
        except UnknownScaleError as e:
            raise ValueError(str(e)) from None


def load_settings(path: Path | None = None) -> DictationSettings:
    """
    Load settings from a YAML file.

    Args:
        path: YAML file; defaults are used if None or missing

    Returns:
        Validated settings

    Raises:
        pydantic.ValidationError: If the file contains invalid values
    """
    if path is None or not path.exists():
        if path is not None:
            logger.warning(f"Settings file not found, using defaults: {path}")
        return DictationSettings()

    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    settings = DictationSettings.model_validate(data)
    logger.info(f"Loaded settings from {path}")
    return settings
