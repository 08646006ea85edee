from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import BaseModel, Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings.main import SettingsConfigDict


class Settings(BaseSettings):
    DATA_FILE: Path = Path(".todos.dat")

    LOG_LEVEL: str = "WARNING"

    LOG_FILE: Path | None = Path(".minitodo.log")

    DISPLAY_FILE: Path | None = None

    model_config = SettingsConfigDict(env_prefix="MINITODO_", env_file=".env", extra="ignore")


class DisplaySpec(BaseModel):
    """Colors and thresholds for the todo screen"""

    # Class variable - NOT a Pydantic field
    color_names: ClassVar[frozenset[str]] = frozenset(
        {"black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"}
    )

    done_color: str = "green"
    overdue_color: str = "red"
    due_soon_color: str = "yellow"
    category_color: str = "blue"

    due_soon_days: int = Field(2, ge=0, description="Days ahead that count as due soon")

    @field_validator("done_color", "overdue_color", "due_soon_color", "category_color")
    @classmethod
    def _known_color(cls, color: str) -> str:
        color = color.lower()
        if color not in cls.color_names:
            raise ValueError(f"Unknown color {color!r}, expected one of {sorted(cls.color_names)}.")
        return color

    @classmethod
    def from_file(cls, path: Path | None) -> DisplaySpec:
        """Load display settings from a YAML file, or the defaults when there is none"""
        if path is None:
            return cls()

        with path.open() as df:
            yaml_spec = yaml.safe_load(df) or {}
            return cls.model_validate(yaml_spec)
