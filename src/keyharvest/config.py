"""Configuration primitives for keyharvest runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfiguration

DEFAULT_INPUT = "routes-large.json"
DEFAULT_OUTPUT = "descriptions.txt"
DEFAULT_CHUNK_SIZE = 50
DEFAULT_MAX_CONCURRENCY = 10
DEFAULT_TARGET_KEY = "description"

ENV_FIELDS: Dict[str, str] = {
    "KEYHARVEST_INPUT": "input_path",
    "KEYHARVEST_OUTPUT": "output_path",
    "KEYHARVEST_SUMMARY": "summary_path",
    "KEYHARVEST_CHUNK_SIZE": "chunk_size",
    "KEYHARVEST_MAX_CONCURRENCY": "max_concurrency",
    "KEYHARVEST_TARGET_KEY": "target_key",
}


class ConfigPayload(BaseModel):
    """Schema for merged file, environment and override settings."""

    model_config = ConfigDict(extra="forbid")

    input_path: Path = Path(DEFAULT_INPUT)
    output_path: Path = Path(DEFAULT_OUTPUT)
    summary_path: Optional[Path] = None
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, ge=1)
    max_concurrency: int = Field(DEFAULT_MAX_CONCURRENCY, ge=1)
    target_key: str = DEFAULT_TARGET_KEY

    @field_validator("chunk_size", "max_concurrency", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value

    @field_validator("summary_path", mode="before")
    @classmethod
    def _blank_summary(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@dataclass(slots=True)
class HarvestConfig:
    """Runtime settings for one extraction run."""

    input_path: Path = Path(DEFAULT_INPUT)
    output_path: Path = Path(DEFAULT_OUTPUT)
    summary_path: Optional[Path] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    target_key: str = DEFAULT_TARGET_KEY

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "HarvestConfig":
        try:
            model = ConfigPayload.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidConfiguration(f"invalid configuration: {exc}") from exc
        return cls(**model.model_dump())

    def validate(self) -> None:
        for name in ("chunk_size", "max_concurrency"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.target_key, str):
            raise InvalidConfiguration(f"target_key must be a string, got {self.target_key!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_path": str(self.input_path),
            "output_path": str(self.output_path),
            "summary_path": str(self.summary_path) if self.summary_path else None,
            "chunk_size": self.chunk_size,
            "max_concurrency": self.max_concurrency,
            "target_key": self.target_key,
        }


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise InvalidConfiguration(f"configuration file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as exc:
        raise InvalidConfiguration(f"configuration file {path} could not be read: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(f"configuration file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration("configuration YAML must produce a mapping")
    return data


def load_config(
    path: Optional[Path | str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> HarvestConfig:
    """Merge defaults, a YAML file, ``KEYHARVEST_*`` variables and overrides.

    Later sources win. ``None`` override values are skipped so CLI flags that
    were not given leave earlier settings untouched.
    """

    merged: Dict[str, Any] = {}
    if path is not None:
        merged.update(_load_yaml(Path(path)))
    env = os.environ if environ is None else environ
    for variable, field_name in ENV_FIELDS.items():
        if variable in env:
            merged[field_name] = env[variable]
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    return HarvestConfig.from_dict(merged)
