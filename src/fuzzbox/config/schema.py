"""Pydantic models for fuzzbox configuration and search options."""

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fuzzbox.config.defaults import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_FIELD_WEIGHT,
    DEFAULT_MAX_STRING_LENGTH,
    DEFAULT_MIN_MATCH_CHAR_LENGTH,
    DEFAULT_THRESHOLD,
)

KeywordHandler = Callable[[list[Any], list[str]], Any]
"""Filter strategy: ``(collection, matched_terms) -> filtered collection``."""


class KeywordMode(str, Enum):
    """How several fired keywords are combined."""

    INTERSECTION = "intersection"
    UNION = "union"

    @classmethod
    def _missing_(cls, value: object) -> "KeywordMode | None":
        aliases = {"and": cls.INTERSECTION, "or": cls.UNION, **{m.value: m for m in cls}}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class FieldSpec(BaseModel):
    """A weighted, optionally thresholded dotted path into an item."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(min_length=1)
    weight: float = Field(default=DEFAULT_FIELD_WEIGHT, ge=0.0, le=1.0)
    threshold: float | None = Field(default=None, ge=0.0, le=1.0)


class KeywordDefinition(BaseModel):
    """A named filter activated by one or more trigger tokens."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    triggers: tuple[str, ...] = Field(min_length=1)
    handler: KeywordHandler

    @field_validator("triggers", mode="before")
    @classmethod
    def _coerce_triggers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, Iterable) and not isinstance(value, (Mapping, bytes)):
            return tuple(value)
        return value

    @field_validator("triggers")
    @classmethod
    def _reject_blank_triggers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not trigger.strip() for trigger in value):
            raise ValueError("triggers must be non-empty strings")
        return value


class KeywordsConfig(BaseModel):
    """Keyword definitions plus the mode used to combine them."""

    model_config = ConfigDict(frozen=True)

    mode: KeywordMode = KeywordMode.INTERSECTION
    definitions: tuple[KeywordDefinition, ...] = ()

    @field_validator("mode", mode="before")
    @classmethod
    def _resolve_mode_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return KeywordMode(value)
        return value


class SearchSettings(BaseModel):
    """Numeric and boolean search options."""

    threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    limit: int | None = Field(default=None, ge=1)  # None: unbounded
    debounce: float = Field(default=DEFAULT_DEBOUNCE_MS, ge=0.0)  # milliseconds
    case_sensitive: bool = False
    min_match_char_length: int = Field(default=DEFAULT_MIN_MATCH_CHAR_LENGTH, ge=1)
    max_string_length: int = Field(default=DEFAULT_MAX_STRING_LENGTH, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class FuzzboxConfig(BaseModel):
    """Root configuration for fuzzbox."""

    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
