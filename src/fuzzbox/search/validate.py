"""Construction-time validation of search options.

Every check is terminal: the first problem raises ``OptionsError`` with a
stable ``ErrorCode``. On success the options come back normalized, so
the engine never has to re-check input shapes.
"""

from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from fuzzbox.config.schema import FieldSpec, KeywordsConfig, SearchSettings
from fuzzbox.exceptions import ErrorCode, OptionsError
from fuzzbox.search.scorer import normalize_field_specs


@dataclass(frozen=True)
class ValidatedOptions:
    """Normalized engine options."""

    collection: list[Any]
    fields: list[FieldSpec]
    keywords: KeywordsConfig | None
    settings: SearchSettings


def _format_loc(prefix: str, loc: tuple[int | str, ...]) -> str:
    path = prefix
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def _describe(prefix: str, error: ValidationError) -> str:
    first = error.errors()[0]
    return f"{_format_loc(prefix, first['loc'])}: {first['msg']}, received {first['input']!r}"


def _is_list_like(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, (Sequence, AbstractSet))


def validate_collection(collection: Any) -> list[Any]:
    """Check the collection is a sequence or set and copy it into a list."""
    if not _is_list_like(collection):
        raise OptionsError(
            f"collection must be a sequence or set, received {type(collection).__name__}",
            ErrorCode.INVALID_COLLECTION,
        )
    return list(collection)


def _field_error_code(error: ValidationError) -> ErrorCode:
    failed = {err["loc"][0] if err["loc"] else None for err in error.errors()}
    if failed - {"weight", "threshold"}:
        return ErrorCode.INVALID_FIELD_CONFIG
    if "weight" in failed:
        return ErrorCode.INVALID_FIELD_WEIGHT
    return ErrorCode.INVALID_FIELD_CONFIG


def validate_fields(fields: Any) -> list[FieldSpec]:
    """Check field inputs and convert each to a FieldSpec.

    Thresholds left unset stay None; see ``normalize_field_specs``.
    """
    if not _is_list_like(fields) or len(fields) == 0:
        raise OptionsError(
            "fields must be a non-empty list", ErrorCode.INVALID_FIELD_CONFIG
        )

    specs: list[FieldSpec] = []
    for index, entry in enumerate(fields):
        if isinstance(entry, FieldSpec):
            specs.append(entry)
            continue
        if isinstance(entry, str):
            entry = {"path": entry}
        elif not isinstance(entry, Mapping):
            raise OptionsError(
                f"fields[{index}] must be a string or mapping, received {type(entry).__name__}",
                ErrorCode.INVALID_FIELD_CONFIG,
            )
        try:
            specs.append(FieldSpec.model_validate(entry, strict=True))
        except ValidationError as e:
            raise OptionsError(_describe(f"fields[{index}]", e), _field_error_code(e)) from e
    return specs


def validate_keywords(keywords: Any) -> KeywordsConfig | None:
    """Check keyword definitions and normalize them to a KeywordsConfig.

    Accepts a list of definitions (intersection mode), a mapping with
    ``mode`` and ``definitions``, or a ready ``KeywordsConfig``.
    """
    if keywords is None:
        return None
    if isinstance(keywords, KeywordsConfig):
        config = keywords
    else:
        if isinstance(keywords, Mapping):
            data = keywords
        elif _is_list_like(keywords):
            data = {"definitions": list(keywords)}
        else:
            raise OptionsError(
                f"keywords must be a list or mapping, received {type(keywords).__name__}",
                ErrorCode.INVALID_KEYWORD,
            )
        try:
            config = KeywordsConfig.model_validate(data)
        except ValidationError as e:
            raise OptionsError(_describe("keywords", e), ErrorCode.INVALID_KEYWORD) from e

    seen: set[str] = set()
    for index, definition in enumerate(config.definitions):
        if definition.name in seen:
            raise OptionsError(
                f"keywords.definitions[{index}].name {definition.name!r} is already defined",
                ErrorCode.INVALID_KEYWORD,
            )
        seen.add(definition.name)
    return config


def validate_settings(
    settings: SearchSettings | None = None,
    **overrides: Any,
) -> SearchSettings:
    """Merge explicit option values over ``settings`` and range-check them.

    Overrides set to None fall back to ``settings`` (or the defaults).
    Validation is strict: booleans are not numbers and integer options
    reject floats.
    """
    data = (settings or SearchSettings()).model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SearchSettings.model_validate(data, strict=True)
    except ValidationError as e:
        first = e.errors()[0]
        code = (
            ErrorCode.INVALID_MAX_STRING_LENGTH
            if first["loc"] and first["loc"][0] == "max_string_length"
            else ErrorCode.INVALID_FIELD_CONFIG
        )
        raise OptionsError(_describe("options", e), code) from e


def validate_options(
    collection: Any,
    fields: Any,
    keywords: Any = None,
    settings: SearchSettings | None = None,
    **overrides: Any,
) -> ValidatedOptions:
    """Validate and normalize everything an engine is built from.

    Order: collection, fields, keywords, then numeric settings.

    Raises:
        OptionsError: On the first invalid option.
    """
    items = validate_collection(collection)
    specs = validate_fields(fields)
    keywords_config = validate_keywords(keywords)
    resolved = validate_settings(settings, **overrides)
    return ValidatedOptions(
        collection=items,
        fields=normalize_field_specs(specs, resolved.threshold),
        keywords=keywords_config,
        settings=resolved,
    )
