"""Weighted multi-field scoring of a single item."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fuzzbox.config.defaults import DEFAULT_MAX_STRING_LENGTH, DEFAULT_THRESHOLD
from fuzzbox.config.schema import FieldSpec
from fuzzbox.search.fuzzy import fuzzy_score
from fuzzbox.search.nested import MISSING, resolve_path

FieldInput = str | Mapping[str, Any] | FieldSpec


@dataclass
class ItemScore:
    """Aggregated score of one item across all fields."""

    score: float  # 0-1 weighted average
    warnings: list[str] = field(default_factory=list)


def normalize_field_specs(
    fields: Iterable[FieldInput],
    global_threshold: float,
) -> list[FieldSpec]:
    """Expand field inputs into full specs.

    Bare strings become ``FieldSpec(path=..., weight=1)``; every spec
    without its own threshold inherits ``global_threshold``.
    """
    normalized: list[FieldSpec] = []
    for entry in fields:
        if isinstance(entry, str):
            spec = FieldSpec(path=entry)
        elif isinstance(entry, FieldSpec):
            spec = entry
        else:
            spec = FieldSpec.model_validate(entry)
        if spec.threshold is None:
            spec = spec.model_copy(update={"threshold": global_threshold})
        normalized.append(spec)
    return normalized


def stringify(value: Any) -> str:
    """Coerce a resolved field value to the text it is compared as."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return " ".join(stringify(element) for element in value if element is not None)
    return str(value)


def score_item(
    item: Any,
    tokens: Sequence[str],
    fields: Sequence[FieldSpec],
    case_sensitive: bool = False,
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH,
) -> ItemScore:
    """Score an item against search tokens across weighted fields.

    Each field contributes the best score any token achieves on it. The
    item score is the weight-averaged contribution over the fields that
    resolved on the item; fields missing from the item are skipped.

    Args:
        item: The record to score.
        tokens: Search tokens. An empty sequence scores 0.
        fields: Normalized field specs.
        case_sensitive: Compare without case folding.
        max_string_length: Truncation limit passed to the fuzzy scorer.

    Returns:
        ItemScore with the weighted score and collected warnings. Missing
        multi-segment paths produce a warning; missing flat fields don't.
    """
    if not tokens:
        return ItemScore(0.0)

    warnings: list[str] = []
    total_score = 0.0
    total_weight = 0.0

    for spec in fields:
        value = resolve_path(item, spec.path)
        if value is MISSING:
            if "." in spec.path:
                warnings.append(f'Field "{spec.path}" not found on item')
            continue

        text = stringify(value)
        threshold = spec.threshold if spec.threshold is not None else DEFAULT_THRESHOLD

        best = 0.0
        for token in tokens:
            match = fuzzy_score(token, text, threshold, case_sensitive, max_string_length)
            warnings.extend(match.warnings)
            best = max(best, match.score)

        total_score += best * spec.weight
        total_weight += spec.weight

    return ItemScore(
        score=total_score / total_weight if total_weight > 0 else 0.0,
        warnings=warnings,
    )
