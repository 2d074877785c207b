"""Dotted-path lookups over arbitrary records.

Records may be mappings, dataclasses or plain objects. Sequences, sets,
strings and other scalars are opaque leaves: a dotted path never walks
into them.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Final


class _Missing:
    """Sentinel type for an unresolvable path."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()

_OPAQUE_TYPES = (str, bytes, bytearray, int, float, complex, list, tuple, set, frozenset)


def _read_segment(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key, MISSING)
    if isinstance(current, _OPAQUE_TYPES):
        return MISSING
    if dataclasses.is_dataclass(current) and not isinstance(current, type):
        names = {f.name for f in dataclasses.fields(current)}
        return getattr(current, key) if key in names else MISSING
    attributes = getattr(current, "__dict__", None)
    if isinstance(attributes, dict):
        return attributes.get(key, MISSING)
    return MISSING


def resolve_path(record: Any, path: str) -> Any:
    """Read a dotted path out of a record.

    Args:
        record: The item to read from.
        path: Dotted path such as ``"company.location.city"``.

    Returns:
        The value at the path, or ``MISSING`` when any segment is absent,
        ``None``, or not a traversable record. A final value of ``None`` is
        also reported as ``MISSING``.
    """
    current = record
    for key in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        current = _read_segment(current, key)
    if current is None:
        return MISSING
    return current


def has_path(record: Any, path: str) -> bool:
    """Return True if the dotted path resolves to a value on the record."""
    return resolve_path(record, path) is not MISSING
