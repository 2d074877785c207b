"""Tests for search option validation."""

from typing import Any

import pytest

from fuzzbox.config.schema import FieldSpec, KeywordMode, KeywordsConfig, SearchSettings
from fuzzbox.exceptions import ErrorCode, OptionsError
from fuzzbox.search import (
    validate_collection,
    validate_fields,
    validate_keywords,
    validate_options,
    validate_settings,
)


def _noop(items: list[Any], terms: list[str]) -> list[Any]:
    return items


def _definition(**overrides: Any) -> dict[str, Any]:
    definition: dict[str, Any] = {"name": "completed", "triggers": ["done"], "handler": _noop}
    definition.update(overrides)
    return definition


class TestValidateCollection:
    """Tests for validate_collection()."""

    @pytest.mark.parametrize("value", ["invalid", 42, None, {"a": 1}, b"bytes"])
    def test_rejects_non_collections(self, value: Any) -> None:
        """Test strings, numbers, None and mappings are rejected."""
        with pytest.raises(OptionsError) as exc_info:
            validate_collection(value)
        assert exc_info.value.code == ErrorCode.INVALID_COLLECTION

    def test_list_is_copied(self) -> None:
        """Test a list comes back as an equal, separate list."""
        items = [{"a": 1}, {"a": 2}]
        result = validate_collection(items)
        assert result == items
        assert result is not items

    def test_set_and_tuple(self) -> None:
        """Test sets and tuples are converted to lists."""
        assert sorted(validate_collection({1, 2, 3})) == [1, 2, 3]
        assert validate_collection((1, 2)) == [1, 2]


class TestValidateFields:
    """Tests for validate_fields()."""

    def _code(self, fields: Any) -> ErrorCode:
        with pytest.raises(OptionsError) as exc_info:
            validate_fields(fields)
        return exc_info.value.code

    def test_empty_fields(self) -> None:
        """Test an empty list is rejected."""
        assert self._code([]) == ErrorCode.INVALID_FIELD_CONFIG

    def test_non_list_fields(self) -> None:
        """Test a bare string or None is rejected."""
        assert self._code("title") == ErrorCode.INVALID_FIELD_CONFIG
        assert self._code(None) == ErrorCode.INVALID_FIELD_CONFIG

    def test_entry_wrong_type(self) -> None:
        """Test entries must be strings or mappings."""
        assert self._code([42]) == ErrorCode.INVALID_FIELD_CONFIG

    def test_missing_path(self) -> None:
        """Test mapping entries need a path."""
        assert self._code([{"weight": 0.5}]) == ErrorCode.INVALID_FIELD_CONFIG
        assert self._code([{"name": "title"}]) == ErrorCode.INVALID_FIELD_CONFIG
        assert self._code([""]) == ErrorCode.INVALID_FIELD_CONFIG

    @pytest.mark.parametrize("weight", [-0.1, 2, 1.5, "high"])
    def test_invalid_weight(self, weight: Any) -> None:
        """Test weights outside [0, 1] or non-numeric are rejected."""
        assert self._code([{"path": "title", "weight": weight}]) == ErrorCode.INVALID_FIELD_WEIGHT

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_invalid_threshold(self, threshold: float) -> None:
        """Test field thresholds outside [0, 1] are rejected."""
        code = self._code([{"path": "title", "threshold": threshold}])
        assert code == ErrorCode.INVALID_FIELD_CONFIG

    def test_error_message_names_field(self) -> None:
        """Test the message points at the offending entry."""
        with pytest.raises(OptionsError, match=r"fields\[1\]\.weight"):
            validate_fields(["title", {"path": "genres", "weight": 2}])

    def test_valid_fields(self) -> None:
        """Test strings, mappings and specs are accepted."""
        specs = validate_fields(
            ["title", {"path": "genres", "weight": 0.5, "threshold": 0.2}, FieldSpec(path="year")]
        )
        assert specs[0] == FieldSpec(path="title")
        assert specs[1].weight == 0.5
        assert specs[1].threshold == 0.2
        assert specs[2].threshold is None


class TestValidateKeywords:
    """Tests for validate_keywords()."""

    def _code(self, keywords: Any) -> ErrorCode:
        with pytest.raises(OptionsError) as exc_info:
            validate_keywords(keywords)
        return exc_info.value.code

    def test_none(self) -> None:
        """Test no keywords is allowed."""
        assert validate_keywords(None) is None

    def test_list_format_defaults_to_intersection(self) -> None:
        """Test a list of definitions uses intersection mode."""
        config = validate_keywords([_definition()])
        assert config is not None
        assert config.mode == KeywordMode.INTERSECTION
        assert config.definitions[0].triggers == ("done",)

    def test_mapping_format_preserves_mode(self) -> None:
        """Test the mapping format keeps its mode, including aliases."""
        assert validate_keywords({"mode": "union", "definitions": [_definition()]}).mode == KeywordMode.UNION  # type: ignore[union-attr]
        assert validate_keywords({"mode": "or", "definitions": [_definition()]}).mode == KeywordMode.UNION  # type: ignore[union-attr]
        assert validate_keywords({"mode": "and", "definitions": []}).mode == KeywordMode.INTERSECTION  # type: ignore[union-attr]

    def test_mapping_format_default_mode(self) -> None:
        """Test mode defaults to intersection."""
        config = validate_keywords({"definitions": [_definition()]})
        assert config is not None
        assert config.mode == KeywordMode.INTERSECTION

    def test_config_instance_passes_through(self) -> None:
        """Test a ready KeywordsConfig is accepted."""
        config = KeywordsConfig(mode=KeywordMode.UNION)
        assert validate_keywords(config) is config

    def test_missing_name(self) -> None:
        """Test definitions need a name."""
        assert self._code([_definition(name="")]) == ErrorCode.INVALID_KEYWORD
        definition = _definition()
        del definition["name"]
        assert self._code([definition]) == ErrorCode.INVALID_KEYWORD

    def test_missing_triggers(self) -> None:
        """Test definitions need at least one non-empty trigger."""
        assert self._code([_definition(triggers=[])]) == ErrorCode.INVALID_KEYWORD
        assert self._code([_definition(triggers=None)]) == ErrorCode.INVALID_KEYWORD
        assert self._code([_definition(triggers=[" "])]) == ErrorCode.INVALID_KEYWORD

    def test_handler_not_callable(self) -> None:
        """Test handlers must be callable."""
        assert self._code([_definition(handler="nope")]) == ErrorCode.INVALID_KEYWORD
        definition = _definition()
        del definition["handler"]
        assert self._code([definition]) == ErrorCode.INVALID_KEYWORD

    def test_unknown_mode(self) -> None:
        """Test unknown modes are rejected."""
        assert self._code({"mode": "xor", "definitions": []}) == ErrorCode.INVALID_KEYWORD

    def test_wrong_type(self) -> None:
        """Test keywords must be a list or mapping."""
        assert self._code(42) == ErrorCode.INVALID_KEYWORD

    def test_duplicate_names(self) -> None:
        """Test definition names must be unique."""
        keywords = [_definition(), _definition(triggers=["finished"])]
        assert self._code(keywords) == ErrorCode.INVALID_KEYWORD


class TestValidateSettings:
    """Tests for validate_settings()."""

    def _code(self, **overrides: Any) -> ErrorCode:
        with pytest.raises(OptionsError) as exc_info:
            validate_settings(**overrides)
        return exc_info.value.code

    def test_defaults(self) -> None:
        """Test default values."""
        settings = validate_settings()
        assert settings.threshold == 0.3
        assert settings.limit is None
        assert settings.debounce == 0
        assert settings.case_sensitive is False
        assert settings.min_match_char_length == 1
        assert settings.max_string_length == 1000

    def test_explicit_values(self) -> None:
        """Test explicit values are kept."""
        settings = validate_settings(
            threshold=0.5,
            limit=10,
            debounce=300,
            case_sensitive=True,
            min_match_char_length=2,
            max_string_length=500,
        )
        assert settings.threshold == 0.5
        assert settings.limit == 10
        assert settings.debounce == 300
        assert settings.case_sensitive is True
        assert settings.min_match_char_length == 2
        assert settings.max_string_length == 500

    def test_overrides_beat_base_settings(self) -> None:
        """Test None overrides fall back to the base settings."""
        base = SearchSettings(threshold=0.9, limit=5)
        settings = validate_settings(base, threshold=0.4, limit=None)
        assert settings.threshold == 0.4
        assert settings.limit == 5

    @pytest.mark.parametrize("threshold", [-0.1, 1.5, "0.5"])
    def test_invalid_threshold(self, threshold: Any) -> None:
        """Test threshold must be a number in [0, 1]."""
        assert self._code(threshold=threshold) == ErrorCode.INVALID_FIELD_CONFIG

    @pytest.mark.parametrize("limit", [0, -1, 2.5])
    def test_invalid_limit(self, limit: Any) -> None:
        """Test limit must be a positive integer."""
        assert self._code(limit=limit) == ErrorCode.INVALID_FIELD_CONFIG

    def test_invalid_debounce(self) -> None:
        """Test debounce must be non-negative."""
        assert self._code(debounce=-1) == ErrorCode.INVALID_FIELD_CONFIG

    def test_invalid_min_match_char_length(self) -> None:
        """Test min_match_char_length must be at least 1."""
        assert self._code(min_match_char_length=0) == ErrorCode.INVALID_FIELD_CONFIG

    @pytest.mark.parametrize("value", [0, -100, 100.5, "100"])
    def test_invalid_max_string_length(self, value: Any) -> None:
        """Test max_string_length must be a positive integer."""
        assert self._code(max_string_length=value) == ErrorCode.INVALID_MAX_STRING_LENGTH

    @pytest.mark.parametrize("value", [1, 50, 1000, 10000])
    def test_valid_max_string_length(self, value: int) -> None:
        """Test positive integers are accepted."""
        assert validate_settings(max_string_length=value).max_string_length == value


class TestValidateOptions:
    """Tests for validate_options()."""

    def test_normalizes_fields_with_threshold(self) -> None:
        """Test field thresholds inherit the resolved global threshold."""
        options = validate_options([{"title": "x"}], ["title"], threshold=0.6)
        assert options.fields == [FieldSpec(path="title", weight=1.0, threshold=0.6)]
        assert options.keywords is None
        assert options.settings.threshold == 0.6

    def test_collection_checked_first(self) -> None:
        """Test the collection error wins over later errors."""
        with pytest.raises(OptionsError) as exc_info:
            validate_options("bad", [], threshold=5)
        assert exc_info.value.code == ErrorCode.INVALID_COLLECTION

    def test_fields_checked_before_keywords(self) -> None:
        """Test field errors win over keyword errors."""
        with pytest.raises(OptionsError) as exc_info:
            validate_options([], [], keywords=42)
        assert exc_info.value.code == ErrorCode.INVALID_FIELD_CONFIG

    def test_keywords_checked_before_settings(self) -> None:
        """Test keyword errors win over numeric errors."""
        with pytest.raises(OptionsError) as exc_info:
            validate_options([], ["title"], keywords=42, max_string_length=0)
        assert exc_info.value.code == ErrorCode.INVALID_KEYWORD
