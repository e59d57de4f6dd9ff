"""Unit tests for search options and library settings."""

import re

import pytest
from pydantic import ValidationError

from fuzzy_ranker.config import Settings, get_settings
from fuzzy_ranker.models.options import KeySpec, SearchOptions


class TestSearchOptions:
    """Test cases for the SearchOptions model."""

    def test_defaults(self):
        """Test the default option values."""
        options = SearchOptions()

        assert options.location == 0
        assert options.distance == 100
        assert options.threshold == 0.6
        assert options.max_pattern_length == 32
        assert options.is_case_sensitive is False
        assert options.token_separator.pattern == " +"
        assert options.find_all_matches is False
        assert options.min_match_char_length == 1
        assert options.keys == []
        assert options.id is None
        assert options.should_sort is True
        assert options.tokenize is False
        assert options.match_all_tokens is False
        assert options.include_matches is False
        assert options.include_score is False
        assert options.get_fn is None
        assert options.verbose is False

    def test_keys_accept_names_and_weighted_entries(self):
        """Test mixing plain key names and weighted keys."""
        options = SearchOptions(keys=["title", {"name": "author", "weight": 0.7}])

        assert options.keys[0] == "title"
        assert options.keys[1] == KeySpec(name="author", weight=0.7)
        assert options.key_names == ["title", "author"]

    def test_bare_string_keys_rejected(self):
        """Test that a single string is not accepted as a key list."""
        with pytest.raises(ValidationError):
            SearchOptions(keys="title")

    def test_separator_compiled_from_string(self):
        """Test that a string separator becomes a compiled regex."""
        options = SearchOptions(token_separator=r"[ ,]+")

        assert options.token_separator.split("a, b c") == ["a", "b", "c"]

    def test_compiled_separator_kept(self):
        """Test that a compiled separator is used as-is."""
        separator = re.compile(r"-")
        options = SearchOptions(token_separator=separator)

        assert options.token_separator is separator

    def test_empty_separator_rejected(self):
        """Test that an empty separator is invalid."""
        with pytest.raises(ValidationError):
            SearchOptions(token_separator="")

    @pytest.mark.parametrize("field,value", [
        ("threshold", -0.1),
        ("threshold", 1.5),
        ("location", -1),
        ("distance", -1),
        ("max_pattern_length", 0),
        ("min_match_char_length", 0),
    ])
    def test_out_of_range_values_rejected(self, field, value):
        """Test numeric option bounds."""
        with pytest.raises(ValidationError):
            SearchOptions(**{field: value})

    def test_case_sensitive_alias(self):
        """Test that both case sensitivity spellings are accepted."""
        assert SearchOptions(case_sensitive=True).is_case_sensitive is True
        assert SearchOptions(is_case_sensitive=True).is_case_sensitive is True

    def test_replace_with_alias(self):
        """Test that replace honours the short case sensitivity spelling."""
        options = SearchOptions()

        assert options.replace(case_sensitive=True).is_case_sensitive is True
        assert options.replace(is_case_sensitive=True).is_case_sensitive is True
        assert options.is_case_sensitive is False

    def test_options_are_frozen(self):
        """Test that options cannot be mutated after construction."""
        options = SearchOptions()

        with pytest.raises(ValidationError):
            options.threshold = 0.1

    def test_replace(self):
        """Test building a modified copy."""
        options = SearchOptions(keys=["title"], threshold=0.4)
        replaced = options.replace(threshold=0.2, tokenize=True)

        assert replaced.threshold == 0.2
        assert replaced.tokenize is True
        assert replaced.keys == ["title"]
        assert options.threshold == 0.4
        assert options.replace() is options

    def test_replace_validates(self):
        """Test that replaced values go through validation."""
        with pytest.raises(ValidationError):
            SearchOptions().replace(threshold=2)

    def test_from_settings(self):
        """Test that settings provide defaults and overrides win."""
        settings = Settings(threshold=0.3, distance=50, case_sensitive=True)
        options = SearchOptions.from_settings(settings, distance=10, keys=["title"])

        assert options.threshold == 0.3
        assert options.distance == 10
        assert options.is_case_sensitive is True
        assert options.keys == ["title"]

    def test_default_sort_fn_orders_by_score(self):
        """Test the default comparator."""
        class Scored:
            def __init__(self, score):
                self.score = score

        options = SearchOptions()
        assert options.sort_fn(Scored(0.1), Scored(0.5)) < 0
        assert options.sort_fn(Scored(0.5), Scored(0.1)) > 0
        assert options.sort_fn(Scored(0.2), Scored(0.2)) == 0


class TestSettings:
    """Test cases for the Settings model."""

    def test_defaults(self, monkeypatch):
        """Test default settings values."""
        for name in ("THRESHOLD", "DISTANCE", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(f"FUZZY_RANKER_{name}", raising=False)
        settings = Settings(_env_file=None)

        assert settings.location == 0
        assert settings.distance == 100
        assert settings.threshold == 0.6
        assert settings.max_pattern_length == 32
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"

    def test_environment_overrides(self, monkeypatch):
        """Test reading settings from prefixed environment variables."""
        monkeypatch.setenv("FUZZY_RANKER_THRESHOLD", "0.25")
        monkeypatch.setenv("FUZZY_RANKER_CASE_SENSITIVE", "true")
        monkeypatch.setenv("FUZZY_RANKER_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.threshold == 0.25
        assert settings.case_sensitive is True
        assert settings.log_level == "DEBUG"

    def test_negative_location_rejected(self, monkeypatch):
        """Test that a negative expected location is rejected."""
        monkeypatch.setenv("FUZZY_RANKER_LOCATION", "-5")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_environment_value(self, monkeypatch):
        """Test that out-of-range environment values are rejected."""
        monkeypatch.setenv("FUZZY_RANKER_THRESHOLD", "3")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        """Test that get_settings returns a shared instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
