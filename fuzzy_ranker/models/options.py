"""Search option models."""

import re
from typing import Any, Callable, Dict, List, Optional, Pattern, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..config import Settings, get_settings

DEFAULT_TOKEN_SEPARATOR = r" +"


def _default_sort_fn(a: Any, b: Any) -> float:
    """Order item results by ascending score."""
    return a.score - b.score


class KeySpec(BaseModel):
    """A searchable field with an optional relative weight."""
    
    name: str = Field(..., description="Dotted path of the field")
    weight: float = Field(default=1.0, description="Relative importance, in (0, 1]")
    
    model_config = ConfigDict(frozen=True)


class SearchOptions(BaseModel):
    """Immutable configuration shared by every matcher built for one engine."""
    
    # Approximately where in the text the pattern is expected to be found
    location: int = Field(default=0, ge=0, description="Expected match offset")
    # A letter match this many characters away from `location` scores as a
    # complete mismatch; 0 requires the match to be exactly at `location`
    distance: int = Field(default=100, ge=0, description="Tolerance radius around location")
    # 0.0 requires a perfect match (letters and location), 1.0 matches anything
    threshold: float = Field(default=0.6, ge=0.0, le=1.0, description="Maximum acceptable score")
    max_pattern_length: int = Field(default=32, ge=1, description="Machine word size")
    is_case_sensitive: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_case_sensitive", "case_sensitive"),
        description="Whether comparisons are case sensitive",
    )
    token_separator: Pattern = Field(
        default_factory=lambda: re.compile(DEFAULT_TOKEN_SEPARATOR),
        description="Regex used to split the query and field values into tokens",
    )
    find_all_matches: bool = Field(
        default=False, description="Keep scanning past the first perfect match"
    )
    min_match_char_length: int = Field(
        default=1, ge=1, description="Shortest run reported as a matched range"
    )
    keys: List[Union[str, KeySpec]] = Field(default_factory=list, description="Fields to search")
    id: Optional[str] = Field(default=None, description="Path of the identifier to return")
    should_sort: bool = Field(default=True, description="Sort results by score")
    tokenize: bool = Field(default=False, description="Also score individual tokens")
    match_all_tokens: bool = Field(
        default=False, description="Only keep items matching every query token"
    )
    include_matches: bool = Field(default=False, description="Attach matched ranges to results")
    include_score: bool = Field(default=False, description="Attach scores to results")
    get_fn: Optional[Callable[[Any, str], Any]] = Field(
        default=None, description="Field accessor: get_fn(item, path), dotted-path lookup if None"
    )
    sort_fn: Callable[[Any, Any], float] = Field(
        default=_default_sort_fn, description="Comparator over item results"
    )
    verbose: bool = Field(default=False, description="Trace search internals to the log")
    
    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    @field_validator("token_separator", mode="before")
    @classmethod
    def compile_separator(cls, v: Union[str, Pattern]) -> Pattern:
        """Accept plain strings as separator expressions."""
        if isinstance(v, str):
            if not v:
                raise ValueError("Token separator cannot be empty")
            return re.compile(v)
        return v

    @field_validator("keys", mode="before")
    @classmethod
    def validate_keys(cls, v: Any) -> Any:
        """Reject a bare string where a list of keys is expected."""
        if isinstance(v, str):
            raise ValueError("Keys must be a list of names or {name, weight} entries")
        return v

    @property
    def key_names(self) -> List[str]:
        """Names of the configured keys, in declaration order."""
        return [key if isinstance(key, str) else key.name for key in self.keys]

    @classmethod
    def _by_field_name(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Rename alias keys (e.g. ``case_sensitive``) to their field names."""
        names = {}
        for name, field in cls.model_fields.items():
            if isinstance(field.validation_alias, AliasChoices):
                for choice in field.validation_alias.choices:
                    if isinstance(choice, str):
                        names[choice] = name
        return {names.get(key, key): value for key, value in values.items()}

    def replace(self, **overrides: Any) -> "SearchOptions":
        """
        Build a validated copy with some fields replaced.
        
        Args:
            **overrides: Field values to change
            
        Returns:
            New SearchOptions instance
        """
        if not overrides:
            return self
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(self._by_field_name(overrides))
        return type(self)(**values)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: Any) -> "SearchOptions":
        """
        Build options from library settings.
        
        Args:
            settings: Settings to read defaults from (cached settings if None)
            **overrides: Explicit option values, taking precedence over settings
            
        Returns:
            SearchOptions instance
        """
        settings = settings or get_settings()
        values = {
            "location": settings.location,
            "distance": settings.distance,
            "threshold": settings.threshold,
            "max_pattern_length": settings.max_pattern_length,
            "min_match_char_length": settings.min_match_char_length,
            "is_case_sensitive": settings.case_sensitive,
        }
        values.update(cls._by_field_name(overrides))
        return cls(**values)
