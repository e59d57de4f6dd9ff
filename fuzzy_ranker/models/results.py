"""Result models produced by matchers and the search engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple

from pydantic import BaseModel, Field

Range = Tuple[int, int]


class MatchResult(NamedTuple):
    """Outcome of comparing one pattern against one string."""
    
    is_match: bool
    score: float  # 0 is a perfect match, 1 a complete mismatch
    matched_ranges: List[Range]


@dataclass
class FieldMatch:
    """A match result for one field value of an item."""
    
    key: str
    value: str
    is_match: bool
    score: float
    matched_ranges: List[Range] = field(default_factory=list)
    array_index: int = -1
    matched_tokens: FrozenSet[str] = frozenset()
    n_score: Optional[float] = None


@dataclass
class ItemResult:
    """All field matches collected for one candidate item."""
    
    item: Any
    output: List[FieldMatch] = field(default_factory=list)
    matched_tokens: Set[str] = field(default_factory=set)
    score: float = 1.0
    # Position of the item in the searched collection, or its mapping key
    ref: Any = None


class MatchDetail(BaseModel):
    """Matched ranges reported for one field value."""
    
    key: Optional[str] = Field(None, description="Field the value came from")
    value: str = Field(..., description="The compared string")
    indices: List[Range] = Field(..., description="Inclusive [start, end] matched ranges")
    array_index: Optional[int] = Field(None, description="Position within a multi-valued field")


class SearchHit(BaseModel):
    """A formatted search result carrying matches and/or score."""
    
    item: Any = Field(..., description="The matched item or its identifier")
    matches: Optional[List[MatchDetail]] = Field(None, description="Matched ranges per field")
    score: Optional[float] = Field(None, ge=0.0, le=1.0, description="Aggregated score (0 is best)")

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict view, omitting fields that were not requested."""
        return self.model_dump(exclude_none=True)
