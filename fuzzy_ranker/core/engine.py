"""Main search engine implementation."""

from collections.abc import Iterable, Mapping
from enum import Enum
from functools import cmp_to_key, reduce
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import structlog

from ..config import Settings
from ..exceptions import InvalidWeightError
from ..models.options import KeySpec, SearchOptions
from ..models.results import FieldMatch, ItemResult, MatchDetail, SearchHit
from .accessor import FieldValue, deep_value, is_leaf, leaf_text
from .bitap import FUZZY_PERFECT_SCORE, BitapMatcher
from .normalizer import TextNormalizer

logger = structlog.get_logger(__name__)

Collection = Union[Sequence[Any], Mapping]


class CollectionShape(str, Enum):
    """How the items of a collection are searched."""

    STRINGS = "strings"
    RECORDS = "records"


class _ScoreAccumulator(NamedTuple):
    total_score: float = 0.0
    best_score: float = 1.0


class SearchEngine:
    """Ranks a collection of strings or records against fuzzy queries."""

    def __init__(
        self,
        collection: Collection,
        options: Optional[SearchOptions] = None,
        **overrides: Any
    ) -> None:
        """
        Initialize the search engine.

        Args:
            collection: Strings or records to search; mappings are searched
                over their values
            options: Search options (defaults if None)
            **overrides: Option values replacing those in `options`

        Raises:
            InvalidWeightError: If a key weight is not in (0, 1]
            pydantic.ValidationError: If an option value is malformed
        """
        self.options = (options or SearchOptions()).replace(**overrides)
        self.get_fn = self.options.get_fn or deep_value
        self.normalizer = TextNormalizer(self.options.is_case_sensitive)
        self.weights = self._build_weights(self.options.keys)
        self.list: Collection = []
        self.set_collection(collection)

        self._log("engine.created", keys=self.options.key_names, weights=self.weights)

    @classmethod
    def from_settings(
        cls,
        collection: Collection,
        settings: Optional[Settings] = None,
        **overrides: Any
    ) -> "SearchEngine":
        """
        Create an engine whose defaults come from library settings.

        Args:
            collection: Strings or records to search
            settings: Settings to read (cached settings if None)
            **overrides: Explicit option values

        Returns:
            SearchEngine instance
        """
        return cls(collection, SearchOptions.from_settings(settings, **overrides))

    @staticmethod
    def _build_weights(keys: Iterable[Union[str, KeySpec]]) -> Dict[str, float]:
        """
        Compute the internal weight of every key.

        A declared weight w is stored inverted as ``1 - w``; a weight of
        exactly 1 stays 1.

        Args:
            keys: Configured keys

        Returns:
            Mapping of key name to internal weight
        """
        weights: Dict[str, float] = {}
        for key in keys:
            if isinstance(key, str):
                weights[key] = 1.0
                continue
            if key.weight <= 0 or key.weight > 1:
                raise InvalidWeightError(key.name, key.weight)
            weights[key.name] = (1 - key.weight) or 1.0
        return weights

    def set_collection(self, collection: Collection) -> Collection:
        """
        Replace the searched collection.

        Args:
            collection: New strings or records to search

        Returns:
            The collection
        """
        self.list = collection
        return collection

    def search(self, pattern: str) -> List[Any]:
        """
        Rank the collection against a query.

        Args:
            pattern: Search query

        Returns:
            Matching items (or their ids, or SearchHit records when matches or
            scores are requested), best first when sorting is enabled. For a
            mapping collection, each entry is a ``(key, result)`` pair.
        """
        self._log("search.start", pattern=pattern)

        token_searchers = self._create_token_searchers(pattern) if self.options.tokenize else []
        full_searcher = self._create_searcher(pattern)

        results = self._compute_score(self._search(token_searchers, full_searcher))
        if self.options.should_sort:
            results = self._sort(results)

        formatted = self._format(results)
        self._log("search.done", pattern=pattern, total_results=len(formatted))
        return formatted

    def _create_searcher(self, pattern: str) -> BitapMatcher:
        return BitapMatcher(pattern, self.options)

    def _create_token_searchers(self, pattern: str) -> List[BitapMatcher]:
        tokens = self.normalizer.tokenize(pattern, self.options.token_separator)
        return [self._create_searcher(token) for token in tokens if token]

    def _entries(self) -> Iterator[Tuple[Any, Any]]:
        if isinstance(self.list, Mapping):
            return iter(self.list.items())
        return enumerate(self.list)

    def _shape(self) -> CollectionShape:
        """Pick the search branch from the first item of the collection."""
        values = self.list.values() if isinstance(self.list, Mapping) else self.list
        first = next(iter(values), None)
        if isinstance(first, str):
            return CollectionShape.STRINGS
        return CollectionShape.RECORDS

    def _search(
        self,
        token_searchers: List[BitapMatcher],
        full_searcher: BitapMatcher
    ) -> List[ItemResult]:
        """
        Collect the matching items of the collection.

        Args:
            token_searchers: One matcher per query token (empty unless tokenizing)
            full_searcher: Matcher for the whole query

        Returns:
            Unscored item results
        """
        if self._shape() is CollectionShape.STRINGS:
            results = self._search_strings(token_searchers, full_searcher)
        else:
            results = self._search_records(token_searchers, full_searcher)

        if self.options.tokenize and self.options.match_all_tokens:
            # Every distinct query token must match somewhere in the item
            token_count = len({searcher.pattern for searcher in token_searchers})
            results = [result for result in results if len(result.matched_tokens) == token_count]

        return results

    def _search_strings(
        self,
        token_searchers: List[BitapMatcher],
        full_searcher: BitapMatcher
    ) -> List[ItemResult]:
        results = []
        for ref, value in self._entries():
            if not isinstance(value, str):
                continue
            field_match = self._analyze_string("", -1, value, token_searchers, full_searcher)
            if field_match.is_match:
                results.append(ItemResult(
                    item=value,
                    output=[field_match],
                    matched_tokens=set(field_match.matched_tokens),
                    ref=ref
                ))
        return results

    def _search_records(
        self,
        token_searchers: List[BitapMatcher],
        full_searcher: BitapMatcher
    ) -> List[ItemResult]:
        results = []
        for ref, item in self._entries():
            result = ItemResult(item=item, ref=ref)
            for key in self.options.key_names:
                for field_value in self._field_values(item, key):
                    if not is_leaf(field_value.value):
                        continue
                    field_match = self._analyze_string(
                        key,
                        field_value.array_index,
                        leaf_text(field_value.value),
                        token_searchers,
                        full_searcher
                    )
                    if field_match.is_match:
                        result.output.append(field_match)
                        result.matched_tokens |= field_match.matched_tokens

            if result.output:
                results.append(result)
        return results

    def _field_values(self, item: Any, path: str) -> List[FieldValue]:
        """
        Resolve a path through the accessor into tagged values.

        Args:
            item: Record to read
            path: Dotted field path

        Returns:
            List of FieldValue entries
        """
        raw = self.get_fn(item, path)
        if raw is None:
            return []
        if isinstance(raw, FieldValue):
            return [raw]
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
            return [FieldValue(raw)]

        entries = list(raw)
        if len(entries) == 1:
            # A lone value is the field itself, not a list element
            entry = entries[0]
            return [entry if isinstance(entry, FieldValue) else FieldValue(entry)]
        return [
            entry if isinstance(entry, FieldValue) else FieldValue(entry, index)
            for index, entry in enumerate(entries)
        ]

    def _analyze_string(
        self,
        key: str,
        array_index: int,
        value: str,
        token_searchers: List[BitapMatcher],
        full_searcher: BitapMatcher
    ) -> FieldMatch:
        """
        Score one field value against the query and its tokens.

        Args:
            key: Field the value came from ("" for flat strings)
            array_index: Position of the value in a list field, -1 otherwise
            value: The string to score
            token_searchers: One matcher per query token
            full_searcher: Matcher for the whole query

        Returns:
            FieldMatch for this value
        """
        options = self.options
        main_result = full_searcher.search(value)
        self._log("search.field", key=key or "-", value=value, score=main_result.score)

        exists = False
        average_score = -1.0
        matched_tokens = set()

        if options.tokenize:
            words = self.normalizer.tokenize(value, options.token_separator)
            scores: List[float] = []
            for token_searcher in token_searchers:
                for word in words:
                    token_result = token_searcher.search(word)
                    if token_result.is_match:
                        exists = True
                        matched_tokens.add(token_searcher.pattern)
                        scores.append(token_result.score)
                    elif not options.match_all_tokens:
                        # A miss counts as a full mismatch
                        scores.append(1.0)

            average_score = self.normalizer.average(scores)
            self._log("search.token_average", key=key or "-", average=average_score)

        if average_score > -1:
            final_score = self.normalizer.average([main_result.score, average_score])
        else:
            final_score = main_result.score

        return FieldMatch(
            key=key,
            value=value,
            is_match=exists or main_result.is_match,
            score=final_score,
            matched_ranges=main_result.matched_ranges,
            array_index=array_index,
            matched_tokens=frozenset(matched_tokens)
        )

    def _accumulate(self, scores: _ScoreAccumulator, field_match: FieldMatch) -> _ScoreAccumulator:
        """
        Fold one field score into the item's running scores.

        Unit-weight fields are summed for averaging; any other weight only
        competes for the best (lowest) weighted score.
        """
        weight = self.weights.get(field_match.key, 1.0)
        score = field_match.score if weight == 1 else (field_match.score or FUZZY_PERFECT_SCORE)
        n_score = score * weight

        if weight != 1:
            return scores._replace(best_score=min(scores.best_score, n_score))

        field_match.n_score = n_score
        return scores._replace(total_score=scores.total_score + n_score)

    def _compute_score(self, results: List[ItemResult]) -> List[ItemResult]:
        """
        Aggregate field scores into one score per item.

        Items whose fields all have unit weight get the mean of their field
        scores. As soon as a weighted field matched, the item score is the
        lowest weighted field score instead.

        Args:
            results: Item results to score in place

        Returns:
            The same item results
        """
        for result in results:
            scores = reduce(self._accumulate, result.output, _ScoreAccumulator())
            if scores.best_score == 1:
                result.score = scores.total_score / len(result.output)
            else:
                result.score = scores.best_score
            self._log("search.item_score", ref=result.ref, score=result.score)
        return results

    def _sort(self, results: List[ItemResult]) -> List[ItemResult]:
        # sorted() is stable: ties keep collection order
        return sorted(results, key=cmp_to_key(self.options.sort_fn))

    def _project(self, item: Any) -> Any:
        """Replace an item with its identifier when an id path is configured."""
        if not self.options.id:
            return item
        values = self._field_values(item, self.options.id)
        return values[0].value if values else None

    def _format(self, results: List[ItemResult]) -> List[Any]:
        """
        Shape item results into the values returned to the caller.

        Args:
            results: Scored (and possibly sorted) item results

        Returns:
            Bare items/ids, or SearchHit records when matches or scores are
            requested
        """
        options = self.options
        keyed = isinstance(self.list, Mapping)
        formatted = []

        for result in results:
            item = self._project(result.item)

            if options.include_matches or options.include_score:
                attached: Dict[str, Any] = {}
                if options.include_matches:
                    attached["matches"] = [
                        MatchDetail(
                            key=field_match.key or None,
                            value=field_match.value,
                            indices=list(field_match.matched_ranges),
                            array_index=(
                                field_match.array_index if field_match.array_index > -1 else None
                            )
                        )
                        for field_match in result.output
                        if field_match.matched_ranges
                    ]
                if options.include_score:
                    attached["score"] = result.score
                item = SearchHit(item=item, **attached)

            formatted.append((result.ref, item) if keyed else item)

        return formatted

    def _log(self, event: str, **fields: Any) -> None:
        if self.options.verbose:
            logger.info(event, **fields)
