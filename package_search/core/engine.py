"""Query resolution over the package index."""

import threading
import time
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Sequence, Set

from ..models.package import PackageRecord
from ..models.request import PackageQuery, QueryMode
from .index import PackageIndex
from .tokenizer import Tokenizer


def intersect_smallest_first(sets: Sequence[AbstractSet[PackageRecord]]) -> Set[PackageRecord]:
    """
    Intersect candidate sets, driving the work from the smallest one.

    The sets are ordered by descending size; members of the smallest set are
    kept only if every larger set also holds them.

    Args:
        sets: Candidate sets; an empty sequence intersects to nothing

    Returns:
        Records present in every set
    """
    if not sets:
        return set()

    ordered = sorted(sets, key=len, reverse=True)
    smallest = ordered.pop()

    return {record for record in smallest if all(record in other for other in ordered)}


class SearchEngine:
    """Answers name, provides and description queries against one snapshot."""

    def __init__(self, tokenizer: Optional[Tokenizer] = None) -> None:
        """
        Initialize the search engine with an empty index.

        Args:
            tokenizer: Word extractor used when building the index
        """
        self.tokenizer = tokenizer or Tokenizer()
        self._index = PackageIndex.build([], self.tokenizer)
        self._loaded = False

        # Performance tracking
        self._stats_lock = threading.Lock()
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "name_queries": 0,
            "provides_queries": 0,
            "description_queries": 0,
            "empty_results": 0,
            "fallbacks": 0,
            "total_execution_time": 0.0,
        }

    @property
    def index(self) -> PackageIndex:
        return self._index

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load_records(self, records: Iterable[PackageRecord]) -> PackageIndex:
        """
        Build the index for a snapshot and start serving it.

        The index is built completely before it replaces the current one, so
        a query never sees a partial index.

        Args:
            records: Package records in snapshot order

        Returns:
            The new index
        """
        index = PackageIndex.build(records, self.tokenizer)
        self._index = index
        self._loaded = True
        return index

    def lookup_names(self, terms: Sequence[str]) -> List[PackageRecord]:
        """
        Exact name lookup for every term.

        Args:
            terms: Package names

        Returns:
            Matching records in term order; unknown names are skipped
        """
        index = self._index
        found = (index.get_by_name(term) for term in terms)
        return [record for record in found if record is not None]

    def lookup_provides(self, terms: Sequence[str]) -> List[PackageRecord]:
        """
        Find the packages that provide the first term.

        Remaining terms are ignored.

        Returns:
            Providing records in snapshot order, or an empty list
        """
        if not terms:
            return []
        return list(self._index.get_providers(terms[0]))

    def search_descriptions(self, terms: Sequence[str]) -> List[PackageRecord]:
        """
        Find packages whose name or description contain every term.

        Each term contributes the records indexed under it as a word (none
        if it is not a known word). When no record holds every word, the
        records named by the terms are returned instead. Otherwise records
        whose name equals a term form one more candidate set when any exist,
        and a record matches only if it is in every candidate set.

        Args:
            terms: Search words, matched against the index as given

        Returns:
            Matching records sorted by name, or the named records in term
            order when the words match nothing
        """
        index = self._index
        if not terms:
            return []

        word_sets: List[AbstractSet[PackageRecord]] = [
            index.get_word_matches(term) for term in terms
        ]
        word_matches = intersect_smallest_first(word_sets)

        name_hits = self.lookup_names(terms)

        if not word_matches:
            if not name_hits:
                return []
            with self._stats_lock:
                self._stats["fallbacks"] += 1
            return self._dedupe(name_hits)

        if name_hits:
            matches = intersect_smallest_first([word_matches, set(name_hits)])
        else:
            matches = word_matches

        return sorted(matches, key=lambda record: record.name)

    def resolve(self, query: PackageQuery) -> List[PackageRecord]:
        """
        Answer a parsed query.

        Args:
            query: Terms and lookup mode

        Returns:
            Matching records; an empty list when nothing matches
        """
        start_time = time.time()

        if query.mode is QueryMode.PROVIDES:
            results = self.lookup_provides(query.terms)
            mode_counter = "provides_queries"
        elif query.mode is QueryMode.DESCRIPTION:
            results = self.search_descriptions(query.terms)
            mode_counter = "description_queries"
        else:
            results = self.lookup_names(query.terms)
            mode_counter = "name_queries"

        execution_time = (time.time() - start_time) * 1000

        with self._stats_lock:
            self._stats["total_queries"] += 1
            self._stats[mode_counter] += 1
            self._stats["total_execution_time"] += execution_time
            if not results:
                self._stats["empty_results"] += 1

        return results

    @staticmethod
    def _dedupe(records: Iterable[PackageRecord]) -> List[PackageRecord]:
        seen: Set[str] = set()
        unique = []
        for record in records:
            if record.name not in seen:
                seen.add(record.name)
                unique.append(record)
        return unique

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        with self._stats_lock:
            stats = self._stats.copy()

        # Calculate averages
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["empty_result_rate"] = stats["empty_results"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["empty_result_rate"] = 0.0

        # Add index stats
        stats["index_stats"] = self._index.get_stats()

        return stats

    def reset_stats(self) -> None:
        """Reset query statistics; the index is left untouched."""
        with self._stats_lock:
            self._stats = self._empty_stats()
