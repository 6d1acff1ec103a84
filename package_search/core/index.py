"""Index data structures for fast package lookups."""

import time
from collections import defaultdict
from types import MappingProxyType
from typing import Any, DefaultDict, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from ..models.package import PackageRecord
from .tokenizer import Tokenizer


class PackageIndex:
    """
    Read-only lookup structures over a fixed snapshot of package records.

    ``by_name`` maps a name to its record, ``by_provides`` maps a provided
    name to the records providing it (in snapshot order), and ``by_word``
    maps a normalized word to the records whose name or description
    contain it. Every entry references the snapshot's record objects.
    """

    def __init__(
        self,
        by_name: Dict[str, PackageRecord],
        by_provides: Dict[str, Tuple[PackageRecord, ...]],
        by_word: Dict[str, FrozenSet[PackageRecord]],
        total_records: int,
        build_time_ms: float,
    ) -> None:
        """Wrap already-built mappings; use ``build`` to construct an index."""
        self.by_name: Mapping[str, PackageRecord] = MappingProxyType(by_name)
        self.by_provides: Mapping[str, Tuple[PackageRecord, ...]] = MappingProxyType(by_provides)
        self.by_word: Mapping[str, FrozenSet[PackageRecord]] = MappingProxyType(by_word)
        self._stats = {
            "total_records": total_records,
            "total_names": len(by_name),
            "total_provides": len(by_provides),
            "total_words": len(by_word),
            "build_time_ms": build_time_ms,
        }

    @classmethod
    def build(
        cls,
        records: Iterable[PackageRecord],
        tokenizer: Optional[Tokenizer] = None,
    ) -> "PackageIndex":
        """
        Build all three lookup structures in one pass over the records.

        Args:
            records: Package records in snapshot order
            tokenizer: Word extractor; a default one is created when omitted

        Returns:
            The finished index
        """
        start_time = time.time()
        tokenizer = tokenizer or Tokenizer()

        by_name: Dict[str, PackageRecord] = {}
        by_provides: DefaultDict[str, List[PackageRecord]] = defaultdict(list)
        by_word: DefaultDict[str, Set[PackageRecord]] = defaultdict(set)
        total_records = 0

        for record in records:
            total_records += 1
            by_name[record.name] = record

            if record.provides:
                # Declared provides replace the implicit self-provision
                for provided in record.provides:
                    by_provides[provided].append(record)
            else:
                by_provides[record.name].append(record)

            for word in tokenizer.tokenize(record.name, record.description):
                found = by_word[word]
                # Records compare by name; keep the latest one for a duplicated name
                found.discard(record)
                found.add(record)

        build_time_ms = (time.time() - start_time) * 1000

        return cls(
            by_name=by_name,
            by_provides={name: tuple(found) for name, found in by_provides.items()},
            by_word={word: frozenset(found) for word, found in by_word.items()},
            total_records=total_records,
            build_time_ms=build_time_ms,
        )

    def get_by_name(self, name: str) -> Optional[PackageRecord]:
        """Get the record with exactly this name, if any."""
        return self.by_name.get(name)

    def get_providers(self, name: str) -> Tuple[PackageRecord, ...]:
        """Get the records providing a name, in snapshot order."""
        return self.by_provides.get(name, ())

    def get_word_matches(self, word: str) -> FrozenSet[PackageRecord]:
        """Get the records whose name or description contain a word."""
        return self.by_word.get(word, frozenset())

    def __len__(self) -> int:
        return self._stats["total_records"]

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        return self._stats.copy()
