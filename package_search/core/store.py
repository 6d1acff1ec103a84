"""Loading of the package snapshot the service answers queries from."""

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Tuple, Union

import structlog
import yaml
from pydantic import TypeAdapter, ValidationError

from ..models.package import PackageRecord

logger = structlog.get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}

_records_adapter = TypeAdapter(List[PackageRecord])


class DatabaseLoadError(Exception):
    """The package snapshot could not be read or understood."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load package database {path}: {reason}")
        self.path = path
        self.reason = reason


class RecordStore:
    """Immutable, ordered collection of the package records of one snapshot."""

    def __init__(self, records: Iterable[PackageRecord]) -> None:
        self._records: Tuple[PackageRecord, ...] = tuple(records)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RecordStore":
        """
        Read a JSON or YAML snapshot from disk.

        Files ending in ``.yaml`` or ``.yml`` are parsed as YAML, anything
        else as JSON. The document must be a list of package objects.

        Args:
            path: Snapshot file location

        Returns:
            The loaded store

        Raises:
            DatabaseLoadError: The file is missing, unreadable, malformed, or
                holds a record that fails validation
        """
        path = Path(path)
        logger.info("Reading package database", path=str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() in YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except OSError as e:
            raise DatabaseLoadError(path, str(e)) from e
        except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise DatabaseLoadError(path, f"parse error: {e}") from e

        return cls.from_data(data, path)

    @classmethod
    def from_data(cls, data: Any, path: Union[str, Path] = "<memory>") -> "RecordStore":
        """
        Validate already-decoded snapshot data.

        Raises:
            DatabaseLoadError: The data is not a list of valid package objects
        """
        path = Path(path)

        if not isinstance(data, list):
            raise DatabaseLoadError(
                path, f"expected a list of packages, got {type(data).__name__}"
            )

        try:
            records = _records_adapter.validate_python(data)
        except ValidationError as e:
            raise DatabaseLoadError(path, f"invalid package record: {e}") from e

        return cls(records)

    @property
    def records(self) -> Tuple[PackageRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
