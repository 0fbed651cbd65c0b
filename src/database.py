"""
Database: In-memory store of tool evaluation records.

Design principles:
- Immutable store loaded once at session start
- No global state
- Readers share the store without synchronization
"""

import json
import os
from typing import Any, Iterable, Iterator

from logging_utils import get_logger
from records import EvaluationRecord, record_from_dict

logger = get_logger(__name__)


class DataStore:
    """
    Ordered, read-only collection of EvaluationRecord.

    Usage:
        store = DataStore.load(config.paths.data_path)

        for record in store:
            print(record.tool_name, record.status)
    """

    def __init__(self, records: Iterable[EvaluationRecord]):
        self._records: tuple[EvaluationRecord, ...] = tuple(records)
        self._by_id: dict[str, EvaluationRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                logger.warning(f"Duplicate record id {record.id!r}; keeping first occurrence")
                continue
            self._by_id[record.id] = record

    @classmethod
    def from_dicts(cls, entries: Iterable[dict[str, Any]]) -> "DataStore":
        """
        Build a store from raw dataset entries.

        Raises:
            ValueError: If any entry breaks a record invariant.
        """
        return cls(record_from_dict(entry) for entry in entries)

    @classmethod
    def load(cls, data_path: str) -> "DataStore":
        """
        Load the dataset from a JSON file holding a list of evaluation objects.

        Args:
            data_path: Path to the evaluations JSON file.

        Returns:
            Loaded DataStore (empty if the file does not exist).
        """
        if not os.path.exists(data_path):
            logger.warning(f"Evaluation data not found at {data_path}")
            return cls(())

        with open(data_path, 'r', encoding='utf-8') as f:
            raw_data = json.load(f)

        if not isinstance(raw_data, list):
            raise ValueError(f"Expected a list of evaluations in {data_path}, got {type(raw_data).__name__}")

        store = cls.from_dicts(raw_data)
        logger.info(f"Loaded {len(store)} evaluations from {data_path}")
        return store

    @property
    def records(self) -> tuple[EvaluationRecord, ...]:
        return self._records

    def get(self, record_id: str) -> EvaluationRecord | None:
        """Look up a record by id."""
        return self._by_id.get(record_id)

    def categories(self) -> list[str]:
        """Distinct category names present in the data, in first-seen order."""
        seen: dict[str, None] = {}
        for record in self._records:
            for name in record.category:
                seen.setdefault(name, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EvaluationRecord]:
        return iter(self._records)
