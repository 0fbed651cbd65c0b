"""
Dashboard: thin controller that owns the query state.

The filtered list and the stats are not stored; they are recomputed from
(store, query) by the pure functions in filtering.py on every access.
"""

from typing import Iterable

from database import DataStore
from example_output import ExampleLink, parse_example_output
from filtering import ALL_STATUSES, Query, Stats, aggregate, filter_records
from records import EvaluationRecord, Status


class Dashboard:
    """
    Usage:
        dashboard = Dashboard(store, default_categories=config.default_categories)
        dashboard.search_term = "clueso"
        dashboard.toggle_category("AI Avatars")
        for record in dashboard.filtered():
            ...
    """

    def __init__(self, store: DataStore, default_categories: Iterable[str] = ()):
        self.store = store
        self.default_categories = tuple(default_categories)
        self.search_term = ""
        self.selected_categories: list[str] = []
        self.status_filter = ""
        self.selected_id: str | None = None

    @property
    def query(self) -> Query:
        return Query.build(
            search_term=self.search_term,
            categories=self.selected_categories,
            status=self.status_filter,
        )

    def filtered(self) -> list[EvaluationRecord]:
        return filter_records(self.store.records, self.query)

    def stats(self) -> Stats:
        return aggregate(self.store.records)

    def toggle_category(self, category: str) -> None:
        if category in self.selected_categories:
            self.selected_categories.remove(category)
        else:
            self.selected_categories.append(category)

    def clear_filters(self) -> None:
        self.search_term = ""
        self.selected_categories = []
        self.status_filter = ""

    def available_categories(self) -> list[str]:
        """Configured categories first, then any others found in the data."""
        categories = list(self.default_categories)
        for name in self.store.categories():
            if name not in categories:
                categories.append(name)
        return categories

    @staticmethod
    def status_options() -> list[str]:
        return [ALL_STATUSES] + [status.value for status in Status]

    def select(self, record_id: str | None) -> EvaluationRecord | None:
        """Open the detail view for a record; None or an unknown id closes it."""
        record = self.store.get(record_id) if record_id else None
        self.selected_id = record.id if record else None
        return record

    @property
    def selected(self) -> EvaluationRecord | None:
        return self.store.get(self.selected_id) if self.selected_id else None

    @staticmethod
    def examples(record: EvaluationRecord) -> list[ExampleLink]:
        return parse_example_output(record.example_output)
