"""Translate device search criteria into query predicates.

``build_device_filter`` turns a :class:`DeviceSearchParams` into an immutable
``DeviceFilter``: one criterion per provided field, combined with AND. The
same object can render a SQLAlchemy clause for the database and evaluate a
loaded row in memory, so both views of "does this device match" stay in step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

from ..models.device import MAX_ROW_ID, Device
from ..schemas.device import DeviceSearchParams

# Case-insensitive "contains" fields, in the order criteria are emitted.
SUBSTRING_FIELDS = (
    "device_id",
    "serial_no",
    "device_brand",
    "device_model",
    "device_name",
    "memory",
    "cpu",
    "harddisk",
    "monitor",
    "device_ip",
)
EXACT_FIELDS = ("device_status", "device_type_id", "department_id")

# Columns covered by the single free-text box on the dashboard.
QUICK_SEARCH_FIELDS = ("device_name", "serial_no", "device_id", "device_brand", "device_model")


def _contains(haystack: Any, needle: str) -> bool:
    if haystack is None:
        return False
    return needle.lower() in str(haystack).lower()


@dataclass(frozen=True)
class Criterion:
    field: str
    value: str | int
    exact: bool = False

    def clause(self) -> ColumnElement[bool]:
        column = getattr(Device, self.field)
        if self.exact:
            if isinstance(self.value, int) and not -MAX_ROW_ID - 1 <= self.value <= MAX_ROW_ID:
                # No INTEGER column can hold it, so nothing matches.
                return false()
            return column == self.value
        return column.icontains(str(self.value), autoescape=True)

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.field, None)
        if self.exact:
            return actual == self.value
        return _contains(actual, str(self.value))


@dataclass(frozen=True)
class DeviceFilter:
    """Conjunction of criteria; no criteria matches every device."""

    criteria: tuple[Criterion, ...] = ()

    def clause(self) -> ColumnElement[bool]:
        if not self.criteria:
            return true()
        return and_(*(criterion.clause() for criterion in self.criteria))

    def matches(self, record: Any) -> bool:
        return all(criterion.matches(record) for criterion in self.criteria)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(criterion.field for criterion in self.criteria)


@dataclass(frozen=True)
class QuickSearch:
    """Free-text search across the identifying columns, combined with OR."""

    query: str = ""

    def clause(self) -> ColumnElement[bool]:
        if not self.query:
            return true()
        return or_(
            *(getattr(Device, field).icontains(self.query, autoescape=True) for field in QUICK_SEARCH_FIELDS)
        )

    def matches(self, record: Any) -> bool:
        if not self.query:
            return True
        return any(_contains(getattr(record, field, None), self.query) for field in QUICK_SEARCH_FIELDS)


def build_device_filter(params: DeviceSearchParams | None = None) -> DeviceFilter:
    if params is None:
        return DeviceFilter()
    criteria: list[Criterion] = []
    for field in SUBSTRING_FIELDS:
        value = getattr(params, field)
        if value:
            criteria.append(Criterion(field, value))
    for field in EXACT_FIELDS:
        value = getattr(params, field)
        if value:
            criteria.append(Criterion(field, value, exact=True))
    return DeviceFilter(tuple(criteria))


def build_quick_search(query: str | None) -> QuickSearch:
    return QuickSearch((query or "").strip())


__all__ = [
    "Criterion",
    "DeviceFilter",
    "QuickSearch",
    "build_device_filter",
    "build_quick_search",
]
