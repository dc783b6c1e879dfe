"""Composable query filters for player listings.

Each filter constrains one column and knows how to render itself as a
SQLAlchemy clause for a given model. Filters are plain values, so callers
can build, compare and combine them without touching a session; the
repository is the only place they meet SQL.

An unconstrained filter renders to ``None`` and is dropped when filters are
combined with :func:`combine`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement


class Filter(ABC):
    @abstractmethod
    def clause(self, model: type) -> ColumnElement[bool] | None:
        ...

    @property
    def is_unconstrained(self) -> bool:
        return False


@dataclass(frozen=True)
class Unconstrained(Filter):
    def clause(self, model: type) -> None:
        return None

    @property
    def is_unconstrained(self) -> bool:
        return True


UNCONSTRAINED = Unconstrained()


@dataclass(frozen=True)
class Contains(Filter):
    """Case-sensitive substring match."""

    field: str
    value: str

    def clause(self, model: type) -> ColumnElement[bool]:
        return getattr(model, self.field).contains(self.value, autoescape=True)


@dataclass(frozen=True)
class Equals(Filter):
    field: str
    value: Any

    def clause(self, model: type) -> ColumnElement[bool]:
        return getattr(model, self.field) == self.value


@dataclass(frozen=True)
class Range(Filter):
    """Inclusive range; either bound may be open (``None``)."""

    field: str
    lower: Any = None
    upper: Any = None

    def clause(self, model: type) -> ColumnElement[bool] | None:
        column = getattr(model, self.field)
        if self.lower is None and self.upper is None:
            return None
        if self.lower is None:
            return column <= self.upper
        if self.upper is None:
            return column >= self.lower
        return column.between(self.lower, self.upper)

    @property
    def is_unconstrained(self) -> bool:
        return self.lower is None and self.upper is None


@dataclass(frozen=True)
class AllOf(Filter):
    filters: tuple[Filter, ...]

    def clause(self, model: type) -> ColumnElement[bool] | None:
        clauses = [c for c in (f.clause(model) for f in self.filters) if c is not None]
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return and_(*clauses)

    @property
    def is_unconstrained(self) -> bool:
        return all(f.is_unconstrained for f in self.filters)


def combine(*filters: Filter) -> Filter:
    """AND the given filters together, skipping unconstrained ones."""
    kept = tuple(f for f in filters if not f.is_unconstrained)
    if not kept:
        return UNCONSTRAINED
    if len(kept) == 1:
        return kept[0]
    return AllOf(kept)


def range_filter(field: str, lower: Any, upper: Any) -> Filter:
    if lower is None and upper is None:
        return UNCONSTRAINED
    return Range(field, lower, upper)
