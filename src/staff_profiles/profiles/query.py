"""Composable, immutable query specification for profile searches.

Every filter is a pure function: it takes a :class:`ProfileQuery` and returns a
new one, leaving the input untouched. Filters are permissive: a missing field
or value (or a column that is not filterable) returns the query unchanged.
Pass ``strict=True`` to raise :class:`InvalidFilterField` for bad columns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Optional, Union

from sqlalchemy import Select, select
from sqlalchemy.sql.elements import ColumnElement

from ..common.datetime_utils import coerce_date
from ..core.constants import DATE_RANGE_FILTER_FIELDS, EQUAL_FILTER_FIELDS, NAME_FILTER_FIELDS
from ..core.exceptions import InvalidFilterField, ValidationError
from ..database.tables import UserInfo

log = logging.getLogger(__name__)

DateBound = Union[date, str, None]


@dataclass(frozen=True)
class ProfileQuery:
    predicates: tuple[ColumnElement[bool], ...] = ()
    include_deleted: bool = False

    def where(self, *clauses: ColumnElement[bool]) -> "ProfileQuery":
        return replace(self, predicates=self.predicates + tuple(clauses))

    def with_deleted(self) -> "ProfileQuery":
        return replace(self, include_deleted=True)

    def statement(self) -> Select:
        stmt = select(UserInfo)
        if not self.include_deleted:
            stmt = stmt.where(UserInfo.deleted_at.is_(None))
        if self.predicates:
            stmt = stmt.where(*self.predicates)
        return stmt.order_by(UserInfo.id)


def _allowed(field: Optional[str], allowed: frozenset, *, strict: bool, filter_name: str) -> bool:
    if field in allowed:
        return True
    if strict:
        raise InvalidFilterField(str(field), allowed)
    log.warning("%s: ignoring unsupported field %r", filter_name, field)
    return False


def where_name(query: ProfileQuery, field: Optional[str], name: Optional[str], *, strict: bool = False) -> ProfileQuery:
    """Case-insensitive substring match on ``first_name`` or ``last_name``."""
    if not field or not name:
        return query
    if not _allowed(field, NAME_FILTER_FIELDS, strict=strict, filter_name="where_name"):
        return query
    column = getattr(UserInfo, field)
    return query.where(column.icontains(name, autoescape=True))


def where_equal(query: ProfileQuery, field: Optional[str], value: Any, *, strict: bool = False) -> ProfileQuery:
    """Exact match on ``email``, ``tel`` or ``sex``."""
    if not field or not value:
        return query
    if not _allowed(field, EQUAL_FILTER_FIELDS, strict=strict, filter_name="where_equal"):
        return query
    return query.where(getattr(UserInfo, field) == value)


def _date_bound(value: DateBound, *, strict: bool) -> Optional[date]:
    # Unparseable bounds are dropped, the other bound still applies
    try:
        return coerce_date(value)
    except ValueError:
        if strict:
            raise ValidationError(f"Invalid date: {value!r}") from None
        log.warning("where_date_range: ignoring invalid date %r", value)
        return None


def where_date_range(
    query: ProfileQuery,
    field: Optional[str],
    start: DateBound = None,
    end: DateBound = None,
    *,
    strict: bool = False,
) -> ProfileQuery:
    """Inclusive range on ``birthday`` or ``hire_date``; either bound may be omitted."""
    if not field or (not start and not end):
        return query
    if not _allowed(field, DATE_RANGE_FILTER_FIELDS, strict=strict, filter_name="where_date_range"):
        return query
    column = getattr(UserInfo, field)
    clauses = []
    lower = _date_bound(start, strict=strict)
    if lower:
        clauses.append(column >= lower)
    upper = _date_bound(end, strict=strict)
    if upper:
        clauses.append(column <= upper)
    return query.where(*clauses)


def where_position_code_below(query: ProfileQuery, threshold: Optional[int]) -> ProfileQuery:
    # 0 counts as "no threshold"
    if not threshold:
        return query
    return query.where(UserInfo.position_code < threshold)


def where_store(query: ProfileQuery, store_id: Optional[int]) -> ProfileQuery:
    return query.where(UserInfo.store_id == store_id)


def where_id(query: ProfileQuery, profile_id: Optional[int]) -> ProfileQuery:
    if not profile_id:
        return query
    return query.where(UserInfo.id == profile_id)
