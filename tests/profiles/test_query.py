from __future__ import annotations

from datetime import date

import pytest

from staff_profiles.core.enums import Sex
from staff_profiles.core.exceptions import InvalidFilterField, ValidationError
from staff_profiles.database.session import db_session
from staff_profiles.database.tables import UserInfo
from staff_profiles.profiles.query import (
    ProfileQuery,
    where_date_range,
    where_equal,
    where_name,
    where_position_code_below,
)


@pytest.fixture
def people(repo, make_input, conn):
    ids = {
        "taro": repo.create(make_input()),
        "hanako": repo.create(
            make_input(
                first_name="Hanako",
                last_name="Yamada",
                sex=Sex.FEMALE,
                email="hanako@example.com",
                tel="080-3333-4444",
                birthday=date(1985, 12, 24),
                hire_date=date(2012, 10, 1),
            )
        ),
        "ken": repo.create(
            make_input(
                first_name="Ken",
                last_name="Suzuki",
                email="ken@example.com",
                tel="070-5555-6666",
                birthday=date(2000, 1, 1),
                hire_date=date(2023, 4, 1),
            )
        ),
    }
    with db_session(conn) as session:
        for name, code in (("taro", 30), ("hanako", 10), ("ken", 50)):
            session.get(UserInfo, ids[name]).position_code = code
    return ids


def _ids(repo, query):
    return [p.profile_id for p in repo.search(query)]


def test_filters_return_new_query_and_leave_input_untouched():
    base = ProfileQuery()

    filtered = where_name(base, "first_name", "ta")

    assert base.predicates == ()
    assert len(filtered.predicates) == 1
    assert filtered is not base


def test_where_name_is_case_insensitive_substring(repo, people):
    assert _ids(repo, where_name(ProfileQuery(), "first_name", "AR")) == [people["taro"]]
    assert _ids(repo, where_name(ProfileQuery(), "last_name", "suzu")) == [people["taro"], people["ken"]]


def test_where_name_treats_wildcards_literally(repo, people):
    assert _ids(repo, where_name(ProfileQuery(), "first_name", "%")) == []


@pytest.mark.parametrize(
    "field, value",
    [
        (None, "taro"),
        ("first_name", None),
        ("first_name", ""),
        ("email", "taro"),
        ("position_name", "x"),
    ],
)
def test_where_name_noop_cases(repo, people, field, value):
    assert _ids(repo, where_name(ProfileQuery(), field, value)) == _ids(repo, ProfileQuery())


def test_where_equal_matches_exactly(repo, people):
    assert _ids(repo, where_equal(ProfileQuery(), "email", "hanako@example.com")) == [people["hanako"]]
    assert _ids(repo, where_equal(ProfileQuery(), "email", "hanako@example")) == []
    assert _ids(repo, where_equal(ProfileQuery(), "tel", "070-5555-6666")) == [people["ken"]]
    assert _ids(repo, where_equal(ProfileQuery(), "sex", Sex.FEMALE)) == [people["hanako"]]
    assert _ids(repo, where_equal(ProfileQuery(), "sex", "male")) == [people["taro"], people["ken"]]


@pytest.mark.parametrize(
    "field, value",
    [
        (None, "taro@example.com"),
        ("email", None),
        ("email", ""),
        ("first_name", "Taro"),
        ("birthday", date(1990, 5, 10)),
    ],
)
def test_where_equal_noop_cases(repo, people, field, value):
    assert _ids(repo, where_equal(ProfileQuery(), field, value)) == _ids(repo, ProfileQuery())


def test_where_date_range_bounds_are_inclusive(repo, people):
    query = where_date_range(ProfileQuery(), "birthday", date(1985, 12, 24), date(1990, 5, 10))
    assert _ids(repo, query) == [people["taro"], people["hanako"]]


def test_where_date_range_single_bound_and_iso_strings(repo, people):
    assert _ids(repo, where_date_range(ProfileQuery(), "hire_date", start="2018-04-01")) == [
        people["taro"],
        people["ken"],
    ]
    assert _ids(repo, where_date_range(ProfileQuery(), "hire_date", end="2012-10-01")) == [people["hanako"]]


@pytest.mark.parametrize(
    "field, start, end",
    [
        (None, date(2000, 1, 1), None),
        ("birthday", None, None),
        ("birthday", "", ""),
        ("created_at", date(2000, 1, 1), None),
        ("email", None, date(2000, 1, 1)),
    ],
)
def test_where_date_range_noop_cases(repo, people, field, start, end):
    assert _ids(repo, where_date_range(ProfileQuery(), field, start, end)) == _ids(repo, ProfileQuery())


@pytest.mark.parametrize("bad", ["not-a-date", "2020-13-01"])
def test_where_date_range_invalid_bound_is_noop(repo, people, bad):
    assert where_date_range(ProfileQuery(), "birthday", bad, None) == ProfileQuery()
    assert _ids(repo, where_date_range(ProfileQuery(), "birthday", None, bad)) == _ids(repo, ProfileQuery())


def test_where_date_range_invalid_bound_keeps_the_other(repo, people):
    query = where_date_range(ProfileQuery(), "birthday", "1995-01-01", "not-a-date")
    assert _ids(repo, query) == [people["ken"]]


def test_where_date_range_strict_rejects_invalid_bound():
    with pytest.raises(ValidationError):
        where_date_range(ProfileQuery(), "birthday", "2020-13-01", strict=True)


def test_where_position_code_below_is_strict(repo, people):
    assert _ids(repo, where_position_code_below(ProfileQuery(), 30)) == [people["hanako"]]
    assert _ids(repo, where_position_code_below(ProfileQuery(), 31)) == [people["taro"], people["hanako"]]


@pytest.mark.parametrize("threshold", [0, None])
def test_where_position_code_below_falsy_is_noop(repo, people, threshold):
    assert _ids(repo, where_position_code_below(ProfileQuery(), threshold)) == _ids(repo, ProfileQuery())


def test_filters_compose(repo, people):
    query = where_name(ProfileQuery(), "last_name", "suzuki")
    query = where_date_range(query, "birthday", start=date(1995, 1, 1))
    query = where_position_code_below(query, 100)

    assert _ids(repo, query) == [people["ken"]]


def test_with_deleted_includes_soft_deleted_rows(repo, people):
    repo.soft_delete(people["ken"])

    assert people["ken"] not in _ids(repo, ProfileQuery())
    assert people["ken"] in _ids(repo, ProfileQuery().with_deleted())


@pytest.mark.parametrize(
    "apply",
    [
        lambda q: where_name(q, "email", "x", strict=True),
        lambda q: where_equal(q, "first_name", "x", strict=True),
        lambda q: where_date_range(q, "created_at", start=date(2000, 1, 1), strict=True),
    ],
)
def test_strict_filters_reject_unknown_fields(apply):
    with pytest.raises(InvalidFilterField):
        apply(ProfileQuery())


def test_strict_filter_still_ignores_missing_values():
    assert where_name(ProfileQuery(), "email", None, strict=True) == ProfileQuery()
