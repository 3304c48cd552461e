from __future__ import annotations

from datetime import date

import pytest

from staff_profiles.core.enums import Sex
from staff_profiles.database.bootstrap import apply_schema
from staff_profiles.database.connection import DatabaseConnection, DBConfig
from staff_profiles.database.session import db_session
from staff_profiles.database.tables import AdminUser, Store, User
from staff_profiles.profiles.model import ProfileInput
from staff_profiles.profiles.sqlalchemy_profile_repository import SQLAlchemyUserProfileRepository


@pytest.fixture
def conn():
    c = DatabaseConnection(DBConfig(url="sqlite+pysqlite:///:memory:"))
    apply_schema(c)
    yield c
    c.dispose()


@pytest.fixture
def stores(conn) -> dict[str, int]:
    with db_session(conn) as session:
        shibuya = Store(name="Shibuya")
        shinjuku = Store(name="Shinjuku")
        session.add_all([shibuya, shinjuku])
        session.flush()
        return {"shibuya": shibuya.id, "shinjuku": shinjuku.id}


@pytest.fixture
def repo(conn) -> SQLAlchemyUserProfileRepository:
    return SQLAlchemyUserProfileRepository(conn)


@pytest.fixture
def make_input(stores):
    def _make(**overrides) -> ProfileInput:
        fields = dict(
            first_name="Taro",
            last_name="Suzuki",
            sex=Sex.MALE,
            birthday=date(1990, 5, 10),
            email="taro@example.com",
            tel="090-1111-2222",
            hire_date=date(2018, 4, 1),
            store_id=stores["shibuya"],
        )
        fields.update(overrides)
        return ProfileInput(**fields)

    return _make


@pytest.fixture
def link_accounts(conn):
    """Attach an account or admin account row to a profile; returns the account id."""

    def _link(profile_id: int, *, admin: bool = False) -> int:
        model = AdminUser if admin else User
        with db_session(conn) as session:
            account = model(email=f"acct{profile_id}@example.com", user_info_id=profile_id)
            session.add(account)
            session.flush()
            return account.id

    return _link
