from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import create_engine, inspect, select, text

from ..core.enums import Sex
from .connection import DatabaseConnection, DBConfig
from .session import db_session
from .tables import AdminUser, Base, Store, User, UserInfo

log = logging.getLogger(__name__)


def ensure_database_exists(config: DBConfig) -> None:
    """Create the MySQL schema if missing. No-op when an explicit URL is configured."""
    if config.url:
        return
    server = DBConfig(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        database="",
    )
    engine = create_engine(server.sqlalchemy_url())
    try:
        with engine.begin() as conn:
            conn.execute(
                text(
                    f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
                    "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                )
            )
    finally:
        engine.dispose()


def apply_schema(conn_factory: DatabaseConnection) -> None:
    ensure_database_exists(conn_factory.config)
    Base.metadata.create_all(conn_factory.engine)
    log.info("Schema ready on %s", conn_factory.describe())


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    return sorted(inspect(conn_factory.engine).get_table_names())


def ensure_demo_profiles(conn_factory: DatabaseConnection) -> None:
    """Idempotent demo data: two stores, an admin profile and a staff profile."""
    with db_session(conn_factory) as session:

        def get_store(name: str) -> Store:
            store = session.scalars(select(Store).where(Store.name == name)).first()
            if store is None:
                store = Store(name=name)
                session.add(store)
                session.flush()
            return store

        shibuya = get_store("Shibuya")
        get_store("Shinjuku")

        def upsert_profile(**fields) -> UserInfo:
            profile = session.scalars(select(UserInfo).where(UserInfo.email == fields["email"])).first()
            if profile is None:
                profile = UserInfo(**fields)
                session.add(profile)
            else:
                for key, value in fields.items():
                    setattr(profile, key, value)
            session.flush()
            return profile

        admin = upsert_profile(
            first_name="Hanako",
            last_name="Yamada",
            sex=Sex.FEMALE,
            birthday=date(1985, 4, 1),
            email="admin@example.com",
            tel="090-0000-0001",
            hire_date=date(2010, 4, 1),
            store_id=shibuya.id,
            access_right=7,
            position_name="Manager",
            position_code=10,
        )
        staff = upsert_profile(
            first_name="Taro",
            last_name="Suzuki",
            sex=Sex.MALE,
            birthday=date(1995, 7, 7),
            email="staff@example.com",
            tel="090-0000-0002",
            hire_date=date(2020, 4, 1),
            store_id=shibuya.id,
            access_right=2,
            position_name="Staff",
            position_code=50,
        )

        if session.scalars(select(AdminUser).where(AdminUser.user_info_id == admin.id)).first() is None:
            session.add(AdminUser(email=admin.email, user_info_id=admin.id))
        if session.scalars(select(User).where(User.user_info_id == staff.id)).first() is None:
            session.add(User(email=staff.email, user_info_id=staff.id))

    log.info("Demo profiles ready")
