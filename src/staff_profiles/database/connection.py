from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


@dataclass
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "store_admin"
    url: Optional[str] = None
    echo: bool = False

    @classmethod
    def from_dict(cls, db_config: dict, *, echo: bool = False) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "store_admin")),
            url=db_config.get("url") or None,
            echo=echo,
        )

    def sqlalchemy_url(self) -> str:
        if self.url:
            return self.url
        # Password may contain '@' and friends
        encoded_password = urllib.parse.quote_plus(self.password)
        return f"mysql+mysqlconnector://{self.user}:{encoded_password}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Singleton-like engine/session factory.

    Note: Repositories open one short-lived session per operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine = _create_engine(config)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def config(self) -> DBConfig:
        return self._config

    def session(self) -> Session:
        return self._session_factory()

    def describe(self) -> str:
        """Connection summary without the password, for log lines."""
        return self._engine.url.render_as_string(hide_password=True)

    def dispose(self) -> None:
        self._engine.dispose()


def _create_engine(config: DBConfig) -> Engine:
    url = config.sqlalchemy_url()
    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith("sqlite:")):
        # A single shared connection, otherwise every session sees an empty database
        return create_engine(
            url,
            echo=config.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=config.echo, pool_pre_ping=True)
