from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .core.constants import DEFAULT_PASSWORD_RESET_URL, DEFAULT_UPDATE_POSITION_CODE
from .core.enums import MailBackend
from .database.connection import DBConfig, DatabaseConnection
from .notifications.notifier import LogNotifier, Notifier, SMTPNotifier, SMTPSettings
from .profiles.service import ProfileService
from .profiles.sqlalchemy_profile_repository import SQLAlchemyUserProfileRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    profiles_repo: SQLAlchemyUserProfileRepository
    notifier: Notifier

    profile_service: ProfileService


def build_notifier(settings: ModuleType) -> Notifier:
    backend = MailBackend(str(getattr(settings, "MAIL_BACKEND", "log")).lower())
    if backend == MailBackend.LOG:
        return LogNotifier()
    return SMTPNotifier(
        SMTPSettings(
            host=settings.MAIL_SERVER,
            port=int(settings.MAIL_PORT),
            sender=settings.MAIL_SENDER,
            username=getattr(settings, "MAIL_USERNAME", ""),
            password=getattr(settings, "MAIL_PASSWORD", ""),
            use_tls=bool(getattr(settings, "MAIL_USE_TLS", False)),
        )
    )


def build_container(*, settings: ModuleType, conn: Optional[DatabaseConnection] = None) -> Container:
    if conn is None:
        config = DBConfig.from_dict(settings.DB_CONFIG, echo=bool(getattr(settings, "SQL_ECHO", False)))
        conn = DatabaseConnection.get_instance(config)

    profiles_repo = SQLAlchemyUserProfileRepository(
        conn,
        update_position_code=int(getattr(settings, "UPDATE_POSITION_CODE", DEFAULT_UPDATE_POSITION_CODE)),
    )
    notifier = build_notifier(settings)

    profile_service = ProfileService(
        profiles_repo,
        notifier,
        reset_url_template=getattr(settings, "PASSWORD_RESET_URL", DEFAULT_PASSWORD_RESET_URL),
    )

    return Container(
        conn=conn,
        profiles_repo=profiles_repo,
        notifier=notifier,
        profile_service=profile_service,
    )
