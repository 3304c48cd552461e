from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Protocol

from ..core.exceptions import NotificationError
from ..profiles.model import UserProfile
from .model import ResetPasswordNotification

log = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, recipient: UserProfile, notification: ResetPasswordNotification) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class SMTPSettings:
    host: str
    port: int
    sender: str
    username: str = ""
    password: str = ""
    use_tls: bool = False
    timeout: float = 10.0


class SMTPNotifier(Notifier):
    """Mail notifications through an SMTP relay."""

    def __init__(self, settings: SMTPSettings):
        self._settings = settings

    def _build_message(self, recipient: UserProfile, notification: ResetPasswordNotification) -> MIMEText:
        msg = MIMEText(notification.body(name=recipient.full_name, email=recipient.email), "plain", "utf-8")
        msg["Subject"] = notification.subject()
        msg["From"] = self._settings.sender
        msg["To"] = recipient.email
        return msg

    def notify(self, recipient: UserProfile, notification: ResetPasswordNotification) -> None:
        if not recipient.email:
            raise NotificationError(f"Profile {recipient.profile_id} has no email address")

        msg = self._build_message(recipient, notification)
        s = self._settings
        try:
            with smtplib.SMTP(s.host, s.port, timeout=s.timeout) as server:
                if s.use_tls:
                    server.starttls()
                if s.username:
                    server.login(s.username, s.password)
                server.sendmail(s.sender, [recipient.email], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            log.error("Failed to send '%s' to %s: %s", notification.subject(), recipient.email, exc)
            raise NotificationError(str(exc)) from exc

        log.info("Sent '%s' to %s", notification.subject(), recipient.email)


class LogNotifier(Notifier):
    """Development notifier: logs the message and keeps it in ``sent``."""

    def __init__(self):
        self.sent: list[tuple[UserProfile, ResetPasswordNotification]] = []

    def notify(self, recipient: UserProfile, notification: ResetPasswordNotification) -> None:
        self.sent.append((recipient, notification))
        log.info(
            "[mail:log] to=%s subject=%s url=%s",
            recipient.email,
            notification.subject(),
            notification.reset_url(recipient.email or ""),
        )
