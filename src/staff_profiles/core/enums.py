from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    """Values stored in the ``sex`` column."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class MailBackend(str, Enum):
    SMTP = "smtp"
    LOG = "log"
