from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..core.constants import DEFAULT_ACCESS_RIGHT, DEFAULT_POSITION_CODE
from ..core.enums import Sex
from .access import AccessRights


def _coerce_sex(value: Any) -> Optional[Sex]:
    if value is None or value == "":
        return None
    if isinstance(value, Sex):
        return value
    return Sex(str(value).strip().lower())


@dataclass(frozen=True)
class UserProfile:
    """Domain entity: employee profile (row of ``user_infos``).

    Note: ``profile_id is None`` marks a new profile that has not been saved yet.
    """

    profile_id: Optional[int]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    sex: Optional[Sex] = None
    birthday: Optional[date] = None
    email: Optional[str] = None
    slack_user_id: Optional[str] = None
    tel: Optional[str] = None
    hire_date: Optional[date] = None
    store_id: Optional[int] = None
    access_right: int = DEFAULT_ACCESS_RIGHT
    position_name: Optional[str] = None
    position_code: int = DEFAULT_POSITION_CODE
    deleted_at: Optional[datetime] = None

    @classmethod
    def stub(cls, *, slack_user_id: str) -> "UserProfile":
        return cls(profile_id=None, slack_user_id=slack_user_id)

    @classmethod
    def from_row(cls, row) -> "UserProfile":
        return cls(
            profile_id=int(row.id),
            first_name=row.first_name,
            last_name=row.last_name,
            sex=_coerce_sex(row.sex),
            birthday=row.birthday,
            email=row.email,
            slack_user_id=row.slack_user_id,
            tel=row.tel,
            hire_date=row.hire_date,
            store_id=row.store_id,
            access_right=int(row.access_right or 0),
            position_name=row.position_name,
            position_code=int(row.position_code or 0),
            deleted_at=row.deleted_at,
        )

    @property
    def is_new(self) -> bool:
        return self.profile_id is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.last_name, self.first_name) if part)

    @property
    def access_rights(self) -> AccessRights:
        return AccessRights.from_int(self.access_right)


@dataclass(frozen=True)
class ProfileInput:
    """Editable fields submitted from the profile form."""

    first_name: str
    last_name: str
    sex: Optional[Sex] = None
    birthday: Optional[date] = None
    email: Optional[str] = None
    tel: Optional[str] = None
    hire_date: Optional[date] = None
    store_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProfileInput":
        store_id = data.get("store_id")
        return cls(
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            sex=_coerce_sex(data.get("sex")),
            birthday=coerce_date(data.get("birthday")),
            email=data.get("email") or None,
            tel=data.get("tel") or None,
            hire_date=coerce_date(data.get("hire_date")),
            store_id=int(store_id) if store_id not in (None, "") else None,
        )

    def as_columns(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "sex": self.sex,
            "birthday": self.birthday,
            "email": self.email,
            "tel": self.tel,
            "hire_date": self.hire_date,
            "store_id": self.store_id,
        }


@dataclass(frozen=True)
class AccountRef:
    """The account whose linked profile an edit targets."""

    account_id: Optional[int]
    user_info_id: int


@dataclass(frozen=True)
class ExternalUser:
    """User object handed over by the Slack integration."""

    id: str
    email: Optional[str] = None
    real_name: Optional[str] = None

    @classmethod
    def from_slack(cls, payload: Mapping[str, Any]) -> "ExternalUser":
        """Build from a Slack ``users.info`` style payload."""
        profile = payload.get("profile") or {}
        return cls(
            id=str(payload["id"]),
            email=payload.get("email") or profile.get("email"),
            real_name=payload.get("real_name") or profile.get("real_name"),
        )
