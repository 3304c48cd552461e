from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import update

from ..common.datetime_utils import utcnow
from ..core.constants import DEFAULT_ACCESS_RIGHT, DEFAULT_POSITION_CODE, DEFAULT_UPDATE_POSITION_CODE
from ..core.exceptions import ProfileNotFoundError
from ..database.connection import DatabaseConnection
from ..database.session import db_session
from ..database.tables import AdminUser, User, UserInfo
from .access import AccessRights
from .model import AccountRef, ExternalUser, ProfileInput, UserProfile
from .query import ProfileQuery, where_id, where_position_code_below, where_store
from .repository import UserProfileRepository

log = logging.getLogger(__name__)


class SQLAlchemyUserProfileRepository(UserProfileRepository):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        update_position_code: int = DEFAULT_UPDATE_POSITION_CODE,
    ):
        self._conn_factory = conn_factory
        self._update_position_code = int(update_position_code)

    def search(self, query: ProfileQuery) -> Sequence[UserProfile]:
        with db_session(self._conn_factory) as session:
            rows = session.scalars(query.statement()).all()
            return [UserProfile.from_row(r) for r in rows]

    def _first(self, query: ProfileQuery) -> Optional[UserProfile]:
        with db_session(self._conn_factory) as session:
            row = session.scalars(query.statement().limit(1)).first()
            return UserProfile.from_row(row) if row else None

    def _update_live(self, profile_id: int, values: dict) -> bool:
        with db_session(self._conn_factory) as session:
            result = session.execute(
                update(UserInfo)
                .where(UserInfo.id == profile_id, UserInfo.deleted_at.is_(None))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount > 0

    def create(self, payload: ProfileInput) -> int:
        with db_session(self._conn_factory) as session:
            row = UserInfo(
                **payload.as_columns(),
                access_right=DEFAULT_ACCESS_RIGHT,
                position_code=DEFAULT_POSITION_CODE,
            )
            session.add(row)
            session.flush()
            profile_id = int(row.id)
        log.info("Created profile id=%s store_id=%s", profile_id, payload.store_id)
        return profile_id

    def update(self, payload: ProfileInput, account: AccountRef) -> bool:
        # Edits always reset permissions and the position code
        values = payload.as_columns()
        values["access_right"] = DEFAULT_ACCESS_RIGHT
        values["position_code"] = self._update_position_code
        changed = self._update_live(account.user_info_id, values)
        log.info("Updated profile id=%s (account=%s): %s", account.user_info_id, account.account_id, changed)
        return changed

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        return self._first(ProfileQuery().where(UserInfo.email == email))

    def find_by_id(self, profile_id: int, *, include_deleted: bool = False) -> Optional[UserProfile]:
        query = ProfileQuery().where(UserInfo.id == profile_id)
        if include_deleted:
            query = query.with_deleted()
        return self._first(query)

    def list_by_store(self, store_id: int) -> Sequence[UserProfile]:
        return self.search(where_store(ProfileQuery(), store_id))

    def list_subordinates_of(self, admin_profile_id: Optional[int]) -> Sequence[UserProfile]:
        # Without an id the anchor is simply the first profile
        anchor = self._first(where_id(ProfileQuery(), admin_profile_id))
        threshold = anchor.position_code if anchor else None
        return self.search(where_position_code_below(ProfileQuery(), threshold))

    def list_emails_by_profile_id(self, profile_id: Optional[int] = None) -> Sequence[UserProfile]:
        return self.search(where_id(ProfileQuery(), profile_id))

    def list_by_admin_account_id(self, admin_account_id: Optional[int] = None) -> Sequence[UserProfile]:
        if admin_account_id:
            clause = UserInfo.admin.has(AdminUser.id == admin_account_id)
        else:
            clause = UserInfo.admin.has()
        return self.search(ProfileQuery().where(clause))

    def grant_access_rights(self, profile_id: int, rights: AccessRights) -> bool:
        access_right = rights.to_int()
        changed = self._update_live(profile_id, {"access_right": access_right})
        log.info("Granted access_right=%s (%s) to profile id=%s: %s", access_right, rights.to_bits(), profile_id, changed)
        return changed

    def find_by_account_id(self, account_id: Optional[int] = None) -> Optional[UserProfile]:
        if account_id:
            clause = UserInfo.account.has(User.id == account_id)
        else:
            clause = UserInfo.account.has()
        return self._first(ProfileQuery().where(clause))

    def find_or_create_by_slack_id(self, slack_user_id: str) -> UserProfile:
        # slack_user_id is unique across live and soft-deleted rows
        existing = self._first(ProfileQuery().with_deleted().where(UserInfo.slack_user_id == slack_user_id))
        return existing or UserProfile.stub(slack_user_id=slack_user_id)

    def save_external_profile(
        self, profile: UserProfile, first_name: str, last_name: str, external_user: ExternalUser
    ) -> UserProfile:
        fields = {
            "first_name": first_name,
            "last_name": last_name,
            "email": external_user.email,
            "slack_user_id": external_user.id,
        }
        with db_session(self._conn_factory) as session:
            if profile.is_new:
                row = UserInfo(**fields)
                session.add(row)
            else:
                row = session.get(UserInfo, profile.profile_id)
                if row is None:
                    raise ProfileNotFoundError(f"Profile {profile.profile_id} no longer exists")
                for key, value in fields.items():
                    setattr(row, key, value)
            session.flush()
            saved = UserProfile.from_row(row)
        log.info("Saved Slack profile id=%s slack_user_id=%s (new=%s)", saved.profile_id, external_user.id, profile.is_new)
        return saved

    def soft_delete(self, profile_id: int) -> bool:
        changed = self._update_live(profile_id, {"deleted_at": utcnow().replace(tzinfo=None)})
        log.info("Soft-deleted profile id=%s: %s", profile_id, changed)
        return changed

    def restore(self, profile_id: int) -> bool:
        with db_session(self._conn_factory) as session:
            result = session.execute(
                update(UserInfo)
                .where(UserInfo.id == profile_id, UserInfo.deleted_at.is_not(None))
                .values(deleted_at=None)
                .execution_options(synchronize_session=False)
            )
            changed = result.rowcount > 0
        log.info("Restored profile id=%s: %s", profile_id, changed)
        return changed
