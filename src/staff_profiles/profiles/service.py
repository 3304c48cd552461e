from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PASSWORD_RESET_URL
from ..core.exceptions import ProfileNotFoundError, ValidationError
from ..notifications.model import ResetPasswordNotification
from ..notifications.notifier import Notifier
from .access import AccessRights
from .model import AccountRef, ExternalUser, ProfileInput, UserProfile
from .query import (
    DateBound,
    ProfileQuery,
    where_date_range,
    where_equal,
    where_name,
    where_position_code_below,
)
from .repository import UserProfileRepository

log = logging.getLogger(__name__)


def split_real_name(real_name: Optional[str]) -> tuple[str, str]:
    """Split a Slack display name into (first_name, last_name).

    A single token is treated as the first name.
    """
    parts = (real_name or "").split()
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return " ".join(parts[:-1]), parts[-1]


class ProfileService:
    """Use case: manage employee profiles (admin screens, Slack sign-in, password reset)."""

    def __init__(
        self,
        profiles: UserProfileRepository,
        notifier: Notifier,
        *,
        reset_url_template: str = DEFAULT_PASSWORD_RESET_URL,
    ):
        self._profiles = profiles
        self._notifier = notifier
        self._reset_url_template = reset_url_template

    def register_profile(self, payload: ProfileInput) -> int:
        require_non_empty(payload.first_name, "first_name")
        require_non_empty(payload.last_name, "last_name")
        return self._profiles.create(payload)

    def edit_profile(self, payload: ProfileInput, account: AccountRef) -> None:
        require_non_empty(payload.first_name, "first_name")
        require_non_empty(payload.last_name, "last_name")
        if not self._profiles.update(payload, account):
            raise ProfileNotFoundError(f"Profile {account.user_info_id} not found")

    def get_profile(self, profile_id: int) -> UserProfile:
        profile = self._profiles.find_by_id(profile_id)
        if not profile:
            raise ProfileNotFoundError(f"Profile {profile_id} not found")
        return profile

    def get_profile_by_email(self, email: str) -> UserProfile:
        profile = self._profiles.find_by_email(email)
        if not profile:
            raise ProfileNotFoundError(f"No profile for {email}")
        return profile

    def search_profiles(
        self,
        *,
        name_field: Optional[str] = None,
        name: Optional[str] = None,
        equal_field: Optional[str] = None,
        equal_value: Any = None,
        date_field: Optional[str] = None,
        start: DateBound = None,
        end: DateBound = None,
        below_position_code: Optional[int] = None,
    ) -> Sequence[UserProfile]:
        query = ProfileQuery()
        query = where_name(query, name_field, name)
        query = where_equal(query, equal_field, equal_value)
        query = where_date_range(query, date_field, start, end)
        query = where_position_code_below(query, below_position_code)
        return self._profiles.search(query)

    def list_store_staff(self, store_id: int) -> Sequence[UserProfile]:
        return self._profiles.list_by_store(store_id)

    def list_subordinates(self, admin_profile_id: Optional[int]) -> Sequence[UserProfile]:
        return self._profiles.list_subordinates_of(admin_profile_id)

    def permit_access_rights(self, profile_id: int, form: Mapping[str, Any]) -> int:
        rights = AccessRights.from_mapping(form)
        if not self._profiles.grant_access_rights(profile_id, rights):
            raise ProfileNotFoundError(f"Profile {profile_id} not found")
        return rights.to_int()

    def send_password_reset_notification(self, profile: UserProfile, token: str) -> None:
        if not token:
            raise ValidationError("Reset token is required")
        notification = ResetPasswordNotification(token=token, reset_url_template=self._reset_url_template)
        self._notifier.notify(profile, notification)

    def link_slack_user(
        self,
        external_user: ExternalUser,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserProfile:
        if first_name is None and last_name is None:
            first_name, last_name = split_real_name(external_user.real_name)

        stub = self._profiles.find_or_create_by_slack_id(external_user.id)
        if stub.is_deleted:
            self._profiles.restore(stub.profile_id)
            log.info("Slack user %s signed in again, restored profile id=%s", external_user.id, stub.profile_id)
        profile = self._profiles.save_external_profile(stub, first_name or "", last_name or "", external_user)
        if stub.is_new:
            log.info("First Slack contact from %s, created profile id=%s", external_user.id, profile.profile_id)
        return profile

    def delete_profile(self, profile_id: int) -> None:
        if self._profiles.soft_delete(profile_id):
            return
        # Already soft-deleted is fine; a missing row is not
        if not self._profiles.find_by_id(profile_id, include_deleted=True):
            raise ProfileNotFoundError(f"Profile {profile_id} not found")

    def restore_profile(self, profile_id: int) -> None:
        if self._profiles.restore(profile_id):
            return
        if not self._profiles.find_by_id(profile_id, include_deleted=True):
            raise ProfileNotFoundError(f"Profile {profile_id} not found")
