from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .access import AccessRights
from .model import AccountRef, ExternalUser, ProfileInput, UserProfile
from .query import ProfileQuery


class UserProfileRepository(Protocol):
    """Repository interface for UserProfile.

    Note (DIP): the service layer depends on this interface, never on a concrete DB.
    """

    def search(self, query: ProfileQuery) -> Sequence[UserProfile]:
        raise NotImplementedError

    def create(self, payload: ProfileInput) -> int:
        raise NotImplementedError

    def update(self, payload: ProfileInput, account: AccountRef) -> bool:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def find_by_id(self, profile_id: int, *, include_deleted: bool = False) -> Optional[UserProfile]:
        raise NotImplementedError

    def list_by_store(self, store_id: int) -> Sequence[UserProfile]:
        raise NotImplementedError

    def list_subordinates_of(self, admin_profile_id: Optional[int]) -> Sequence[UserProfile]:
        raise NotImplementedError

    def list_emails_by_profile_id(self, profile_id: Optional[int] = None) -> Sequence[UserProfile]:
        raise NotImplementedError

    def list_by_admin_account_id(self, admin_account_id: Optional[int] = None) -> Sequence[UserProfile]:
        raise NotImplementedError

    def grant_access_rights(self, profile_id: int, rights: AccessRights) -> bool:
        raise NotImplementedError

    def find_by_account_id(self, account_id: Optional[int] = None) -> Optional[UserProfile]:
        raise NotImplementedError

    def find_or_create_by_slack_id(self, slack_user_id: str) -> UserProfile:
        raise NotImplementedError

    def save_external_profile(
        self, profile: UserProfile, first_name: str, last_name: str, external_user: ExternalUser
    ) -> UserProfile:
        raise NotImplementedError

    def soft_delete(self, profile_id: int) -> bool:
        raise NotImplementedError

    def restore(self, profile_id: int) -> bool:
        raise NotImplementedError
