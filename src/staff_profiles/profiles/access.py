from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import require_bit
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AccessRights:
    """The three permission flags packed into ``access_right``.

    The flags are concatenated admin, user, store into a binary string, so
    admin is the most-significant bit: ``AccessRights(1, 0, 1).to_int() == 5``.
    """

    admin: int = 0
    user: int = 0
    store: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "admin", require_bit(self.admin, "admin"))
        object.__setattr__(self, "user", require_bit(self.user, "user"))
        object.__setattr__(self, "store", require_bit(self.store, "store"))

    def to_bits(self) -> str:
        return f"{self.admin}{self.user}{self.store}"

    def to_int(self) -> int:
        return int(self.to_bits(), 2)

    @classmethod
    def from_int(cls, value: int) -> "AccessRights":
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 7:
            raise ValidationError(f"access_right must be an integer in 0..7, got {value!r}")
        bits = format(value, "03b")
        return cls(admin=int(bits[0]), user=int(bits[1]), store=int(bits[2]))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AccessRights":
        """Read the ``admin_right``/``user_right``/``store_right`` keys of a submitted form."""
        return cls(
            admin=data.get("admin_right", 0),
            user=data.get("user_right", 0),
            store=data.get("store_right", 0),
        )
