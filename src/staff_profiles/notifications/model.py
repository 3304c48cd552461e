from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_PASSWORD_RESET_URL

RESET_PASSWORD_SUBJECT = "Reset Password Notification"

RESET_PASSWORD_BODY = """
Hello {name},

You are receiving this email because we received a password reset request for your account.

Reset your password: {url}

If you did not request a password reset, no further action is required.
""".strip()


@dataclass(frozen=True)
class ResetPasswordNotification:
    token: str
    reset_url_template: str = DEFAULT_PASSWORD_RESET_URL

    def reset_url(self, email: str) -> str:
        return self.reset_url_template.format(token=self.token, email=email or "")

    def subject(self) -> str:
        return RESET_PASSWORD_SUBJECT

    def body(self, *, name: str, email: str) -> str:
        return RESET_PASSWORD_BODY.format(name=name or email, url=self.reset_url(email))
