from typing import List, Tuple

from src.app.services.email_sender import EmailDeliveryError, IEmailSender


class RecordingEmailSender(IEmailSender):
    """Keeps every message in memory; addresses in fail_for raise on send."""

    def __init__(self, fail_for=()):
        self.sent: List[Tuple[str, str, str]] = []
        self.reset_tokens: List[Tuple[str, str]] = []
        self.new_reader_notifications: List[str] = []
        self.membership_request_notifications: List[str] = []
        self.fail_for = set(fail_for)

    async def send_email(self, to: str, subject: str, html: str) -> None:
        if to in self.fail_for:
            raise EmailDeliveryError(f"refused {to}")
        self.sent.append((to, subject, html))

    async def send_password_reset_email(self, to: str, name: str, reset_token: str) -> None:
        self.reset_tokens.append((to, reset_token))
        await self.send_email(to, "Reset your password", reset_token)

    async def send_new_reader_notification(self, name: str, username: str, email: str) -> None:
        self.new_reader_notifications.append(username)

    async def send_new_request_notification(
        self, name: str, username: str, email: str, writing_sample: str
    ) -> None:
        self.membership_request_notifications.append(username)
