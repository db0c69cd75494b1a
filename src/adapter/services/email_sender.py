"""
Email senders.

ResendEmailSender talks to the Resend HTTP API with httpx. When no API key
is configured the LoggingEmailSender stands in and only records what would
have been sent.
"""

import logging
from html import escape

import httpx

from src.app.services.email_sender import EmailDeliveryError, IEmailSender

logger = logging.getLogger(__name__)


def _reset_email_html(app_name: str, name: str, reset_url: str) -> str:
    return (
        f"<h1>Reset your {escape(app_name)} password</h1>"
        f"<p>Hi {escape(name)},</p>"
        "<p>We received a request to reset your password. "
        "Use the link below to choose a new one.</p>"
        f'<p><a href="{escape(reset_url, quote=True)}">Reset Password</a></p>'
        "<p>This link will expire in 1 hour. If you didn't request a password "
        "reset, you can safely ignore this email.</p>"
    )


def _new_reader_html(name: str, username: str, email: str) -> str:
    return (
        "<h1>New reader signed up</h1>"
        f"<p>Name: {escape(name)}</p>"
        f"<p>Username: {escape(username)}</p>"
        f"<p>Email: {escape(email)}</p>"
    )


def _new_request_html(name: str, username: str, email: str, writing_sample: str, review_url: str) -> str:
    return (
        "<h1>New Membership Request</h1>"
        f"<p>Name: {escape(name)}</p>"
        f"<p>Username: @{escape(username)}</p>"
        f"<p>Email: {escape(email)}</p>"
        "<p><strong>Why they want to join:</strong></p>"
        f"<p style=\"white-space: pre-wrap\">{escape(writing_sample)}</p>"
        f'<p><a href="{escape(review_url, quote=True)}">Review Request</a></p>'
    )


class _BaseEmailSender(IEmailSender):
    def __init__(self, app_name: str, app_url: str, super_admin_email: str = ""):
        self.app_name = app_name
        self.app_url = app_url.rstrip("/")
        self.super_admin_email = super_admin_email

    async def send_password_reset_email(self, to: str, name: str, reset_token: str) -> None:
        reset_url = f"{self.app_url}/reset-password?token={reset_token}"
        await self.send_email(
            to,
            f"Reset your {self.app_name} password",
            _reset_email_html(self.app_name, name, reset_url),
        )

    async def send_new_reader_notification(self, name: str, username: str, email: str) -> None:
        if not self.super_admin_email:
            logger.warning("SUPER_ADMIN_EMAIL not configured, skipping new reader notification")
            return
        await self.send_email(
            self.super_admin_email,
            f"New reader on {self.app_name}: {username}",
            _new_reader_html(name, username, email),
        )

    async def send_new_request_notification(
        self, name: str, username: str, email: str, writing_sample: str
    ) -> None:
        if not self.super_admin_email:
            logger.warning("SUPER_ADMIN_EMAIL not configured, skipping membership request notification")
            return
        await self.send_email(
            self.super_admin_email,
            f"New membership request from {name}",
            _new_request_html(name, username, email, writing_sample, f"{self.app_url}/admin/requests"),
        )


class ResendEmailSender(_BaseEmailSender):
    def __init__(
        self,
        api_key: str,
        from_address: str,
        app_name: str,
        app_url: str,
        super_admin_email: str = "",
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        super().__init__(app_name, app_url, super_admin_email)
        self.api_key = api_key
        self.from_address = from_address
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def send_email(self, to: str, subject: str, html: str) -> None:
        payload = {
            "from": f"{self.app_name} <{self.from_address}>",
            "to": [to],
            "subject": subject,
            "html": html,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        if response.status_code >= 400:
            raise EmailDeliveryError(
                f"Email provider rejected message: HTTP {response.status_code}"
            )
        logger.info(f"Email sent: subject={subject!r}")


class LoggingEmailSender(_BaseEmailSender):
    async def send_email(self, to: str, subject: str, html: str) -> None:
        logger.warning(f"RESEND_API_KEY not configured, email not sent: subject={subject!r}")
