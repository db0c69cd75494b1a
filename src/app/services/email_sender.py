from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """Raised by senders when the provider rejects or cannot take a message."""


class IEmailSender(ABC):
    """Outbound email - application layer"""

    @abstractmethod
    async def send_email(self, to: str, subject: str, html: str) -> None:
        """Send one message; raises EmailDeliveryError on failure"""
        pass

    @abstractmethod
    async def send_password_reset_email(self, to: str, name: str, reset_token: str) -> None:
        """Send the reset link for a freshly issued token"""
        pass

    @abstractmethod
    async def send_new_reader_notification(self, name: str, username: str, email: str) -> None:
        """Tell the super admin that a reader signed up"""
        pass

    @abstractmethod
    async def send_new_request_notification(
        self, name: str, username: str, email: str, writing_sample: str
    ) -> None:
        """Tell the super admin that a reader asked to become a writer"""
        pass
