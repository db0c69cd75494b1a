import json

import httpx
import pytest

from src.adapter.services.email_sender import LoggingEmailSender, ResendEmailSender
from src.app.services.email_sender import EmailDeliveryError


def make_sender(handler, **kwargs):
    return ResendEmailSender(
        api_key="re_test",
        from_address="noreply@inkhouse.dev",
        app_name="Inkhouse",
        app_url="https://inkhouse.dev/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_reset_email_posts_to_provider():
    captured = {}

    def handler(request: httpx.Request):
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_1"})

    await make_sender(handler).send_password_reset_email("a@b.com", "A", "f" * 64)

    assert captured["auth"] == "Bearer re_test"
    assert captured["body"]["from"] == "Inkhouse <noreply@inkhouse.dev>"
    assert captured["body"]["to"] == ["a@b.com"]
    assert "https://inkhouse.dev/reset-password?token=" + "f" * 64 in captured["body"]["html"]


@pytest.mark.asyncio
async def test_provider_rejection_raises():
    sender = make_sender(lambda request: httpx.Response(422, json={"message": "bad"}))

    with pytest.raises(EmailDeliveryError):
        await sender.send_email("a@b.com", "Hi", "<p>Hi</p>")


@pytest.mark.asyncio
async def test_network_failure_raises():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(EmailDeliveryError):
        await make_sender(handler).send_email("a@b.com", "Hi", "<p>Hi</p>")


@pytest.mark.asyncio
async def test_new_reader_notification_goes_to_super_admin():
    recipients = []

    def handler(request):
        recipients.extend(json.loads(request.content)["to"])
        return httpx.Response(200, json={"id": "email_2"})

    sender = make_sender(handler, super_admin_email="owner@inkhouse.dev")
    await sender.send_new_reader_notification("A", "abc123", "a@b.com")

    assert recipients == ["owner@inkhouse.dev"]


@pytest.mark.asyncio
async def test_logging_sender_never_raises():
    sender = LoggingEmailSender(app_name="Inkhouse", app_url="http://localhost:3000")

    await sender.send_email("a@b.com", "Hi", "<p>Hi</p>")
    await sender.send_new_reader_notification("A", "abc123", "a@b.com")
