"""Tests for EmailNotifier. ``smtplib.SMTP`` is always patched."""

import smtplib
from unittest.mock import patch

import pytest

from redesigner.config import Settings
from redesigner.services.notifier import SUBJECT, EmailNotifier, NotificationPayload


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_username="mailer",
        smtp_password="secret",
        email_from="noreply@example.com",
        public_base_url="https://redesigner.example",
    )


@pytest.fixture()
def payload() -> NotificationPayload:
    return NotificationPayload(
        website="https://acme.example",
        theme="dark-black",
        business_type="tech",
        demo_urls=["/demo/abc"],
    )


class TestNotify:
    def test_sends_over_smtp(self, settings, payload) -> None:
        with patch("redesigner.services.notifier.smtplib.SMTP") as smtp_cls:
            ok = EmailNotifier(settings).notify("owner@example.com", payload)

        assert ok is True
        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=30)
        smtp = smtp_cls.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("mailer", "secret")
        message = smtp.send_message.call_args.args[0]
        assert message["To"] == "owner@example.com"
        assert message["Subject"] == SUBJECT

    def test_unconfigured_smtp_is_skipped(self, payload) -> None:
        with patch("redesigner.services.notifier.smtplib.SMTP") as smtp_cls:
            ok = EmailNotifier(Settings(smtp_host=None)).notify("owner@example.com", payload)

        assert ok is False
        smtp_cls.assert_not_called()

    def test_transport_error_returns_false(self, settings, payload) -> None:
        with patch("redesigner.services.notifier.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

            ok = EmailNotifier(settings).notify("owner@example.com", payload)

        assert ok is False

    def test_connection_error_returns_false(self, settings, payload) -> None:
        with patch("redesigner.services.notifier.smtplib.SMTP", side_effect=ConnectionRefusedError()):
            ok = EmailNotifier(settings).notify("owner@example.com", payload)

        assert ok is False


class TestBuildMessage:
    def test_links_absolute_demo_url(self, settings, payload) -> None:
        message = EmailNotifier(settings).build_message("owner@example.com", payload)

        html = message.get_body(preferencelist=("html",)).get_content()
        assert "https://redesigner.example/demo/abc" in html
        assert "dark-black" in html

    def test_links_mockup_url(self, settings) -> None:
        payload = NotificationPayload(
            website="https://acme.example",
            theme="colorful",
            business_type="blog",
            job_type="mockup",
            mockup_url="https://images.example.com/m.png",
        )

        message = EmailNotifier(settings).build_message("owner@example.com", payload)

        text = message.get_body(preferencelist=("plain",)).get_content()
        assert "https://images.example.com/m.png" in text
