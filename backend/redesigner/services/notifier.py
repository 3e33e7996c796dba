"""Email notification when a job completes."""

import html
import logging
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage

from redesigner.config import Settings
from redesigner.exceptions import NotificationFailure

logger = logging.getLogger(__name__)

SUBJECT = "Your Website Redesign is Ready!"


@dataclass
class NotificationPayload:
    website: str
    theme: str
    business_type: str
    job_type: str = "clone"
    demo_urls: list[str] = field(default_factory=list)
    mockup_url: str | None = None


class EmailNotifier:
    """Send completion emails over SMTP. Failures never propagate."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.smtp_host and (self.settings.email_from or self.settings.smtp_username))

    def notify(self, address: str, payload: NotificationPayload) -> bool:
        """Send the completion email. Returns False instead of raising."""
        if not self.is_configured:
            logger.warning(f"SMTP is not configured, skipping notification to {address}")
            return False

        try:
            self.send(address, payload)
        except NotificationFailure as e:
            logger.warning(f"Notification to {address} failed: {e}")
            return False

        logger.info(f"Notification sent to {address}")
        return True

    def send(self, address: str, payload: NotificationPayload) -> None:
        message = self.build_message(address, payload)
        try:
            with smtplib.SMTP(
                self.settings.smtp_host, self.settings.smtp_port, timeout=30
            ) as smtp:
                if self.settings.smtp_use_tls:
                    smtp.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    smtp.login(self.settings.smtp_username, self.settings.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationFailure(str(e)) from e

    def build_message(self, address: str, payload: NotificationPayload) -> EmailMessage:
        link = self._result_link(payload)
        theme = html.escape(payload.theme)
        business_type = html.escape(payload.business_type)

        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = self.settings.email_from or self.settings.smtp_username
        message["To"] = address
        message.set_content(
            f"Your {payload.theme} redesign of {payload.website} is ready.\n\nView it here: {link}\n"
        )
        message.add_alternative(
            f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h1 style="color: #333;">Your Website Redesign is Complete!</h1>
  <p>We've redesigned {html.escape(payload.website)} with a modern, {theme} aesthetic
  that's perfect for your {business_type} business.</p>
  <ul>
    <li>Modern, responsive design</li>
    <li>Mobile-first approach</li>
    <li>{theme} color scheme</li>
    <li>All your original content preserved</li>
  </ul>
  <div style="text-align: center; margin: 2rem 0;">
    <a href="{html.escape(link, quote=True)}" style="background: #007bff; color: white; padding: 1rem 2rem; text-decoration: none; border-radius: 5px; display: inline-block;">View Your New Design</a>
  </div>
</div>""",
            subtype="html",
        )
        return message

    def _result_link(self, payload: NotificationPayload) -> str:
        if payload.demo_urls:
            return self.settings.public_base_url.rstrip("/") + payload.demo_urls[0]
        return payload.mockup_url or self.settings.public_base_url
