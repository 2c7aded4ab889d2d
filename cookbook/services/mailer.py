"""Outbound mail for account verification."""

import logging
import smtplib
from email.message import EmailMessage

from cookbook.config import Settings

logger = logging.getLogger(__name__)


class MailerService:
    """Sends mail through SMTP. Disabled when no SMTP host is configured."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return bool(self.settings.smtp_host)

    def verification_link(self, verification_token: str) -> str:
        return self.settings.public_url(f"users/verify/{verification_token}")

    def build_verification_message(self, email: str, verification_token: str) -> EmailMessage:
        link = self.verification_link(verification_token)
        message = EmailMessage()
        message["Subject"] = "So Yummy - Verify your account"
        message["From"] = self.settings.mail_from
        message["To"] = email
        message.set_content(f"Hello! Please verify your So Yummy account by visiting {link}")
        message.add_alternative(
            f'<h2>Hello!</h2><br/>Please verify your So Yummy account by clicking <a href="{link}">here</a>!',
            subtype="html",
        )
        return message

    def send_verification(self, email: str, verification_token: str) -> bool:
        """Send the verification mail. Returns False when skipped or failed."""
        if not self.enabled:
            logger.info("SMTP not configured, verification mail skipped")
            return False

        message = self.build_verification_message(email, verification_token)
        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port) as conn:
                conn.starttls()
                if self.settings.smtp_user:
                    conn.login(self.settings.smtp_user, self.settings.smtp_password or "")
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send verification mail to {email}: {e}")
            return False

        logger.info(f"Verification mail sent to {email}")
        return True
