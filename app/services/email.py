"""
Email service for Courtside
Sends account verification codes over SMTP
"""

import smtplib
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List

from app.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails via SMTP"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_pass = settings.SMTP_PASS
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.from_addr = settings.MAIL_FROM

    def is_configured(self) -> bool:
        """Check if email service is properly configured"""
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass)

    def send_email(self, to_addrs: List[str], subject: str, html_content: str) -> bool:
        """
        Send an HTML email.

        Returns:
            True if the message was handed to the SMTP server
        """
        if not self.is_configured():
            logger.warning("Email service not configured, skipping email '%s'", subject)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_addr
        msg["To"] = ", ".join(to_addrs)
        msg.attach(MIMEText(html_content, "html", "utf-8"))

        try:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port)
            if self.smtp_use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_pass)
            server.send_message(msg)
            server.quit()
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email '%s' to %s: %s", subject, to_addrs, e)
            return False

        logger.info("Email '%s' sent to %s", subject, ", ".join(to_addrs))
        return True

    def send_otp_email(self, to_addr: str, otp: str, expires_minutes: int) -> bool:
        html_content = f"""
        <html>
        <body style="font-family: -apple-system, 'Segoe UI', Roboto, sans-serif;">
            <h2>Verify your Courtside account</h2>
            <p>Your verification code is <b>{otp}</b>.</p>
            <p>It is valid for {expires_minutes} minutes.</p>
        </body>
        </html>
        """
        return self.send_email([to_addr], "Courtside OTP Verification", html_content)


# Global email service instance
email_service = EmailService()
