"""Outbound SMTP mail."""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import structlog

from staffing_portal.core.config import settings

logger = structlog.get_logger(__name__)


class MailerConfig:
    """Configuration for the outbound SMTP server."""

    def __init__(
        self,
        smtp_host: str = "localhost",
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        use_tls: bool = True,
        mail_from: str = "no-reply@staffing-portal.local",
        timeout: float = 10.0
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.mail_from = mail_from
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "MailerConfig":
        return cls(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_username=settings.smtp_username,
            smtp_password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            mail_from=settings.mail_from,
            timeout=settings.smtp_timeout,
        )


class Mailer:
    """Sends plain-text email over SMTP."""

    def __init__(self, config: Optional[MailerConfig] = None):
        """Initialize mailer.

        Args:
            config: SMTP configuration, defaults to application settings
        """
        self.config = config or MailerConfig.from_settings()

    def send(self, to_address: str, subject: str, body: str) -> bool:
        """Send a plain-text email.

        Args:
            to_address: Recipient email address
            subject: Email subject
            body: Email body text

        Returns:
            True if email sent successfully, False otherwise
        """
        try:
            msg = MIMEMultipart()
            msg['From'] = self.config.mail_from
            msg['To'] = to_address
            msg['Subject'] = subject
            msg.attach(MIMEText(body, 'plain'))

            server = smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=self.config.timeout)
            try:
                if self.config.use_tls:
                    server.starttls()

                if self.config.smtp_username and self.config.smtp_password:
                    server.login(self.config.smtp_username, self.config.smtp_password)

                server.sendmail(self.config.mail_from, to_address, msg.as_string())
            finally:
                server.quit()

            logger.info("Email sent", to_address=to_address, subject=subject)
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Failed to send email",
                to_address=to_address,
                subject=subject,
                error=str(e)
            )
            return False
