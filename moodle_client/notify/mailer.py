"""
SMTP delivery of password reset mails.
"""

import asyncio
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, Optional

from shared.errors import ConfigurationError, MailDeliveryError
from shared.logging import get_logger
from .templates import MailTemplate, WELCOME


@dataclass
class SmtpSettings:
    """Outgoing mail server. The server is expected to speak TLS from the first byte (port 465)."""
    host: Optional[str] = None
    port: int = 0
    user: Optional[str] = None
    password: Optional[str] = None
    from_name: Optional[str] = None
    from_email: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings) -> "SmtpSettings":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            from_name=settings.smtp_from_name,
            from_email=settings.smtp_from_email,
        )

    def validate(self) -> None:
        if not self.host or not self.port:
            raise ConfigurationError("Password reset mail requires smtp host and port to be specified.")
        if not self.user or not self.password:
            raise ConfigurationError("Password reset mail requires smtp user and password to be specified.")
        if not self.from_name or not self.from_email:
            raise ConfigurationError("Password reset mail requires smtp from name and email to be specified.")


class PasswordMailer:
    """Sends new passwords to account owners."""

    def __init__(self, settings: SmtpSettings, smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP_SSL):
        self.settings = settings
        self.smtp_factory = smtp_factory
        self.logger = get_logger("moodle.mailer")

    def build_message(self, person, password: str, site_url: str,
                      template: MailTemplate = WELCOME) -> EmailMessage:
        subject, body = template.render(
            first_name=person.first_name,
            site_url=site_url,
            username=person.email,
            password=password,
            signature=self.settings.from_name,
        )
        message = EmailMessage()
        message["From"] = formataddr((self.settings.from_name, self.settings.from_email))
        message["To"] = formataddr((person.full_name, person.email))
        message["Subject"] = subject
        message.set_content(body, charset="utf-8", cte="8bit")
        return message

    async def send_password(self, person, password: str, site_url: str,
                            template: MailTemplate = WELCOME) -> None:
        """Mail ``password`` to ``person``. Delivery runs in a worker thread."""
        self.settings.validate()
        message = self.build_message(person, password, site_url, template)
        await asyncio.to_thread(self._deliver, message, person.email)
        self.logger.info("Password mail sent", recipient=person.email)

    def _deliver(self, message: EmailMessage, recipient: str) -> None:
        # Certificates are not verified; many campus relays use self-signed ones.
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        try:
            with self.smtp_factory(self.settings.host, self.settings.port,
                                   context=context, timeout=self.settings.timeout) as smtp:
                smtp.login(self.settings.user, self.settings.password)
                smtp.send_message(message, from_addr=self.settings.from_email, to_addrs=[recipient])
        except (smtplib.SMTPException, OSError) as e:
            self.logger.error("Password mail delivery failed", recipient=recipient, error=str(e))
            raise MailDeliveryError(f"Mail delivery failed: {e}", details={"recipient": recipient}) from e
