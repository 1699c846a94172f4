"""
Notification package: password reset mails over SMTP.
"""

from .templates import MailTemplate, WELCOME, course_access
from .mailer import PasswordMailer, SmtpSettings

__all__ = [
    "MailTemplate",
    "WELCOME",
    "course_access",
    "PasswordMailer",
    "SmtpSettings",
]
