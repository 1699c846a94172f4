"""
Password mail templates.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MailTemplate:
    """Subject and body of a password mail.

    Both are ``str.format`` templates receiving ``first_name``,
    ``site_url``, ``username``, ``password`` and ``signature``.
    """
    subject: str
    body: str

    def render(self, **values) -> tuple:
        return self.subject.format(**values), self.body.format(**values)


WELCOME = MailTemplate(
    subject="Welcome to {signature} Moodle",
    body=(
        "Hi {first_name},\n"
        "\n"
        "Welcome to the {signature} Moodle, You can sign-in using the details below:\n"
        "\n"
        "    URL: {site_url}\n"
        "    Username: {username}\n"
        "    Password: {password}\n"
        "\n"
        "If you have any difficulties with moodle access, please reply to this email.\n"
        "\n"
        "Regards,\n"
        "{signature}\n"
    ),
)


def course_access(course_code: str) -> MailTemplate:
    """Welcome mail for someone who was just given access to one course."""
    course_code = course_code.replace("{", "{{").replace("}", "}}")
    return MailTemplate(
        subject=f"Welcome to {course_code}",
        body=(
            "Hi {first_name},\n"
            "\n"
            f"You now have access to {course_code} in Moodle. "
            "You can sign-in using the details below:\n"
            "\n"
            "    URL: {site_url}\n"
            "    Username: {username}\n"
            "    Password: {password}\n"
            "\n"
            "Regards,\n"
            "{signature}\n"
        ),
    )
