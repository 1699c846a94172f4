"""
Moodle web service API client.

    api = MoodleApi("https://moodle.example.com/moodle/", "a0092ba9a9f5b45cdd2f01d049595bfe91")

    courses = await api.get_courses("History")
    for course in courses:
        print(course.code)

    people = await api.get_people_by_attribute("email", "%")

Web service function reference:
https://docs.moodle.org/dev/Web_service_API_functions
"""

from typing import Optional

from shared.config import MoodleSettings, get_settings
from moodle_client.notify import PasswordMailer, SmtpSettings
from moodle_client.transport import FetchConfig, UrlFetcher
from .assessments import AssessmentsMixin
from .base import MoodleApiBase
from .courses import CoursesMixin
from .modules import CourseModulesMixin
from .people import PeopleMixin


class MoodleApi(PeopleMixin, CoursesMixin, AssessmentsMixin, CourseModulesMixin, MoodleApiBase):
    """Client for one Moodle site."""

    def __init__(self, base_url: str, token: str, fetcher: Optional[UrlFetcher] = None,
                 mailer: Optional[PasswordMailer] = None):
        super().__init__(base_url, token, fetcher=fetcher)
        self.mailer = mailer

    def set_smtp_settings(self, host: str, port: int, user: str, password: str,
                          from_name: str, from_email: str) -> None:
        """Enable password reset mails."""
        self.mailer = PasswordMailer(SmtpSettings(
            host=host,
            port=port,
            user=user,
            password=password,
            from_name=from_name,
            from_email=from_email,
        ))

    @classmethod
    def from_settings(cls, settings: Optional[MoodleSettings] = None) -> "MoodleApi":
        """Build a client from ``MOODLE_*`` settings."""
        settings = settings or get_settings()
        mailer = None
        if settings.smtp_host:
            mailer = PasswordMailer(SmtpSettings.from_settings(settings))
        return cls(
            settings.url,
            settings.token,
            fetcher=UrlFetcher(FetchConfig.from_settings(settings)),
            mailer=mailer,
        )
