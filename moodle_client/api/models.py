"""
Data models returned by the Moodle API client.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from moodle_client.restrictions import CourseGroup, Restriction


def from_timestamp(value: Optional[int]) -> Optional[datetime]:
    """Moodle uses 0 for "not set"; anything else is a Unix timestamp."""
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass
class Course:
    """A course."""
    moodle_id: int
    code: str = ""
    name: str = ""
    summary: str = ""
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass
class Person:
    """A Moodle account."""
    moodle_id: int
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    alphacrucis_id: str = ""
    personal_email: str = ""
    profile_image_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class CustomField:
    name: str
    value: str = ""
    type: str = ""


@dataclass
class CourseRole:
    role_id: int
    name: str = ""
    shortname: str = ""


@dataclass
class CoursePerson:
    """A person enrolled in a course, with their groups and roles."""
    id: int
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    last_access: int = 0
    first_access: int = 0
    groups: List[CourseGroup] = field(default_factory=list)
    roles: List[CourseRole] = field(default_factory=list)
    custom_fields: List[CustomField] = field(default_factory=list)

    def first_access_time(self) -> Optional[datetime]:
        return from_timestamp(self.first_access)

    def last_access_time(self) -> Optional[datetime]:
        return from_timestamp(self.last_access)

    def custom_field(self, name: str) -> str:
        for f in self.custom_fields:
            if f.name == name:
                return f.value
        return ""

    def has_group_named(self, name: str) -> bool:
        return any(g.name == name for g in self.groups)


@dataclass
class SiteInfo:
    site_name: str
    first_name: str
    last_name: str
    user_id: int


@dataclass
class AssignmentInfo:
    id: int
    cm_id: int
    course_id: int
    course_code: str
    course_name: str
    name: str
    due_date: Optional[datetime] = None


@dataclass
class AssignmentSubmission:
    id: int
    submission_id: int
    user_id: int
    status: str = ""
    grading_status: str = ""


@dataclass
class AssignmentGrade:
    assignment_id: int
    grade_id: int
    user_id: int
    grade: Optional[float] = None
    grader: int = 0
    attempt_number: int = 0
    updated: Optional[datetime] = None


@dataclass
class Quiz:
    id: int
    course_id: int
    cm_id: int
    name: str
    time_open: Optional[datetime] = None
    time_close: Optional[datetime] = None
    grade_method: int = 0
    grade: float = 0.0
    preferred_behaviour: str = ""


@dataclass
class Forum:
    id: int
    course_id: int
    cm_id: int
    name: str
    type: str = ""
    assessed: int = 0
    scale: int = 0
    grade: int = 0
    due_date: Optional[datetime] = None


@dataclass
class ForumDiscussion:
    id: int
    discussion_id: int
    name: str
    user_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None


@dataclass
class GradeItem:
    id: int
    name: Optional[str]
    item_type: str = ""
    item_module: Optional[str] = None
    item_instance: int = 0
    cm_id: Optional[int] = None
    grade: Optional[float] = None
    grade_formatted: Optional[str] = None
    grade_min: float = 0.0
    grade_max: float = 0.0
    percentage: Optional[str] = None


@dataclass
class UserGrades:
    course_id: int
    user_id: int
    user_full_name: str = ""
    items: List[GradeItem] = field(default_factory=list)


@dataclass
class CourseModule:
    """A course module (assignment, forum, quiz, ...) and its restriction."""
    id: int
    course_id: int
    name: str = ""
    mod_name: str = ""
    instance: int = 0
    section: int = 0
    visible: bool = True
    group_mode: int = 0
    grouping_id: int = 0
    availability: Optional[Restriction] = None

    def is_restricted_for(self, learner_groups: Iterable[Union[int, CourseGroup]]) -> bool:
        """True when the learner is blocked; modules without a rule are open."""
        if self.availability is None:
            return False
        return self.availability.is_restricted(learner_groups)
