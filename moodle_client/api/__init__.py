"""
API package for the Moodle web service client.

Each mixin groups the web service functions for one area (people,
courses, assessments, course modules). MoodleApi combines them over
MoodleApiBase, which owns:

- URL construction against webservice/rest/server.php
- Exception envelope detection and mapping to shared errors
- Validation of response shapes (see wire.py)

Responses are re-projected into the dataclasses in models.py.
"""

from .client import MoodleApi
from .base import MoodleApiBase, read_error
from .models import (
    AssignmentGrade,
    AssignmentInfo,
    AssignmentSubmission,
    Course,
    CourseModule,
    CoursePerson,
    CourseRole,
    CustomField,
    Forum,
    ForumDiscussion,
    GradeItem,
    Person,
    Quiz,
    SiteInfo,
    UserGrades,
)

__all__ = [
    "MoodleApi",
    "MoodleApiBase",
    "read_error",
    "AssignmentGrade",
    "AssignmentInfo",
    "AssignmentSubmission",
    "Course",
    "CourseModule",
    "CoursePerson",
    "CourseRole",
    "CustomField",
    "Forum",
    "ForumDiscussion",
    "GradeItem",
    "Person",
    "Quiz",
    "SiteInfo",
    "UserGrades",
]
