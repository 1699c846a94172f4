"""
Response shapes returned by Moodle web service functions.

Only the fields this client projects are declared; everything else in
a response is ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExceptionEnvelope(WireModel):
    """Moodle's error response."""
    exception: str = ""
    errorcode: str = ""
    message: str = ""
    debuginfo: Optional[str] = None


class CustomFieldWire(WireModel):
    shortname: str = ""
    value: Optional[str] = ""
    type: str = ""


class UserWire(WireModel):
    id: int
    username: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    profileimageurl: Optional[str] = None
    customfields: List[CustomFieldWire] = Field(default_factory=list)


class UserSearchWire(WireModel):
    users: List[UserWire] = Field(default_factory=list)


class CreatedUserWire(WireModel):
    id: int
    username: str = ""


class CourseWire(WireModel):
    id: int
    shortname: str = ""
    fullname: str = ""
    summary: Optional[str] = ""
    startdate: Optional[int] = 0
    enddate: Optional[int] = 0


class CourseSearchWire(WireModel):
    courses: List[CourseWire] = Field(default_factory=list)
    total: int = 0


class GroupWire(WireModel):
    id: int
    name: str = ""
    shortname: Optional[str] = ""


class RoleWire(WireModel):
    roleid: int
    name: Optional[str] = ""
    shortname: str = ""


class EnrolledUserWire(WireModel):
    id: int
    username: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    lastaccess: int = 0
    firstaccess: int = 0
    groups: List[GroupWire] = Field(default_factory=list)
    roles: List[RoleWire] = Field(default_factory=list)
    customfields: List[CustomFieldWire] = Field(default_factory=list)


class SiteInfoWire(WireModel):
    sitename: str
    firstname: str
    lastname: str
    userid: int


class AssignWire(WireModel):
    id: int
    cmid: int
    name: str = ""
    duedate: int = 0


class CourseAssignWire(WireModel):
    id: int
    shortname: str = ""
    fullname: str = ""
    assignments: List[AssignWire] = Field(default_factory=list)


class AssignmentsWire(WireModel):
    courses: List[CourseAssignWire] = Field(default_factory=list)


class SubmissionWire(WireModel):
    id: int
    userid: int
    status: str = ""
    gradingstatus: str = ""


class AssignSubmissionsWire(WireModel):
    assignmentid: int
    submissions: List[SubmissionWire] = Field(default_factory=list)


class SubmissionsWire(WireModel):
    assignments: List[AssignSubmissionsWire] = Field(default_factory=list)


class GradeWire(WireModel):
    id: int
    userid: int
    attemptnumber: int = 0
    timemodified: int = 0
    grader: int = 0
    grade: Optional[str] = None


class AssignGradesWire(WireModel):
    assignmentid: int
    grades: List[GradeWire] = Field(default_factory=list)


class GradesWire(WireModel):
    assignments: List[AssignGradesWire] = Field(default_factory=list)


class QuizWire(WireModel):
    id: int
    course: int
    coursemodule: int = 0
    name: str = ""
    timeopen: int = 0
    timeclose: int = 0
    grademethod: int = 0
    grade: float = 0.0
    preferredbehaviour: str = ""


class QuizzesWire(WireModel):
    quizzes: List[QuizWire] = Field(default_factory=list)


class ForumWire(WireModel):
    id: int
    course: int
    type: str = ""
    name: str = ""
    cmid: int = 0
    assessed: int = 0
    scale: int = 0
    grade_forum: int = 0
    duedate: int = 0


class DiscussionWire(WireModel):
    id: int
    discussion: int = 0
    name: str = ""
    userid: int = 0
    created: int = 0
    timemodified: int = 0


class DiscussionsWire(WireModel):
    discussions: List[DiscussionWire] = Field(default_factory=list)


class GradeItemWire(WireModel):
    id: int
    itemname: Optional[str] = None
    itemtype: str = ""
    itemmodule: Optional[str] = None
    iteminstance: int = 0
    cmid: Optional[int] = None
    graderaw: Optional[float] = None
    gradeformatted: Optional[str] = None
    grademin: float = 0.0
    grademax: float = 0.0
    percentageformatted: Optional[str] = None


class UserGradesWire(WireModel):
    courseid: int
    userid: int
    userfullname: str = ""
    gradeitems: List[GradeItemWire] = Field(default_factory=list)


class GradebookWire(WireModel):
    usergrades: List[UserGradesWire] = Field(default_factory=list)


class CourseModuleWire(WireModel):
    id: int
    course: int
    module: int = 0
    name: str = ""
    modname: str = ""
    instance: int = 0
    section: int = 0
    visible: int = 1
    groupmode: int = 0
    groupingid: int = 0
    availability: Optional[str] = None


class CourseModuleResponseWire(WireModel):
    cm: CourseModuleWire


class UploadedFileWire(WireModel):
    itemid: int
    filename: str = ""


class PictureUpdateWire(WireModel):
    success: bool
    profileimageurl: Optional[str] = None
