"""
Assignments, quizzes, forums and grades.
"""

from typing import Iterable, List, Optional, Tuple

from .models import (
    AssignmentGrade, AssignmentInfo, AssignmentSubmission, Course, Forum,
    ForumDiscussion, GradeItem, Quiz, UserGrades, from_timestamp
)
from .wire import AssignmentsWire, DiscussionsWire, ForumWire, GradebookWire, GradesWire, QuizzesWire, SubmissionsWire


def _course_id_params(course_ids: Iterable[int]) -> List[Tuple[str, int]]:
    return [(f"courseids[{i}]", course_id) for i, course_id in enumerate(course_ids)]


def _grade_value(grade: Optional[str]) -> Optional[float]:
    # Ungraded submissions report "" or "-1.00000".
    if grade is None or grade == "":
        return None
    try:
        value = float(grade)
    except ValueError:
        return None
    return None if value < 0 else value


class AssessmentsMixin:
    """Web service calls about assessable activities and their grades."""

    async def get_assignments(self, courses: Iterable[Course]) -> List[AssignmentInfo]:
        """Assignments in the given courses."""
        return await self.get_assignments_with_course_id([c.moodle_id for c in courses])

    async def get_assignments_with_course_id(self, course_ids: Iterable[int]) -> List[AssignmentInfo]:
        """Assignments in the courses with the given ids."""
        result = await self._call_parsed(
            "mod_assign_get_assignments", AssignmentsWire,
            [("includenotenrolledcourses", 1)] + _course_id_params(course_ids)
        )
        return [
            AssignmentInfo(
                id=a.id,
                cm_id=a.cmid,
                course_id=c.id,
                course_code=c.shortname,
                course_name=c.fullname,
                name=a.name,
                due_date=from_timestamp(a.duedate),
            )
            for c in result.courses
            for a in c.assignments
        ]

    async def get_assignment_submissions(self, assignment_id: int) -> List[AssignmentSubmission]:
        result = await self._call_parsed(
            "mod_assign_get_submissions", SubmissionsWire, [("assignmentids[0]", assignment_id)]
        )
        return [
            AssignmentSubmission(
                id=a.assignmentid,
                submission_id=s.id,
                user_id=s.userid,
                status=s.status,
                grading_status=s.gradingstatus,
            )
            for a in result.assignments
            for s in a.submissions
        ]

    async def get_assignment_grades(self, assignment_id: int) -> List[AssignmentGrade]:
        result = await self._call_parsed(
            "mod_assign_get_grades", GradesWire, [("assignmentids[0]", assignment_id)]
        )
        return [
            AssignmentGrade(
                assignment_id=a.assignmentid,
                grade_id=g.id,
                user_id=g.userid,
                grade=_grade_value(g.grade),
                grader=g.grader,
                attempt_number=g.attemptnumber,
                updated=from_timestamp(g.timemodified),
            )
            for a in result.assignments
            for g in a.grades
        ]

    async def get_quizzes_with_course_id(self, course_ids: Iterable[int]) -> List[Quiz]:
        result = await self._call_parsed(
            "mod_quiz_get_quizzes_by_courses", QuizzesWire, _course_id_params(course_ids)
        )
        return [
            Quiz(
                id=q.id,
                course_id=q.course,
                cm_id=q.coursemodule,
                name=q.name,
                time_open=from_timestamp(q.timeopen),
                time_close=from_timestamp(q.timeclose),
                grade_method=q.grademethod,
                grade=q.grade,
                preferred_behaviour=q.preferredbehaviour,
            )
            for q in result.quizzes
        ]

    async def get_forums_with_course_id(self, course_ids: Iterable[int]) -> List[Forum]:
        forums = await self._call_parsed(
            "mod_forum_get_forums_by_courses", List[ForumWire], _course_id_params(course_ids)
        )
        return [
            Forum(
                id=f.id,
                course_id=f.course,
                cm_id=f.cmid,
                name=f.name,
                type=f.type,
                assessed=f.assessed,
                scale=f.scale,
                grade=f.grade_forum,
                due_date=from_timestamp(f.duedate),
            )
            for f in forums
        ]

    async def get_forum_discussions(self, forum_id: int) -> List[ForumDiscussion]:
        result = await self._call_parsed(
            "mod_forum_get_forum_discussions_paginated", DiscussionsWire, [("forumid", forum_id)]
        )
        return [
            ForumDiscussion(
                id=d.id,
                discussion_id=d.discussion,
                name=d.name,
                user_id=d.userid,
                created=from_timestamp(d.created),
                modified=from_timestamp(d.timemodified),
            )
            for d in result.discussions
        ]

    async def get_course_gradebook(self, course_id: int) -> List[UserGrades]:
        """Every participant's grade items for a course."""
        result = await self._call_parsed(
            "gradereport_user_get_grade_items", GradebookWire, [("courseid", course_id)]
        )
        return [
            UserGrades(
                course_id=u.courseid,
                user_id=u.userid,
                user_full_name=u.userfullname,
                items=[
                    GradeItem(
                        id=i.id,
                        name=i.itemname,
                        item_type=i.itemtype,
                        item_module=i.itemmodule,
                        item_instance=i.iteminstance,
                        cm_id=i.cmid,
                        grade=i.graderaw,
                        grade_formatted=i.gradeformatted,
                        grade_min=i.grademin,
                        grade_max=i.grademax,
                        percentage=i.percentageformatted,
                    )
                    for i in u.gradeitems
                ],
            )
            for u in result.usergrades
        ]
