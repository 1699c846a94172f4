"""
Unit tests for assignment, quiz, forum and gradebook calls.
"""

from urllib.parse import parse_qsl, urlsplit

import pytest

from moodle_client.api import Course, MoodleApi
from shared.test_helpers import called_url, json_result, stub_fetcher


def query(url: str) -> dict:
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))


def make_api(*results) -> MoodleApi:
    return MoodleApi("http://moodle.test/", "secret", fetcher=stub_fetcher(*results))


class TestAssignments:
    """Test cases for assignment calls."""

    ASSIGNMENTS = {
        "courses": [
            {
                "id": 36, "shortname": "THE201", "fullname": "Theology 2",
                "assignments": [
                    {"id": 3, "cmid": 1155, "name": "Essay 1", "duedate": 1541682000},
                    {"id": 4, "cmid": 1156, "name": "Essay 2", "duedate": 0},
                ],
            },
            {"id": 12, "shortname": "HIS101", "fullname": "History 1", "assignments": []},
        ],
        "warnings": [],
    }

    @pytest.mark.asyncio
    async def test_get_assignments_with_course_id(self):
        api = make_api(json_result(self.ASSIGNMENTS))

        assignments = await api.get_assignments_with_course_id([36, 12])

        assert [(a.id, a.cm_id, a.course_code) for a in assignments] == [(3, 1155, "THE201"), (4, 1156, "THE201")]
        assert assignments[0].due_date is not None
        assert assignments[1].due_date is None
        params = query(called_url(api.fetcher))
        assert params["wsfunction"] == "mod_assign_get_assignments"
        assert params["includenotenrolledcourses"] == "1"
        assert params["courseids[0]"] == "36"
        assert params["courseids[1]"] == "12"

    @pytest.mark.asyncio
    async def test_get_assignments_from_courses(self):
        api = make_api(json_result(self.ASSIGNMENTS))

        await api.get_assignments([Course(moodle_id=36, code="THE201")])

        assert query(called_url(api.fetcher))["courseids[0]"] == "36"

    @pytest.mark.asyncio
    async def test_get_assignment_submissions(self):
        api = make_api(json_result({
            "assignments": [{
                "assignmentid": 3,
                "submissions": [
                    {"id": 90, "userid": 101, "status": "submitted", "gradingstatus": "notgraded"},
                    {"id": 91, "userid": 102, "status": "new", "gradingstatus": "notgraded"},
                ],
            }],
            "warnings": [],
        }))

        submissions = await api.get_assignment_submissions(3)

        assert [(s.id, s.submission_id, s.user_id, s.status) for s in submissions] == [
            (3, 90, 101, "submitted"), (3, 91, 102, "new")
        ]
        assert query(called_url(api.fetcher))["assignmentids[0]"] == "3"

    @pytest.mark.asyncio
    async def test_get_assignment_grades(self):
        api = make_api(json_result({
            "assignments": [{
                "assignmentid": 3,
                "grades": [
                    {"id": 1, "userid": 101, "grader": 2, "attemptnumber": 0, "timemodified": 1541682000,
                     "grade": "72.50000"},
                    {"id": 2, "userid": 102, "grader": 2, "grade": "-1.00000"},
                    {"id": 3, "userid": 103, "grade": ""},
                ],
            }],
        }))

        grades = await api.get_assignment_grades(3)

        assert [g.grade for g in grades] == [72.5, None, None]
        assert grades[0].updated is not None
        assert grades[1].updated is None
        assert query(called_url(api.fetcher))["wsfunction"] == "mod_assign_get_grades"


class TestQuizzesAndForums:
    """Test cases for quiz and forum calls."""

    @pytest.mark.asyncio
    async def test_get_quizzes_with_course_id(self):
        api = make_api(json_result({
            "quizzes": [{
                "id": 8, "course": 36, "coursemodule": 1170, "name": "Week 1 quiz",
                "timeopen": 0, "timeclose": 1541682000, "grademethod": 1, "grade": 10,
                "preferredbehaviour": "deferredfeedback",
            }],
            "warnings": [],
        }))

        quizzes = await api.get_quizzes_with_course_id([36])

        quiz = quizzes[0]
        assert (quiz.id, quiz.cm_id, quiz.grade) == (8, 1170, 10.0)
        assert quiz.time_open is None
        assert quiz.time_close is not None
        assert query(called_url(api.fetcher))["wsfunction"] == "mod_quiz_get_quizzes_by_courses"

    @pytest.mark.asyncio
    async def test_get_forums_with_course_id(self):
        api = make_api(json_result([
            {"id": 5, "course": 36, "type": "news", "name": "Announcements", "cmid": 1150},
            {"id": 6, "course": 36, "type": "general", "name": "Discussion", "cmid": 1151,
             "assessed": 1, "scale": 100, "grade_forum": 0, "duedate": 0},
        ]))

        forums = await api.get_forums_with_course_id([36])

        assert [(f.id, f.type, f.cm_id) for f in forums] == [(5, "news", 1150), (6, "general", 1151)]
        assert forums[1].scale == 100

    @pytest.mark.asyncio
    async def test_get_forum_discussions(self):
        api = make_api(json_result({
            "discussions": [
                {"id": 40, "discussion": 20, "name": "Welcome", "userid": 2, "created": 1541682000,
                 "timemodified": 1541682000},
            ],
            "warnings": [],
        }))

        discussions = await api.get_forum_discussions(5)

        assert discussions[0].discussion_id == 20
        assert discussions[0].name == "Welcome"
        params = query(called_url(api.fetcher))
        assert params["wsfunction"] == "mod_forum_get_forum_discussions_paginated"
        assert params["forumid"] == "5"


class TestGradebook:
    """Test cases for get_course_gradebook."""

    @pytest.mark.asyncio
    async def test_get_course_gradebook(self):
        api = make_api(json_result({
            "usergrades": [{
                "courseid": 36,
                "userid": 101,
                "userfullname": "John Doe",
                "gradeitems": [
                    {"id": 11, "itemname": "Essay 1", "itemtype": "mod", "itemmodule": "assign",
                     "iteminstance": 3, "cmid": 1155, "graderaw": 72.5, "gradeformatted": "72.50",
                     "grademin": 0, "grademax": 100, "percentageformatted": "72.50 %"},
                    {"id": 12, "itemname": None, "itemtype": "course", "iteminstance": 36,
                     "graderaw": None, "gradeformatted": "-", "grademin": 0, "grademax": 100},
                ],
            }],
            "warnings": [],
        }))

        gradebook = await api.get_course_gradebook(36)

        user = gradebook[0]
        assert user.user_full_name == "John Doe"
        assert [i.id for i in user.items] == [11, 12]
        assert user.items[0].grade == 72.5
        assert user.items[0].cm_id == 1155
        assert user.items[1].grade is None
        assert user.items[1].item_type == "course"
        assert query(called_url(api.fetcher))["courseid"] == "36"
