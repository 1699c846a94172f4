"""
Courses, enrolments and course groups.
"""

from typing import List

from moodle_client.restrictions import CourseGroup
from .models import Course, CoursePerson, CourseRole, CustomField, SiteInfo, from_timestamp
from .wire import CourseSearchWire, CourseWire, EnrolledUserWire, GroupWire, SiteInfoWire


def course_from_wire(course: CourseWire) -> Course:
    return Course(
        moodle_id=course.id,
        code=course.shortname,
        name=course.fullname,
        summary=course.summary or "",
        start=from_timestamp(course.startdate),
        end=from_timestamp(course.enddate),
    )


def group_from_wire(group: GroupWire) -> CourseGroup:
    return CourseGroup(id=group.id, name=group.name, shortname=group.shortname or "")


def course_person_from_wire(user: EnrolledUserWire) -> CoursePerson:
    return CoursePerson(
        id=user.id,
        username=user.username,
        first_name=user.firstname,
        last_name=user.lastname,
        email=user.email,
        last_access=user.lastaccess,
        first_access=user.firstaccess,
        groups=[group_from_wire(g) for g in user.groups],
        roles=[CourseRole(role_id=r.roleid, name=r.name or "", shortname=r.shortname) for r in user.roles],
        custom_fields=[CustomField(name=f.shortname, value=f.value or "", type=f.type) for f in user.customfields],
    )


class CoursesMixin:
    """Web service calls about courses and who is in them."""

    async def get_courses(self, search: str) -> List[Course]:
        """Search courses by text, sorted by course code."""
        result = await self._call_parsed(
            "core_course_search_courses", CourseSearchWire,
            [("criterianame", "search"), ("criteriavalue", search)]
        )
        courses = [course_from_wire(c) for c in result.courses]
        courses.sort(key=lambda c: c.code)
        return courses

    async def get_person_course_list(self, moodle_id: int) -> List[Course]:
        """Courses a person is enrolled in."""
        courses = await self._call_parsed(
            "core_enrol_get_users_courses", List[CourseWire], [("userid", moodle_id)]
        )
        return [course_from_wire(c) for c in courses]

    async def get_course_groups(self, course_id: int) -> List[CourseGroup]:
        """Id, name and shortname of each group in a course."""
        groups = await self._call_parsed(
            "core_group_get_course_groups", List[GroupWire], [("courseid", course_id)]
        )
        return [group_from_wire(g) for g in groups]

    async def get_course_roles(self, course_id: int) -> List[CoursePerson]:
        """Everyone enrolled in a course, with their roles and groups."""
        users = await self._call_parsed(
            "core_enrol_get_enrolled_users", List[EnrolledUserWire], [("courseid", course_id)]
        )
        return [course_person_from_wire(u) for u in users]

    async def set_role(self, moodle_id: int, role_id: int, course_id: int) -> None:
        """Enrol a person in a course with a role."""
        await self._call(
            "enrol_manual_enrol_users",
            [
                ("enrolments[0][roleid]", role_id),
                ("enrolments[0][userid]", moodle_id),
                ("enrolments[0][courseid]", course_id),
            ]
        )

    async def unset_role(self, moodle_id: int, role_id: int, course_id: int) -> None:
        """Unenrol a person from a course.

        Moodle ignores the role id here (MDL-51152), so this removes the
        whole manual enrolment.
        """
        await self._call(
            "enrol_manual_unenrol_users",
            [
                ("enrolments[0][roleid]", role_id),
                ("enrolments[0][userid]", moodle_id),
                ("enrolments[0][courseid]", course_id),
            ]
        )

    async def add_person_to_course_group(self, moodle_id: int, group_id: int) -> None:
        await self._call_acknowledged(
            "core_group_add_group_members",
            [("members[0][userid]", moodle_id), ("members[0][groupid]", group_id)]
        )

    async def remove_person_from_course_group(self, moodle_id: int, group_id: int) -> None:
        await self._call_acknowledged(
            "core_group_delete_group_members",
            [("members[0][userid]", moodle_id), ("members[0][groupid]", group_id)]
        )

    async def get_site_info(self) -> SiteInfo:
        """Site name and the account the token belongs to."""
        info = await self._call_parsed("core_webservice_get_site_info", SiteInfoWire)
        return SiteInfo(
            site_name=info.sitename,
            first_name=info.firstname,
            last_name=info.lastname,
            user_id=info.userid,
        )
