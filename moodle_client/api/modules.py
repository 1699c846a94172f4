"""
Course modules and their access restrictions.
"""

from typing import Iterable, Union

from moodle_client.restrictions import CourseGroup, decode_restriction
from .models import CourseModule, CoursePerson
from .wire import CourseModuleResponseWire


class CourseModulesMixin:
    """Web service calls about course modules."""

    async def get_course_module(self, cm_id: int) -> CourseModule:
        """Fetch a course module and decode its availability rule, if any."""
        result = await self._call_parsed(
            "core_course_get_course_module", CourseModuleResponseWire, [("cmid", cm_id)]
        )
        cm = result.cm
        availability = None
        if cm.availability and cm.availability.strip():
            availability = decode_restriction(cm.availability)

        return CourseModule(
            id=cm.id,
            course_id=cm.course,
            name=cm.name,
            mod_name=cm.modname,
            instance=cm.instance,
            section=cm.section,
            visible=bool(cm.visible),
            group_mode=cm.groupmode,
            grouping_id=cm.groupingid,
            availability=availability,
        )

    async def is_module_restricted(self, cm_id: int,
                                   learner: Union[CoursePerson, Iterable[Union[int, CourseGroup]]]) -> bool:
        """True when ``learner`` (an enrolled person or their groups) is blocked from the module."""
        module = await self.get_course_module(cm_id)
        groups = learner.groups if isinstance(learner, CoursePerson) else learner
        restricted = module.is_restricted_for(groups)
        self.logger.debug("Course module restriction evaluated", cm_id=cm_id, restricted=restricted)
        return restricted
