"""
Restriction evaluation for course module availability.
"""

from typing import Iterable, Set, Union

from shared.logging import get_logger
from .models import (
    CourseGroup, GroupCondition, Restriction, RestrictionCondition, RestrictionOperator
)

logger = get_logger("moodle.restrictions")


def learner_group_ids(groups: Iterable[Union[int, CourseGroup]]) -> Set[int]:
    """Normalise group objects or raw ids into a set of ids."""
    return {g.id if isinstance(g, CourseGroup) else g for g in groups}


def condition_matches(condition: RestrictionCondition, group_ids: Set[int]) -> bool:
    """Only group conditions can match; date and unknown kinds never do."""
    if isinstance(condition, GroupCondition):
        return condition.group_id in group_ids
    return False


def is_restricted(rule: Restriction, learner_groups: Iterable[Union[int, CourseGroup]]) -> bool:
    """Return True when the learner is blocked by ``rule``.

    ``&``  restricted unless every condition matches.
    ``!&`` restricted when every condition matches. An empty rule never restricts.
    ``|``  restricted unless at least one condition matches. An empty rule always restricts.
    ``!|`` restricted when any condition matches.

    Unrecognized operators fail open.
    """
    group_ids = learner_group_ids(learner_groups)
    matches = [condition_matches(c, group_ids) for c in rule.conditions]
    operator = rule.operator

    if operator == RestrictionOperator.AND:
        return not all(matches)

    elif operator == RestrictionOperator.NOT_AND:
        return bool(matches) and all(matches)

    elif operator == RestrictionOperator.OR:
        return not any(matches)

    elif operator == RestrictionOperator.NOT_OR:
        return any(matches)

    else:
        logger.warning("Unrecognized restriction operator", operator=rule.op)
        return False
