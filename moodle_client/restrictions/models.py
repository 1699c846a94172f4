"""
Restriction data models.

Moodle stores a course module's availability as a small JSON tree:

    {"op": "&", "c": [{"type": "group", "id": 191}], "showc": [true]}

``op`` combines the conditions in ``c``. Visibility of the restricted
item is carried either as one ``show`` flag or as ``showc``, a flag per
condition. Visibility does not take part in the restriction verdict.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set, Union


class RestrictionOperator(str, Enum):
    """Restriction operators."""
    AND = "&"
    NOT_AND = "!&"
    OR = "|"
    NOT_OR = "!|"
    UNRECOGNIZED = "?"

    @classmethod
    def from_code(cls, code: str) -> "RestrictionOperator":
        """Map a wire operator code to an operator, UNRECOGNIZED when unknown."""
        for operator in (cls.AND, cls.NOT_AND, cls.OR, cls.NOT_OR):
            if operator.value == code:
                return operator
        return cls.UNRECOGNIZED


@dataclass(frozen=True)
class GroupCondition:
    """Learner must (or must not) be a member of a course group.

    ``extra`` carries wire keys this client does not interpret.
    """
    group_id: int
    kind: str = field(default="group", init=False)
    extra: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({"type": self.kind, "id": self.group_id})
        return data


@dataclass(frozen=True)
class DateCondition:
    """Time based condition, e.g. not available until on/after a date.

    Decoded and preserved, but not evaluated.
    """
    operator: str
    timestamp: int
    kind: str = field(default="date", init=False)
    extra: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({"type": self.kind, "d": self.operator, "t": self.timestamp})
        return data


@dataclass(frozen=True)
class UnknownCondition:
    """Any condition kind this client does not interpret."""
    kind: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, hash=False, compare=True)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


RestrictionCondition = Union[GroupCondition, DateCondition, UnknownCondition]


@dataclass
class CourseGroup:
    """A group defined by a course."""
    id: int
    name: str = ""
    shortname: str = ""


@dataclass
class Restriction:
    """Access restriction rule attached to a course module."""
    op: str
    conditions: List[RestrictionCondition] = field(default_factory=list)
    show: Optional[bool] = None
    show_per_condition: Optional[List[bool]] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def operator(self) -> RestrictionOperator:
        return RestrictionOperator.from_code(self.op)

    def is_restricted(self, learner_groups: Iterable[Union[int, CourseGroup]]) -> bool:
        """True when a learner with ``learner_groups`` is blocked."""
        from .engine import is_restricted
        return is_restricted(self, learner_groups)

    def to_dict(self) -> Dict[str, Any]:
        """Render the upstream wire shape."""
        data: Dict[str, Any] = dict(self.extra)
        data["op"] = self.op
        data["c"] = [condition.to_dict() for condition in self.conditions]
        if self.show is not None:
            data["show"] = self.show
        if self.show_per_condition is not None:
            data["showc"] = list(self.show_per_condition)
        return data

    def group_ids(self) -> Set[int]:
        """Group ids referenced by the rule's group conditions."""
        return {c.group_id for c in self.conditions if isinstance(c, GroupCondition)}
