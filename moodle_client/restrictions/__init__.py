"""
Restrictions package.

Models Moodle's availability rules for course modules and decides
whether a learner is blocked from a module based on group membership.

Modules of interest:
- models: Restriction, condition variants, operators and CourseGroup.
- engine: The evaluation algorithm.
- codec: Lossless decoding/encoding of the availability JSON.

Evaluation is pure and never raises; decoding raises
RestrictionDecodeError on malformed input.
"""

from .models import (
    CourseGroup,
    DateCondition,
    GroupCondition,
    Restriction,
    RestrictionCondition,
    RestrictionOperator,
    UnknownCondition,
)
from .engine import is_restricted, learner_group_ids
from .codec import decode_restriction, encode_restriction

__all__ = [
    "CourseGroup",
    "DateCondition",
    "GroupCondition",
    "Restriction",
    "RestrictionCondition",
    "RestrictionOperator",
    "UnknownCondition",
    "is_restricted",
    "learner_group_ids",
    "decode_restriction",
    "encode_restriction",
]
