"""
Decoding and encoding of Moodle availability JSON.
"""

import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from shared.errors import RestrictionDecodeError
from .models import (
    DateCondition, GroupCondition, Restriction, RestrictionCondition, UnknownCondition
)


class RestrictionPayload(BaseModel):
    """Wire shape of a restriction tree node."""
    model_config = ConfigDict(extra="ignore")

    op: StrictStr
    c: List[Dict[str, Any]]
    show: Optional[StrictBool] = None
    showc: Optional[List[StrictBool]] = None


class GroupConditionPayload(BaseModel):
    """Wire shape of a group condition."""
    type: Literal["group"]
    id: StrictInt


class DateConditionPayload(BaseModel):
    """Wire shape of a date condition."""
    type: Literal["date"]
    d: StrictStr
    t: StrictInt


def _extra_keys(raw: Dict[str, Any], model) -> Dict[str, Any]:
    return {key: value for key, value in raw.items() if key not in model.model_fields}


def _decode_condition(raw: Dict[str, Any], index: int) -> RestrictionCondition:
    kind = raw.get("type")
    # A group condition without an id means "member of any group".
    if kind == "group" and "id" not in raw:
        return UnknownCondition(kind=kind, raw=dict(raw))
    try:
        if kind == "group":
            payload = GroupConditionPayload.model_validate(raw)
            return GroupCondition(group_id=payload.id, extra=_extra_keys(raw, GroupConditionPayload))
        if kind == "date":
            payload = DateConditionPayload.model_validate(raw)
            return DateCondition(operator=payload.d, timestamp=payload.t,
                                 extra=_extra_keys(raw, DateConditionPayload))
    except PydanticValidationError as e:
        raise RestrictionDecodeError(
            f"Invalid {kind} condition at position {index}",
            details={"index": index, "errors": e.errors(include_url=False)}
        ) from e
    return UnknownCondition(kind=kind if isinstance(kind, str) else None, raw=dict(raw))


def decode_restriction(payload: Union[str, bytes, Dict[str, Any]]) -> Restriction:
    """Decode an availability payload into a ``Restriction``.

    Raises ``RestrictionDecodeError`` for malformed JSON or unexpected
    field types; required fields are never defaulted.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise RestrictionDecodeError(
                f"Restriction is not valid JSON: {e.msg}",
                details={"position": e.pos}
            ) from e

    if not isinstance(payload, dict):
        raise RestrictionDecodeError(
            "Restriction must be a JSON object",
            details={"type": type(payload).__name__}
        )

    try:
        node = RestrictionPayload.model_validate(payload)
    except PydanticValidationError as e:
        raise RestrictionDecodeError(
            "Invalid restriction payload",
            details={"errors": e.errors(include_url=False)}
        ) from e

    return Restriction(
        op=node.op,
        conditions=[_decode_condition(raw, i) for i, raw in enumerate(node.c)],
        show=node.show,
        show_per_condition=node.showc,
        extra=_extra_keys(payload, RestrictionPayload),
    )


def encode_restriction(rule: Restriction) -> str:
    """Encode a ``Restriction`` back into compact availability JSON."""
    return json.dumps(rule.to_dict(), separators=(",", ":"))
