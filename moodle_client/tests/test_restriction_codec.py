"""
Unit tests for availability JSON decoding and encoding.
"""

import json

import pytest

from moodle_client.restrictions import (
    DateCondition, GroupCondition, RestrictionOperator, UnknownCondition,
    decode_restriction, encode_restriction
)
from shared.errors import RestrictionDecodeError


class TestDecodeRestriction:
    """Test cases for decode_restriction."""

    def test_decode_group_rule_with_showc(self):
        rule = decode_restriction('{"op":"&","c":[{"type":"group","id":191}],"showc":[true]}')

        assert rule.op == "&"
        assert rule.operator == RestrictionOperator.AND
        assert rule.conditions == [GroupCondition(group_id=191)]
        assert rule.show is None
        assert rule.show_per_condition == [True]

    def test_decode_group_rule_with_show(self):
        rule = decode_restriction({"op": "!&", "c": [{"type": "group", "id": 10}], "show": True})

        assert rule.operator == RestrictionOperator.NOT_AND
        assert rule.show is True
        assert rule.show_per_condition is None

    def test_decode_bytes(self):
        rule = decode_restriction(b'{"op":"|","c":[]}')

        assert rule.operator == RestrictionOperator.OR
        assert rule.conditions == []

    def test_decode_date_condition(self):
        rule = decode_restriction({
            "op": "&",
            "c": [{"type": "date", "d": ">=", "t": 1541682000}, {"type": "group", "id": 191}],
            "showc": [True, False],
        })

        assert rule.conditions[0] == DateCondition(operator=">=", timestamp=1541682000)
        assert rule.conditions[1] == GroupCondition(group_id=191)
        assert rule.group_ids() == {191}

    def test_decode_unknown_kinds_preserved(self):
        completion = {"type": "completion", "cm": 1150, "e": 1}
        nested = {"op": "|", "c": [{"type": "group", "id": 1}], "show": True}
        rule = decode_restriction({"op": "&", "c": [completion, nested], "showc": [True, True]})

        assert rule.conditions[0] == UnknownCondition(kind="completion", raw=completion)
        assert rule.conditions[1].kind is None
        assert rule.conditions[1].raw == nested

    def test_decode_unrecognized_operator_is_kept(self):
        rule = decode_restriction({"op": "^", "c": [{"type": "group", "id": 1}]})

        assert rule.op == "^"
        assert rule.operator == RestrictionOperator.UNRECOGNIZED

    def test_extra_fields_preserved(self):
        rule = decode_restriction({
            "op": "&",
            "c": [{"type": "group", "id": 5, "x": 1}, {"type": "date", "d": "<", "t": 10, "y": "z"}],
            "frob": 1,
        })

        assert rule.conditions == [GroupCondition(5), DateCondition("<", 10)]
        assert rule.to_dict() == {
            "op": "&",
            "c": [{"type": "group", "id": 5, "x": 1}, {"type": "date", "d": "<", "t": 10, "y": "z"}],
            "frob": 1,
        }

    def test_any_group_condition_kept_verbatim(self):
        """``{"type": "group"}`` without an id means membership of any group."""
        text = '{"op":"&","c":[{"type":"group"}],"showc":[true]}'

        rule = decode_restriction(text)

        assert rule.conditions == [UnknownCondition(kind="group", raw={"type": "group"})]
        assert rule.group_ids() == set()
        assert json.loads(encode_restriction(rule)) == json.loads(text)

    def test_any_group_condition_never_matches(self):
        required = decode_restriction('{"op":"&","c":[{"type":"group"}],"showc":[true]}')
        excluded = decode_restriction('{"op":"!|","c":[{"type":"group"}],"showc":[true]}')

        assert required.is_restricted([191, 192]) is True
        assert excluded.is_restricted([191, 192]) is False

    @pytest.mark.parametrize("payload", [
        "not json",
        '{"op":"&","c":[',
        "",
    ])
    def test_malformed_json(self, payload):
        with pytest.raises(RestrictionDecodeError) as exc_info:
            decode_restriction(payload)

        assert exc_info.value.code == "RESTRICTION_DECODE_ERROR"
        assert "not valid JSON" in exc_info.value.message

    @pytest.mark.parametrize("payload", ["[]", "42", '"&"', "null"])
    def test_non_object(self, payload):
        with pytest.raises(RestrictionDecodeError, match="must be a JSON object"):
            decode_restriction(payload)

    @pytest.mark.parametrize("payload", [
        {"c": []},
        {"op": "&"},
        {"op": 1, "c": []},
        {"op": "&", "c": "group"},
        {"op": "&", "c": [], "show": "yes"},
        {"op": "&", "c": [], "showc": [1]},
    ])
    def test_missing_or_mistyped_fields(self, payload):
        with pytest.raises(RestrictionDecodeError, match="Invalid restriction payload"):
            decode_restriction(payload)

    @pytest.mark.parametrize("condition", [
        {"type": "group", "id": None},
        {"type": "group", "id": "191"},
        {"type": "group", "id": 1.5},
    ])
    def test_invalid_group_condition(self, condition):
        with pytest.raises(RestrictionDecodeError) as exc_info:
            decode_restriction({"op": "&", "c": [{"type": "group", "id": 1}, condition]})

        assert exc_info.value.message == "Invalid group condition at position 1"
        assert exc_info.value.details["index"] == 1

    def test_invalid_date_condition(self):
        with pytest.raises(RestrictionDecodeError, match="Invalid date condition at position 0"):
            decode_restriction({"op": "&", "c": [{"type": "date", "d": ">="}]})


class TestEncodeRestriction:
    """Test cases for encode_restriction."""

    @pytest.mark.parametrize("text", [
        '{"op":"&","c":[{"type":"group","id":191}],"showc":[true]}',
        '{"op":"!|","c":[{"type":"group","id":10},{"type":"group","id":20}],"show":false}',
        '{"op":"&","c":[{"type":"date","d":">=","t":1541682000}],"showc":[false]}',
        '{"op":"|","c":[{"type":"completion","cm":1150,"e":1}],"show":true}',
    ])
    def test_encode_reproduces_input(self, text):
        assert json.loads(encode_restriction(decode_restriction(text))) == json.loads(text)

    def test_absent_visibility_is_not_invented(self):
        encoded = encode_restriction(decode_restriction('{"op":"&","c":[]}'))

        assert json.loads(encoded) == {"op": "&", "c": []}

    def test_compact_output(self):
        encoded = encode_restriction(decode_restriction({"op": "&", "c": [{"type": "group", "id": 7}]}))

        assert encoded == '{"op":"&","c":[{"type":"group","id":7}]}'
