import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from price_guide.engine.models import PriceRule
from price_guide.services.rules_service import validate_rules, generate_suggested_rules


def valid_rule(**overrides):
    rule = {
        "id": "r1",
        "name": "Emergency",
        "enabled": True,
        "order": 1,
        "condition": {"questionId": "q1", "operator": "equals", "value": True},
        "action": {"type": "add", "value": 50},
    }
    rule.update(overrides)
    return rule


def test_valid_rules_pass():
    result = validate_rules([valid_rule(), valid_rule(id="r2", order=2)])
    assert result.valid is True
    assert result.errors == []


def test_empty_list_is_valid():
    assert validate_rules([]).valid is True


@pytest.mark.parametrize("rules", [None, "rules", 42, {"id": "r1"}])
def test_non_list_rejected_with_single_error(rules):
    result = validate_rules(rules)
    assert result.valid is False
    assert result.errors == ["Rules must be an array"]


@pytest.mark.parametrize("overrides, message", [
    ({"id": None}, "Rule 1: Missing ID"),
    ({"id": ""}, "Rule 1: Missing ID"),
    ({"name": "   "}, "Rule 1: Name is required"),
    ({"name": None}, "Rule 1: Name is required"),
    ({"enabled": "true"}, "Rule 1: 'enabled' must be true or false"),
    ({"enabled": 1}, "Rule 1: 'enabled' must be true or false"),
    ({"condition": {"operator": "equals", "value": 1}}, "Rule 1: Condition must reference a question"),
    ({"condition": {"questionId": "q1", "value": 1}}, "Rule 1: Condition must have an operator"),
    ({"condition": {"questionId": "q1", "operator": "equals", "value": None}}, "Rule 1: Condition must have a value"),
    ({"condition": {"questionId": "q1", "operator": "equals"}}, "Rule 1: Condition must have a value"),
    ({"action": {"value": 5}}, "Rule 1: Action type is required"),
    ({"action": {"type": "add", "value": None}}, "Rule 1: Action value is required"),
    ({"order": "1"}, "Rule 1: Order must be a number"),
    ({"order": None}, "Rule 1: Order must be a number"),
    ({"order": True}, "Rule 1: Order must be a number"),
])
def test_field_errors(overrides, message):
    result = validate_rules([valid_rule(**overrides)])
    assert result.valid is False
    assert message in result.errors


@pytest.mark.parametrize("value", [False, 0, ""])
def test_falsy_condition_values_allowed(value):
    rule = valid_rule(condition={"questionId": "q1", "operator": "equals", "value": value})
    assert validate_rules([rule]).valid is True


def test_missing_condition_and_action_reported_without_raising():
    rule = valid_rule()
    del rule["condition"]
    del rule["action"]
    result = validate_rules([rule])

    assert result.errors == [
        "Rule 1: Condition must reference a question",
        "Rule 1: Condition must have an operator",
        "Rule 1: Condition must have a value",
        "Rule 1: Action type is required",
        "Rule 1: Action value is required",
    ]


def test_errors_use_one_based_position():
    result = validate_rules([valid_rule(), valid_rule(id="r2", name="")])
    assert result.errors == ["Rule 2: Name is required"]


def test_non_object_rule_reported():
    result = validate_rules([valid_rule(), "oops"])
    assert result.errors == ["Rule 2: Rule must be an object"]


def test_all_errors_collected():
    result = validate_rules([valid_rule(id="", enabled="yes"), valid_rule(id="r2", order="x")])
    assert len(result.errors) == 3


def test_duplicate_ids_single_message():
    rules = [valid_rule(id="a"), valid_rule(id="b"), valid_rule(id="a"), valid_rule(id="a"), valid_rule(id="b")]
    result = validate_rules(rules)

    assert result.valid is False
    assert result.errors == ["Duplicate rule IDs found: a, b"]


def test_duplicate_ids_compared_by_kind():
    rules = [valid_rule(id=1), valid_rule(id="1"), valid_rule(id=2), valid_rule(id=2.0)]
    result = validate_rules(rules)

    assert result.errors == ["Duplicate rule IDs found: 2"]


def test_accepts_rule_objects():
    rule = PriceRule.from_dict(valid_rule())
    assert validate_rules([rule]).valid is True


def test_snake_case_question_id_accepted():
    rule = valid_rule(condition={"question_id": "q1", "operator": "equals", "value": 1})
    assert validate_rules([rule]).valid is True


def test_to_dict():
    result = validate_rules("nope")
    assert result.to_dict() == {"valid": False, "errors": ["Rules must be an array"]}


# ============================================================================
# SUGGESTED RULES
# ============================================================================

def test_suggested_rules_drop_unknown_questions_and_renumber():
    templates = [
        valid_rule(id="t1", order=10, condition={"questionId": "urgent", "operator": "equals", "value": True}),
        valid_rule(id="t2", order=20, condition={"questionId": "pool_size", "operator": "equals", "value": 1}),
        valid_rule(id="t3", order=30, condition={"questionId": "rooms", "operator": "greater_than", "value": 3}),
    ]
    questions = [{"id": "urgent", "type": "yes_no"}, {"id": "rooms", "type": "number"}]

    suggested = generate_suggested_rules(templates, questions)

    assert [r["id"] for r in suggested] == ["t1", "t3"]
    assert [r["order"] for r in suggested] == [1, 2]
    # templates untouched
    assert [t["order"] for t in templates] == [10, 20, 30]


def test_suggested_rules_non_list_template():
    assert generate_suggested_rules(None, [{"id": "q1"}]) == []
    assert generate_suggested_rules({"rules": []}, [{"id": "q1"}]) == []


def test_suggested_rules_skip_rules_without_condition():
    templates = [{"id": "t1", "name": "No condition"}]
    assert generate_suggested_rules(templates, [{"id": "q1"}]) == []
