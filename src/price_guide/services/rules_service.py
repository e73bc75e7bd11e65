"""
Rules Service - authoring-time checks and helpers for price guide rules.

Validation here is structural only (is each rule shaped correctly?). It never
runs during estimation and never checks that referenced questions exist.
"""
import copy
from dataclasses import dataclass, field
from typing import Any

from ..engine.coercion import is_number, strict_equals, to_comparable_string
from ..engine.models import PriceRule


@dataclass
class ValidationResult:
    """Result of rule validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {'valid': self.valid, 'errors': list(self.errors)}


def _is_missing(value: Any) -> bool:
    return value is None or value == ''


def _get(data: Any, *keys: str) -> Any:
    if not isinstance(data, dict):
        return None
    for key in keys:
        if key in data:
            return data[key]
    return None


def _contains(values: list, target: Any) -> bool:
    return any(strict_equals(v, target) for v in values)


def _validate_rule(rule: dict, position: int) -> list[str]:
    """Check one rule's shape. position is 1-based."""
    errors = []
    prefix = f"Rule {position}"

    if _is_missing(rule.get('id')):
        errors.append(f"{prefix}: Missing ID")

    name = rule.get('name')
    if not isinstance(name, str) or name.strip() == '':
        errors.append(f"{prefix}: Name is required")

    if not isinstance(rule.get('enabled'), bool):
        errors.append(f"{prefix}: 'enabled' must be true or false")

    condition = rule.get('condition')
    if _is_missing(_get(condition, 'questionId', 'question_id')):
        errors.append(f"{prefix}: Condition must reference a question")
    if _is_missing(_get(condition, 'operator')):
        errors.append(f"{prefix}: Condition must have an operator")
    # False, 0 and '' are all legitimate values to compare against
    if _get(condition, 'value') is None:
        errors.append(f"{prefix}: Condition must have a value")

    action = rule.get('action')
    if _is_missing(_get(action, 'type')):
        errors.append(f"{prefix}: Action type is required")
    if _get(action, 'value') is None:
        errors.append(f"{prefix}: Action value is required")

    if not is_number(rule.get('order')):
        errors.append(f"{prefix}: Order must be a number")

    return errors


def validate_rules(rules: Any) -> ValidationResult:
    """
    Validate a rule list before a guide is saved.

    Collects every problem rather than stopping at the first; the only
    short-circuit is when rules isn't a list at all. Never raises: whether
    errors block a save is the caller's call.
    """
    result = ValidationResult(valid=True)

    if not isinstance(rules, (list, tuple)):
        result.errors.append("Rules must be an array")
        result.valid = False
        return result

    ids = []
    for position, rule in enumerate(rules, start=1):
        if isinstance(rule, PriceRule):
            rule = rule.to_dict()
        if not isinstance(rule, dict):
            result.errors.append(f"Rule {position}: Rule must be an object")
            continue

        result.errors.extend(_validate_rule(rule, position))
        if not _is_missing(rule.get('id')):
            ids.append(rule['id'])

    # Duplicate IDs, reported once each; 1 and "1" are different IDs
    seen = []
    duplicates = []
    for rule_id in ids:
        if _contains(seen, rule_id) and not _contains(duplicates, rule_id):
            duplicates.append(rule_id)
        seen.append(rule_id)
    if duplicates:
        listed = ', '.join(to_comparable_string(d) for d in duplicates)
        result.errors.append(f"Duplicate rule IDs found: {listed}")

    result.valid = len(result.errors) == 0
    return result


def generate_suggested_rules(template_rules: Any, questions: list[dict]) -> list[dict]:
    """
    Turn an industry template's rules into a starting rule list for a form.

    Template rules pointing at questions the form doesn't have are dropped,
    and the survivors are renumbered 1..n in template order.
    """
    if not isinstance(template_rules, (list, tuple)):
        return []

    question_ids = {q.get('id') for q in questions if isinstance(q, dict)}

    suggested = []
    for rule in template_rules:
        question_id = _get(_get(rule, 'condition'), 'questionId', 'question_id')
        if question_id is None or question_id not in question_ids:
            continue
        rule = copy.deepcopy(rule)
        rule['order'] = len(suggested) + 1
        suggested.append(rule)

    return suggested
