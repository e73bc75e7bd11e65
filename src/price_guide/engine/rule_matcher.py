"""
Rule Matcher - Matches rule conditions against answers and applies rule actions.

Used by the estimation engine for every enabled rule of a price guide.
Nothing here raises on bad rule data: an unknown operator never matches and
an unknown action leaves the range alone, both reported as warnings.
"""
import logging
import math
from typing import Any, Optional

from .coercion import to_comparable_string, to_number_or_nan, strict_equals
from .models import (
    RuleCondition,
    RuleAction,
    NumericAdjustment,
    BandOverride,
    OP_EQUALS,
    OP_CONTAINS,
    OP_GREATER_THAN,
    OP_LESS_THAN,
    OP_BETWEEN,
    ACTION_ADD,
    ACTION_MULTIPLY,
    ACTION_SET_BAND,
)

logger = logging.getLogger(__name__)


def evaluate_condition(
    answer: Any,
    condition: RuleCondition,
    log: Optional[logging.Logger] = None
) -> bool:
    """
    Decide whether a single answer satisfies a rule condition.

    A missing answer never matches. Numeric comparisons against values that
    don't parse as numbers are False (NaN never compares true).
    """
    log = log or logger
    operator = condition.operator
    value = condition.value

    if answer is None:
        return False

    if operator == OP_EQUALS:
        if isinstance(answer, bool):
            return isinstance(value, bool) and answer == value
        return to_comparable_string(answer) == to_comparable_string(value)

    elif operator == OP_CONTAINS:
        if isinstance(answer, (list, tuple)):
            return any(strict_equals(option, value) for option in answer)
        return to_comparable_string(value).lower() in to_comparable_string(answer).lower()

    elif operator == OP_GREATER_THAN:
        return to_number_or_nan(answer) > to_number_or_nan(value)

    elif operator == OP_LESS_THAN:
        return to_number_or_nan(answer) < to_number_or_nan(value)

    elif operator == OP_BETWEEN:
        if isinstance(value, (list, tuple)) and len(value) == 2:
            number = to_number_or_nan(answer)
            return to_number_or_nan(value[0]) <= number <= to_number_or_nan(value[1])
        return False

    log.warning("Unknown operator: %s (question %s)", operator, condition.question_id)
    return False


def apply_action(
    current_min: float,
    current_max: float,
    action: RuleAction,
    log: Optional[logging.Logger] = None
) -> tuple[float, float]:
    """
    Apply a single rule action to the running range.

    Returns (new_min, new_max). set_band with a {min, max} value replaces the
    range outright, base price included.
    """
    log = log or logger
    value = action.value

    if action.type in (ACTION_ADD, ACTION_MULTIPLY):
        if not isinstance(value, NumericAdjustment):
            log.warning("Action %s needs a single number, got %r; ignored", action.type, value.raw())
            return current_min, current_max
        if not math.isfinite(value.amount):
            log.warning("Action %s has a non-numeric value; ignored", action.type)
            return current_min, current_max

        if action.type == ACTION_ADD:
            new_min, new_max = current_min + value.amount, current_max + value.amount
        else:
            new_min, new_max = current_min * value.amount, current_max * value.amount

        # Finite amounts can still overflow to inf, and inf * 0 is NaN
        if not (math.isfinite(new_min) and math.isfinite(new_max)):
            log.warning("Action %s gives a non-finite range; ignored", action.type)
            return current_min, current_max
        return new_min, new_max

    elif action.type == ACTION_SET_BAND:
        if isinstance(value, BandOverride):
            if not (math.isfinite(value.min) and math.isfinite(value.max)):
                log.warning("Action set_band has a non-numeric band; ignored")
                return current_min, current_max
            return value.min, value.max

        if not math.isfinite(value.amount):
            log.warning("Action set_band has a non-numeric value; ignored")
            return current_min, current_max
        # Single value collapses both legs
        return value.amount, value.amount

    log.warning("Unknown action type: %s", action.type)
    return current_min, current_max
