"""
Pricing Engine - evaluates a price guide's rules against form answers.

The same estimate() function backs live submissions and the authoring-time
"test my rules" preview, so what a business previews is exactly what its
customers get. It is pure: no I/O, no state, inputs are never modified.

Resolution order:
1. Seed min = max = base price, plus the callout fee
2. Evaluate enabled rules in ascending 'order' (stable for ties)
3. Apply each matching rule's action and record it
4. Raise both legs to min_price, then cap both legs at max_price
5. Repair min > max by lifting max to min
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .models import (
    PriceGuide,
    PriceRule,
    PriceEstimate,
    AppliedRule,
    DEFAULT_CURRENCY,
    MODE_RANGE,
)
from .rule_matcher import evaluate_condition, apply_action

logger = logging.getLogger(__name__)

TEST_DISCLAIMER = 'Test estimate'


def estimate(
    answers: Mapping[str, Any],
    guide: PriceGuide,
    log: Optional[logging.Logger] = None
) -> PriceEstimate:
    """
    Calculate a price estimate from a set of answers.

    Args:
        answers: question id -> answer (text, number, bool, list or None)
        guide: point-in-time snapshot of the form's price guide
        log: where warnings about misconfigured rules go

    Returns:
        PriceEstimate with min <= max and the rules that fired, in order
    """
    log = log or logger

    current_min = guide.base_price or 0
    current_max = guide.base_price or 0
    callout = guide.base_callout_fee or 0
    current_min += callout
    current_max += callout

    applied_rules = []

    # sorted() is stable, so equal 'order' keeps authored sequence
    ordered = sorted((r for r in guide.rules if r.enabled), key=lambda r: r.order)

    for rule in ordered:
        answer = answers.get(rule.condition.question_id)
        if not evaluate_condition(answer, rule.condition, log):
            log.debug("Rule %s (%s) did not match", rule.id, rule.name)
            continue

        current_min, current_max = apply_action(current_min, current_max, rule.action, log)
        applied_rules.append(AppliedRule(
            rule_name=rule.name,
            adjustment=rule.action.authored_value(),
            note=rule.action.note,
        ))
        log.debug("Rule %s (%s) applied: %s -> %s..%s",
                  rule.id, rule.name, rule.action.type, current_min, current_max)

    if guide.min_price is not None:
        current_min = max(current_min, guide.min_price)
        current_max = max(current_max, guide.min_price)

    if guide.max_price is not None:
        current_min = min(current_min, guide.max_price)
        current_max = min(current_max, guide.max_price)

    # Mechanical repair for min_price > max_price; must stay last
    if current_min > current_max:
        current_max = current_min

    return PriceEstimate(
        min=current_min,
        max=current_max,
        applied_rules=tuple(applied_rules),
        mode=guide.estimate_mode,
        disclaimer=guide.disclaimer,
        show_to_customer=guide.show_to_customer,
    )


def test_rules(
    rules: Sequence[Union[PriceRule, dict]],
    sample_answers: Mapping[str, Any],
    base_price: float = 0,
    base_callout_fee: float = 0,
    log: Optional[logging.Logger] = None
) -> PriceEstimate:
    """
    Preview rules against sample answers before they are saved.

    Builds a throwaway guide (range mode, shown to customer, no bounds) and
    runs it through estimate() unchanged.
    """
    guide = PriceGuide(
        base_price=base_price,
        base_callout_fee=base_callout_fee,
        currency=DEFAULT_CURRENCY,
        estimate_mode=MODE_RANGE,
        show_to_customer=True,
        rules=tuple(PriceRule.from_dict(r) for r in rules),
        min_price=None,
        max_price=None,
        disclaimer=TEST_DISCLAIMER,
    )
    return estimate(sample_answers, guide, log)


# Keep pytest from collecting this when a test module imports it
test_rules.__test__ = False
