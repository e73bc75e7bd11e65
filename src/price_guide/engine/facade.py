"""
PriceGuideEngine - one object exposing every price guide operation.

Holds no instance fields; every method delegates to a pure function, so a
single instance can be shared freely between request handlers.
"""
import logging
from typing import Any, Mapping, Optional

from ..display.formatter import for_customer, for_internal
from ..services.rules_service import validate_rules, generate_suggested_rules, ValidationResult
from .confidence import confidence
from .models import PriceGuide, PriceEstimate, DEFAULT_CURRENCY
from .pricing_engine import estimate, test_rules


class PriceGuideEngine:
    """Stateless entry point bundling the price guide operations."""

    def estimate(self, answers: Mapping[str, Any], guide: PriceGuide,
                 log: Optional[logging.Logger] = None) -> PriceEstimate:
        return estimate(answers, guide, log)

    def test_rules(self, rules, sample_answers, base_price: float = 0,
                   base_callout_fee: float = 0,
                   log: Optional[logging.Logger] = None) -> PriceEstimate:
        return test_rules(rules, sample_answers, base_price, base_callout_fee, log)

    def validate_rules(self, rules: Any) -> ValidationResult:
        return validate_rules(rules)

    def generate_suggested_rules(self, template_rules: Any, questions: list[dict]) -> list[dict]:
        return generate_suggested_rules(template_rules, questions)

    def confidence(self, result: PriceEstimate, total_questions: int) -> str:
        return confidence(result, total_questions)

    def for_customer(self, result: PriceEstimate, currency: str = DEFAULT_CURRENCY) -> str:
        return for_customer(result, currency)

    def for_internal(self, result: PriceEstimate, currency: str = DEFAULT_CURRENCY) -> str:
        return for_internal(result, currency)
