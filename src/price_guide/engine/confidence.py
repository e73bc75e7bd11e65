"""
Confidence Estimator - coverage heuristic for an estimate.

The label says how much of the form actually drove the number: the share of
questions that had a matching rule. It is NOT a statistical confidence
interval and says nothing about how accurate the price is.
"""
from .models import PriceEstimate

HIGH = 'high'
MEDIUM = 'medium'
LOW = 'low'

HIGH_COVERAGE = 0.7
MEDIUM_COVERAGE = 0.3


def confidence(estimate: PriceEstimate, total_questions: int) -> str:
    """
    Label an estimate high, medium or low by rule coverage.

    A form with no questions is labelled high: every applied count covers it.
    """
    if total_questions <= 0:
        return HIGH

    ratio = len(estimate.applied_rules) / total_questions
    if ratio >= HIGH_COVERAGE:
        return HIGH
    if ratio >= MEDIUM_COVERAGE:
        return MEDIUM
    return LOW
