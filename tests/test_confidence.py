import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from price_guide.engine.confidence import confidence
from price_guide.engine.models import PriceEstimate, AppliedRule


def estimate_with(applied_count):
    applied = tuple(AppliedRule(rule_name=f"r{i}", adjustment=1.0) for i in range(applied_count))
    return PriceEstimate(min=0, max=0, applied_rules=applied)


@pytest.mark.parametrize("applied, total, expected", [
    (7, 10, "high"),
    (10, 10, "high"),
    (12, 10, "high"),
    (6, 10, "medium"),
    (3, 10, "medium"),
    (2, 10, "low"),
    (0, 10, "low"),
    (1, 3, "medium"),
    (0, 0, "high"),
])
def test_confidence_levels(applied, total, expected):
    assert confidence(estimate_with(applied), total) == expected
