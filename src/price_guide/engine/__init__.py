"""Engine subpackage - rule evaluation and price estimation."""
from .pricing_engine import estimate, test_rules
from .models import PriceGuide, PriceRule, PriceEstimate, AppliedRule

__all__ = ['estimate', 'test_rules', 'PriceGuide', 'PriceRule', 'PriceEstimate', 'AppliedRule']
