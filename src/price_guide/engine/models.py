"""
Data models for the price guide engine.

Uses dataclasses for structured, type-safe data representation. Records come
in from stored JSON (snake_case guide fields, camelCase rule fields), so each
model can be built from a plain dict and turned back into one.
"""
import copy
import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from .coercion import to_number_or_nan

# Estimate modes
MODE_INTERNAL = 'internal'
MODE_RANGE = 'range'
MODE_STARTING_FROM = 'starting_from'
MODE_DISABLED = 'disabled'
ESTIMATE_MODES = (MODE_INTERNAL, MODE_RANGE, MODE_STARTING_FROM, MODE_DISABLED)

# Condition operators
OP_EQUALS = 'equals'
OP_CONTAINS = 'contains'
OP_GREATER_THAN = 'greater_than'
OP_LESS_THAN = 'less_than'
OP_BETWEEN = 'between'
OPERATORS = (OP_EQUALS, OP_CONTAINS, OP_GREATER_THAN, OP_LESS_THAN, OP_BETWEEN)

# Action types
ACTION_ADD = 'add'
ACTION_MULTIPLY = 'multiply'
ACTION_SET_BAND = 'set_band'
ACTION_TYPES = (ACTION_ADD, ACTION_MULTIPLY, ACTION_SET_BAND)

DEFAULT_CURRENCY = 'AUD'
DEFAULT_DISCLAIMER = (
    'This is an estimate only based on the information provided. '
    'Final price will be confirmed after inspection.'
)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (stored and camelCase spellings)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _optional_money(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected a money amount, got {value!r}")
    amount = float(value)
    if not math.isfinite(amount):
        raise ValueError(f"Money amounts must be finite, got {value!r}")
    return amount


@dataclass(frozen=True)
class NumericAdjustment:
    """A single-number action value (add, multiply, or a point set_band)."""
    amount: float

    def raw(self) -> Optional[float]:
        return None if math.isnan(self.amount) else self.amount


@dataclass(frozen=True)
class BandOverride:
    """A {min, max} action value that replaces the running range."""
    min: float
    max: float

    def raw(self) -> dict[str, Optional[float]]:
        return {
            'min': None if math.isnan(self.min) else self.min,
            'max': None if math.isnan(self.max) else self.max,
        }


ActionValue = Union[NumericAdjustment, BandOverride]


def parse_action_value(value: Any) -> ActionValue:
    """Build the tagged action value from its stored form."""
    if isinstance(value, (BandOverride, NumericAdjustment)):
        return value
    if value is None:
        # Missing amount: the applicator treats NaN as "do nothing"
        return NumericAdjustment(amount=float('nan'))
    if isinstance(value, dict) and 'min' in value and 'max' in value:
        return BandOverride(
            min=to_number_or_nan(value['min']),
            max=to_number_or_nan(value['max']),
        )
    return NumericAdjustment(amount=to_number_or_nan(value))


@dataclass(frozen=True)
class RuleCondition:
    """Which answer a rule looks at and how it compares."""
    question_id: str
    operator: str
    value: Any = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'RuleCondition':
        if not isinstance(data, dict):
            data = {}
        return cls(
            question_id=_pick(data, 'questionId', 'question_id', default='') or '',
            operator=data.get('operator') or '',
            value=data.get('value'),
        )

    def to_dict(self) -> dict:
        return {'questionId': self.question_id, 'operator': self.operator, 'value': self.value}


@dataclass(frozen=True)
class RuleAction:
    """What a matching rule does to the running range."""
    type: str
    value: ActionValue
    note: Optional[str] = None
    # Value as authored ("50", {"min": "200", ...}); None when built in code
    raw_value: Any = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'RuleAction':
        if not isinstance(data, dict):
            data = {}
        return cls(
            type=data.get('type') or '',
            value=parse_action_value(data.get('value')),
            note=data.get('note'),
            raw_value=copy.deepcopy(data.get('value')),
        )

    def authored_value(self) -> Any:
        """The action value as written by the business, for display."""
        if self.raw_value is not None:
            return copy.deepcopy(self.raw_value)
        return self.value.raw()

    def to_dict(self) -> dict:
        result = {'type': self.type, 'value': self.authored_value()}
        if self.note is not None:
            result['note'] = self.note
        return result


@dataclass(frozen=True)
class PriceRule:
    """A condition-action pair authored by the business."""
    id: str
    name: str
    enabled: bool
    condition: RuleCondition
    action: RuleAction
    order: float = 0

    @classmethod
    def from_dict(cls, data: Union[dict, 'PriceRule']) -> 'PriceRule':
        """Create a rule from its stored JSON form."""
        if isinstance(data, PriceRule):
            return data
        if not isinstance(data, dict):
            raise ValueError(f"Rule must be an object, got {type(data).__name__}")

        order = data.get('order', 0)
        if not isinstance(order, (int, float)) or isinstance(order, bool):
            order = 0

        return cls(
            id=str(data.get('id') or ''),
            name=data.get('name') or '',
            enabled=bool(data.get('enabled', False)),
            condition=RuleCondition.from_dict(data.get('condition')),
            action=RuleAction.from_dict(data.get('action')),
            order=order,
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'enabled': self.enabled,
            'condition': self.condition.to_dict(),
            'action': self.action.to_dict(),
            'order': self.order,
        }


@dataclass(frozen=True)
class PriceGuide:
    """
    Form-scoped pricing configuration.

    Treated as an immutable snapshot: rules are held in a tuple and the
    engine never writes back to it.
    """
    base_price: Optional[float] = None
    base_callout_fee: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    estimate_mode: str = MODE_INTERNAL
    show_to_customer: bool = False
    rules: tuple[PriceRule, ...] = ()
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    disclaimer: str = DEFAULT_DISCLAIMER
    internal_notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceGuide':
        """
        Create a guide from a stored record.

        Accepts the stored snake_case columns as well as camelCase keys.
        Absent fields take the defaults a freshly created guide gets.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Price guide must be an object, got {type(data).__name__}")

        rules = data.get('rules') or []
        if not isinstance(rules, (list, tuple)):
            raise ValueError("Price guide rules must be a list")

        estimate_mode = _pick(data, 'estimate_mode', 'estimateMode') or MODE_INTERNAL
        if estimate_mode not in ESTIMATE_MODES:
            raise ValueError(
                f"Invalid estimate_mode '{estimate_mode}', must be one of: {', '.join(ESTIMATE_MODES)}"
            )

        disclaimer = data.get('disclaimer')
        return cls(
            base_price=_optional_money(_pick(data, 'base_price', 'basePrice')),
            base_callout_fee=_optional_money(_pick(data, 'base_callout_fee', 'baseCalloutFee')),
            currency=data.get('currency') or DEFAULT_CURRENCY,
            estimate_mode=estimate_mode,
            show_to_customer=bool(_pick(data, 'show_to_customer', 'showToCustomer', default=False)),
            rules=tuple(PriceRule.from_dict(r) for r in rules),
            min_price=_optional_money(_pick(data, 'min_price', 'minPrice')),
            max_price=_optional_money(_pick(data, 'max_price', 'maxPrice')),
            disclaimer=DEFAULT_DISCLAIMER if disclaimer is None else disclaimer,
            internal_notes=_pick(data, 'internal_notes', 'internalNotes'),
        )


@dataclass(frozen=True)
class AppliedRule:
    """Audit record for a rule that fired."""
    rule_name: str
    adjustment: Union[float, dict[str, float]]
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {'ruleName': self.rule_name, 'adjustment': self.adjustment, 'note': self.note}


@dataclass(frozen=True)
class PriceEstimate:
    """Result of evaluating a price guide against one answer set."""
    min: float
    max: float
    applied_rules: tuple[AppliedRule, ...] = ()
    mode: str = MODE_INTERNAL
    disclaimer: str = ''
    show_to_customer: bool = False

    def to_dict(self) -> dict:
        """Convert to the camelCase record stored alongside a submission."""
        return {
            'min': self.min,
            'max': self.max,
            'appliedRules': [r.to_dict() for r in self.applied_rules],
            'mode': self.mode,
            'disclaimer': self.disclaimer,
            'showToCustomer': self.show_to_customer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceEstimate':
        if not isinstance(data, dict):
            raise ValueError(f"Estimate must be an object, got {type(data).__name__}")
        if data.get('min') is None or data.get('max') is None:
            raise ValueError("Estimate requires both 'min' and 'max'")
        applied = _pick(data, 'appliedRules', 'applied_rules', default=[]) or []
        return cls(
            min=float(data['min']),
            max=float(data['max']),
            applied_rules=tuple(
                AppliedRule(
                    rule_name=_pick(r, 'ruleName', 'rule_name', default=''),
                    adjustment=r.get('adjustment'),
                    note=r.get('note'),
                )
                for r in applied
            ),
            mode=data.get('mode') or MODE_INTERNAL,
            disclaimer=data.get('disclaimer') or '',
            show_to_customer=bool(_pick(data, 'showToCustomer', 'show_to_customer', default=False)),
        )
