"""
Rule Table - flattens rule lists into an editable table and back.

The preview UI edits rules in a spreadsheet-style grid (one row per rule).
Condition and action values can be numbers, booleans, lists or {min, max}
bands, so those cells hold JSON text; anything that isn't valid JSON is kept
as plain text.
"""
import json
from typing import Any, Optional, Union

import pandas as pd

from ..engine.models import PriceRule

TABLE_COLUMNS = [
    'id', 'name', 'enabled', 'order', 'question_id', 'operator',
    'condition_value', 'action_type', 'action_value', 'note'
]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, dict)):
        return False
    return bool(pd.isna(value))


def _to_cell(value: Any) -> str:
    """Render a rule value as cell text that parses back to the same value."""
    if value is None:
        return ''
    if isinstance(value, str):
        try:
            json.loads(value)
        except ValueError:
            return value
        # Text that looks like JSON ("5", "true") keeps its quotes
        return json.dumps(value)
    return json.dumps(value)


def parse_cell_value(value: Any) -> Any:
    """Parse a value cell: JSON when possible, otherwise the text itself."""
    if _is_blank(value):
        return None
    if not isinstance(value, str):
        return value.item() if hasattr(value, 'item') else value
    try:
        return json.loads(value)
    except ValueError:
        return value.strip()


def parse_bool(value: Any) -> Optional[bool]:
    """Parse a boolean cell; blank stays None so validation can flag it."""
    if _is_blank(value):
        return None
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def parse_order(value: Any) -> Union[int, float, None]:
    """Parse an order cell. Whole numbers come back as int."""
    if _is_blank(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


def parse_optional_str(value: Any) -> Optional[str]:
    """Parse optional string (blank = None)."""
    if _is_blank(value):
        return None
    return str(value).strip()


def rules_to_frame(rules: list[Union[dict, PriceRule]]) -> pd.DataFrame:
    """Flatten rules into one row per rule."""
    rows = []
    for rule in rules:
        if isinstance(rule, PriceRule):
            rule = rule.to_dict()
        condition = rule.get('condition') or {}
        action = rule.get('action') or {}
        rows.append({
            'id': rule.get('id') or '',
            'name': rule.get('name') or '',
            'enabled': bool(rule.get('enabled', False)),
            'order': rule.get('order'),
            'question_id': condition.get('questionId') or '',
            'operator': condition.get('operator') or '',
            'condition_value': _to_cell(condition.get('value')),
            'action_type': action.get('type') or '',
            'action_value': _to_cell(action.get('value')),
            'note': action.get('note') or '',
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def rules_from_frame(df: pd.DataFrame) -> list[dict]:
    """
    Rebuild rule dicts from an edited table.

    Fully blank rows (new rows the user never filled in) are skipped. Cells
    are parsed leniently; shape problems are left for validate_rules().
    """
    rules = []
    for _, row in df.iterrows():
        cells = {col: row.get(col) for col in TABLE_COLUMNS}
        # An unticked checkbox alone doesn't make a rule
        if all(_is_blank(v) for col, v in cells.items() if col != 'enabled'):
            continue

        action = {
            'type': parse_optional_str(cells['action_type']),
            'value': parse_cell_value(cells['action_value']),
        }
        note = parse_optional_str(cells['note'])
        if note:
            action['note'] = note

        rules.append({
            'id': parse_optional_str(cells['id']),
            'name': parse_optional_str(cells['name']) or '',
            'enabled': parse_bool(cells['enabled']),
            'order': parse_order(cells['order']),
            'condition': {
                'questionId': parse_optional_str(cells['question_id']),
                'operator': parse_optional_str(cells['operator']),
                'value': parse_cell_value(cells['condition_value']),
            },
            'action': action,
        })
    return rules
