#!/usr/bin/env python
"""
Preview a price guide against sample answers from the command line.

Usage:
    python scripts/preview_rules.py preview.json

preview.json holds {"guide": {...}, "answers": {...}, "total_questions": 5}.
Rules are validated first; the estimate is only run when they pass.
"""
import json
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from price_guide.engine.facade import PriceGuideEngine
from price_guide.engine.models import PriceGuide


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)

    preview_path = Path(sys.argv[1])
    if not preview_path.exists():
        print(f"ERROR: file not found: {preview_path}")
        sys.exit(1)

    with open(preview_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    engine = PriceGuideEngine()
    guide_data = data.get('guide', {})

    validation = engine.validate_rules(guide_data.get('rules', []))
    if not validation.valid:
        print("❌ Rule validation failed:")
        for error in validation.errors:
            print(f"  {error}")
        sys.exit(1)

    guide = PriceGuide.from_dict(guide_data)
    result = engine.estimate(data.get('answers', {}), guide)

    print("=" * 60)
    print("PRICE GUIDE PREVIEW")
    print("=" * 60)
    print(f"Internal:  {engine.for_internal(result, guide.currency)}")
    print(f"Customer:  {engine.for_customer(result, guide.currency) or '(hidden)'}")
    if data.get('total_questions') is not None:
        print(f"Confidence: {engine.confidence(result, int(data['total_questions']))}")
    print()
    print(f"Applied rules ({len(result.applied_rules)}):")
    for applied in result.applied_rules:
        note = f" - {applied.note}" if applied.note else ""
        print(f"  → {applied.rule_name}: {json.dumps(applied.adjustment)}{note}")


if __name__ == "__main__":
    main()
