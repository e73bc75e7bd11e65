"""
Streamlit UI for previewing price guide rules.

Features:
- Guide settings in the sidebar (base price, callout fee, bounds, mode)
- Editable rule grid with live structural validation
- Sample answers run through the same estimate() live submissions use
- Customer / internal display text and coverage confidence
- Export rules to JSON or CSV
"""
import json
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from price_guide.config.settings import get_settings, configure_logging
from price_guide.engine.facade import PriceGuideEngine
from price_guide.engine.models import PriceGuide, PriceRule, ESTIMATE_MODES, OPERATORS, ACTION_TYPES
from price_guide.display.formatter import CURRENCY_SYMBOLS
from price_guide.services.rule_table import rules_to_frame, rules_from_frame


st.set_page_config(
    page_title="Price Guide Rule Tester",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    configure_logging(get_settings())
    return PriceGuideEngine()


engine = get_engine()
settings = get_settings()

SAMPLE_RULES = [
    {
        'id': 'rule-1', 'name': 'Emergency callout', 'enabled': True, 'order': 1,
        'condition': {'questionId': 'urgent', 'operator': 'equals', 'value': True},
        'action': {'type': 'add', 'value': 80, 'note': 'After-hours surcharge'},
    },
    {
        'id': 'rule-2', 'name': 'Large job', 'enabled': True, 'order': 2,
        'condition': {'questionId': 'rooms', 'operator': 'greater_than', 'value': 3},
        'action': {'type': 'multiply', 'value': 1.5},
    },
]
SAMPLE_ANSWERS = {'urgent': True, 'rooms': 4}

if 'rules_df' not in st.session_state:
    st.session_state.rules_df = rules_to_frame(SAMPLE_RULES)


# ============================================================================
# SIDEBAR: Guide Settings
# ============================================================================
with st.sidebar:
    st.header("⚙️ Guide Settings")

    with st.container(border=True):
        base_price = st.number_input("Base Price", value=100.0, step=10.0)
        callout_fee = st.number_input("Callout Fee", value=0.0, step=10.0)
        currencies = list(CURRENCY_SYMBOLS)
        currency = st.selectbox(
            "Currency", currencies,
            index=currencies.index(settings.default_currency) if settings.default_currency in currencies else 0
        )
        estimate_mode = st.selectbox("Estimate Mode", ESTIMATE_MODES, index=ESTIMATE_MODES.index('range'))
        show_to_customer = st.checkbox("Show to customer", value=True)

    with st.expander("📏 Price Bounds"):
        use_min = st.checkbox("Minimum price")
        min_price = st.number_input("Min", value=0.0, step=10.0, disabled=not use_min)
        use_max = st.checkbox("Maximum price")
        max_price = st.number_input("Max", value=1000.0, step=10.0, disabled=not use_max)

    disclaimer = st.text_area("Disclaimer", value=PriceGuide().disclaimer)
    total_questions = st.number_input("Questions on form", min_value=0, value=2, step=1)


st.title("Price Guide Rule Tester")
st.caption("Preview uses the same estimate() as live submissions")

tab1, tab2, tab3 = st.tabs(["🔧 Rules", "🧪 Test", "📤 Export"])


# ============================================================================
# TAB 1: RULE EDITOR
# ============================================================================
with tab1:
    edited_df = st.data_editor(
        st.session_state.rules_df,
        use_container_width=True,
        num_rows="dynamic",
        column_config={
            "enabled": st.column_config.CheckboxColumn("Enabled"),
            "order": st.column_config.NumberColumn("Order", step=1),
            "operator": st.column_config.SelectboxColumn("Operator", options=list(OPERATORS)),
            "action_type": st.column_config.SelectboxColumn("Action", options=list(ACTION_TYPES)),
            "condition_value": st.column_config.TextColumn("Condition Value", help="JSON, e.g. true, 3, [1, 5]"),
            "action_value": st.column_config.TextColumn("Action Value", help='e.g. 50, 1.5 or {"min": 200, "max": 300}'),
        },
        hide_index=True,
        key="rules_editor"
    )
    rules = rules_from_frame(edited_df)

    validation = engine.validate_rules(rules)
    if validation.valid:
        st.success(f"✅ {len(rules)} rules valid")
    else:
        for error in validation.errors:
            st.error(error)


# ============================================================================
# TAB 2: TEST AGAINST SAMPLE ANSWERS
# ============================================================================
with tab2:
    col1, col2 = st.columns([1, 1.4], gap="large")

    with col1:
        st.subheader("Sample Answers")
        answers_text = st.text_area("Answers (JSON)", value=json.dumps(SAMPLE_ANSWERS, indent=2), height=240)
        try:
            answers = json.loads(answers_text)
            if not isinstance(answers, dict):
                raise ValueError("Answers must be a JSON object")
        except ValueError as e:
            st.error(f"Invalid answers: {e}")
            answers = None

    with col2:
        st.subheader("Estimate")
        if answers is None:
            st.info("Fix the sample answers to run the rules.")
        elif not validation.valid:
            st.warning("Fix rule errors before testing.")
        else:
            guide = PriceGuide(
                base_price=base_price,
                base_callout_fee=callout_fee,
                currency=currency,
                estimate_mode=estimate_mode,
                show_to_customer=show_to_customer,
                rules=tuple(PriceRule.from_dict(r) for r in rules),
                min_price=min_price if use_min else None,
                max_price=max_price if use_max else None,
                disclaimer=disclaimer,
            )
            result = engine.estimate(answers, guide)

            with st.container(border=True):
                m1, m2, m3 = st.columns(3)
                m1.metric("Min", f"{result.min:,.2f}")
                m2.metric("Max", f"{result.max:,.2f}")
                m3.metric("Confidence", engine.confidence(result, int(total_questions)).title())

                st.divider()
                customer_text = engine.for_customer(result, currency)
                st.markdown(f"**Customer sees:** {customer_text}" if customer_text else "**Customer sees:** _nothing_")
                st.markdown(f"**Internal:** {engine.for_internal(result, currency)}")
                if customer_text:
                    st.caption(result.disclaimer)

            if result.applied_rules:
                st.dataframe(pd.DataFrame([{
                    'Rule': r.rule_name,
                    'Adjustment': json.dumps(r.adjustment),
                    'Note': r.note or '',
                } for r in result.applied_rules]), use_container_width=True, hide_index=True)
            else:
                st.info("No rules matched these answers.")


# ============================================================================
# TAB 3: EXPORT
# ============================================================================
with tab3:
    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "📥 Rules JSON",
            data=json.dumps(rules, indent=2),
            file_name="price_rules.json",
            mime="application/json",
            use_container_width=True
        )
    with c2:
        st.download_button(
            "📥 Rules CSV",
            data=edited_df.to_csv(index=False),
            file_name="price_rules.csv",
            mime="text/csv",
            use_container_width=True
        )
