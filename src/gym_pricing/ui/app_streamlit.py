"""
Streamlit UI for the Gym Membership Pricing tool.

Features:
- Plan, add-on and member selection in the sidebar
- Live quote with discount badges
- Step-by-step resolution trace
- Catalog tables
"""
import streamlit as st
import pandas as pd
from datetime import datetime

from gym_pricing.engine import PricingEngine


st.set_page_config(
    page_title="Gym Membership Pricing",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine()


try:
    engine = get_engine()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()

currency = engine.settings.currency_symbol
plans = engine.list_plans()
features = engine.list_features()


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        .stMetric {
            background-color: #f0f2f6;
            padding: 10px;
            border-radius: 5px;
            border-left: 5px solid #ff4b4b;
        }
    </style>
""", unsafe_allow_html=True)

# ============================================================================
# SIDEBAR: Membership Selection
# ============================================================================
with st.sidebar:
    st.header("🏋️ Membership")

    with st.container(border=True):
        plan = st.selectbox(
            "Plan",
            options=plans,
            format_func=lambda p: f"{p.name} ({currency}{p.cost})",
        )
        selected_features = st.multiselect(
            "Add-on features",
            options=features,
            format_func=lambda f: f"{f.name} ({currency}{f.cost})" + (" ⭐" if f.is_premium else ""),
        )
        member_count = st.number_input("Members", min_value=1, value=1, step=1)


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Gym Membership Pricing")
st.caption(f"Pricing Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2 = st.tabs(["⚡ Quote", "📚 Catalog"])

with tab1:
    result = engine.calculate_total_cost(
        plan.id,
        [f.id for f in selected_features],
        int(member_count),
    )

    if not result.ok:
        st.error(result.error.message)
    else:
        col1, col2 = st.columns([1.2, 1.8], gap="large")

        with col1:
            st.metric("Total Due", f"{currency}{result.total}")
            st.metric("Per Person (before discounts)", f"{currency}{result.subtotal_per_person:.2f}")

            if result.premium_surcharge_applied:
                st.warning("Premium surcharge applied")
            if result.group_discount_applied:
                st.success("Group discount applied")
            if result.offer_discount:
                st.success(f"Special offer: -{currency}{result.offer_discount}")

        with col2:
            st.subheader("Resolution Details")
            for t in result.trace:
                if t.value:
                    st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
                else:
                    st.caption(f"**{t.step}**: {t.description}")

with tab2:
    st.subheader("Plans")
    st.dataframe(
        pd.DataFrame([{"ID": p.id, "Plan": p.name, "Cost": float(p.cost)} for p in plans]),
        hide_index=True,
        use_container_width=True,
    )

    st.subheader("Add-on Features")
    st.dataframe(
        pd.DataFrame([
            {"ID": f.id, "Feature": f.name, "Cost": float(f.cost), "Premium": f.is_premium}
            for f in features
        ]),
        hide_index=True,
        use_container_width=True,
    )
