import altair as alt
import streamlit as st

from tariff_engine.demand import PROFILES
from tariff_engine.pipeline import run_pipeline
from tariff_engine.scenarios import PriceScenario
from tariff_optimizer.results_analysis import flexibility_metrics


SCENARIO_TABS = {
    PriceScenario.FIXED: ("Fixed Tariff 🕗", "Fixed time-of-use tariff with consistent pricing periods."),
    PriceScenario.WINDY: ("Windy Night 🌬️", "High wind generation creates cheap night-time electricity, perfect for EV charging."),
    PriceScenario.SUNNY: ("Sunny Day ☀️", "High solar generation creates cheap daytime electricity, an opportunity for daytime charging."),
    PriceScenario.VOLATILE: ("Grid Issues ⚠️", "Volatile and expensive prices due to grid constraints: charging flexibility becomes crucial."),
}


def format_pence(pence):
    return f"{'-' if pence < 0 else ''}£{abs(pence) / 100:.2f}"


def build_chart(hourly):
    chart_data = hourly.reset_index()

    price_cols = ["price"]
    if "reference_price" in chart_data.columns:
        price_cols.append("reference_price")
    prices = chart_data.melt(
        id_vars=["hour"],
        value_vars=price_cols,
        var_name="Tariff",
        value_name="Price"
    )

    price_chart = (
        alt.Chart(prices)
        .mark_line(interpolate="step-after", strokeWidth=3)
        .encode(
            x=alt.X("hour:O", title="Hour"),
            y=alt.Y("Price:Q", title="Price (p/kWh)"),
            color=alt.Color(
                "Tariff:N",
                legend=alt.Legend(
                    labelExpr="""
                    {
                      'price': 'Scenario price',
                      'reference_price': 'Fixed tariff'
                    }[datum.label]
                    """
                )
            ),
            strokeDash=alt.StrokeDash("Tariff:N", legend=None)
        )
    )

    demand_chart = (
        alt.Chart(chart_data)
        .mark_bar(opacity=0.5, color="#10b981")
        .encode(
            x=alt.X("hour:O", title="Hour"),
            y=alt.Y("demand:Q", title="Demand (kWh)"),
            tooltip=["hour", "price", "demand", "cost"]
        )
    )

    return (
        alt.layer(demand_chart, price_chart)
        .resolve_scale(y="independent")
        .properties(height=320)
    )


st.set_page_config(
    page_title="EV Charging Flexibility",
    page_icon="⚡",
    layout="wide"
)
st.title("EV Charging Flexibility Dashboard ⚡")
st.markdown(
    "How much a day of electricity costs depends on **price × demand** in every hour. "
    "Compare a fixed tariff with wholesale-linked prices, and see what happens when "
    "charging moves to the cheapest hours."
)

col_profile, col_toggle, col_seed = st.columns(3)
with col_profile:
    profile_name = st.selectbox("Demand profile", list(PROFILES), index=0)
with col_toggle:
    optimisation = st.toggle("Smart charging", value=False)
with col_seed:
    seed = st.number_input("Price seed", value=42, min_value=0, step=1)

profile = PROFILES[profile_name]
tabs = st.tabs([label for label, _ in SCENARIO_TABS.values()])

for tab, (scenario, (label, description)) in zip(tabs, SCENARIO_TABS.items()):
    with tab:
        st.caption(description)
        result = run_pipeline(scenario, optimisation=optimisation, seed=int(seed), profile=profile)
        summary = result.summary

        # --- KPIs ---
        kpi_col1, kpi_col2, kpi_col3 = st.columns(3)
        with kpi_col1:
            st.metric(label="💷 Daily cost", value=format_pence(summary.primary_total))
        with kpi_col2:
            st.metric(label="🕗 Fixed tariff would cost", value=format_pence(summary.reference_total))
        with kpi_col3:
            st.metric(label=f"Versus fixed tariff ({summary.outcome})", value=format_pence(summary.delta))

        st.altair_chart(build_chart(result.hourly), use_container_width=True)

        if optimisation and scenario.is_market_linked:
            manual = run_pipeline(scenario, optimisation=False, seed=int(seed), profile=profile)
            metrics = flexibility_metrics(manual, result)
            st.markdown(
                f"Smart charging shifts **{metrics['shiftable_load_kWh']} kWh** and saves "
                f"**£{metrics['daily_savings_gbp']:.2f}** a day "
                f"(about **£{metrics['annual_savings_gbp']:.0f}** a year)."
            )

        with st.expander("Hourly figures"):
            st.dataframe(result.hourly, use_container_width=True)

        # --- Download button ---
        csv = result.hourly.to_csv(index=True).encode("utf-8")
        st.download_button(
            label="Download hourly figures as CSV",
            data=csv,
            file_name=f"{scenario.value}_day.csv",
            mime="text/csv",
            key=f"download_{scenario.value}"
        )

st.caption("* Scenario: 28kWh EV battery charged at 11kW (3-phase, 230V, 16A)")
