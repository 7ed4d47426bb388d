"""
HMPI Analyzer - Main Application

Streamlit front end for the Heavy Metal Pollution Index calculator.
All domain work goes through AnalysisSession; this file only renders.
"""

import logging

import streamlit as st
import pandas as pd
import plotly.express as px
import pydeck as pdk

from core.commands import AnalysisSession, CALCULATE_ALL
from core.errors import HMPIError
from core.export import export_filename
from core.models import MetalKey
from core import reference
from core.settings import UserSettings
from core.store import SampleStore
from core.summary import (
    FILTER_ALL, SORT_ORDERS, category_counts, filter_results, map_bounds,
    hmpi_range, metal_breakdown, results_frame, sort_results,
)
from core.theme import (
    CATEGORY_COLORS, category_rgb, get_page_config, inject_theme, plotly_template,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# ═══════════════════════════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(**get_page_config("Calculator"), initial_sidebar_state="expanded")

# One store per browser session
if "session" not in st.session_state:
    st.session_state.session = AnalysisSession(SampleStore())
if "settings" not in st.session_state:
    st.session_state.settings = UserSettings.load()

session: AnalysisSession = st.session_state.session
settings: UserSettings = st.session_state.settings

inject_theme(settings.is_dark)

# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════════════════════════
st.sidebar.title("🚰 HMPI Analyzer")

theme_label = "☀️ Light mode" if settings.is_dark else "🌙 Dark mode"
if st.sidebar.button(theme_label):
    settings.toggle_theme()
    settings.save()
    st.rerun()

st.sidebar.markdown("---")
st.sidebar.metric("Samples", len(session.store))
st.sidebar.metric("Results", len(session.store.results))

st.sidebar.markdown("---")
st.sidebar.subheader("Metal info")
info_metal = st.sidebar.selectbox(
    "Metal",
    options=list(MetalKey),
    format_func=lambda m: reference.info(m).name,
)
metal_info = reference.info(info_metal)
st.sidebar.write(f"**Limit:** {metal_info.limit}")
st.sidebar.write(f"**Health effects:** {metal_info.effects}")
st.sidebar.write(f"**Sources:** {metal_info.sources}")

# ═══════════════════════════════════════════════════════════════════════════
# MAIN PAGE
# ═══════════════════════════════════════════════════════════════════════════
st.title("🚰 Heavy Metal Pollution Index")
st.caption("Groundwater quality assessment from heavy metal concentrations (mg/L).")

tab_input, tab_results, tab_charts, tab_map = st.tabs(
    ["🧪 Samples", "📋 Results", "📊 Charts", "🗺️ Map"]
)

# ═══════════════════════════════════════════════════════════════════════════
# SAMPLES TAB
# ═══════════════════════════════════════════════════════════════════════════
with tab_input:
    col_form, col_upload = st.columns(2)

    with col_form:
        st.subheader("Manual entry")
        with st.form("manual_form", clear_on_submit=True):
            raw = {"name": st.text_input("Sample name")}
            c1, c2 = st.columns(2)
            raw["latitude"] = c1.text_input("Latitude (optional)")
            raw["longitude"] = c2.text_input("Longitude (optional)")
            metal_cols = st.columns(3)
            for i, metal in enumerate(MetalKey):
                raw[metal.value] = metal_cols[i % 3].text_input(
                    f"{reference.info(metal).name} ({metal.symbol})"
                )
            if st.form_submit_button("Add sample", type="primary"):
                try:
                    sample = session.on_sample_submitted(raw)
                    st.success(f"Added '{sample.name}'")
                except HMPIError as e:
                    st.error(str(e))

    with col_upload:
        st.subheader("Batch import")
        st.caption("CSV header: sampleName, latitude, longitude, cd, pb, cr, cu, zn, ni")
        uploaded = st.file_uploader("Upload CSV or JSON", type=["csv", "json"])
        if uploaded is not None and st.button("Import file"):
            try:
                batch = session.on_batch_file_loaded(uploaded.getvalue().decode("utf-8"), uploaded.name)
                st.success(batch.summary())
            except HMPIError as e:
                st.error(f"Error processing file: {e}")

    st.markdown("---")
    samples = session.store.samples
    if not samples:
        st.info("No samples added yet")
    else:
        a1, a2 = st.columns([1, 1])
        if a1.button("🧮 Calculate all", type="primary"):
            try:
                results = session.on_calculate_requested(CALCULATE_ALL)
                st.success(f"Calculated HMPI for {len(results)} samples")
            except HMPIError as e:
                st.error(str(e))
        if a2.button("🗑️ Clear all"):
            session.on_clear_requested()
            st.rerun()

        for sample in samples:
            with st.expander(sample.name):
                st.write(", ".join(f"{m.symbol}={v}" for m, v in sample.metals.items()))
                if sample.has_location:
                    st.write(f"📍 {sample.latitude:.4f}, {sample.longitude:.4f}")
                b1, b2 = st.columns(2)
                if b1.button("Calculate", key=f"calc_{sample.id}"):
                    try:
                        session.on_calculate_requested(sample.id)
                        st.rerun()
                    except HMPIError as e:
                        st.error(str(e))
                if b2.button("Remove", key=f"remove_{sample.id}"):
                    session.on_remove_requested(sample.id)
                    st.rerun()

# ═══════════════════════════════════════════════════════════════════════════
# RESULTS TAB
# ═══════════════════════════════════════════════════════════════════════════
results = session.store.results

with tab_results:
    if not results:
        st.info("No results yet. Calculate HMPI for your samples first.")
    else:
        counts = category_counts(results)
        m1, m2, m3 = st.columns(3)
        m1.metric("Safe", counts["safe"])
        m2.metric("Moderate", counts["moderate"])
        m3.metric("Hazardous", counts["hazardous"])

        f1, f2, f3 = st.columns([1, 1, 1])
        category = f1.selectbox("Category", [FILTER_ALL, "safe", "moderate", "hazardous"])
        order = f2.selectbox("Sort by", SORT_ORDERS)
        f3.download_button(
            "⬇️ Export CSV",
            session.export(),
            file_name=export_filename(),
            mime="text/csv",
        )

        shown = sort_results(filter_results(results, category), order)
        if not shown:
            st.info("No results in this category")
        else:
            df = results_frame(shown)
            df["hmpi"] = df["hmpi"].round(2)
            st.dataframe(
                df.drop(columns=["sample_id", "computed_at"]),
                width="stretch",
                hide_index=True,
            )

        st.subheader("Sample details")
        detail = st.selectbox("Sample", shown, format_func=lambda r: r.name)
        if detail is not None:
            st.write(f"**HMPI:** {detail.hmpi:.2f}  |  **Category:** {detail.category.value}"
                     f"  |  **Dominant metal:** {detail.dominant_label}")
            st.dataframe(pd.DataFrame([
                {
                    "Metal": row.metal.value.upper(),
                    "Concentration (mg/L)": f"{row.concentration:.4f}",
                    "WHO Limit": row.standard,
                    "Ratio": f"{row.ratio:.2f}x",
                    "Exceeds": "⚠️" if row.exceeds_limit else "",
                }
                for row in metal_breakdown(detail)
            ]), hide_index=True)

# ═══════════════════════════════════════════════════════════════════════════
# CHARTS TAB
# ═══════════════════════════════════════════════════════════════════════════
with tab_charts:
    if not results:
        st.info("No data to display")
    else:
        df = results_frame(results)
        template = plotly_template(settings.is_dark)
        chart = st.radio("Chart", ["Bar", "Pie", "Line"], horizontal=True)

        if chart == "Bar":
            fig = px.bar(df, x="name", y="hmpi", color="category",
                         color_discrete_map=CATEGORY_COLORS, template=template,
                         labels={"name": "Sample", "hmpi": "HMPI"})
            fig.add_hline(y=100, line_dash="dash")
            fig.add_hline(y=200, line_dash="dash")
            _, max_hmpi = hmpi_range(results)
            fig.update_yaxes(range=[0, max(max_hmpi, 200.0) * 1.1])
        elif chart == "Pie":
            counts = category_counts(results)
            pie_df = pd.DataFrame({"category": list(counts), "count": list(counts.values())})
            fig = px.pie(pie_df[pie_df["count"] > 0], names="category", values="count",
                         color="category", color_discrete_map=CATEGORY_COLORS, template=template)
        else:
            line_df = results_frame(sort_results(results, "name"))
            fig = px.line(line_df, x="name", y="hmpi", markers=True, template=template,
                          labels={"name": "Sample", "hmpi": "HMPI"})

        fig.update_layout(height=400, margin=dict(l=20, r=20, t=20, b=20))
        st.plotly_chart(fig, width="stretch")

# ═══════════════════════════════════════════════════════════════════════════
# MAP TAB
# ═══════════════════════════════════════════════════════════════════════════
with tab_map:
    bounds = map_bounds(results)
    if bounds is None:
        st.info("No samples with coordinates")
    else:
        df_map = results_frame([r for r in results if r.has_location])
        df_map["color"] = df_map["category"].apply(category_rgb)
        df_map["hmpi_str"] = df_map["hmpi"].apply(lambda x: f"{x:.2f}")

        layer = pdk.Layer(
            "ScatterplotLayer",
            df_map,
            get_position=["longitude", "latitude"],
            get_fill_color="color",
            get_radius=200,
            radius_min_pixels=6,
            radius_max_pixels=20,
            pickable=True,
        )
        view = pdk.ViewState(
            latitude=bounds.center_latitude,
            longitude=bounds.center_longitude,
            zoom=6,
        )
        st.pydeck_chart(
            pdk.Deck(
                layers=[layer],
                initial_view_state=view,
                tooltip={"text": "{name}\nHMPI: {hmpi_str}\nCategory: {category}"},
            ),
            height=480,
        )
        st.caption("Green=Safe | Amber=Moderate | Red=Hazardous | Hover for info")
