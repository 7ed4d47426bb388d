"""
Shared theme and styling for the app.

Provides the light/dark palettes, category colors and Streamlit helpers.
"""

from typing import List

# Color palettes
LIGHT_COLORS = {
    'primary': '#0369a1',      # Deep water blue
    'secondary': '#64748b',    # Slate gray
    'background': '#f8fafc',
    'surface': '#ffffff',
    'text': '#1e293b',
    'muted': '#64748b',
    'grid': '#e2e8f0',
}

DARK_COLORS = {
    'primary': '#38bdf8',
    'secondary': '#94a3b8',
    'background': '#0f172a',
    'surface': '#1e293b',
    'text': '#f1f5f9',
    'muted': '#94a3b8',
    'grid': '#334155',
}

# Same in both themes so charts and map agree
CATEGORY_COLORS = {
    'safe': '#059669',         # Emerald
    'moderate': '#d97706',     # Amber
    'hazardous': '#dc2626',    # Red
}

CSS_TEMPLATE = """
<style>
    /* Hide Streamlit chrome */
    #MainMenu, footer, .stDeployButton {{
        visibility: hidden;
        display: none;
    }}

    .stApp {{
        background-color: {background};
        color: {text};
    }}

    .block-container {{
        padding: 1.5rem 2rem;
        max-width: 1200px;
    }}

    h1, h2, h3 {{
        color: {text};
        font-weight: 600;
    }}

    [data-testid="stMetricValue"] {{
        font-weight: 600;
    }}

</style>
"""


def palette(dark: bool = False) -> dict:
    return DARK_COLORS if dark else LIGHT_COLORS


def category_rgb(category: str) -> List[int]:
    """Category color as an [r, g, b] list for pydeck layers."""
    hex_color = CATEGORY_COLORS[category].lstrip('#')
    return [int(hex_color[i:i + 2], 16) for i in (0, 2, 4)]


def plotly_template(dark: bool = False) -> str:
    return "plotly_dark" if dark else "plotly_white"


def build_css(dark: bool = False) -> str:
    return CSS_TEMPLATE.format(**palette(dark))


def get_page_config(title: str):
    """Get consistent page configuration."""
    return {
        'page_title': f"{title} | HMPI Analyzer",
        'page_icon': "🚰",
        'layout': "wide",
    }


def inject_theme(dark: bool = False):
    """Inject shared CSS into the page."""
    import streamlit as st
    st.markdown(build_css(dark), unsafe_allow_html=True)
