"""Streamlit dashboard for stock quotes.

Search a ticker, view headline metrics, a price chart over a selectable
range and a metrics table that can be downloaded as CSV.
"""

import html

import streamlit as st
import plotly.graph_objects as go

from stock_dashboard.config import Settings, TIME_RANGES, DEFAULT_TIME_RANGE
from stock_dashboard.data import QuoteService
from stock_dashboard.ui.controller import DashboardController
from stock_dashboard.ui.view_model import ChartData, DashboardView, OverviewMetrics, table_frame


POSITIVE_COLOR = "#10b981"
NEGATIVE_COLOR = "#ef4444"
ACCENT_COLOR = "#007bff"


def get_controller() -> DashboardController:
    """One service and controller per browser session."""
    if "controller" not in st.session_state:
        settings = Settings()
        st.session_state["controller"] = DashboardController(QuoteService(settings), settings)
    return st.session_state["controller"]


def render_overview(overview: OverviewMetrics) -> None:
    """Render name, price and change metrics."""
    color = POSITIVE_COLOR if overview.is_up else NEGATIVE_COLOR

    st.markdown(
        f"""
        <div style="
            background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
            border: 1px solid #334155;
            border-left: 4px solid {color};
            border-radius: 8px;
            padding: 1.25rem 2rem;
            margin-bottom: 1rem;
        ">
            <div style="color: #94a3b8; font-size: 0.75rem; text-transform: uppercase; letter-spacing: 0.1em;">
                {html.escape(overview.name)}
            </div>
            <div style="display: flex; align-items: baseline; gap: 1rem; margin-top: 0.25rem;">
                <span style="font-size: 2.75rem; font-weight: 700; color: #f1f5f9; font-family: 'SF Mono', 'Consolas', monospace;">
                    {overview.price}
                </span>
                <span style="font-size: 1.25rem; color: {color}; font-family: 'SF Mono', 'Consolas', monospace;">
                    {overview.change} ({overview.change_percent})
                </span>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )

    col_vol, col_cap = st.columns(2)
    col_vol.metric("Volume", overview.volume)
    col_cap.metric("Market Cap", overview.market_cap)


def render_chart(chart: ChartData) -> None:
    """Render the price line chart."""
    if chart.is_empty:
        st.info("No price data for this range")
        return

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=chart.labels, y=chart.prices,
        mode="lines", line=dict(color=ACCENT_COLOR, width=2),
        fill="tozeroy", fillcolor="rgba(0, 123, 255, 0.1)",
        name=chart.title,
        hovertemplate="Price: $%{y:.2f}<extra></extra>",
    ))

    lo, hi = min(chart.prices), max(chart.prices)
    pad = (hi - lo) * 0.05 or hi * 0.01

    fig.update_layout(
        height=360, margin=dict(l=0, r=0, t=30, b=0),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        showlegend=True,
        legend=dict(font=dict(size=10, color="#ffffff"), bgcolor="rgba(0,0,0,0)"),
        xaxis=dict(type="category", showgrid=True, gridcolor="rgba(255,255,255,0.1)",
                   tickfont=dict(color="#b0b0b0", size=10), nticks=10),
        yaxis=dict(showgrid=True, gridcolor="rgba(255,255,255,0.1)",
                   tickfont=dict(color="#b0b0b0", size=10), tickprefix="$",
                   tickformat=".2f", range=[lo - pad, hi + pad]),
        hovermode="x unified",
    )

    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def render_table(controller: DashboardController, view: DashboardView) -> None:
    """Render the metrics table and CSV download."""
    st.dataframe(table_frame(view), hide_index=True, use_container_width=True)

    exported = controller.export()
    if exported is not None:
        filename, csv_text = exported
        st.download_button(
            "Export CSV",
            data=csv_text,
            file_name=filename,
            mime="text/csv",
        )


def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(
        page_title="Stock Dashboard",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #0f172a; }
            .stMarkdown, .stText, p, span, label { color: #e2e8f0; }
            h1, h2, h3, h4 { color: #f1f5f9 !important; font-weight: 600 !important; }
            #MainMenu, footer { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    st.markdown(
        """<div style="padding: 0.5rem 0 1rem 0; border-bottom: 1px solid #334155; margin-bottom: 1rem;">
            <h1 style="margin: 0; font-size: 1.5rem; color: #f1f5f9;">Stock Dashboard</h1>
            <div style="color: #64748b; font-size: 0.75rem; margin-top: 0.25rem;">Data: Yahoo Finance</div>
        </div>""",
        unsafe_allow_html=True,
    )

    controller = get_controller()

    with st.form("stock_form"):
        col_input, col_button = st.columns([4, 1])
        with col_input:
            symbol = st.text_input(
                "Stock symbol",
                value=controller.current_symbol,
                placeholder="e.g. AAPL",
                label_visibility="collapsed",
            )
        with col_button:
            submitted = st.form_submit_button("Search", use_container_width=True)

    if submitted:
        with st.spinner("Loading..."):
            controller.search(symbol)

    if controller.current_symbol:
        labels = list(TIME_RANGES.keys())
        selected = st.radio(
            "Time range",
            options=labels,
            index=labels.index(controller.requested_range) if controller.requested_range in labels
            else labels.index(DEFAULT_TIME_RANGE),
            horizontal=True,
            label_visibility="collapsed",
        )
        if selected != controller.requested_range:
            with st.spinner("Loading..."):
                controller.change_time_range(selected)

    message = controller.active_error()
    if message:
        st.error(message)

    view = controller.view()
    if view is None:
        st.info("Enter a stock symbol to get started.")
        return

    render_overview(view.overview)
    render_chart(view.chart)
    render_table(controller, view)


if __name__ == "__main__":
    main()
