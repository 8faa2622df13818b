"""
Tickerboard Dashboard.

Main entry point for the Streamlit dashboard application.

Run with: streamlit run dashboard/app.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st

from config import Config
from dashboard.data_loader import MarketDataLoader, MarketSnapshot
from dashboard.views import overview
from tickerboard.data.price_client import PriceClient
from tickerboard.data.watchlist import Watchlist
from tickerboard.indicators import IndicatorSettings

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


# =============================================================================
# Page Configuration
# =============================================================================

st.set_page_config(
    page_title="Tickerboard",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)


# =============================================================================
# Data Access
# =============================================================================

@st.cache_resource
def get_data_loader():
    """Get cached data loader instance."""
    return MarketDataLoader()


@st.cache_data(ttl=300, show_spinner="Loading market data...")
def load_snapshot(symbol: str, period: str, interval: str) -> MarketSnapshot:
    """Load and cache a snapshot per symbol/period/interval."""
    return get_data_loader().load_snapshot(
        symbol, period=period, interval=interval, settings=IndicatorSettings()
    )


def get_watchlist() -> Watchlist:
    """Watchlist stored in the Streamlit session."""
    if "watchlist" not in st.session_state:
        st.session_state.watchlist = Watchlist()
    return st.session_state.watchlist


# =============================================================================
# Sidebar
# =============================================================================

def _add_ticker():
    """Callback for the add-ticker input."""
    watchlist = get_watchlist()
    entry = st.session_state.get("new_ticker", "")
    if watchlist.add_symbol(entry):
        st.session_state.selected_symbol = Watchlist.normalize(entry)
    st.session_state.new_ticker = ""


def render_sidebar():
    """
    Render sidebar with ticker list, add box and options.

    Returns:
        Tuple of (selected_symbol, period, interval).
    """
    st.sidebar.title("📈 Tickerboard")
    st.sidebar.markdown("---")

    watchlist = get_watchlist()

    st.sidebar.text_input(
        "Add ticker (e.g. SAP.DE)",
        key="new_ticker",
        on_change=_add_ticker
    )

    selected = watchlist.resolve_selection(st.session_state.get("selected_symbol"))
    symbols = watchlist.get_symbols()

    if symbols:
        selected_symbol = st.sidebar.radio(
            "Tickers",
            options=symbols,
            index=symbols.index(selected),
        )
        st.session_state.selected_symbol = selected_symbol
        if st.sidebar.button(f"Remove {selected_symbol}"):
            watchlist.remove_symbol(selected_symbol)
            st.session_state.selected_symbol = watchlist.resolve_selection(None)
            st.rerun()
    else:
        selected_symbol = None
        st.sidebar.warning("Watchlist is empty. Add a ticker.")

    st.sidebar.markdown("---")

    period = st.sidebar.selectbox(
        "Period",
        options=["1mo", "3mo", "6mo", "1y", "2y", "5y", "max"],
        index=3
    )
    interval = st.sidebar.selectbox(
        "Interval",
        options=["1d", "1wk", "1mo"],
        index=0
    )

    if st.sidebar.button("Reload"):
        load_snapshot.clear()

    for warning in Config.validate():
        st.sidebar.caption(warning)

    return selected_symbol, period, interval


# =============================================================================
# Main Application
# =============================================================================

def main():
    """Main application entry point."""
    selected_symbol, period, interval = render_sidebar()

    if selected_symbol is None:
        st.info("Add a ticker to get started.")
        return

    if period not in PriceClient.VALID_PERIODS or interval not in PriceClient.VALID_INTERVALS:
        st.error("Unsupported period or interval")
        return

    settings = IndicatorSettings()
    snapshot = load_snapshot(selected_symbol, period, interval)

    overview.render(snapshot, settings, Config.DISPLAY_CURRENCY)


if __name__ == "__main__":
    main()
