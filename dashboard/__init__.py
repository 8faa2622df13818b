"""
Dashboard package for Streamlit web application.

Contains:
- Main application entry point
- Page components
- Visualization components
"""

# Lazy imports to avoid dependency issues
__all__ = [
    'MarketDataLoader',
]

def __getattr__(name):
    if name == 'MarketDataLoader':
        from .data_loader import MarketDataLoader
        return MarketDataLoader
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
