"""
Watchlist management for the tickers shown on the dashboard.
"""

from typing import Iterator, Optional

from config import Config


class Watchlist:
    """Ordered, in-memory list of tracked symbols."""

    # Default symbols for a new watchlist
    DEFAULT_SYMBOLS = list(Config.DEFAULT_WATCHLIST)

    def __init__(self, symbols: Optional[list[str]] = None):
        """
        Initialize the watchlist.

        Args:
            symbols: Initial list of symbols. If None, uses default symbols.
        """
        self._symbols: list[str] = []
        for symbol in (self.DEFAULT_SYMBOLS if symbols is None else symbols):
            self.add_symbol(symbol)

    @staticmethod
    def normalize(symbol: str) -> str:
        """Upper-case and strip a user-entered symbol."""
        return (symbol or "").strip().upper()

    def add_symbol(self, symbol: str) -> bool:
        """
        Add a symbol to the end of the watchlist.

        Args:
            symbol: Stock symbol to add (e.g. "sap.de").

        Returns:
            True if symbol was added, False if blank or already present.
        """
        symbol = self.normalize(symbol)
        if not symbol or symbol in self._symbols:
            return False
        self._symbols.append(symbol)
        return True

    def remove_symbol(self, symbol: str) -> bool:
        """
        Remove a symbol from the watchlist.

        Args:
            symbol: Stock symbol to remove.

        Returns:
            True if symbol was removed, False if not present.
        """
        symbol = self.normalize(symbol)
        if symbol not in self._symbols:
            return False
        self._symbols.remove(symbol)
        return True

    def get_symbols(self) -> list[str]:
        """
        Get all symbols in the watchlist.

        Returns:
            Symbols in insertion order.
        """
        return list(self._symbols)

    def resolve_selection(self, selected: Optional[str]) -> Optional[str]:
        """
        Keep the current selection if still listed, else pick the first symbol.

        Args:
            selected: Currently selected symbol.

        Returns:
            Symbol to select, or None when the watchlist is empty.
        """
        if selected and self.normalize(selected) in self._symbols:
            return self.normalize(selected)
        return self._symbols[0] if self._symbols else None

    def contains(self, symbol: str) -> bool:
        return self.normalize(symbol) in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_symbols())

    def __contains__(self, symbol: str) -> bool:
        return self.contains(symbol)

    def to_dict(self) -> dict:
        """Convert watchlist to a dictionary."""
        return {
            "symbols": self.get_symbols(),
            "count": len(self._symbols)
        }

    def __repr__(self) -> str:
        return f"Watchlist({self.get_symbols()})"
