"""Ledger — производные показатели портфеля по снапшоту holdings."""

from .aggregator import (
    HoldingsCheck,
    HoldingsShortfall,
    HoldingsTotals,
    aggregate_totals,
    check_units,
    has_sufficient_units,
    stock_items_for_symbol,
    totals_by_symbol,
)

__all__ = [
    "HoldingsCheck",
    "HoldingsShortfall",
    "HoldingsTotals",
    "aggregate_totals",
    "check_units",
    "has_sufficient_units",
    "stock_items_for_symbol",
    "totals_by_symbol",
]
