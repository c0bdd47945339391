"""
Domain models and value objects.

Contains fundamental domain entities like Security, StockItem, HoldingsSnapshot,
TransactionRecord.
"""

from src.core.domain.holdings import HoldingsSnapshot, StockItem
from src.core.domain.security import Quote, Security
from src.core.domain.transaction import TransactionKind, TransactionRecord

__all__ = [
    # Security model
    "Security",
    "Quote",
    # Holdings model
    "StockItem",
    "HoldingsSnapshot",
    # Transaction model
    "TransactionRecord",
    "TransactionKind",
]
