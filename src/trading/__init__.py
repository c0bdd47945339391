"""Trading — решения о покупке/продаже на странице инструмента.

- Security Lookup: поиск инструмента по тикеру без учёта регистра
- Trade Authorizer: валидация buy/sell и построение TransactionRecord
- Stock Desk: сессия страницы, связывающая feeds, commit и навигацию
"""

from .security_lookup import canonical_symbol, find_security, symbol_exists
from .stock_desk import Router, StockDeskConfig, StockDetailsDesk, TransactionSink
from .trade_authorizer import (
    RejectionKind,
    TradeAuthorizer,
    TradeAuthorizerConfig,
    TradeDecision,
)

__all__ = [
    "canonical_symbol",
    "find_security",
    "symbol_exists",
    "RejectionKind",
    "TradeAuthorizer",
    "TradeAuthorizerConfig",
    "TradeDecision",
    "Router",
    "StockDeskConfig",
    "StockDetailsDesk",
    "TransactionSink",
]
