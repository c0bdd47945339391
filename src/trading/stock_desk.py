"""Stock Desk — сессия страницы одного инструмента.

Связывает Trade Authorizer с внешними коллабораторами:
- securities feed и holdings feed (каждая emission полностью заменяет снапшот)
- TransactionSink.submit(record): commit во внешний store
- Router.navigate_to_default(): redirect, если активного тикера нет в снапшоте

Изменяемое состояние принадлежит store: desk лишь хранит последний
полученный снапшот. Итоги портфеля не кэшируются, а пересчитываются
из текущего снапшота при каждом обращении.

Проверки desk являются UI pre-check, store обязан повторно валидировать запрос
при commit.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from src.core.contracts.feeds import dump_transaction_record
from src.core.domain.holdings import HoldingsSnapshot, StockItem
from src.core.domain.security import Security
from src.core.domain.transaction import TransactionRecord
from src.ledger.aggregator import aggregate_totals
from src.trading.security_lookup import find_security, symbol_exists
from src.trading.trade_authorizer import TradeAuthorizer, TradeDecision

logger = logging.getLogger(__name__)


# =============================================================================
# COLLABORATORS
# =============================================================================


class TransactionSink(Protocol):
    """Commit interface внешнего store."""

    def submit(self, record: TransactionRecord) -> None: ...


class Router(Protocol):
    """Навигация внешнего router."""

    def navigate_to_default(self) -> None: ...


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class StockDeskConfig:
    """Конфигурация Stock Desk."""

    redirect_on_unknown_symbol: bool = True

    # Проверять TransactionRecord контрактом transaction_record.json перед submit
    validate_contracts: bool = True


# =============================================================================
# STOCK DESK
# =============================================================================


class StockDetailsDesk:
    """Страница торговли одним инструментом."""

    def __init__(
        self,
        sink: TransactionSink,
        router: Router,
        authorizer: TradeAuthorizer | None = None,
        config: StockDeskConfig | None = None,
    ):
        self.sink = sink
        self.router = router
        self.authorizer = authorizer or TradeAuthorizer()
        self.config = config or StockDeskConfig()

        self.ticker_symbol: str | None = None
        self.securities: list[Security] = []
        self.holdings = HoldingsSnapshot()
        self.show_buy_error = False

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    def set_ticker_symbol(self, ticker_symbol: str) -> None:
        """Активный тикер из route parameter."""
        self.ticker_symbol = ticker_symbol

    def on_securities(self, securities: Sequence[Security]) -> None:
        """Новый снапшот securities feed.

        Если активного тикера в снапшоте нет, router получает redirect.
        Пока route parameter не получен (ticker_symbol is None), redirect не делается.
        """
        self.securities = list(securities)
        if self.ticker_symbol is None or not self.config.redirect_on_unknown_symbol:
            return
        if not symbol_exists(self.securities, self.ticker_symbol):
            logger.info("Symbol %r not in securities snapshot, redirecting", self.ticker_symbol)
            self.router.navigate_to_default()

    def on_holdings(self, holdings: HoldingsSnapshot) -> None:
        """Новый снапшот holdings feed."""
        self.holdings = holdings

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def stock(self) -> Security | None:
        return find_security(self.securities, self.ticker_symbol)

    @property
    def current_holdings(self) -> list[StockItem]:
        return list(self.holdings.stock_items)

    @property
    def purchase_cost(self) -> float:
        return aggregate_totals(self.holdings).purchase_cost

    @property
    def quantity(self) -> int:
        return aggregate_totals(self.holdings).quantity

    @property
    def buy_error_message(self) -> str:
        return self.authorizer.config.buy_error_message

    # -------------------------------------------------------------------------
    # Trades
    # -------------------------------------------------------------------------

    def buy(self, raw_units: str | None) -> TradeDecision:
        """Покупка raw_units единиц активного инструмента."""
        decision = self.authorizer.buy(self.securities, self.ticker_symbol, raw_units)
        if decision.buy_error_visible is not None:
            self.show_buy_error = decision.buy_error_visible
        self._commit(decision)
        return decision

    def sell(self, raw_units: str | None, stock_item_id: str | None) -> TradeDecision:
        """Продажа raw_units единиц из лота stock_item_id."""
        decision = self.authorizer.sell(
            self.securities,
            self.holdings,
            self.ticker_symbol,
            raw_units,
            stock_item_id,
        )
        self._commit(decision)
        return decision

    def _commit(self, decision: TradeDecision) -> None:
        if not decision.accepted:
            return
        if self.config.validate_contracts:
            dump_transaction_record(decision.record)
        self.sink.submit(decision.record)
