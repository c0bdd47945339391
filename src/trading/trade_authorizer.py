"""Trade Authorizer — решение о покупке/продаже на странице инструмента.

Проверяет запрос на buy/sell и при положительном решении строит
TransactionRecord для внешнего store.

Buy:
1. Парсинг количества (Quantity Parser)
2. Поиск инструмента и котировки (Security Lookup)
3. TransactionRecord по quote.latest_price

Sell:
1. Парсинг количества (Quantity Parser)
2. Достаточность единиц в лоте stock_item_id (Holdings Ledger Aggregator)
3. TransactionRecord по ТЕКУЩЕЙ котировке активного тикера
   (не по цене покупки лота)

Внутреннего состояния нет, каждый вызов оценивается заново по переданным
снапшотам. Исключения не выбрасываются: отказ возвращается как TradeDecision с
accepted=False и RejectionKind.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from src.core.domain.holdings import HoldingsSnapshot
from src.core.domain.security import Security
from src.core.domain.transaction import TransactionKind, TransactionRecord
from src.core.math.quantity import QuantityRejection, validate_quantity
from src.ledger.aggregator import HoldingsShortfall, check_units
from src.trading.security_lookup import canonical_symbol, find_security

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_BUY_ERROR_MESSAGE = "Please enter a whole number, e.g. 10000."


# =============================================================================
# RESULT
# =============================================================================


class RejectionKind(str, Enum):
    """Причина отказа в сделке."""

    MALFORMED_QUANTITY = "malformed_quantity"
    UNKNOWN_SECURITY = "unknown_security"
    INSUFFICIENT_HOLDINGS = "insufficient_holdings"
    UNKNOWN_HOLDING_ID = "unknown_holding_id"


@dataclass(frozen=True)
class TradeDecision:
    """Результат оценки запроса на сделку."""

    accepted: bool
    rejection: RejectionKind | None
    block_reason: str

    # TransactionRecord для submit (только при accepted=True)
    record: TransactionRecord | None

    # Индикатор ошибки ввода на buy: None означает не менять текущее состояние
    buy_error_visible: bool | None

    # Детали
    details: str


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class TradeAuthorizerConfig:
    """Конфигурация Trade Authorizer."""

    # Явный "0" считается валидной (тривиальной) сделкой
    allow_zero_units: bool = True

    buy_error_message: str = DEFAULT_BUY_ERROR_MESSAGE


# =============================================================================
# TRADE AUTHORIZER
# =============================================================================


_SHORTFALL_TO_REJECTION = {
    HoldingsShortfall.EMPTY_HOLDINGS: RejectionKind.UNKNOWN_HOLDING_ID,
    HoldingsShortfall.UNKNOWN_HOLDING_ID: RejectionKind.UNKNOWN_HOLDING_ID,
    HoldingsShortfall.INVALID_TARGET: RejectionKind.MALFORMED_QUANTITY,
    HoldingsShortfall.INSUFFICIENT_UNITS: RejectionKind.INSUFFICIENT_HOLDINGS,
}


class TradeAuthorizer:
    """Проверка buy/sell запросов и построение TransactionRecord."""

    def __init__(self, config: TradeAuthorizerConfig | None = None):
        """Инициализация.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or TradeAuthorizerConfig()

    def buy(
        self,
        securities: Iterable[Security] | None,
        ticker_symbol: str | None,
        raw_units: str | None,
    ) -> TradeDecision:
        """Оценка запроса на покупку.

        Args:
            securities: текущий снапшот securities feed
            ticker_symbol: активный тикер страницы (route parameter)
            raw_units: сырой ввод количества

        Returns:
            TradeDecision; при accepted=True record.kind == BUY
        """
        parsed = validate_quantity(raw_units)
        if parsed.rejection is QuantityRejection.NOT_WHOLE_NUMBER:
            return self._rejected(
                RejectionKind.MALFORMED_QUANTITY,
                reason=f"not_whole_number: {raw_units!r}",
                buy_error_visible=None,
            )
        if parsed.rejection is QuantityRejection.NOT_FINITE:
            return self._rejected(
                RejectionKind.MALFORMED_QUANTITY,
                reason="not_finite: quantity is not representable as an integer",
                buy_error_visible=True,
            )

        units = parsed.units
        if units == 0 and not self.config.allow_zero_units:
            return self._rejected(
                RejectionKind.MALFORMED_QUANTITY,
                reason="zero_units: zero-unit trades are disabled",
                buy_error_visible=False,
            )

        security = find_security(securities, ticker_symbol)
        if security is None:
            return self._rejected(
                RejectionKind.UNKNOWN_SECURITY,
                reason=f"unknown_symbol: {ticker_symbol!r}",
                buy_error_visible=False,
            )
        if not security.has_quote():
            return self._rejected(
                RejectionKind.UNKNOWN_SECURITY,
                reason=f"no_quote: {security.symbol}",
                buy_error_visible=False,
            )

        record = TransactionRecord(
            symbol=canonical_symbol(ticker_symbol),
            units=units,
            price_per_unit=security.latest_price(),
            kind=TransactionKind.BUY,
        )
        logger.info("Buy accepted: %s x%d @ %.4f", record.symbol, record.units, record.price_per_unit)
        return TradeDecision(
            accepted=True,
            rejection=None,
            block_reason="",
            record=record,
            buy_error_visible=False,
            details=f"Buy {record.units} {record.symbol} @ {record.price_per_unit}",
        )

    def sell(
        self,
        securities: Iterable[Security] | None,
        holdings: HoldingsSnapshot | None,
        ticker_symbol: str | None,
        raw_units: str | None,
        stock_item_id: str | None,
    ) -> TradeDecision:
        """Оценка запроса на продажу из лота stock_item_id.

        Учитывается только лот с данным id; другие лоты того же тикера
        не суммируются.

        Args:
            securities: текущий снапшот securities feed
            holdings: текущий снапшот портфеля
            ticker_symbol: активный тикер страницы
            raw_units: сырой ввод количества
            stock_item_id: id лота

        Returns:
            TradeDecision; при accepted=True record.kind == SELL
        """
        parsed = validate_quantity(raw_units)
        if not parsed.accepted:
            return self._rejected(
                RejectionKind.MALFORMED_QUANTITY,
                reason=f"{parsed.rejection.value}: {raw_units!r}",
            )

        units = parsed.units
        if units == 0 and not self.config.allow_zero_units:
            return self._rejected(
                RejectionKind.MALFORMED_QUANTITY,
                reason="zero_units: zero-unit trades are disabled",
            )

        check = check_units(holdings, stock_item_id, units)
        if not check.sufficient:
            return self._rejected(
                _SHORTFALL_TO_REJECTION[check.shortfall],
                reason=(
                    f"{check.shortfall.value}: stock_item_id={stock_item_id!r} "
                    f"held={check.held_units} requested={units}"
                ),
            )

        security = find_security(securities, ticker_symbol)
        if security is None or not security.has_quote():
            return self._rejected(
                RejectionKind.UNKNOWN_SECURITY,
                reason=f"no_current_price: {ticker_symbol!r}",
            )

        record = TransactionRecord(
            stock_id=stock_item_id,
            symbol=canonical_symbol(ticker_symbol),
            units=units,
            price_per_unit=security.latest_price(),
            kind=TransactionKind.SELL,
        )
        logger.info(
            "Sell accepted: %s x%d @ %.4f from %s",
            record.symbol,
            record.units,
            record.price_per_unit,
            stock_item_id,
        )
        return TradeDecision(
            accepted=True,
            rejection=None,
            block_reason="",
            record=record,
            buy_error_visible=None,
            details=(
                f"Sell {record.units} {record.symbol} @ {record.price_per_unit} "
                f"(held {check.held_units})"
            ),
        )

    def _rejected(
        self,
        rejection: RejectionKind,
        reason: str,
        buy_error_visible: bool | None = None,
    ) -> TradeDecision:
        """Создание TradeDecision с accepted=False."""
        logger.debug("Trade rejected (%s): %s", rejection.value, reason)
        return TradeDecision(
            accepted=False,
            rejection=rejection,
            block_reason=reason,
            record=None,
            buy_error_visible=buy_error_visible,
            details=reason,
        )
