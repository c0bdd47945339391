"""Holdings Ledger Aggregator — производные показатели портфеля.

Все значения вычисляются как fold по текущему HoldingsSnapshot.stock_items:
- purchase_cost = Σ(units * price_per_unit_on_purchase_date)
- quantity = Σ(units)

Кэшированных итогов нет: каждый вызов пересчитывает снапшот заново.
Суммирование через math.fsum, поэтому результат не зависит от порядка лотов.

Проверка достаточности лотов для продажи (check_units / has_sufficient_units)
смотрит только на лот с данным id, другие лоты того же тикера игнорируются.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from src.core.domain.holdings import HoldingsSnapshot, StockItem

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class HoldingsTotals:
    """Агрегированные показатели по набору лотов."""

    purchase_cost: float
    quantity: int


class HoldingsShortfall(str, Enum):
    """Причина, по которой лотов недостаточно для продажи."""

    EMPTY_HOLDINGS = "empty_holdings"
    INVALID_TARGET = "invalid_target"
    UNKNOWN_HOLDING_ID = "unknown_holding_id"
    INSUFFICIENT_UNITS = "insufficient_units"


@dataclass(frozen=True)
class HoldingsCheck:
    """Результат проверки лота перед продажей."""

    sufficient: bool
    shortfall: HoldingsShortfall | None
    held_units: int
    target_units: float | None


# =============================================================================
# SELL PRECONDITION
# =============================================================================


def _is_valid_target(target_units) -> bool:
    """Конечное неотрицательное число (bool и NaN не принимаются)."""
    if isinstance(target_units, bool) or not isinstance(target_units, (int, float)):
        return False
    if isinstance(target_units, float) and not math.isfinite(target_units):
        return False
    return target_units >= 0


def check_units(
    snapshot: HoldingsSnapshot | None,
    stock_item_id: str | None,
    target_units: float | None,
) -> HoldingsCheck:
    """Проверка, что в лоте stock_item_id есть не меньше target_units единиц.

    Порядок проверок:
    1. Пустой / отсутствующий снапшот
    2. Валидность target_units (конечное, >= 0)
    3. Наличие лота с данным id
    4. held_units >= target_units (равенство достаточно)

    Если store прислал несколько лотов с одним id, их units суммируются.

    Args:
        snapshot: текущий снапшот портфеля
        stock_item_id: id лота
        target_units: сколько единиц продать

    Returns:
        HoldingsCheck
    """
    if snapshot is None or not snapshot.stock_items:
        return HoldingsCheck(
            sufficient=False,
            shortfall=HoldingsShortfall.EMPTY_HOLDINGS,
            held_units=0,
            target_units=target_units,
        )

    if not _is_valid_target(target_units):
        return HoldingsCheck(
            sufficient=False,
            shortfall=HoldingsShortfall.INVALID_TARGET,
            held_units=0,
            target_units=None,
        )

    matching = snapshot.find_stock_items(stock_item_id) if stock_item_id is not None else []
    if not matching:
        return HoldingsCheck(
            sufficient=False,
            shortfall=HoldingsShortfall.UNKNOWN_HOLDING_ID,
            held_units=0,
            target_units=target_units,
        )

    held_units = sum(item.units for item in matching)
    if held_units < target_units:
        return HoldingsCheck(
            sufficient=False,
            shortfall=HoldingsShortfall.INSUFFICIENT_UNITS,
            held_units=held_units,
            target_units=target_units,
        )

    return HoldingsCheck(
        sufficient=True,
        shortfall=None,
        held_units=held_units,
        target_units=target_units,
    )


def has_sufficient_units(
    snapshot: HoldingsSnapshot | None,
    stock_item_id: str | None,
    target_units: float | None,
) -> bool:
    """Достаточно ли единиц в лоте для продажи.

    "Лот не найден" и "лот найден, но единиц мало" снаружи неразличимы: оба False.
    """
    return check_units(snapshot, stock_item_id, target_units).sufficient


# =============================================================================
# AGGREGATION
# =============================================================================


def _fold(stock_items: list[StockItem]) -> HoldingsTotals:
    return HoldingsTotals(
        purchase_cost=math.fsum(item.cost_basis() for item in stock_items),
        quantity=sum(item.units for item in stock_items),
    )


def aggregate_totals(snapshot: HoldingsSnapshot | None) -> HoldingsTotals:
    """Итоги по портфелю (для отображения, не для торговых проверок).

    Returns:
        HoldingsTotals; для пустого снапшота purchase_cost=0.0, quantity=0
    """
    if snapshot is None:
        return HoldingsTotals(purchase_cost=0.0, quantity=0)
    return _fold(snapshot.stock_items)


def stock_items_for_symbol(snapshot: HoldingsSnapshot | None, symbol: str | None) -> list[StockItem]:
    """Лоты одного тикера (сравнение без учёта регистра), в порядке снапшота."""
    if snapshot is None or not isinstance(symbol, str) or not symbol.strip():
        return []
    upper_symbol = symbol.upper()
    return [item for item in snapshot.stock_items if item.symbol.upper() == upper_symbol]


def totals_by_symbol(snapshot: HoldingsSnapshot | None) -> dict[str, HoldingsTotals]:
    """Итоги по каждому тикеру (ключ: тикер в верхнем регистре)."""
    if snapshot is None:
        return {}

    grouped: dict[str, list[StockItem]] = {}
    for item in snapshot.stock_items:
        grouped.setdefault(item.symbol.upper(), []).append(item)

    totals = {symbol: _fold(items) for symbol, items in grouped.items()}
    logger.debug("Aggregated %d stock items into %d symbols", len(snapshot.stock_items), len(totals))
    return totals
