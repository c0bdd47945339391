"""
HoldingsSnapshot — Модель текущих позиций пользователя

Immutable Pydantic модели. Снапшот пересчитывается внешним ledger store
после каждого commit; core его только читает.

Stock item: отдельный лот покупки со своим id, количеством и ценой
на дату покупки.
"""

from pydantic import BaseModel, Field

from .transaction import TransactionRecord


# =============================================================================
# STOCK ITEM
# =============================================================================


class StockItem(BaseModel):
    """Лот в портфеле"""

    id: str = Field(..., min_length=1, description="Идентификатор лота")
    symbol: str = Field(..., min_length=1, description="Тикер")
    units: int = Field(..., ge=0, description="Количество в лоте")
    price_per_unit_on_purchase_date: float = Field(
        ...,
        ge=0,
        alias="pricePerUnitOnPurchaseDate",
        description="Цена за единицу на дату покупки",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def cost_basis(self) -> float:
        """
        Стоимость лота по цене покупки.

        Returns:
            units * price_per_unit_on_purchase_date
        """
        return self.units * self.price_per_unit_on_purchase_date


# =============================================================================
# HOLDINGS SNAPSHOT
# =============================================================================


class HoldingsSnapshot(BaseModel):
    """
    Снапшот портфеля.

    Порядок stock_items и transactions сохраняется как его отдал store.
    """

    stock_items: list[StockItem] = Field(
        default_factory=list, alias="stockItems", description="Лоты в портфеле"
    )
    transactions: list[TransactionRecord] = Field(
        default_factory=list, description="История транзакций"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def find_stock_items(self, stock_item_id: str) -> list[StockItem]:
        """Все лоты с данным id (в корректном снапшоте не более одного)"""
        return [item for item in self.stock_items if item.id == stock_item_id]
