"""
TransactionRecord — Модель запроса на покупку/продажу

Immutable Pydantic модель. Создаётся Trade Authorizer при положительном
решении и передаётся во внешний store через TransactionSink.submit().
Store присваивает id и публикует обновлённые снапшоты.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class TransactionKind(str, Enum):
    """Тип транзакции"""

    BUY = "buy"
    SELL = "sell"


# =============================================================================
# TRANSACTION RECORD
# =============================================================================


class TransactionRecord(BaseModel):
    """
    Модель транзакции.

    Инварианты:
    - units: строго целое неотрицательное число (float, строки и bool отклоняются)
    - symbol: уже в каноническом верхнем регистре
    - После создания не изменяется (frozen=True)
    """

    # Идентификация
    id: str | None = Field(None, description="Идентификатор, присваивается store при commit")
    stock_id: str | None = Field(
        None, alias="stockId", description="Идентификатор stock item (только для sell)"
    )
    symbol: str = Field(..., min_length=1, description="Тикер в верхнем регистре")

    # Параметры сделки
    units: int = Field(..., ge=0, strict=True, description="Количество (целое, >= 0)")
    price_per_unit: float = Field(
        ..., ge=0, alias="pricePerUnit", description="Цена за единицу"
    )
    kind: TransactionKind = Field(..., description="Тип транзакции (buy/sell)")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("symbol")
    @classmethod
    def validate_canonical_symbol(cls, v: str) -> str:
        """Symbol должен быть непустым и в верхнем регистре"""
        if not v.strip():
            raise ValueError("symbol must not be blank")
        if v != v.upper():
            raise ValueError(f"symbol {v!r} is not in canonical upper case")
        return v

    def notional(self) -> float:
        """
        Стоимость транзакции.

        Returns:
            units * price_per_unit
        """
        return self.units * self.price_per_unit

    def is_buy(self) -> bool:
        return self.kind is TransactionKind.BUY

    def is_sell(self) -> bool:
        return self.kind is TransactionKind.SELL
