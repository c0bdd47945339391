"""
Security — Модель торгуемого инструмента

Immutable Pydantic модель, представляющая снапшот инструмента из внешнего
securities feed. Core никогда не изменяет эти объекты, только читает.

Store исторически отдаёт инструмент как {name, quote}, поэтому поле symbol
принимает и ключ 'name'.
"""

from pydantic import AliasChoices, BaseModel, Field


# =============================================================================
# QUOTE
# =============================================================================


class Quote(BaseModel):
    """Текущая котировка инструмента"""

    latest_price: float = Field(
        ..., gt=0, alias="latestPrice", description="Последняя цена (quote currency)"
    )

    model_config = {"frozen": True, "populate_by_name": True}


# =============================================================================
# SECURITY MODEL
# =============================================================================


class Security(BaseModel):
    """
    Модель инструмента.

    Идентичность = symbol. Канонический вид symbol: верхний регистр,
    сравнение выполняется только через security_lookup.
    """

    symbol: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("symbol", "name"),
        description="Тикер (например, 'AAPL')",
    )
    quote: Quote | None = Field(None, description="Котировка, если уже загружена")

    model_config = {"frozen": True}

    def has_quote(self) -> bool:
        """Есть ли у инструмента котировка"""
        return self.quote is not None

    def latest_price(self) -> float | None:
        """
        Последняя цена инструмента.

        Returns:
            quote.latest_price или None если котировки нет
        """
        if self.quote is None:
            return None
        return self.quote.latest_price
