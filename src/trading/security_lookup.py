"""Security Lookup — поиск инструмента в снапшоте securities feed.

Правило сопоставления:
- security.symbol == symbol.upper(), точное равенство
- Никакого частичного или fuzzy сопоставления
- Пустой symbol, symbol из пробелов и None никогда не совпадают

Данные не загружаются, поиск только по переданной коллекции.
"""

from typing import Iterable

from src.core.domain.security import Security


def canonical_symbol(symbol: str | None) -> str | None:
    """Канонический (верхний регистр) вид тикера.

    Returns:
        symbol.upper() или None для None / пустой строки / строки из пробелов
    """
    if not isinstance(symbol, str) or not symbol.strip():
        return None
    return symbol.upper()


def find_security(securities: Iterable[Security] | None, symbol: str | None) -> Security | None:
    """Поиск инструмента по тикеру без учёта регистра.

    Args:
        securities: снапшот securities feed (может быть None до первой загрузки)
        symbol: тикер в любом регистре

    Returns:
        Первый Security с совпадающим symbol или None
    """
    upper_symbol = canonical_symbol(symbol)
    if upper_symbol is None or securities is None:
        return None

    for security in securities:
        if security.symbol == upper_symbol:
            return security
    return None


def symbol_exists(securities: Iterable[Security] | None, symbol: str | None) -> bool:
    """Есть ли инструмент с данным тикером в снапшоте."""
    return find_security(securities, symbol) is not None
