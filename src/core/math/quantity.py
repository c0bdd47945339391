"""
Quantity — Парсинг и валидация количества для сделки

Превращает сырой текст из поля ввода в целое неотрицательное количество
или отклоняет его.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Принимаются только строки из одной или более ASCII цифр
   (без знака, точки, пробелов, экспоненты)
2. Результат всегда int, дробные значения никогда не принимаются
3. Функции чистые, без side effects
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

# Только ASCII цифры: \d без re.ASCII пропускает, например, арабские цифры
WHOLE_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
SINGLE_DIGIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]")


# =============================================================================
# RESULT
# =============================================================================


class QuantityRejection(str, Enum):
    """Причина отклонения количества"""

    NOT_WHOLE_NUMBER = "not_whole_number"  # Не строка из цифр (или None)
    NOT_FINITE = "not_finite"  # Строка из цифр, но не конечное число (вне диапазона float)


@dataclass(frozen=True)
class QuantityParseResult:
    """Результат парсинга количества."""

    units: int | None
    rejection: QuantityRejection | None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


# =============================================================================
# PARSING
# =============================================================================


def is_whole_number(raw: str | None) -> bool:
    """
    Проверка, что строка состоит только из ASCII цифр.

    Args:
        raw: Сырой ввод (может быть None)

    Returns:
        True если raw непустая строка из цифр

    Examples:
        >>> is_whole_number("10000")
        True
        >>> is_whole_number("10000.01")
        False
        >>> is_whole_number(" 1")
        False
    """
    if not isinstance(raw, str):
        return False
    return WHOLE_NUMBER_PATTERN.fullmatch(raw) is not None


def _is_finite_units(units: int) -> bool:
    try:
        return math.isfinite(float(units))
    except OverflowError:
        return False


def validate_quantity(raw: str | None) -> QuantityParseResult:
    """
    Парсинг количества с указанием причины отказа.

    Порядок проверок:
    1. Шаблон "одна или более цифр" (иначе NOT_WHOLE_NUMBER)
    2. Конверсия int(raw, 10); строка, превышающая лимит интерпретатора
       на длину int-строки, даёт NOT_FINITE
    3. Значение должно оставаться конечным при переводе во float
       (иначе NOT_FINITE): цены и итоги считаются во float

    Args:
        raw: Сырой ввод из поля формы

    Returns:
        QuantityParseResult
    """
    if not is_whole_number(raw):
        return QuantityParseResult(units=None, rejection=QuantityRejection.NOT_WHOLE_NUMBER)

    try:
        units = int(raw, 10)
    except ValueError:
        # sys.get_int_max_str_digits() превышен
        return QuantityParseResult(units=None, rejection=QuantityRejection.NOT_FINITE)

    if not _is_finite_units(units):
        return QuantityParseResult(units=None, rejection=QuantityRejection.NOT_FINITE)

    return QuantityParseResult(units=units, rejection=None)


def parse_quantity(raw: str | None) -> int | None:
    """
    Парсинг количества.

    Args:
        raw: Сырой ввод из поля формы

    Returns:
        Целое количество или None если ввод отклонён

    Examples:
        >>> parse_quantity("20")
        20
        >>> parse_quantity("NaN") is None
        True
    """
    return validate_quantity(raw).units


# =============================================================================
# INPUT SANITIZING
# =============================================================================


def strip_non_digit_keystroke(current_value: str, inserted: str | None) -> str:
    """
    Фильтр нажатий клавиш для поля количества.

    Если вставленные данные не являются ровно одной цифрой, последний символ
    значения поля удаляется. Событие удаления (inserted=None) значение не трогает.

    Args:
        current_value: Значение поля после ввода
        inserted: Данные, вставленные событием input (None при удалении)

    Returns:
        Значение поля после фильтрации
    """
    if inserted is None or SINGLE_DIGIT_PATTERN.fullmatch(inserted):
        return current_value
    return current_value[:-1]
