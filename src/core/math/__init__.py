"""
Core math modules

Парсинг и валидация количества для сделок.
"""

from src.core.math.quantity import (
    QuantityParseResult,
    QuantityRejection,
    is_whole_number,
    parse_quantity,
    strip_non_digit_keystroke,
    validate_quantity,
)

__all__ = [
    "QuantityParseResult",
    "QuantityRejection",
    "is_whole_number",
    "parse_quantity",
    "strip_non_digit_keystroke",
    "validate_quantity",
]
