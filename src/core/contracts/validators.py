"""
Feed Contracts — JSON Schema контракты границы с внешним store

Каждый контракт соответствует одному файлу в contracts/schema/:
- FeedContract.SECURITY → security.json (элемент securities feed)
- FeedContract.HOLDINGS_SNAPSHOT → holdings_snapshot.json (holdings feed)
- FeedContract.TRANSACTION_RECORD → transaction_record.json (запрос submit)

Схема читается и проходит meta-validation один раз при первом обращении,
после чего скомпилированный Draft202012Validator переиспользуется всеми feed
loaders. Feeds приходят на каждую emission, поэтому пересборка валидатора
на каждый вызов недопустима.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)

# Корень проекта: src/core/contracts/validators.py → 4 уровня вверх
SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


class FeedContract(str, Enum):
    """Контракт на границе со store (значение = имя файла схемы)."""

    SECURITY = "security"
    HOLDINGS_SNAPSHOT = "holdings_snapshot"
    TRANSACTION_RECORD = "transaction_record"


# Кэши на процесс
_SCHEMAS: Dict[FeedContract, Dict[str, Any]] = {}
_VALIDATORS: Dict[FeedContract, Draft202012Validator] = {}


# =============================================================================
# SCHEMA LOADING
# =============================================================================


def load_schema(contract: FeedContract) -> Dict[str, Any]:
    """
    Загрузка и meta-validation схемы контракта.

    Raises:
        FileNotFoundError: Файла схемы нет в SCHEMA_DIR
        ValueError: Схема не проходит meta-validation Draft 2020-12
    """
    contract = FeedContract(contract)
    if contract in _SCHEMAS:
        return _SCHEMAS[contract]

    schema_path = SCHEMA_DIR / f"{contract.value}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e}") from e

    logger.debug("Loaded %s contract from %s", contract.value, schema_path)
    _SCHEMAS[contract] = schema
    return schema


def contract_validator(contract: FeedContract) -> Draft202012Validator:
    """Скомпилированный валидатор контракта (один экземпляр на процесс)."""
    contract = FeedContract(contract)
    validator = _VALIDATORS.get(contract)
    if validator is None:
        validator = Draft202012Validator(load_schema(contract))
        _VALIDATORS[contract] = validator
    return validator


# =============================================================================
# CHECKING
# =============================================================================


def check_contract(contract: FeedContract, data: Any) -> None:
    """
    Проверка данных контрактом.

    Raises:
        jsonschema.ValidationError: Первое нарушение контракта
    """
    try:
        contract_validator(contract).validate(data)
    except jsonschema.ValidationError as e:
        logger.warning(
            "%s contract violation at %s: %s",
            FeedContract(contract).value,
            "/".join(str(part) for part in e.absolute_path) or "<root>",
            e.message,
        )
        raise
