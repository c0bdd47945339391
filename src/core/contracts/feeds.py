"""
Feed loaders — превращение сырых emission внешних feeds в модели

Каждая emission является полной заменой снапшота, не diff. Сначала проверяется
JSON Schema контракт, затем строятся Pydantic модели.
"""

import logging
from typing import Any, Dict, Iterable, List

from src.core.domain.holdings import HoldingsSnapshot
from src.core.domain.security import Security
from src.core.domain.transaction import TransactionRecord

from .validators import FeedContract, check_contract

logger = logging.getLogger(__name__)


def load_securities(payload: Iterable[Dict[str, Any]]) -> List[Security]:
    """
    Загрузка снапшота securities feed.

    Args:
        payload: Список объектов {name|symbol, quote: {latestPrice}}

    Returns:
        Список Security в порядке payload

    Raises:
        jsonschema.ValidationError: Нарушение контракта
        pydantic.ValidationError: Данные не проходят валидацию модели
    """
    securities = []
    for entry in payload:
        check_contract(FeedContract.SECURITY, entry)
        securities.append(Security.model_validate(entry))
    logger.debug("Loaded securities snapshot with %d entries", len(securities))
    return securities


def load_holdings(payload: Dict[str, Any]) -> HoldingsSnapshot:
    """
    Загрузка снапшота holdings feed.

    Args:
        payload: Объект {stockItems: [...], transactions: [...]}

    Returns:
        HoldingsSnapshot

    Raises:
        jsonschema.ValidationError: Нарушение контракта
        pydantic.ValidationError: Данные не проходят валидацию модели
    """
    check_contract(FeedContract.HOLDINGS_SNAPSHOT, payload)
    snapshot = HoldingsSnapshot.model_validate(payload)
    logger.debug(
        "Loaded holdings snapshot: %d stock items, %d transactions",
        len(snapshot.stock_items),
        len(snapshot.transactions),
    )
    return snapshot


def dump_transaction_record(record: TransactionRecord) -> Dict[str, Any]:
    """
    JSON-представление TransactionRecord для store, проверенное контрактом.

    Raises:
        jsonschema.ValidationError: Нарушение контракта
    """
    data = record.model_dump(mode="json", by_alias=True)
    check_contract(FeedContract.TRANSACTION_RECORD, data)
    return data
