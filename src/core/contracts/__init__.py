"""
Contract Validation Module

Валидация JSON контрактов на границе с внешним store.
"""

from .feeds import dump_transaction_record, load_holdings, load_securities
from .validators import SCHEMA_DIR, FeedContract, check_contract, contract_validator, load_schema

__all__ = [
    # Contracts
    "SCHEMA_DIR",
    "FeedContract",
    "load_schema",
    "contract_validator",
    "check_contract",
    # Feeds
    "load_securities",
    "load_holdings",
    "dump_transaction_record",
]
