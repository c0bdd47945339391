"""
Tests for Feed Contracts

Контракты проверяются через feed loaders и dump_transaction_record:
- Meta-validation схем и единственный экземпляр валидатора на контракт
- Правильные emission превращаются в модели
- Нарушения required полей, типов и constraints отклоняют emission целиком
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    FeedContract,
    check_contract,
    contract_validator,
    dump_transaction_record,
    load_holdings,
    load_schema,
    load_securities,
)
from src.core.domain import TransactionKind, TransactionRecord


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_securities():
    """Валидная emission securities feed."""
    return [
        {"name": "AAPL", "quote": {"latestPrice": 100.0}},
        {"name": "MSFT", "quote": {"latestPrice": 90.0}},
        {"symbol": "IBM"},
    ]


@pytest.fixture
def valid_holdings():
    """Валидная emission holdings feed."""
    return {
        "stockItems": [
            {"id": "x", "symbol": "AAPL", "units": 20, "pricePerUnitOnPurchaseDate": 80.0},
            {"id": "y", "symbol": "MSFT", "units": 20, "pricePerUnitOnPurchaseDate": 60.0},
        ],
        "transactions": [
            {"id": "t1", "symbol": "AAPL", "units": 20, "pricePerUnit": 80.0, "kind": "buy"},
            {"id": "t2", "symbol": "MSFT", "units": 20, "pricePerUnit": 60.0, "kind": "buy"},
        ],
    }


@pytest.fixture
def valid_record():
    """Валидный TransactionRecord в JSON-представлении."""
    return {
        "id": None,
        "stockId": "x",
        "symbol": "AAPL",
        "units": 20,
        "pricePerUnit": 100.0,
        "kind": "sell",
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoading:
    """Загрузка, meta-validation и кэш валидаторов."""

    @pytest.mark.parametrize("contract", list(FeedContract))
    def test_schemas_load(self, contract):
        schema = load_schema(contract)
        assert schema["title"] == contract.value

    def test_schema_cached(self):
        assert load_schema(FeedContract.SECURITY) is load_schema(FeedContract.SECURITY)

    def test_validator_built_once(self):
        """Feed loaders переиспользуют один скомпилированный валидатор"""
        first = contract_validator(FeedContract.SECURITY)
        assert contract_validator(FeedContract.SECURITY) is first
        assert contract_validator("security") is first

    def test_unknown_contract(self):
        with pytest.raises(ValueError):
            load_schema("does_not_exist")


# =============================================================================
# SECURITY CONTRACT
# =============================================================================


class TestSecurityFeed:
    """Контракт элемента securities feed через load_securities."""

    def test_valid(self, valid_securities):
        securities = load_securities(valid_securities)
        assert [s.symbol for s in securities] == ["AAPL", "MSFT", "IBM"]
        assert securities[0].latest_price() == 100.0
        assert securities[2].quote is None

    def test_empty_emission(self):
        assert load_securities([]) == []

    def test_missing_symbol(self):
        with pytest.raises(ValidationError):
            load_securities([{"quote": {"latestPrice": 1.0}}])

    @pytest.mark.parametrize("quote", [{"latestPrice": 0}, {"latestPrice": -1.0}, {}])
    def test_bad_quote(self, quote):
        with pytest.raises(ValidationError):
            load_securities([{"name": "AAPL", "quote": quote}])

    def test_null_quote(self):
        securities = load_securities([{"name": "AAPL", "quote": None}])
        assert not securities[0].has_quote()

    def test_one_bad_entry_rejects_emission(self, valid_securities):
        valid_securities.append({"name": ""})
        with pytest.raises(ValidationError):
            load_securities(valid_securities)


# =============================================================================
# HOLDINGS CONTRACT
# =============================================================================


class TestHoldingsFeed:
    """Контракт holdings feed через load_holdings."""

    def test_valid(self, valid_holdings):
        snapshot = load_holdings(valid_holdings)
        assert [item.id for item in snapshot.stock_items] == ["x", "y"]
        assert snapshot.transactions[1].kind is TransactionKind.BUY

    def test_missing_stock_items(self):
        with pytest.raises(ValidationError):
            load_holdings({"transactions": []})

    def test_missing_item_id(self, valid_holdings):
        valid_holdings["stockItems"][0].pop("id")
        with pytest.raises(ValidationError):
            load_holdings(valid_holdings)

    @pytest.mark.parametrize("units", [2.5, -1, "20"])
    def test_bad_units(self, valid_holdings, units):
        valid_holdings["stockItems"][0]["units"] = units
        with pytest.raises(ValidationError):
            load_holdings(valid_holdings)

    def test_unknown_kind(self, valid_holdings):
        valid_holdings["transactions"][0]["kind"] = "short"
        with pytest.raises(ValidationError):
            load_holdings(valid_holdings)

    def test_violation_reports_path(self, valid_holdings):
        valid_holdings["stockItems"][1]["units"] = -1
        with pytest.raises(ValidationError) as exc_info:
            check_contract(FeedContract.HOLDINGS_SNAPSHOT, valid_holdings)
        assert list(exc_info.value.absolute_path) == ["stockItems", 1, "units"]


# =============================================================================
# TRANSACTION RECORD CONTRACT
# =============================================================================


class TestTransactionRecordContract:
    """Контракт submit."""

    def test_dump_transaction_record(self, valid_record):
        record = TransactionRecord(
            stock_id="x",
            symbol="AAPL",
            units=20,
            price_per_unit=100.0,
            kind=TransactionKind.SELL,
        )
        assert dump_transaction_record(record) == valid_record

    def test_dump_buy_record(self):
        record = TransactionRecord(symbol="MSFT", units=0, price_per_unit=90.0, kind=TransactionKind.BUY)
        data = dump_transaction_record(record)
        assert data["kind"] == "buy"
        assert data["stockId"] is None

    def test_lowercase_symbol(self, valid_record):
        valid_record["symbol"] = "aapl"
        with pytest.raises(ValidationError):
            check_contract(FeedContract.TRANSACTION_RECORD, valid_record)

    def test_additional_property(self, valid_record):
        valid_record["note"] = "x"
        with pytest.raises(ValidationError):
            check_contract(FeedContract.TRANSACTION_RECORD, valid_record)

    @pytest.mark.parametrize("field", ["symbol", "units", "pricePerUnit", "kind"])
    def test_required(self, valid_record, field):
        del valid_record[field]
        with pytest.raises(ValidationError):
            check_contract(FeedContract.TRANSACTION_RECORD, valid_record)
