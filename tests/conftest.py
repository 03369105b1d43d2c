"""Shared test fixtures for salesprep."""

import pytest

from salesprep.config import EngineConfig
from salesprep.models.records import RawRecord


def make_raw(**overrides) -> RawRecord:
    """A well-formed raw record; override any column."""
    values = {
        "transaction_id": "TRX_001",
        "customer_id": "CUST_001",
        "customer_email": "john@example.com",
        "product_sku": "SKU-100",
        "quantity": "2",
        "amount": "100.00",
        "currency": "USD",
        "order_date": "2024-03-15",
        "ship_country": "USA",
        "payment_method": "Credit Card",
        "category": "Electronics",
    }
    values.update(overrides)
    return RawRecord(**values)


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def raw_batch() -> list[RawRecord]:
    """A small messy batch covering every normalizer and one duplicate pair."""
    return [
        make_raw(transaction_id="TRX_001", customer_email="john@gmail",
                 order_date="2024-03-15", amount="$1,234.56", currency=None),
        make_raw(transaction_id="TRX_001", customer_email="john@gmail.com",
                 order_date="2024-03-16", amount="$1,234.56", currency=None),
        make_raw(transaction_id="TRX_002", customer_id="CUST_002", customer_email="NULL",
                 amount="€890.00", currency="EUR", order_date="03/20/2024",
                 ship_country="UK", quantity="99999"),
        make_raw(transaction_id="TRX_003", customer_id="CUST_003", customer_email="amy@yahoo",
                 amount="(45.00)", order_date="25-04-2024", ship_country="Deutschland",
                 quantity="-2", category=None),
        make_raw(transaction_id="TRX_004", customer_id="CUST_001", customer_email="john@example.com",
                 amount="250", currency="GBP", order_date="2024/05/01",
                 ship_country="united states", quantity="", category="home"),
    ]


@pytest.fixture
def raw_factory():
    return make_raw
