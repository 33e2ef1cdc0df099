"""
Global pytest Configuration and Fixtures

Shared request data fixtures for the interpay test suite plus isolation of the
process-wide logging state (structlog configuration and stdlib root handlers)
between tests.

Fixture data mirrors the decoded JSON a calling application hands to the
parsers: PascalCase keys, decimal amounts and counters as strings.
"""

import logging
from typing import Any, Dict

import pytest
import structlog

from interpay.monitoring import logging as interpay_logging


# ============================================================================
# TEST ISOLATION
# ============================================================================

@pytest.fixture(autouse=True)
def reset_logging_state(monkeypatch):
    """Restore default structlog and stdlib logging after every test."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    monkeypatch.setattr(interpay_logging, '_logging_config', None)

    yield

    structlog.reset_defaults()
    # Handlers installed by configure_logging; pytest's own are subclasses
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)
    logging.getLogger(interpay_logging.ERRORS_LOGGER_NAME).setLevel(logging.NOTSET)


# ============================================================================
# REQUEST DATA FIXTURES
# ============================================================================

@pytest.fixture
def item_data() -> Dict[str, Any]:
    """Single fully populated order item."""
    return {
        'Sku': '123X',
        'ConsumerPrice': '123.45',
        'Quantity': '1',
        'Description': 'widget',
        'ImageUrl': 'http://example.com/widget.png',
    }


@pytest.fixture
def consumer_data() -> Dict[str, Any]:
    """Consumer with every contact and identity field set."""
    return {
        'Name': 'Joe Shopper',
        'Company': 'Shoppers Inc.',
        'Email': 'joe@example.com',
        'Phone': '+1 555 0100',
        'Address': '1 Main Street',
        'City': 'Springfield',
        'Region': 'IL',
        'PostalCode': '62701',
        'Country': 'US',
        'NationalIdentifier': 'X1234567',
        'BirthDate': '1980-04-12',
        'MerchantProfileId': 'profile-42',
        'IpAddress': '8.8.8.8',
    }


@pytest.fixture
def consignee_data() -> Dict[str, Any]:
    """Consignee without the optional Email and Phone."""
    return {
        'Name': 'Jane Receiver',
        'Address': '22 Harbour Road',
        'City': 'Halifax',
        'PostalCode': 'B3H 1A1',
        'Country': 'CA',
    }


@pytest.fixture
def card_data() -> Dict[str, Any]:
    """Well-formed payment card."""
    return {
        'Number': '4111111111111111',
        'Name': 'Joe Shopper',
        'Expiry': {'Year': '2030', 'Month': '5'},
        'VerificationCode': '013',
    }


@pytest.fixture
def order_data(item_data, consumer_data, consignee_data) -> Dict[str, Any]:
    """Complete order as received from the calling application."""
    return {
        'Currency': 'USD',
        'MerchantReference': '123e4567-e89b-12d3-a456-426614174000',
        'Items': [
            item_data,
            {'Sku': '456Y', 'ConsumerPrice': '5.00', 'Quantity': '2.5'},
        ],
        'Shipping': {
            'ConsumerPrice': '10.23',
            'ConsumerTaxes': '4.56',
            'ConsumerDuty': '3.90',
        },
        'Charges': [{'Name': 'gift wrap', 'ConsumerPrice': '1.00'}],
        'Discounts': [{'Name': 'loyalty', 'ConsumerPrice': '2.00'}],
        'Financing': {'Instalments': '3', 'ConsumerPrice': '10.00'},
        'Consumer': consumer_data,
        'Consignee': consignee_data,
    }
