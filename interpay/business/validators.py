"""
Composite Validators for Payment Request Entities

This module builds the nested entities of a payment request from untyped,
caller-supplied mappings. Each composite validator combines the field accessor,
the primitive validators and the null filter from interpay.utils.validators and
returns a freshly built dict, or raises at the first missing or invalid field.

Validators:
    get_items: Order line items (array, required unless nullable)
    get_shipping: Shipping charges (object, optional)
    get_ancillary: Named charges or discounts (array, optional)
    get_financing: Instalment financing terms (object, optional)
    get_consumer: Paying consumer contact and identity (object, required unless nullable)
    get_consignee: Delivery contact (object, optional)
    get_card: Payment card details, validated on a redaction-safe path

Input shapes (decoded JSON):
    'Items': [
        {'Sku': '123X', 'ConsumerPrice': '123.45', 'Quantity': '1',
         'Description': 'widget', 'ImageUrl': 'http://example.com/widget.png'},
    ]
    'Shipping': {'ConsumerPrice': '10.23', 'ConsumerTaxes': '4.56', 'ConsumerDuty': '3.90'}
    'Charges' / 'Discounts': [{'Name': 'gift wrap', 'ConsumerPrice': '1.00'}]
    'Financing': {'Instalments': '3', 'ConsumerPrice': '10.00'}
    card: {'Number': '4111111111111111', 'Name': 'Joe Shopper',
           'Expiry': {'Year': '2030', 'Month': '5'}, 'VerificationCode': '013'}
"""

import logging
from typing import List, Optional, cast

import structlog

from ..utils.exceptions import REDACTED, InvalidValueError
from ..utils.validators import (
    NULL_OK, NUMBER_REGEX, JsonObject, JsonValue, filter_nulls, get_country,
    get_decimal, get_number, get_string, optional, optional_date, optional_ip,
    optional_string, optional_url, required
)
from .models import (
    AncillaryCharge, AncillaryList, Card, Consignee, Consumer, Contact,
    FinancingInfo, Item, ItemList, ShippingInfo
)

logger = structlog.wrap_logger(
    logging.getLogger("interpay.business.validators"),
    wrapper_class=structlog.stdlib.BoundLogger
)

# Valid card expiry months, inclusive
EXPIRY_MONTH_MIN = 0
EXPIRY_MONTH_MAX = 12


def _get_array(container: JsonObject, name: str) -> Optional[List[JsonValue]]:
    """Read an optional array. Returns None when the key is absent or null."""
    values = optional(container, name)
    if values is None:
        return None
    if not isinstance(values, list):
        raise InvalidValueError(values, f'array for {name}')
    return values


def _check_entry(values: List[JsonValue], entry: JsonValue, name: str) -> JsonObject:
    """Each array entry must be a non-null object; checked as it is reached."""
    if entry is None:
        raise InvalidValueError(values, f'array value for {name}')
    if not isinstance(entry, dict):
        raise InvalidValueError(values, f'array for {name} entry')
    return entry


def get_items(container: JsonObject, nullable: bool = False) -> Optional[ItemList]:
    """
    Get all of the order items, in input order.

    Args:
        container: Request mapping holding the 'Items' key
        nullable: Return None instead of failing when 'Items' is absent or null

    Returns:
        List of items with unset optional fields omitted. An empty array is
        returned as an empty list.

    Raises:
        InvalidValueError: If 'Items' is missing (and not nullable), is not an
            array, or holds a non-object entry or an invalid field
        MissingFieldError: If an item lacks Sku, ConsumerPrice or Quantity
    """
    values = _get_array(container, 'Items')
    if values is None:
        if nullable:
            return None
        raise InvalidValueError(None, 'array for Items')

    items: ItemList = []
    for value in values:
        entry = _check_entry(values, value, 'Items')
        items.append(cast(Item, filter_nulls({
            'Sku': get_string(entry, 'Sku'),
            'ConsumerPrice': get_decimal(entry, 'ConsumerPrice'),
            'Quantity': get_decimal(entry, 'Quantity'),
            'Description': optional_string(entry, 'Description'),
            'ImageUrl': optional_url(entry, 'ImageUrl'),
        })))

    logger.debug("Items parsed", item_count=len(items))
    return items


def get_shipping(container: JsonObject) -> Optional[ShippingInfo]:
    """
    Get the shipping charges, if any. When present, all three amounts are
    required decimals.
    """
    shipping = optional(container, 'Shipping')
    if shipping is None:
        return None
    if not isinstance(shipping, dict):
        raise InvalidValueError(shipping, 'object for Shipping')

    return cast(ShippingInfo, filter_nulls({
        'ConsumerPrice': get_decimal(shipping, 'ConsumerPrice'),
        'ConsumerTaxes': get_decimal(shipping, 'ConsumerTaxes'),
        'ConsumerDuty': get_decimal(shipping, 'ConsumerDuty'),
    }))


def get_ancillary(container: JsonObject, name: str) -> Optional[AncillaryList]:
    """
    Get the ancillary charges or discounts stored under ``name``
    ('Charges' or 'Discounts'), if any.
    """
    values = _get_array(container, name)
    if values is None:
        return None

    # ConsumerPrice is only checked as a string here, unlike every other
    # ConsumerPrice; callers rely on that.
    charges: AncillaryList = []
    for value in values:
        entry = _check_entry(values, value, name)
        charges.append(AncillaryCharge(
            Name=get_string(entry, 'Name'),
            ConsumerPrice=get_string(entry, 'ConsumerPrice'),
        ))

    logger.debug("Ancillary entries parsed", ancillary=name, entry_count=len(charges))
    return charges


def get_financing(container: JsonObject) -> Optional[FinancingInfo]:
    """Get the instalment financing terms, if any."""
    financing = optional(container, 'Financing')
    if financing is None:
        return None
    if not isinstance(financing, dict):
        raise InvalidValueError(financing, 'object for Financing')

    return FinancingInfo(
        Instalments=get_number(financing, 'Instalments'),
        ConsumerPrice=get_decimal(financing, 'ConsumerPrice'),
    )


def _get_contact(contact: JsonValue, is_consumer: bool) -> Contact:
    """
    Validate the fields shared by consumer and consignee. Email and Phone are
    required for a consumer and optional for a consignee.
    """
    if not isinstance(contact, dict):
        raise InvalidValueError(contact, 'object for Consumer' if is_consumer else 'object for Consignee')

    get_contact_string = get_string if is_consumer else optional_string

    return cast(Contact, filter_nulls({
        'Name': get_string(contact, 'Name'),
        'Company': optional_string(contact, 'Company'),
        'Email': get_contact_string(contact, 'Email'),
        'Phone': get_contact_string(contact, 'Phone'),
        'Address': get_string(contact, 'Address'),
        'City': get_string(contact, 'City'),
        'Region': optional_string(contact, 'Region'),
        'PostalCode': optional_string(contact, 'PostalCode'),
        'Country': get_country(contact, 'Country'),
    }))


def get_consumer(container: JsonObject, nullable: bool = False) -> Optional[Consumer]:
    """
    Get the paying consumer.

    Contact fields come first, followed by the optional identity fields
    NationalIdentifier, BirthDate, MerchantProfileId and IpAddress (which
    must be a public address).
    """
    consumer = optional(container, 'Consumer')
    if consumer is None and nullable:
        return None

    contact = _get_contact(consumer, is_consumer=True)
    identity = filter_nulls({
        'NationalIdentifier': optional_string(consumer, 'NationalIdentifier'),
        'BirthDate': optional_date(consumer, 'BirthDate'),
        'MerchantProfileId': optional_string(consumer, 'MerchantProfileId'),
        'IpAddress': optional_ip(consumer, 'IpAddress'),
    })

    logger.debug("Consumer parsed", field_count=len(contact) + len(identity))
    return cast(Consumer, {**contact, **identity})


def get_consignee(container: JsonObject, nullable: bool = NULL_OK) -> Optional[Consignee]:
    """Get the consignee, if any. Email and Phone are optional."""
    consignee = optional(container, 'Consignee')
    if consignee is None and nullable:
        return None
    return _get_contact(consignee, is_consumer=False)


def _is_digits(value: JsonValue) -> bool:
    return isinstance(value, str) and NUMBER_REGEX.fullmatch(value) is not None


def get_card(card: JsonValue, nullable: bool = False) -> Optional[Card]:
    """
    Get the values of a card used for a payment attempt.

    Number and VerificationCode bypass the generic validators: a failure
    carries REDACTED instead of the offending value, so no card data reaches
    error messages or logs. For the same reason the card and expiry objects
    themselves are never attached to an error.

    Args:
        card: The card object itself (not a container holding it)
        nullable: Return None when ``card`` is None

    Raises:
        InvalidValueError: On a malformed card; Month must be within 0-12
        MissingFieldError: If a card or expiry field is absent
    """
    if card is None and nullable:
        return None
    if not isinstance(card, dict):
        raise InvalidValueError(REDACTED, 'object for card')

    number = required(card, 'Number')
    if not _is_digits(number):
        raise InvalidValueError(REDACTED, 'card number')

    verification_code = required(card, 'VerificationCode')
    if not _is_digits(verification_code):
        raise InvalidValueError(REDACTED, 'verification code')

    expiry = required(card, 'Expiry')
    if not isinstance(expiry, dict):
        raise InvalidValueError(REDACTED, 'object for card expiry')

    month = get_number(expiry, 'Month')
    if not EXPIRY_MONTH_MIN <= int(month) <= EXPIRY_MONTH_MAX:
        raise InvalidValueError(month, 'Month')

    return Card(
        Number=number,
        Name=get_string(card, 'Name'),
        Expiry={
            'Month': month,
            'Year': get_number(expiry, 'Year'),
        },
        VerificationCode=verification_code,
    )


__all__ = [
    'get_items',
    'get_shipping',
    'get_ancillary',
    'get_financing',
    'get_consumer',
    'get_consignee',
    'get_card',
    'EXPIRY_MONTH_MIN',
    'EXPIRY_MONTH_MAX',
]
