"""
Normalized payment request entity shapes.

These TypedDicts describe the dictionaries produced by the composite validators
in interpay.business.validators. Entities are plain dicts built fresh per call;
keys declared in a ``total=False`` class are omitted from the output when the
caller supplied no value (see filter_nulls).

All monetary amounts, quantities and counters are kept as the caller's decimal
or digit strings.
"""

from typing import List, TypedDict


class _ItemRequired(TypedDict):
    Sku: str
    ConsumerPrice: str
    Quantity: str


class Item(_ItemRequired, total=False):
    """Order line item."""
    Description: str
    ImageUrl: str


class ShippingInfo(TypedDict):
    """Shipping charges; all three amounts are present when shipping is."""
    ConsumerPrice: str
    ConsumerTaxes: str
    ConsumerDuty: str


class AncillaryCharge(TypedDict):
    """Named charge or discount. ConsumerPrice is any string."""
    Name: str
    ConsumerPrice: str


class FinancingInfo(TypedDict):
    Instalments: str
    ConsumerPrice: str


class _ContactRequired(TypedDict):
    Name: str
    Address: str
    City: str
    Country: str


class Contact(_ContactRequired, total=False):
    """
    Shared consumer/consignee contact. Email and Phone are always present for
    a consumer and optional for a consignee.
    """
    Company: str
    Email: str
    Phone: str
    Region: str
    PostalCode: str


class Consumer(Contact, total=False):
    NationalIdentifier: str
    BirthDate: str
    MerchantProfileId: str
    IpAddress: str


# A consignee carries exactly the contact fields
Consignee = Contact


class CardExpiry(TypedDict):
    Month: str
    Year: str


class Card(TypedDict):
    Number: str
    Name: str
    Expiry: CardExpiry
    VerificationCode: str


ItemList = List[Item]
AncillaryList = List[AncillaryCharge]


__all__ = [
    'Item',
    'ItemList',
    'ShippingInfo',
    'AncillaryCharge',
    'AncillaryList',
    'FinancingInfo',
    'Contact',
    'Consumer',
    'Consignee',
    'CardExpiry',
    'Card',
]
