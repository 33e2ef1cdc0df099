"""
Business Package - Composite validators for payment request entities.

Package Components:
    Entity Shapes (models.py):
        - TypedDict declarations of every normalized entity
    Composite Validators (validators.py):
        - Items, Shipping, Charges/Discounts, Financing, Consumer, Consignee, Card
"""

from .models import (
    AncillaryCharge,
    Card,
    CardExpiry,
    Consignee,
    Consumer,
    Contact,
    FinancingInfo,
    Item,
    ShippingInfo,
)
from .validators import (
    get_ancillary,
    get_card,
    get_consignee,
    get_consumer,
    get_financing,
    get_items,
    get_shipping,
)

__all__ = [
    'AncillaryCharge',
    'Card',
    'CardExpiry',
    'Consignee',
    'Consumer',
    'Contact',
    'FinancingInfo',
    'Item',
    'ShippingInfo',
    'get_ancillary',
    'get_card',
    'get_consignee',
    'get_consumer',
    'get_financing',
    'get_items',
    'get_shipping',
]
