"""
interpay - Payment request parsing and normalization.

Checks values supplied by the calling application before they are sent to the
payment gateway, and normalizes them into null-filtered request structures.
The same helpers can be used to extract data from gateway responses.

Usage:
    import interpay

    payload = {
        'Items': interpay.get_items(order),
        'Shipping': interpay.get_shipping(order),
        'Consumer': interpay.get_consumer(order),
    }

Errors:
    Every failure raises a ParseError subclass at the first bad field:
    MissingFieldError for an absent required key, InvalidValueError for a
    value of the wrong type or format. Card numbers and verification codes are
    reported as REDACTED.
"""

__version__ = "1.0.0"
__title__ = "interpay-parse"
__description__ = "Validation and normalization of payment gateway request data"

import logging

from .business import *  # noqa: F401,F403
from .business import __all__ as _business_all
from .utils import *  # noqa: F401,F403
from .utils import __all__ as _utils_all

__all__ = list(_utils_all) + list(_business_all)

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())
