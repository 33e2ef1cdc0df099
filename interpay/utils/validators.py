"""
Field access and primitive validation utilities for payment request data.

This module implements the leaf level of request parsing: extracting values from
untyped request mappings and checking that single scalar values match a fixed
format. Every validator is a pure predicate with pass-through: an accepted value
is returned unchanged, never normalized or coerced.

Key Features:
- Structural field access distinguishing absent keys from explicit nulls
- Format validators for booleans, strings, decimals, numbers, URLs, country and
  currency codes, UUIDs, dates, email addresses and public IP addresses
- Required (get_*) and optional (optional_*) extraction wrappers for every kind
- Shallow null filtering of finished composite results
- Email validation using email-validator without deliverability (DNS) checks

Usage:
    sku = get_string(item, 'Sku')
    description = optional_string(item, 'Description')
    price = as_decimal(raw_price, NULL_OK)
"""

import ipaddress
import re
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidValueError, MissingFieldError

# Decoded JSON input as received from the calling application
JsonValue = Union[None, bool, str, int, float, List["JsonValue"], Dict[str, "JsonValue"]]
JsonObject = Dict[str, JsonValue]

# Passed as the nullable argument for readability at call sites
NULL_OK = True

# Format patterns, always applied with fullmatch
DECIMAL_REGEX = re.compile(r'[0-9]+(?:\.[0-9]*)?')
NUMBER_REGEX = re.compile(r'[0-9]+')
COUNTRY_REGEX = re.compile(r'[A-Z]{2}')
CURRENCY_REGEX = re.compile(r'[A-Z]{3}')
UUID_REGEX = re.compile(r'[A-F0-9]{8}-(?:[A-F0-9]{4}-){3}[A-F0-9]{12}', re.IGNORECASE)
DATE_REGEX = re.compile(r'[0-9]{4}-(?:0[1-9]|1[012])-(?:0[1-9]|[12][0-9]|3[01])')
URL_SCHEME_REGEX = re.compile(r'[A-Za-z][A-Za-z0-9+.-]*')

# Schemes that are well formed without a host component
HOSTLESS_URL_SCHEMES = frozenset({'mailto', 'news', 'file'})


# ============================================================================
# FIELD ACCESSOR
# ============================================================================

def optional(container: JsonObject, key: str) -> JsonValue:
    """Get a value by key; absent keys read as None."""
    return container[key] if key in container else None


def required(container: JsonObject, key: str) -> JsonValue:
    """
    Get a required value by key.

    The key must exist; an explicit None is returned as-is and left for the
    primitive validator to reject.

    Raises:
        MissingFieldError: If the key is not present
    """
    if key not in container:
        raise MissingFieldError(key)
    return container[key]


def filter_nulls(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Remove None-valued keys from a finished composite, keeping every other
    value (including empty strings, zero and False). Shallow; the input is not
    modified.
    """
    return {key: value for key, value in values.items() if value is not None}


# ============================================================================
# FORMAT PREDICATES
# ============================================================================

def _matches(pattern: re.Pattern, value: JsonValue) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _is_url(value: JsonValue) -> bool:
    if not isinstance(value, str) or not value.isprintable() or ' ' in value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    if not URL_SCHEME_REGEX.fullmatch(parsed.scheme):
        return False
    if parsed.scheme.lower() in HOSTLESS_URL_SCHEMES:
        return bool(parsed.netloc or parsed.path)
    return bool(parsed.hostname)


def _is_email(value: JsonValue) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _is_public_ip(value: JsonValue) -> bool:
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    return not (
        address.is_private
        or address.is_reserved
        or address.is_loopback
        or address.is_link_local
        or address.is_unspecified
    )


# ============================================================================
# PRIMITIVE VALIDATORS
# ============================================================================

def as_boolean(value: JsonValue, nullable: bool = False) -> Optional[bool]:
    """Return the value iff it is a boolean."""
    if value is None and nullable:
        return None
    if isinstance(value, bool):
        return value
    raise InvalidValueError(value, 'boolean')


def get_boolean(container: JsonObject, key: str) -> bool:
    return as_boolean(required(container, key))


def optional_boolean(container: JsonObject, key: str) -> Optional[bool]:
    return as_boolean(optional(container, key), NULL_OK)


def as_string(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is a string."""
    if value is None and nullable:
        return None
    if isinstance(value, str):
        return value
    raise InvalidValueError(value, 'string')


def get_string(container: JsonObject, key: str) -> str:
    return as_string(required(container, key))


def optional_string(container: JsonObject, key: str) -> Optional[str]:
    return as_string(optional(container, key), NULL_OK)


def as_decimal(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """
    Return the value iff it is a decimal string such as "12" or "12.50".

    Decimals stay strings; numeric types are rejected rather than coerced.
    """
    if value is None and nullable:
        return None
    if _matches(DECIMAL_REGEX, value):
        return value
    raise InvalidValueError(value, 'decimal value')


def get_decimal(container: JsonObject, key: str) -> str:
    return as_decimal(required(container, key))


def optional_decimal(container: JsonObject, key: str) -> Optional[str]:
    return as_decimal(optional(container, key), NULL_OK)


def as_number(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is a string of digits."""
    if value is None and nullable:
        return None
    if _matches(NUMBER_REGEX, value):
        return value
    raise InvalidValueError(value, 'number')


def get_number(container: JsonObject, key: str) -> str:
    return as_number(required(container, key))


def optional_number(container: JsonObject, key: str) -> Optional[str]:
    return as_number(optional(container, key), NULL_OK)


def as_url(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is an absolute, well-formed URL."""
    if value is None and nullable:
        return None
    if _is_url(value):
        return value
    raise InvalidValueError(value, 'URL')


def get_url(container: JsonObject, key: str) -> str:
    return as_url(required(container, key))


def optional_url(container: JsonObject, key: str) -> Optional[str]:
    return as_url(optional(container, key), NULL_OK)


def as_country(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is an uppercase ISO 3166-1 alpha-2 code."""
    if value is None and nullable:
        return None
    if _matches(COUNTRY_REGEX, value):
        return value
    raise InvalidValueError(value, 'ISO 3166-1-alpha-2 country code')


def get_country(container: JsonObject, key: str) -> str:
    return as_country(required(container, key))


def optional_country(container: JsonObject, key: str) -> Optional[str]:
    return as_country(optional(container, key), NULL_OK)


def as_uuid(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is a UUID in 8-4-4-4-12 form, any case."""
    if value is None and nullable:
        return None
    if _matches(UUID_REGEX, value):
        return value
    raise InvalidValueError(value, 'UUID')


def get_uuid(container: JsonObject, key: str) -> str:
    return as_uuid(required(container, key))


def optional_uuid(container: JsonObject, key: str) -> Optional[str]:
    return as_uuid(optional(container, key), NULL_OK)


def as_date(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """
    Return the value iff it is a YYYY-MM-DD date.

    Only month (01-12) and day (01-31) ranges are checked, so "2024-02-30"
    is accepted.
    """
    if value is None and nullable:
        return None
    if _matches(DATE_REGEX, value):
        return value
    raise InvalidValueError(value, 'date')


def get_date(container: JsonObject, key: str) -> str:
    return as_date(required(container, key))


def optional_date(container: JsonObject, key: str) -> Optional[str]:
    return as_date(optional(container, key), NULL_OK)


def as_currency(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is an uppercase ISO 4217 currency code."""
    if value is None and nullable:
        return None
    if _matches(CURRENCY_REGEX, value):
        return value
    raise InvalidValueError(value, 'ISO 4217 currency code')


def get_currency(container: JsonObject, key: str) -> str:
    return as_currency(required(container, key))


def optional_currency(container: JsonObject, key: str) -> Optional[str]:
    return as_currency(optional(container, key), NULL_OK)


def as_email(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """
    Return the value iff it is a syntactically valid email address.

    Uses email-validator without the deliverability check, so no DNS lookup
    happens. The caller's string is returned, not the normalized form.
    """
    if value is None and nullable:
        return None
    if _is_email(value):
        return value
    raise InvalidValueError(value, 'email address')


def get_email(container: JsonObject, key: str) -> str:
    return as_email(required(container, key))


def optional_email(container: JsonObject, key: str) -> Optional[str]:
    return as_email(optional(container, key), NULL_OK)


def as_ip(value: JsonValue, nullable: bool = False) -> Optional[str]:
    """Return the value iff it is a public IPv4 or IPv6 address literal."""
    if value is None and nullable:
        return None
    if _is_public_ip(value):
        return value
    raise InvalidValueError(value, 'public IP address')


def get_ip(container: JsonObject, key: str) -> str:
    return as_ip(required(container, key))


def optional_ip(container: JsonObject, key: str) -> Optional[str]:
    return as_ip(optional(container, key), NULL_OK)


__all__ = [
    'JsonValue',
    'JsonObject',
    'NULL_OK',
    'optional',
    'required',
    'filter_nulls',
    'as_boolean', 'get_boolean', 'optional_boolean',
    'as_string', 'get_string', 'optional_string',
    'as_decimal', 'get_decimal', 'optional_decimal',
    'as_number', 'get_number', 'optional_number',
    'as_url', 'get_url', 'optional_url',
    'as_country', 'get_country', 'optional_country',
    'as_uuid', 'get_uuid', 'optional_uuid',
    'as_date', 'get_date', 'optional_date',
    'as_currency', 'get_currency', 'optional_currency',
    'as_email', 'get_email', 'optional_email',
    'as_ip', 'get_ip', 'optional_ip',
]
