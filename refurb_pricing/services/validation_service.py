# refurb_pricing/services/validation_service.py
"""
Field validation for manually entered master data.
Failures raise ValueError with a message that can be shown to the user as-is.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

_ONLY_DIGITS = re.compile(r"^\d+$")


def validate_name(name: Optional[str], field_name: str = "Name") -> str:
    '''
    校验 make / model number 这类名称字段

    Rules:
    - required, not blank
    - not digits only
    - at least 2 characters
    :return: stripped name
    '''
    if name is None or not str(name).strip():
        raise ValueError(f"{field_name} is required")

    stripped = str(name).strip()
    if _ONLY_DIGITS.match(stripped):
        raise ValueError(f'"{name}" is not a valid name (cannot be only numbers)')

    if len(stripped) < 2:
        raise ValueError(f"{field_name} must be at least 2 characters long")

    return stripped


def validate_price(price: Any, field_name: str) -> Optional[Decimal]:
    '''
    校验价格字段

    Rules:
    - None / "" is allowed (optional price) and returns None
    - must parse as a number
    - must not be negative
    '''
    if price is None or (isinstance(price, str) and not price.strip()):
        return None
    if isinstance(price, bool):
        raise ValueError(f"{field_name} must be a valid number")

    try:
        value = Decimal(str(price).strip())
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a valid number")

    if not value.is_finite():
        raise ValueError(f"{field_name} must be a valid number")

    if value < 0:
        raise ValueError(f"{field_name} cannot be negative")

    return value


def optional_text(value: Any) -> Optional[str]:
    '''"" -> None, otherwise stripped string'''
    if value is None:
        return None
    s = str(value).strip()
    return s or None
