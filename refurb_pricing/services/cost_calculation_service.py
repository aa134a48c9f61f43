# refurb_pricing/services/cost_calculation_service.py
"""
Repair cost and suggested price rules.

All amounts are Decimal. Rounding to cents (ROUND_HALF_UP) happens only at the
persistence boundary via to_money(); the arithmetic here is exact.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from refurb_pricing.services.field_resolver import is_blank

OK_STATUS = "ok"
_OK_ALIASES = {"", "ok", "0"}
CENTS = Decimal("0.01")


def to_money(value: Optional[Any]) -> Decimal:
    '''Coerce to Decimal quantized to cents; None -> 0'''
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_status(value: Any) -> str:
    '''
    Normalize a component condition label.

    Rules:
    - blank / None / falsy (0, False) -> "ok"
    - trim + lower-case
    - "", "ok", "0" -> "ok"
    - anything else is a defect label and is kept as-is ("broken", "missing" ...)
    '''
    if is_blank(value) or not value:
        return OK_STATUS
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    s = str(value).strip().lower()
    if s in _OK_ALIASES:
        return OK_STATUS
    return s


def component_cost(status: Any, master_price: Optional[Decimal]) -> Decimal:
    '''
    Cost of one component.

    :param status: condition label, normalized here
    :param master_price: spare-part master price, None when unknown
    :return: 0 for "ok"; otherwise master_price, or 0 when the price is unknown
    :rtype: Decimal
    '''
    if normalize_status(status) == OK_STATUS:
        return Decimal("0")
    if master_price is None:
        return Decimal("0")
    return Decimal(master_price)


def total_repair_cost(costs: Iterable[Decimal]) -> Decimal:
    '''Sum of component costs. Negative prices are rejected at data entry, not here.'''
    return sum((Decimal(c) for c in costs), Decimal("0"))


def suggested_sale_price(master_sale_price: Decimal, repair_cost: Decimal) -> Decimal:
    '''
    master sale price - repair cost

    A negative result means the unit is uneconomical to repair; it is never clamped.
    '''
    return Decimal(master_sale_price) - Decimal(repair_cost)
