# refurb_pricing/services/field_resolver.py
"""
Resolve canonical field values from spreadsheet rows.

Spreadsheet exports arrive with uncontrolled header spelling
("Front Panel(Bazel)", "front_panel", "BAZEL" ...). Every header and every
target name is normalized the same way, then matched directly and, failing
that, through a static alias table.
"""
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

_STRIP_PATTERN = re.compile(r"[\s\-_.()]")

# canonical field -> accepted alternate spellings
FIELD_ALIASES: Dict[str, List[str]] = {
    "make": ["brand", "manufacturer", "mfr"],
    "modelNumber": ["model", "modelno", "modelnumber", "sku", "partnumber"],
    "productName": ["name", "description", "title", "product"],
    "salePrice": ["price", "mrp", "cost", "sellingprice", "rate"],
    "frontPanel": ["frontpanel(bazel)", "frontpanelbazel", "bazel", "frontpanel"],
    "panel": ["panel"],
    "screenNonTouch": ["screennontouch", "screen-nontouch", "screen-non-touch", "displaynontouch", "screen"],
    "screenTouch": ["screentouch", "screen-touch", "displaytouch"],
    "hinge": ["hinge"],
    "touchPad": ["touchpad", "touch pad"],
    "base": ["base"],
    "keyboard": ["keyboard"],
    "battery": ["battery", "batt"],
    "ram": ["ram", "memory", "ramcapacity", "ram capacity"],
    "hdd": ["hdd", "harddrive", "hard drive"],
    "ssd": ["ssd", "solidstatedrive", "solid state drive"],
    "tagNo": ["tag no", "tag", "tagno"],
    "lotNumber": ["lot number", "lot no", "lotnumber"],
}


def normalize_key(key: Any) -> str:
    '''
    lower-case, drop whitespace, "-", "_", "." and parentheses

    "Front Panel(Bazel)" -> "frontpanelbazel"
    '''
    return _STRIP_PATTERN.sub("", str(key).lower())


_NORMALIZED_ALIASES: Dict[str, List[str]] = {
    field: [normalize_key(a) for a in alts] for field, alts in FIELD_ALIASES.items()
}


def is_blank(value: Any) -> bool:
    '''None, NaN (pandas empty cell) or whitespace-only string'''
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def resolve(row: Mapping[str, Any], *targets: str, use_aliases: bool = True) -> Optional[Any]:
    '''
    Return the row value for the first matching target, or None when absent.

    Rules:
    - direct pass: any row key whose normalized form equals any normalized target
    - alias pass: for each target in order, any row key matching one of its aliases
    - never raises; an unmatched field is simply absent

    :param row: one spreadsheet row, header -> cell value
    :type row: Mapping[str, Any]
    :param targets: canonical or alternative field names, tried in order
    :type targets: str
    :param use_aliases: False skips the alias pass
    :return: the raw cell value, or None
    '''
    if not row or not targets:
        return None

    normalized_row = [(normalize_key(k), k) for k in row.keys()]

    # 1) direct match
    norm_targets = {normalize_key(t) for t in targets}
    for norm, key in normalized_row:
        if norm in norm_targets:
            return row[key]

    if not use_aliases:
        return None

    # 2) alias match
    for target in targets:
        alts = _NORMALIZED_ALIASES.get(target)
        if not alts:
            continue
        for norm, key in normalized_row:
            if norm in alts:
                return row[key]

    return None


def resolve_text(row: Mapping[str, Any], *targets: str, use_aliases: bool = True) -> Optional[str]:
    '''Resolved value as a stripped string; blank -> None'''
    value = resolve(row, *targets, use_aliases=use_aliases)
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        # pandas 会把整数列读成 float: 8.0 -> "8"
        value = int(value)
    return str(value).strip()


def resolve_decimal(
    row: Mapping[str, Any],
    *targets: str,
    default: Optional[Decimal] = None,
) -> Optional[Decimal]:
    '''
    Resolved value as Decimal; blank or unparseable -> default

    "1,500" is accepted as 1500.
    '''
    value = resolve(row, *targets)
    if is_blank(value) or isinstance(value, bool):
        return default
    try:
        number = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return default
    if not number.is_finite():
        return default
    return number
