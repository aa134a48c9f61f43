import math
from decimal import Decimal

import pytest

from refurb_pricing.services.field_resolver import (
    is_blank,
    normalize_key,
    resolve,
    resolve_decimal,
    resolve_text,
)


def test_normalize_key_strips_separators_and_case():
    assert normalize_key("Front Panel(Bazel)") == "frontpanelbazel"
    assert normalize_key("screen-non_touch") == "screennontouch"
    assert normalize_key(" Lot.No ") == "lotno"


def test_touch_pad_spellings_resolve_to_same_field():
    assert resolve({"touch pad": "broken"}, "touchPad") == "broken"
    assert resolve({"TouchPad": "broken"}, "touchPad") == "broken"
    assert resolve({"TOUCH_PAD": "broken"}, "touchPad") == "broken"


def test_direct_match_wins_over_alias():
    row = {"Brand": "HP", "Make": "Dell"}
    assert resolve(row, "make") == "Dell"


def test_alias_match_when_no_direct_header():
    assert resolve({"Manufacturer": "Lenovo"}, "make") == "Lenovo"
    assert resolve({"Bazel": "cracked"}, "frontPanel") == "cracked"
    assert resolve({"Batt": "dead"}, "battery") == "dead"


def test_first_target_alias_tried_first():
    row = {"MRP": 100, "Model": "X1"}
    assert resolve(row, "modelNumber", "salePrice") == "X1"


def test_absent_field_returns_none():
    assert resolve({"Grade": "A"}, "tagNo") is None
    assert resolve({}, "make") is None
    assert resolve({"Make": "Dell"}) is None


def test_use_aliases_false_skips_alias_table():
    row = {"Name": "something"}
    assert resolve(row, "productName", use_aliases=False) is None
    assert resolve(row, "productName") == "something"


def test_resolve_is_idempotent():
    row = {"Front Panel": "broken", "Hinge": "ok"}
    assert resolve(row, "frontPanel") == resolve(row, "frontPanel")
    assert row == {"Front Panel": "broken", "Hinge": "ok"}


def test_is_blank():
    assert is_blank(None)
    assert is_blank(float("nan"))
    assert is_blank("   ")
    assert not is_blank(0)
    assert not is_blank("ok")


def test_resolve_text_handles_pandas_values():
    assert resolve_text({"Tag No": 1234.0}, "tagNo") == "1234"
    assert resolve_text({"Tag No": math.nan}, "tagNo") is None
    assert resolve_text({"Grade": "  A "}, "grade") == "A"


def test_resolve_decimal():
    assert resolve_decimal({"Sale Price": "1,500"}, "salePrice") == Decimal("1500")
    assert resolve_decimal({"Price": 99.5}, "salePrice") == Decimal("99.5")
    assert resolve_decimal({"Price": "n/a"}, "salePrice", default=Decimal("0")) == Decimal("0")
    assert resolve_decimal({"Price": None}, "salePrice") is None
    assert resolve_decimal({"Price": "inf"}, "salePrice") is None


@pytest.mark.parametrize("header", ["Front Panel(Bazel)", "frontpanelbazel", "bazel"])
def test_front_panel_spellings_resolve_to_same_value(header):
    assert resolve({header: "cracked", "Grade": "A"}, "frontPanel") == "cracked"
