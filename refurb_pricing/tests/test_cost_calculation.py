from decimal import Decimal

from refurb_pricing.services.cost_calculation_service import (
    component_cost,
    normalize_status,
    suggested_sale_price,
    to_money,
    total_repair_cost,
)


def test_normalize_status_ok_variants():
    for value in (None, "", "  ", 0, 0.0, False, "0", "OK", " ok ", float("nan")):
        assert normalize_status(value) == "ok"


def test_normalize_status_keeps_defect_labels():
    assert normalize_status(" Broken ") == "broken"
    assert normalize_status("MISSING") == "missing"
    assert normalize_status(1) == "1"


def test_component_cost():
    assert component_cost("ok", Decimal("1500")) == Decimal("0")
    assert component_cost("0", Decimal("1500")) == Decimal("0")
    assert component_cost("broken", Decimal("1500")) == Decimal("1500")
    assert component_cost("broken", None) == Decimal("0")


def test_total_repair_cost():
    assert total_repair_cost([]) == Decimal("0")
    assert total_repair_cost([Decimal("0.10"), Decimal("0.20")]) == Decimal("0.30")


def test_suggested_sale_price_is_not_clamped():
    assert suggested_sale_price(Decimal("30000"), Decimal("1500")) == Decimal("28500")
    assert suggested_sale_price(Decimal("0"), Decimal("1500")) == Decimal("-1500")


def test_to_money_rounds_half_up():
    assert to_money(Decimal("1.005")) == Decimal("1.01")
    assert to_money(2) == Decimal("2.00")
    assert to_money(None) == Decimal("0.00")
