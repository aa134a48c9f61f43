from decimal import Decimal

import pytest
from pydantic import ValidationError

from refurb_pricing.db.schema_inspection import table_has_columns
from refurb_pricing.exceptions import RecordNotFoundError
from refurb_pricing.models.price_calculation import EXCEL_CAPACITY_COLUMNS
from refurb_pricing.schemas.price_calculation_dto import PriceCalculationDraft
from refurb_pricing.services.price_calculation_service import PriceCalculationService


def _draft(**overrides):
    values = {
        "product_name": "Dell/Latitude 5420/i5/11th",
        "front_panel": "broken",
        "front_panel_cost": Decimal("1500"),
        "repair_cost": Decimal("1500"),
        "sale_price": Decimal("30000"),
        "suggested_sale_price": Decimal("28500"),
        "excel_ram_capacity": "16GB",
    }
    values.update(overrides)
    return PriceCalculationDraft(**values)


def test_table_has_columns(db):
    assert table_has_columns(db, "price_calculations", EXCEL_CAPACITY_COLUMNS)
    assert not table_has_columns(db, "price_calculations", ["not_a_column"])
    assert not table_has_columns(db, "no_such_table", ["id"])


def test_add_and_list(db):
    service = PriceCalculationService(db)
    created = service.add_calculation(_draft())
    db.commit()

    assert created.front_panel_cost == 1500.0
    assert created.suggested_sale_price == 28500.0
    assert created.excel_ram_capacity == "16GB"
    listed = service.list_calculations()
    assert [c.id for c in listed] == [created.id]


def test_without_excel_columns_reports_none(db):
    service = PriceCalculationService(db, has_excel_columns=False)
    created = service.add_calculation(_draft())
    db.commit()
    assert created.excel_ram_capacity is None
    assert service.list_calculations()[0].excel_ram_capacity is None


def test_product_name_required(db):
    with pytest.raises(ValueError, match="Product Name is required"):
        PriceCalculationService(db).add_calculation(_draft(product_name="  "))


def test_update_and_delete(db):
    service = PriceCalculationService(db)
    created = service.add_calculation(_draft())
    updated = service.update_calculation(created.id, _draft(grade="B", repair_cost=Decimal("0.005")))
    assert updated.grade == "B"
    assert updated.repair_cost == 0.01

    other = service.add_calculation(_draft(tag_no="T-2"))
    assert service.bulk_delete([created.id, other.id, "missing"]) == 2
    with pytest.raises(RecordNotFoundError):
        service.delete_calculation(created.id)
    with pytest.raises(RecordNotFoundError):
        service.update_calculation("missing", _draft())


def test_negative_component_cost_rejected():
    with pytest.raises(ValidationError):
        _draft(front_panel_cost=Decimal("-1500"))
    with pytest.raises(ValidationError):
        _draft(repair_cost=Decimal("-1"))
    # 建议售价可以为负
    assert _draft(suggested_sale_price=Decimal("-10")).suggested_sale_price == Decimal("-10")
