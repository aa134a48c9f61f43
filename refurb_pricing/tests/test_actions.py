from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from refurb_pricing.actions.error_type import ErrorType
from refurb_pricing.actions.master_actions import (
    add_product_action,
    bulk_upload_products_action,
    delete_spare_part_action,
    dashboard_data_action,
)
from refurb_pricing.actions.price_calculator_actions import (
    add_calculation_action,
    bulk_upload_calculations_action,
    list_calculations_action,
    lookup_masters_action,
)
from refurb_pricing.models.price_calculation import PriceCalculation
from refurb_pricing.models.product import Product

PRODUCT_NAME = "Dell/Latitude 5420/i5/11th"


def test_bulk_upload_commits(db, product_factory, spare_part_factory):
    product_factory()
    spare_part_factory(front_panel=Decimal("1500"))

    result = bulk_upload_calculations_action(
        db, [{"Product Name": PRODUCT_NAME, "Front Panel": "broken"}, {"Grade": "A"}]
    )
    assert result.ok
    assert result.side_effect
    assert result.data == {"count": 1}
    assert db.query(PriceCalculation).count() == 1


def test_bulk_upload_no_valid_rows(db):
    result = bulk_upload_calculations_action(db, [{"Grade": "A"}])
    assert not result.ok
    assert result.error_type == ErrorType.INPUT_ERROR
    assert result.error_message == "No valid data found. Ensure 'Product Name' column exists."


def test_bulk_upload_database_failure_rolls_back(db):
    with patch(
        "refurb_pricing.services.bulk_reconciliation_service.BulkReconciliationService.bulk_upload",
        side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")),
    ):
        result = bulk_upload_calculations_action(db, [{"Product Name": PRODUCT_NAME}])

    assert not result.ok
    assert result.error_type == ErrorType.DATABASE_ERROR
    assert result.error_message == "Failed to bulk upload calculations"
    assert db.query(PriceCalculation).count() == 0


def test_lookup_masters(db, product_factory, spare_part_factory):
    product_factory()
    spare_part_factory(front_panel=Decimal("1500"))

    result = lookup_masters_action(db, PRODUCT_NAME)
    assert result.ok
    assert result.data["product"]["sale_price"] == 30000.0
    assert result.data["spare_parts"]["front_panel"] == 1500.0
    # 未知配件价按 0 展示
    assert result.data["spare_parts"]["battery"] == 0.0

    miss = lookup_masters_action(db, "HP/ProBook 450")
    assert miss.ok
    assert miss.data == {"product": None, "spare_parts": None}

    blank = lookup_masters_action(db, " ")
    assert blank.error_type == ErrorType.INPUT_ERROR


def test_list_calculations_empty(db):
    result = list_calculations_action(db)
    assert result.ok
    assert result.data == []
    assert not result.side_effect


def test_add_product_validation_error(db):
    result = add_product_action(db, {"make": "1234", "model_number": "Latitude", "sale_price": 10})
    assert not result.ok
    assert result.error_type == ErrorType.INPUT_ERROR
    assert "only numbers" in result.error_message
    assert db.query(Product).count() == 0


def test_delete_missing_spare_part(db):
    result = delete_spare_part_action(db, "missing-id")
    assert result.error_type == ErrorType.NOT_FOUND


def test_bulk_upload_products_conflict(db):
    # 同一批次内主键冲突 -> IntegrityError
    with patch("refurb_pricing.services.master_import_service.uuid4", return_value="fixed-id"):
        result = bulk_upload_products_action(
            db,
            [
                {"Make": "Dell", "Model Number": "Latitude 5420"},
                {"Make": "Dell", "Model Number": "Latitude 5430"},
            ],
        )
    assert not result.ok
    assert result.error_type == ErrorType.BUSINESS_RULE_ERROR
    assert result.error_message.startswith("Conflicting data found")
    assert db.query(Product).count() == 0


def test_dashboard_action(db, product_factory):
    product_factory()
    result = dashboard_data_action(db)
    assert result.ok
    assert result.data["stats"]["total_products"] == 1
    assert isinstance(result.data["recent_activity"][0]["created_at"], str)


def test_add_calculation_negative_cost_is_input_error(db):
    result = add_calculation_action(db, {"product_name": PRODUCT_NAME, "battery_cost": -200})
    assert not result.ok
    assert result.error_type == ErrorType.INPUT_ERROR
    assert result.error_message.startswith("battery_cost")
    assert db.query(PriceCalculation).count() == 0
