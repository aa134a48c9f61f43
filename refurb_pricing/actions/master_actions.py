# refurb_pricing/actions/master_actions.py
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from refurb_pricing.actions.action_result import ActionResult
from refurb_pricing.actions.error_type import ErrorType
from refurb_pricing.actions.executor import classify_common_error, dump, execute_action
from refurb_pricing.schemas.master_dto import ProductDTO, SparePartDTO
from refurb_pricing.services.dashboard_service import DashboardService
from refurb_pricing.services.master_import_service import MasterImportService
from refurb_pricing.services.product_service import ProductService
from refurb_pricing.services.spare_part_service import SparePartService

CONFLICT_MESSAGE = "Conflicting data found: One or more model numbers already exist."
PRODUCT_FAILED = "Failed to save product"
SPARE_PART_FAILED = "Failed to save spare part"
PRODUCT_UPLOAD_FAILED = "Failed to bulk upload products"
SPARE_PART_UPLOAD_FAILED = "Failed to bulk upload spare parts"
DASHBOARD_FAILED = "Failed to load dashboard data"
SEARCH_FAILED = "Search failed"


def _classify_master_error(fallback_message: str):
    '''duplicate keys are a business conflict, everything else follows the common rules'''
    def classify(e: Exception) -> Tuple[ErrorType, str]:
        if isinstance(e, IntegrityError):
            return ErrorType.BUSINESS_RULE_ERROR, CONFLICT_MESSAGE
        return classify_common_error(e, fallback_message)
    return classify


def _classify_dashboard_error(e: Exception) -> Tuple[ErrorType, str]:
    return classify_common_error(e, DASHBOARD_FAILED)


# =========
# Products
# =========
def bulk_upload_products_action(db: Session, rows: List[Mapping[str, Any]]) -> ActionResult:
    return execute_action(
        db,
        lambda: {"count": MasterImportService(db).import_products(rows)},
        classify=_classify_master_error(PRODUCT_UPLOAD_FAILED),
        action_name="bulk_upload_products",
        side_effect=True,
    )


def list_products_action(db: Session) -> ActionResult:
    return execute_action(
        db,
        lambda: [dump(ProductDTO.from_orm_model(p)) for p in ProductService(db).list_products()],
        classify=_classify_master_error("Failed to load products"),
        action_name="list_products",
    )


def add_product_action(db: Session, data: Dict[str, Any]) -> ActionResult:
    def run():
        product = ProductService(db).create_product(
            make=data.get("make"),
            model_number=data.get("model_number"),
            sale_price=data.get("sale_price"),
            cpu=data.get("cpu"),
            generation=data.get("generation"),
            product_name=data.get("product_name"),
            ram=data.get("ram"),
            ssd=data.get("ssd"),
            hdd=data.get("hdd"),
        )
        return dump(ProductDTO.from_orm_model(product))

    return execute_action(
        db, run,
        classify=_classify_master_error(PRODUCT_FAILED),
        action_name="add_product",
        side_effect=True,
    )


def update_product_action(db: Session, product_id: str, data: Dict[str, Any]) -> ActionResult:
    def run():
        product = ProductService(db).update_product(product_id, **data)
        return dump(ProductDTO.from_orm_model(product))

    return execute_action(
        db, run,
        classify=_classify_master_error(PRODUCT_FAILED),
        action_name="update_product",
        side_effect=True,
    )


def update_product_price_action(db: Session, product_id: str, sale_price: Any) -> ActionResult:
    def run():
        product = ProductService(db).update_sale_price(product_id, sale_price)
        return dump(ProductDTO.from_orm_model(product))

    return execute_action(
        db, run,
        classify=_classify_master_error("Failed to update price"),
        action_name="update_product_price",
        side_effect=True,
    )


def delete_product_action(db: Session, product_id: str) -> ActionResult:
    def run():
        ProductService(db).delete_product(product_id)
        return {"id": product_id}

    return execute_action(
        db, run,
        classify=_classify_master_error("Failed to delete product"),
        action_name="delete_product",
        side_effect=True,
    )


def bulk_delete_products_action(db: Session, ids: List[str]) -> ActionResult:
    return execute_action(
        db,
        lambda: {"count": ProductService(db).bulk_delete(ids)},
        classify=_classify_master_error("Failed to delete products"),
        action_name="bulk_delete_products",
        side_effect=True,
    )


def product_stats_action(db: Session) -> ActionResult:
    return execute_action(
        db,
        lambda: ProductService(db).stats(),
        classify=_classify_master_error("Failed to load product stats"),
        action_name="product_stats",
    )


# =========
# Spare parts
# =========
def bulk_upload_spare_parts_action(db: Session, rows: List[Mapping[str, Any]]) -> ActionResult:
    return execute_action(
        db,
        lambda: {"count": MasterImportService(db).import_spare_parts(rows)},
        classify=_classify_master_error(SPARE_PART_UPLOAD_FAILED),
        action_name="bulk_upload_spare_parts",
        side_effect=True,
    )


def list_spare_parts_action(db: Session) -> ActionResult:
    return execute_action(
        db,
        lambda: [dump(SparePartDTO.from_orm_model(s)) for s in SparePartService(db).list_spare_parts()],
        classify=_classify_master_error("Failed to load spare parts"),
        action_name="list_spare_parts",
    )


def add_spare_part_action(db: Session, data: Dict[str, Any]) -> ActionResult:
    def run():
        part = SparePartService(db).create_spare_part(**data)
        return dump(SparePartDTO.from_orm_model(part))

    return execute_action(
        db, run,
        classify=_classify_master_error(SPARE_PART_FAILED),
        action_name="add_spare_part",
        side_effect=True,
    )


def update_spare_part_action(db: Session, spare_part_id: str, data: Dict[str, Any]) -> ActionResult:
    def run():
        part = SparePartService(db).update_spare_part(spare_part_id, **data)
        return dump(SparePartDTO.from_orm_model(part))

    return execute_action(
        db, run,
        classify=_classify_master_error(SPARE_PART_FAILED),
        action_name="update_spare_part",
        side_effect=True,
    )


def delete_spare_part_action(db: Session, spare_part_id: str) -> ActionResult:
    def run():
        SparePartService(db).delete_spare_part(spare_part_id)
        return {"id": spare_part_id}

    return execute_action(
        db, run,
        classify=_classify_master_error("Failed to delete spare part"),
        action_name="delete_spare_part",
        side_effect=True,
    )


def bulk_delete_spare_parts_action(db: Session, ids: List[str]) -> ActionResult:
    return execute_action(
        db,
        lambda: {"count": SparePartService(db).bulk_delete(ids)},
        classify=_classify_master_error("Failed to delete spare parts"),
        action_name="bulk_delete_spare_parts",
        side_effect=True,
    )


# =========
# Dashboard
# =========
def dashboard_data_action(db: Session) -> ActionResult:
    return execute_action(
        db,
        lambda: DashboardService(db).dashboard_data(),
        classify=_classify_dashboard_error,
        action_name="dashboard_data",
    )


def global_search_action(db: Session, query: Optional[str]) -> ActionResult:
    return execute_action(
        db,
        lambda: DashboardService(db).global_search(query or ""),
        classify=lambda e: classify_common_error(e, SEARCH_FAILED),
        action_name="global_search",
    )
