# refurb_pricing/actions/price_calculator_actions.py
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from refurb_pricing.actions.action_result import ActionResult
from refurb_pricing.actions.error_type import ErrorType
from refurb_pricing.actions.executor import classify_common_error, dump, execute_action
from refurb_pricing.schemas.master_dto import ProductDTO, SparePartPricesDTO
from refurb_pricing.schemas.price_calculation_dto import PriceCalculationDraft
from refurb_pricing.services.bulk_reconciliation_service import BulkReconciliationService
from refurb_pricing.services.master_lookup_service import MasterLookupService
from refurb_pricing.services.price_calculation_service import PriceCalculationService

BULK_UPLOAD_FAILED = "Failed to bulk upload calculations"
LOOKUP_FAILED = "Failed to look up master data"
SAVE_FAILED = "Failed to save price calculation"
DELETE_FAILED = "Failed to delete price calculation"
LIST_FAILED = "Failed to load price calculations"


def _classify_bulk_upload_error(e: Exception) -> Tuple[ErrorType, str]:
    # 批量导入：任何数据库异常（含约束冲突）都视为整批失败
    if isinstance(e, SQLAlchemyError):
        return ErrorType.DATABASE_ERROR, BULK_UPLOAD_FAILED
    return classify_common_error(e, BULK_UPLOAD_FAILED)


def _classify_lookup_error(e: Exception) -> Tuple[ErrorType, str]:
    return classify_common_error(e, LOOKUP_FAILED)


def _classify_save_error(e: Exception) -> Tuple[ErrorType, str]:
    return classify_common_error(e, SAVE_FAILED)


def _classify_delete_error(e: Exception) -> Tuple[ErrorType, str]:
    return classify_common_error(e, DELETE_FAILED)


def bulk_upload_calculations_action(
    db: Session,
    rows: List[Mapping[str, Any]],
    has_excel_columns: Optional[bool] = None,
) -> ActionResult:
    '''
    Spreadsheet rows -> PriceCalculation rows, all or nothing.

    :return: data = {"count": inserted rows}
    '''
    def run():
        count = BulkReconciliationService(db).bulk_upload(rows, has_excel_columns=has_excel_columns)
        return {"count": count}

    return execute_action(
        db, run,
        classify=_classify_bulk_upload_error,
        action_name="bulk_upload_calculations",
        side_effect=True,
    )


def lookup_masters_action(db: Session, product_name: Optional[str]) -> ActionResult:
    '''
    Calculator lookup: matched product + spare part prices for a product name.
    A miss on either master is reported as None, not as an error.
    '''
    def run():
        if not product_name or not product_name.strip():
            raise ValueError("productName is required")
        lookup = MasterLookupService(db)
        product = lookup.find_product_by_name(product_name.strip())
        spare_part = lookup.find_spare_part_by_name(product_name.strip())
        return {
            "product": dump(ProductDTO.from_orm_model(product)) if product else None,
            "spare_parts": dump(SparePartPricesDTO.from_orm_model(spare_part)) if spare_part else None,
        }

    return execute_action(db, run, classify=_classify_lookup_error, action_name="lookup_masters")


def list_calculations_action(db: Session) -> ActionResult:
    def run():
        return [dump(c) for c in PriceCalculationService(db).list_calculations()]

    return execute_action(
        db, run,
        classify=lambda e: classify_common_error(e, LIST_FAILED),
        action_name="list_calculations",
    )


def add_calculation_action(db: Session, data: Dict[str, Any]) -> ActionResult:
    def run():
        draft = PriceCalculationDraft(**data)
        return dump(PriceCalculationService(db).add_calculation(draft))

    return execute_action(
        db, run, classify=_classify_save_error, action_name="add_calculation", side_effect=True
    )


def update_calculation_action(db: Session, calculation_id: str, data: Dict[str, Any]) -> ActionResult:
    def run():
        draft = PriceCalculationDraft(**data)
        return dump(PriceCalculationService(db).update_calculation(calculation_id, draft))

    return execute_action(
        db, run, classify=_classify_save_error, action_name="update_calculation", side_effect=True
    )


def delete_calculation_action(db: Session, calculation_id: str) -> ActionResult:
    def run():
        PriceCalculationService(db).delete_calculation(calculation_id)
        return {"id": calculation_id}

    return execute_action(
        db, run, classify=_classify_delete_error, action_name="delete_calculation", side_effect=True
    )


def bulk_delete_calculations_action(db: Session, ids: List[str]) -> ActionResult:
    def run():
        return {"count": PriceCalculationService(db).bulk_delete(ids)}

    return execute_action(
        db, run, classify=_classify_delete_error, action_name="bulk_delete_calculations", side_effect=True
    )
