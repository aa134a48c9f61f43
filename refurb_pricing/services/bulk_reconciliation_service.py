# refurb_pricing/services/bulk_reconciliation_service.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4
from decimal import Decimal
from sqlalchemy import insert
from sqlalchemy.orm import Session

from refurb_pricing.db.enums import Component
from refurb_pricing.db.schema_inspection import table_has_columns
from refurb_pricing.exceptions import NoValidRowsError
from refurb_pricing.logger import get_logger
from refurb_pricing.models.price_calculation import PriceCalculation, EXCEL_CAPACITY_COLUMNS
from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.schemas.price_calculation_dto import PriceCalculationDraft
from refurb_pricing.services import cost_calculation_service as costs
from refurb_pricing.services.field_resolver import is_blank, resolve, resolve_text
from refurb_pricing.services.master_lookup_service import MasterLookupService

logger = get_logger(__name__)

PRODUCT_NAME_TARGETS = ("productName", "product name", "product")

# 各部件状态列的可接受写法（再经 field_resolver 别名表兜底）
STATUS_TARGETS: Dict[Component, tuple] = {
    Component.front_panel: ("frontPanel", "front panel", "bazel", "front panel(bazel)"),
    Component.panel: ("panel",),
    Component.screen_non_touch: ("screenNonTouch", "screen non touch"),
    Component.screen_touch: ("screenTouch", "screen touch"),
    Component.hinge: ("hinge",),
    Component.touch_pad: ("touchPad", "touch pad", "touchpad"),
    Component.base: ("base",),
    Component.keyboard: ("keyboard",),
    Component.battery: ("battery", "batt"),
}
# a single "Screen" column grades both screen variants
GENERIC_SCREEN_TARGETS = ("screen", "display")

# spreadsheet capacity columns, read independently of the product master
EXCEL_CAPACITY_TARGETS = {
    "excel_ram_capacity": ("ramCapacity", "ram capacity", "ramcap", "memory"),
    "excel_hdd": ("hddCapacity", "hdd capacity", "hddcap", "harddrive", "hard drive"),
    "excel_ssd": ("ssdCapacity", "ssd capacity", "ssdcap", "solidstatedrive", "solid state drive"),
}
_ABSENT_CAPACITY = {"no", "missing", "false", "0", "none"}


@dataclass
class ReconcileResult:
    admitted_rows: List[PriceCalculationDraft] = field(default_factory=list)
    rejected_count: int = 0

    @property
    def admitted_count(self) -> int:
        return len(self.admitted_rows)


class BulkReconciliationService:
    """
    Turn spreadsheet rows into PriceCalculation snapshots.

    Responsibility:
    - resolve product name / component statuses / identifiers from raw rows
    - match Product and SparePart masters
    - compute component costs, repair cost and suggested sale price
    - insert admitted rows in one batch, adapting to the destination schema

    Row-level problems never abort the batch: a row without a product name is
    rejected and counted, a master miss degrades to zero prices.
    """

    def __init__(self, db: Session, lookup_service: Optional[MasterLookupService] = None):
        self.db = db
        self.lookup_service = lookup_service or MasterLookupService(db)

    def reconcile(self, rows: List[Mapping[str, Any]]) -> ReconcileResult:
        '''
        Build drafts for every row that has a product name.
        Admitted drafts keep the input order.

        :param rows: spreadsheet rows, header -> cell value
        :type rows: List[Mapping[str, Any]]
        :return: admitted drafts + number of rejected rows
        :rtype: ReconcileResult
        '''
        result = ReconcileResult()
        for row in rows:
            draft = self.build_draft(row)
            if draft is None:
                result.rejected_count += 1
                continue
            result.admitted_rows.append(draft)

        logger.info(
            f"[price_calculation] rows={len(rows)} "
            f"admitted={result.admitted_count} rejected={result.rejected_count}"
        )
        return result

    def build_draft(self, row: Mapping[str, Any]) -> Optional[PriceCalculationDraft]:
        '''单行计算；没有 product name 返回 None'''
        # only explicit product-name headers; "Name"/"Description" columns are not the business key
        product_name = resolve_text(row, *PRODUCT_NAME_TARGETS, use_aliases=False)
        if not product_name:
            return None

        # 1️⃣ 主数据匹配（互不影响，匹配失败不拒绝该行）
        product = self.lookup_service.find_product_by_name(product_name)
        spare_part = self.lookup_service.find_spare_part_by_name(product_name)

        # 2️⃣ 部件状态 + 费用
        statuses = self._resolve_statuses(row)
        component_values: Dict[str, Any] = {}
        component_costs: List[Decimal] = []
        for component, status in statuses.items():
            master_price = getattr(spare_part, component.name) if spare_part is not None else None
            cost = costs.component_cost(status, master_price)
            component_values[component.name] = status
            component_values[component.cost_attr] = cost
            component_costs.append(cost)

        repair_cost = costs.total_repair_cost(component_costs)

        # 3️⃣ 售价
        sale_price = Decimal(product.sale_price) if product is not None and product.sale_price is not None else Decimal("0")
        suggested = costs.suggested_sale_price(sale_price, repair_cost)

        return PriceCalculationDraft(
            product_name=product_name,
            tag_no=resolve_text(row, "tagNo", "tag no", "tag"),
            grade=resolve_text(row, "grade"),
            lot_number=resolve_text(row, "lotNumber", "lot number", "lot no"),
            **self._identity(row, product),
            **self._capacities(row, product),
            **component_values,
            repair_cost=repair_cost,
            sale_price=sale_price,
            suggested_sale_price=suggested,
        )

    def bulk_upload(
        self,
        rows: List[Mapping[str, Any]],
        *,
        has_excel_columns: Optional[bool] = None,
    ) -> int:
        '''
        Reconcile rows and insert every admitted draft in one batch.

        The caller owns the transaction: commit on success, rollback on any
        exception raised here.

        :param rows: spreadsheet rows
        :param has_excel_columns: whether price_calculations has the excel
            capacity columns; None means inspect the database
        :return: number of inserted rows
        :rtype: int
        Raises:
            NoValidRowsError: no row had a usable product name
            SQLAlchemyError: the batch insert failed
        '''
        result = self.reconcile(rows)
        if result.admitted_count == 0:
            raise NoValidRowsError("No valid data found. Ensure 'Product Name' column exists.")

        if has_excel_columns is None:
            has_excel_columns = table_has_columns(
                self.db, PriceCalculation.__tablename__, EXCEL_CAPACITY_COLUMNS
            )
        if not has_excel_columns:
            logger.warning("[price_calculation] excel capacity columns missing, stripping them from this batch")

        db_rows = []
        for draft in result.admitted_rows:
            db_row = draft.to_row(include_excel_columns=has_excel_columns)
            db_row["id"] = str(uuid4())
            db_rows.append(db_row)

        self.db.execute(insert(PriceCalculation.__table__), db_rows)
        self.db.flush()
        logger.info(f"[price_calculation] inserted={len(db_rows)}")
        return len(db_rows)

    # =========
    # helpers
    # =========
    def _resolve_statuses(self, row: Mapping[str, Any]) -> Dict[Component, str]:
        generic_screen = resolve(row, *GENERIC_SCREEN_TARGETS)
        statuses = {}
        for component, targets in STATUS_TARGETS.items():
            raw = resolve(row, *targets, component.value)
            if is_blank(raw) and component in (Component.screen_non_touch, Component.screen_touch):
                raw = generic_screen
            statuses[component] = costs.normalize_status(raw)
        return statuses

    @staticmethod
    def _identity(row: Mapping[str, Any], product: Optional[Product]) -> Dict[str, Optional[str]]:
        '''master 优先，未匹配时退回表格自身的列'''
        def pick(master_value, *targets):
            return master_value or resolve_text(row, *targets)

        return {
            "make": pick(product.make if product else None, "make"),
            "model_number": pick(product.model_number if product else None, "modelNumber", "model number", "model"),
            "cpu": pick(product.cpu if product else None, "cpu"),
            "generation": pick(product.generation if product else None, "generation", "gen"),
        }

    @staticmethod
    def _capacities(row: Mapping[str, Any], product: Optional[Product]) -> Dict[str, Any]:
        '''
        presence flags and master capacities come only from the product master;
        spreadsheet capacities are kept in their own fields so disagreements stay visible
        '''
        values: Dict[str, Any] = {
            "ram_present": bool(product and product.ram),
            "ram_capacity": (product.ram or None) if product else None,
            "hdd_present": bool(product and product.hdd),
            "hdd": (product.hdd or None) if product else None,
            "ssd_present": bool(product and product.ssd),
            "ssd": (product.ssd or None) if product else None,
        }
        for column, targets in EXCEL_CAPACITY_TARGETS.items():
            raw = resolve_text(row, *targets)
            values[column] = raw if raw and raw.lower() not in _ABSENT_CAPACITY else None
        return values
