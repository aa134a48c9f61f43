# refurb_pricing/services/price_calculation_service.py
from typing import List, Optional
from uuid import uuid4
from sqlalchemy import select
from sqlalchemy.orm import Session

from refurb_pricing.db.schema_inspection import table_has_columns
from refurb_pricing.exceptions import RecordNotFoundError
from refurb_pricing.logger import get_logger
from refurb_pricing.models.price_calculation import PriceCalculation, EXCEL_CAPACITY_COLUMNS
from refurb_pricing.schemas.price_calculation_dto import PriceCalculationDraft, PriceCalculationDTO

logger = get_logger(__name__)


class PriceCalculationService:
    """
    Single PriceCalculation records (manual calculator entries).
    Every read/write checks whether the excel capacity columns exist, so the
    service keeps working against a schema that has not been upgraded yet.
    """

    def __init__(self, db: Session, has_excel_columns: Optional[bool] = None):
        self.db = db
        self._has_excel_columns = has_excel_columns

    @property
    def has_excel_columns(self) -> bool:
        if self._has_excel_columns is None:
            self._has_excel_columns = table_has_columns(
                self.db, PriceCalculation.__tablename__, EXCEL_CAPACITY_COLUMNS
            )
        return self._has_excel_columns

    def list_calculations(self) -> List[PriceCalculationDTO]:
        '''
        newest first；缺少 excel 列时只查询基础列，excel 字段返回 None
        '''
        rows = self.db.execute(
            select(*self._columns()).order_by(PriceCalculation.created_at.desc())
        ).mappings().all()
        return [PriceCalculationDTO.from_mapping(r) for r in rows]

    def add_calculation(self, draft: PriceCalculationDraft) -> PriceCalculationDTO:
        self._require_product_name(draft)
        values = draft.to_row(include_excel_columns=self.has_excel_columns)
        calc_id = str(uuid4())
        self.db.execute(PriceCalculation.__table__.insert().values(id=calc_id, **values))
        self.db.flush()
        logger.info(f"[price_calculation] added id={calc_id} product={draft.product_name}")
        return self.get_calculation(calc_id)

    def update_calculation(self, calculation_id: str, draft: PriceCalculationDraft) -> PriceCalculationDTO:
        self._require_product_name(draft)
        self.get_calculation(calculation_id)
        values = draft.to_row(include_excel_columns=self.has_excel_columns)
        self.db.execute(
            PriceCalculation.__table__.update()
            .where(PriceCalculation.__table__.c.id == calculation_id)
            .values(**values)
        )
        self.db.flush()
        return self.get_calculation(calculation_id)

    def get_calculation(self, calculation_id: str) -> PriceCalculationDTO:
        row = self.db.execute(
            select(*self._columns()).where(PriceCalculation.__table__.c.id == calculation_id)
        ).mappings().first()
        if row is None:
            raise RecordNotFoundError(f"Price calculation not found: {calculation_id}")
        return PriceCalculationDTO.from_mapping(row)

    def delete_calculation(self, calculation_id: str) -> None:
        self.get_calculation(calculation_id)
        self.db.execute(
            PriceCalculation.__table__.delete()
            .where(PriceCalculation.__table__.c.id == calculation_id)
        )
        self.db.flush()

    def bulk_delete(self, ids: List[str]) -> int:
        if not ids:
            return 0
        result = self.db.execute(
            PriceCalculation.__table__.delete()
            .where(PriceCalculation.__table__.c.id.in_(ids))
        )
        self.db.flush()
        return result.rowcount

    def _columns(self):
        return [
            c for c in PriceCalculation.__table__.columns
            if self.has_excel_columns or c.name not in EXCEL_CAPACITY_COLUMNS
        ]

    @staticmethod
    def _require_product_name(draft: PriceCalculationDraft) -> None:
        if not draft.product_name or not draft.product_name.strip():
            raise ValueError("Product Name is required")
