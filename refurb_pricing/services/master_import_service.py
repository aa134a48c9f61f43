# refurb_pricing/services/master_import_service.py
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4
from decimal import Decimal
from sqlalchemy import insert
from sqlalchemy.orm import Session

from refurb_pricing.db.enums import Component
from refurb_pricing.exceptions import NoValidRowsError
from refurb_pricing.logger import get_logger
from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.services.cost_calculation_service import to_money
from refurb_pricing.services.field_resolver import resolve_decimal, resolve_text

logger = get_logger(__name__)

DEFAULT_PRODUCT_NAME = "Laptop"
MISSING_KEY_MESSAGE = "No valid data found in file. Please ensure 'Make' and 'Model Number' columns exist."


def _non_negative(price: Optional[Decimal], default: Optional[Decimal] = None) -> Optional[Decimal]:
    '''负数价格与无法解析的值同样处理：返回 default'''
    if price is None or price < 0:
        return default
    return price


class MasterImportService:
    """
    Bulk import of Product / SparePart masters from spreadsheet rows.

    Responsibility:
    - resolve identity columns (make, model number, cpu, generation, product name)
    - coerce prices (products: blank or negative -> 0; spare parts: blank or negative -> NULL)
    - drop rows without make or model number
    - insert the remaining rows in one batch
    """

    def __init__(self, db: Session):
        self.db = db

    def import_products(self, rows: List[Mapping[str, Any]]) -> int:
        '''
        解析产品主数据行并批量入库

        :param rows: spreadsheet rows
        :return: number of inserted products
        Raises:
            NoValidRowsError: no row had make + model number
        '''
        records = []
        for row in rows:
            record = self._identity(row)
            if record is None:
                continue
            record.update(
                ram=resolve_text(row, "ram"),
                ssd=resolve_text(row, "ssd"),
                hdd=resolve_text(row, "hdd"),
                sale_price=to_money(_non_negative(
                    resolve_decimal(row, "salePrice", "sale price"), default=Decimal("0")
                )),
            )
            records.append(record)

        return self._insert(Product, rows, records)

    def import_spare_parts(self, rows: List[Mapping[str, Any]]) -> int:
        '''
        解析配件价格主数据行并批量入库

        :param rows: spreadsheet rows
        :return: number of inserted spare parts
        Raises:
            NoValidRowsError: no row had make + model number
        '''
        records = []
        for row in rows:
            record = self._identity(row)
            if record is None:
                continue
            for component in Component:
                price = _non_negative(resolve_decimal(row, component.value))
                record[component.name] = to_money(price) if price is not None else None
            records.append(record)

        return self._insert(SparePart, rows, records)

    def _identity(self, row: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        make = resolve_text(row, "make")
        model_number = resolve_text(row, "modelNumber", "model number")
        if not make or not model_number:
            return None
        return {
            "id": str(uuid4()),
            "make": make,
            "model_number": model_number,
            "cpu": resolve_text(row, "cpu"),
            "generation": resolve_text(row, "generation"),
            "product_name": resolve_text(row, "productName", "product name") or DEFAULT_PRODUCT_NAME,
        }

    def _insert(self, model, rows: List[Mapping[str, Any]], records: List[Dict[str, Any]]) -> int:
        if not records:
            raise NoValidRowsError(MISSING_KEY_MESSAGE)

        self.db.execute(insert(model.__table__), records)
        self.db.flush()
        logger.info(f"[{model.__tablename__}] rows={len(rows)} inserted={len(records)}")
        return len(records)
