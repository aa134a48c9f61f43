# refurb_pricing/services/master_lookup_service.py
from typing import Optional, Type, TypeVar, Union
from sqlalchemy import func, literal
from sqlalchemy.orm import Session

from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.logger import get_logger

logger = get_logger(__name__)

MasterT = TypeVar("MasterT", Product, SparePart)


class MasterLookupService:
    '''
    Resolve a free-text product name ("Make/Model/CPU/Generation") against
    the Product and SparePart masters.

    A miss is not an error: lookups return None. Only database failures raise.
    '''

    def __init__(self, db: Session):
        self.db = db

    def find_product_by_name(self, product_name: str) -> Optional[Product]:
        return self._find_by_name(Product, product_name)

    def find_spare_part_by_name(self, product_name: str) -> Optional[SparePart]:
        return self._find_by_name(SparePart, product_name)

    def _find_by_name(
        self,
        model: Type[MasterT],
        product_name: str,
    ) -> Optional[MasterT]:
        '''
        规则：
        1. product_name 大小写不敏感精确匹配
        2. 按 "/" 拆成 make/model_number/cpu/generation 四段，逐字段大小写不敏感匹配；
           cpu/generation 缺失时要求数据库中该列为 NULL（严格匹配，不是通配）
        3. 仍未找到返回 None

        :param model: Product 或 SparePart
        :param product_name: 待解析的名称
        :type product_name: str
        '''
        if not product_name or not product_name.strip():
            return None

        # Step 1: exact name match
        record = (
            self.db.query(model)
            .filter(func.lower(model.product_name) == func.lower(literal(product_name)))
            .first()
        )
        if record is not None:
            return record

        # Step 2: composite key match
        parts = [p.strip() for p in product_name.split("/")]
        make, model_number, cpu, generation = (parts + [None] * 4)[:4]
        if not make or not model_number:
            logger.debug(f"[{model.__tablename__}] no composite key in '{product_name}'")
            return None

        record = (
            self.db.query(model)
            .filter(
                func.lower(model.make) == func.lower(literal(make)),
                func.lower(model.model_number) == func.lower(literal(model_number)),
                self._strict_match(model.cpu, cpu),
                self._strict_match(model.generation, generation),
            )
            .first()
        )
        if record is None:
            logger.debug(f"[{model.__tablename__}] no master for '{product_name}'")
        return record

    @staticmethod
    def _strict_match(column, value: Union[str, None]):
        if value:
            return func.lower(column) == func.lower(literal(value))
        return column.is_(None)
