# refurb_pricing/services/dashboard_service.py
from typing import Any, Dict, List
from decimal import Decimal
from sqlalchemy import func, literal, or_
from sqlalchemy.orm import Session

from refurb_pricing.db.enums import MasterType
from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.schemas.master_dto import ProductDTO, SparePartDTO
from refurb_pricing.services.product_service import HIGH_VALUE_THRESHOLD

RECENT_ACTIVITY_LIMIT = 5
SEARCH_LIMIT = 20
MIN_QUERY_LENGTH = 2


class DashboardService:

    def __init__(self, db: Session):
        self.db = db

    def dashboard_data(self, high_value_threshold: Decimal = HIGH_VALUE_THRESHOLD) -> Dict[str, Any]:
        '''
        汇总首页数据

        :return: stats (counts) + recent_activity (latest masters across both tables)
        '''
        total_products = self.db.query(Product).count()
        high_value_products = (
            self.db.query(Product)
            .filter(Product.sale_price > high_value_threshold)
            .count()
        )
        total_spare_parts = self.db.query(SparePart).count()

        activity: List[Dict[str, Any]] = []
        for model, master_type in ((Product, MasterType.PRODUCT), (SparePart, MasterType.SPARE_PART)):
            recent = (
                self.db.query(model)
                .order_by(model.created_at.desc())
                .limit(RECENT_ACTIVITY_LIMIT)
                .all()
            )
            activity.extend(
                {
                    "id": m.id,
                    "make": m.make,
                    "model_number": m.model_number,
                    "created_at": m.created_at,
                    "type": master_type.value,
                }
                for m in recent
            )
        activity.sort(key=lambda a: a["created_at"], reverse=True)
        activity = activity[:RECENT_ACTIVITY_LIMIT]
        for a in activity:
            a["created_at"] = a["created_at"].isoformat() if a["created_at"] else None

        return {
            "stats": {
                "total_products": total_products,
                "high_value_products": high_value_products,
                "total_spare_parts": total_spare_parts,
                "total_inventory": total_products + total_spare_parts,
            },
            "recent_activity": activity,
        }

    def global_search(self, query: str) -> Dict[str, List[Dict[str, Any]]]:
        '''
        Case-insensitive substring search over make / model / product name /
        cpu / generation of both masters. Queries under 2 characters return nothing.
        '''
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return {"products": [], "spare_parts": []}

        products = self._search(Product, query.strip())
        spare_parts = self._search(SparePart, query.strip())
        return {
            "products": [ProductDTO.from_orm_model(p).model_dump(mode="json") for p in products],
            "spare_parts": [SparePartDTO.from_orm_model(s).model_dump(mode="json") for s in spare_parts],
        }

    def _search(self, model, query: str) -> list:
        # % 和 _ 按字面匹配
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = func.lower(literal(f"%{escaped}%"))
        return (
            self.db.query(model)
            .filter(
                or_(
                    func.lower(model.make).like(pattern, escape="\\"),
                    func.lower(model.model_number).like(pattern, escape="\\"),
                    func.lower(model.product_name).like(pattern, escape="\\"),
                    func.lower(model.cpu).like(pattern, escape="\\"),
                    func.lower(model.generation).like(pattern, escape="\\"),
                )
            )
            .limit(SEARCH_LIMIT)
            .all()
        )
