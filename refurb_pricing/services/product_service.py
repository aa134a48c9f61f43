# refurb_pricing/services/product_service.py
import os
from typing import Any, Dict, List, Optional
from uuid import uuid4
from decimal import Decimal
from sqlalchemy.orm import Session

from refurb_pricing.exceptions import RecordNotFoundError
from refurb_pricing.models.product import Product
from refurb_pricing.services.cost_calculation_service import to_money
from refurb_pricing.services.validation_service import optional_text, validate_name, validate_price

HIGH_VALUE_THRESHOLD = Decimal(os.getenv("HIGH_VALUE_THRESHOLD", "50000"))


class ProductService:
    """
    Product master maintenance (manual entry).
    Bulk import lives in MasterImportService.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[Product]:
        return (
            self.db.query(Product)
            .order_by(Product.created_at.desc())
            .all()
        )

    def get_product(self, product_id: str) -> Product:
        product = self.db.get(Product, product_id)
        if not product:
            raise RecordNotFoundError(f"Product not found: {product_id}")
        return product

    def create_product(
        self,
        *,
        make: str,
        model_number: str,
        sale_price: Any,
        cpu: Optional[str] = None,
        generation: Optional[str] = None,
        product_name: Optional[str] = None,
        ram: Optional[str] = None,
        ssd: Optional[str] = None,
        hdd: Optional[str] = None,
    ) -> Product:
        '''
        Create one product master.

        :param make: manufacturer, validated by validate_name
        :param model_number: model number, validated by validate_name
        :param sale_price: required, non-negative
        '''
        values = self._validated({
            "make": make,
            "model_number": model_number,
            "sale_price": sale_price,
            "cpu": cpu,
            "generation": generation,
            "product_name": product_name,
            "ram": ram,
            "ssd": ssd,
            "hdd": hdd,
        })
        product = Product(id=str(uuid4()))
        self._apply(product, values)
        self.db.add(product)
        self.db.flush()
        return product

    def update_product(self, product_id: str, **fields: Any) -> Product:
        '''全量更新（与新增相同的校验规则）'''
        product = self.get_product(product_id)
        self._apply(product, self._validated(fields))
        self.db.flush()
        return product

    def update_sale_price(self, product_id: str, sale_price: Any) -> Product:
        product = self.get_product(product_id)
        price = validate_price(sale_price, "Sale price")
        if price is None:
            raise ValueError("Sale price is required")
        product.sale_price = to_money(price)
        self.db.flush()
        return product

    def delete_product(self, product_id: str) -> None:
        product = self.get_product(product_id)
        self.db.delete(product)
        self.db.flush()

    def bulk_delete(self, ids: List[str]) -> int:
        if not ids:
            return 0
        deleted = (
            self.db.query(Product)
            .filter(Product.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted

    def stats(self, high_value_threshold: Decimal = HIGH_VALUE_THRESHOLD) -> Dict[str, Any]:
        '''
        :return: total count, count above the high-value threshold, most expensive product
        '''
        total = self.db.query(Product).count()
        high_value = (
            self.db.query(Product)
            .filter(Product.sale_price > high_value_threshold)
            .count()
        )
        most_expensive = (
            self.db.query(Product)
            .order_by(Product.sale_price.desc())
            .first()
        )
        return {
            "total_products": total,
            "high_value_items": high_value,
            "expensive_product": {
                "make": most_expensive.make,
                "model_number": most_expensive.model_number,
                "sale_price": float(most_expensive.sale_price),
            } if most_expensive else None,
        }

    @staticmethod
    def _validated(fields: Dict[str, Any]) -> Dict[str, Any]:
        sale_price = validate_price(fields.get("sale_price"), "Sale price")
        if sale_price is None:
            raise ValueError("Sale price is required")
        return {
            "make": validate_name(fields.get("make"), "Make"),
            "model_number": validate_name(fields.get("model_number"), "Model number"),
            "cpu": optional_text(fields.get("cpu")),
            "generation": optional_text(fields.get("generation")),
            "product_name": optional_text(fields.get("product_name")),
            "ram": optional_text(fields.get("ram")),
            "ssd": optional_text(fields.get("ssd")),
            "hdd": optional_text(fields.get("hdd")),
            "sale_price": to_money(sale_price),
        }

    @staticmethod
    def _apply(product: Product, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            setattr(product, key, value)
