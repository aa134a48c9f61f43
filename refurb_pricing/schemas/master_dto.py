# refurb_pricing/schemas/master_dto.py
from typing import Optional
from datetime import datetime
from decimal import Decimal

from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.db.enums import Component
from refurb_pricing.schemas.base_dto import BaseDTO


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class ProductDTO(BaseDTO):
    id: str
    make: str
    model_number: str
    cpu: Optional[str] = None
    generation: Optional[str] = None
    product_name: Optional[str] = None
    ram: Optional[str] = None
    ssd: Optional[str] = None
    hdd: Optional[str] = None
    sale_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm_model(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id,
            make=product.make,
            model_number=product.model_number,
            cpu=product.cpu,
            generation=product.generation,
            product_name=product.product_name,
            ram=product.ram,
            ssd=product.ssd,
            hdd=product.hdd,
            sale_price=float(product.sale_price or 0),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class SparePartDTO(BaseDTO):
    '''Catalogue view: unknown component prices stay None'''
    id: str
    make: str
    model_number: str
    cpu: Optional[str] = None
    generation: Optional[str] = None
    product_name: Optional[str] = None
    front_panel: Optional[float] = None
    panel: Optional[float] = None
    screen_non_touch: Optional[float] = None
    screen_touch: Optional[float] = None
    hinge: Optional[float] = None
    touch_pad: Optional[float] = None
    base: Optional[float] = None
    keyboard: Optional[float] = None
    battery: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm_model(cls, part: SparePart) -> "SparePartDTO":
        prices = {c.name: _money(getattr(part, c.name)) for c in Component}
        return cls(
            id=part.id,
            make=part.make,
            model_number=part.model_number,
            cpu=part.cpu,
            generation=part.generation,
            product_name=part.product_name,
            created_at=part.created_at,
            updated_at=part.updated_at,
            **prices,
        )


class SparePartPricesDTO(BaseDTO):
    '''Calculator view: unknown component prices are reported as 0'''
    front_panel: float = 0.0
    panel: float = 0.0
    screen_non_touch: float = 0.0
    screen_touch: float = 0.0
    hinge: float = 0.0
    touch_pad: float = 0.0
    base: float = 0.0
    keyboard: float = 0.0
    battery: float = 0.0

    @classmethod
    def from_orm_model(cls, part: SparePart) -> "SparePartPricesDTO":
        return cls(**{c.name: float(getattr(part, c.name) or 0) for c in Component})
