# refurb_pricing/models/product.py
from typing import Optional
from sqlalchemy import String, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from decimal import Decimal

from refurb_pricing.db.base import Base
from refurb_pricing.models.mixins.base_master import BaseMasterMixin


class Product(Base, BaseMasterMixin):
    """
    Product master: the catalogue sale price and default configuration
    of one make/model/cpu/generation.
    """

    __tablename__ = "products"

    # =========
    # 💾 Configuration (capacity strings, e.g. "8GB")
    # =========
    ram :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="RAM capacity")
    hdd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="HDD capacity")
    ssd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="SSD capacity")

    # =========
    # 💰 Pricing
    # =========
    sale_price :Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Master sale price, non-negative",
    )

    def __repr__(self) -> str:
        return (
            f"<Product id={self.id} "
            f"name={self.product_name or f'{self.make}/{self.model_number}'} "
            f"sale_price={self.sale_price}>"
        )
