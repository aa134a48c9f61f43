# refurb_pricing/models/spare_part.py
from typing import Optional
from sqlalchemy import Numeric
from sqlalchemy.orm import Mapped, mapped_column
from decimal import Decimal

from refurb_pricing.db.base import Base
from refurb_pricing.models.mixins.base_master import BaseMasterMixin


class SparePart(Base, BaseMasterMixin):
    """
    Spare-part master: replacement price of each component for one
    make/model/cpu/generation. NULL means cost unknown / not applicable.
    """

    __tablename__ = "spare_parts"

    # =========
    # 🔧 Component prices
    # =========
    front_panel :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Front panel (bezel) price")
    panel :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Panel price")
    screen_non_touch :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Non-touch screen price")
    screen_touch :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Touch screen price")
    hinge :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Hinge price")
    touch_pad :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Touch pad price")
    base :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Base price")
    keyboard :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Keyboard price")
    battery :Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True, comment="Battery price")

    def __repr__(self) -> str:
        return (
            f"<SparePart id={self.id} "
            f"name={self.product_name or f'{self.make}/{self.model_number}'}>"
        )
