# refurb_pricing/models/price_calculation.py
from typing import Optional
from sqlalchemy import String, Numeric, Boolean, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from decimal import Decimal

from refurb_pricing.db.base import Base

# 可选列：旧库可能尚未加列，写入前需检查
EXCEL_CAPACITY_COLUMNS = ("excel_ram_capacity", "excel_hdd", "excel_ssd")


class PriceCalculation(Base):
    """
    Point-in-time valuation of one physical unit.
    Master values are copied at calculation time and never re-resolved.
    """

    __tablename__ = "price_calculations"

    # =========
    # 🔒 Identity
    # =========
    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Calculation UUID")

    product_name :Mapped[str] = mapped_column(String(255), nullable=False, comment="Free-text business key")
    tag_no :Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="Asset tag")
    grade :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="Cosmetic grade")
    lot_number :Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="Purchase lot")

    # =========
    # 📎 Resolved master identity (snapshot)
    # =========
    make :Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model_number :Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    cpu :Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    generation :Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # =========
    # 💾 Storage & memory
    # =========
    ram_present :Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="Product master has RAM")
    ram_capacity :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="RAM from product master")
    hdd_present :Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="Product master has HDD")
    hdd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="HDD from product master")
    ssd_present :Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="Product master has SSD")
    ssd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="SSD from product master")

    excel_ram_capacity :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="RAM read from spreadsheet")
    excel_hdd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="HDD read from spreadsheet")
    excel_ssd :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="SSD read from spreadsheet")

    # =========
    # 🔧 Component status & cost
    # =========
    front_panel :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    front_panel_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    panel :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    panel_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    screen_non_touch :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    screen_non_touch_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    screen_touch :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    screen_touch_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    hinge :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    hinge_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    touch_pad :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    touch_pad_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    base :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    base_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    keyboard :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    keyboard_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    battery :Mapped[str] = mapped_column(String(50), nullable=False, default="ok")
    battery_cost :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    # =========
    # 💰 Price snapshot
    # =========
    repair_cost :Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"), comment="Sum of component costs")
    sale_price :Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"), comment="Product master sale price at calculation time")
    suggested_sale_price :Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
        comment="sale_price - repair_cost, may be negative",
    )

    # =========
    # ⏱ Timestamps
    # =========
    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp"
    )

    updated_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Last update timestamp"
    )

    def __repr__(self) -> str:
        return (
            f"<PriceCalculation id={self.id} "
            f"product={self.product_name} "
            f"suggested={self.suggested_sale_price}>"
        )
