# refurb_pricing/models/mixins/base_master.py
from typing import Optional
from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime


class BaseMasterMixin:
    """
    Base mixin for master catalogue entries (Product / SparePart).

    Invariants:
    - Identity is the (make, model_number, cpu, generation) tuple
    - make and model_number are never empty
    - product_name is a denormalized display string, conventionally
      "Make/Model/CPU/Generation"
    """
    # =========
    # Identity
    # =========
    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Master entry UUID")

    make :Mapped[str] = mapped_column(String(100), nullable=False, comment="Manufacturer, e.g. Dell")
    model_number :Mapped[str] = mapped_column(String(100), nullable=False, comment="Model number, e.g. Latitude 5420")
    cpu :Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="CPU family, e.g. i5")
    generation :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="CPU generation, e.g. 11th")

    product_name :Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name, conventionally Make/Model/CPU/Generation",
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
