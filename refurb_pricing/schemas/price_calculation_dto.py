# refurb_pricing/schemas/price_calculation_dto.py
from typing import Any, Dict, Mapping, Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from refurb_pricing.models.price_calculation import EXCEL_CAPACITY_COLUMNS
from refurb_pricing.services.cost_calculation_service import to_money
from refurb_pricing.schemas.base_dto import BaseDTO

MONEY_FIELDS = (
    "front_panel_cost",
    "panel_cost",
    "screen_non_touch_cost",
    "screen_touch_cost",
    "hinge_cost",
    "touch_pad_cost",
    "base_cost",
    "keyboard_cost",
    "battery_cost",
    "repair_cost",
    "sale_price",
    "suggested_sale_price",
)


class PriceCalculationDraft(BaseModel):
    '''
    Unsaved PriceCalculation row, produced by bulk reconciliation or by
    manual entry. Money is Decimal and exact until to_row().
    '''
    product_name: str
    tag_no: Optional[str] = None
    grade: Optional[str] = None
    lot_number: Optional[str] = None

    make: Optional[str] = None
    model_number: Optional[str] = None
    cpu: Optional[str] = None
    generation: Optional[str] = None

    ram_present: bool = False
    ram_capacity: Optional[str] = None
    hdd_present: bool = False
    hdd: Optional[str] = None
    ssd_present: bool = False
    ssd: Optional[str] = None

    excel_ram_capacity: Optional[str] = None
    excel_hdd: Optional[str] = None
    excel_ssd: Optional[str] = None

    front_panel: str = "ok"
    front_panel_cost: Decimal = Field(default=Decimal("0"), ge=0)
    panel: str = "ok"
    panel_cost: Decimal = Field(default=Decimal("0"), ge=0)
    screen_non_touch: str = "ok"
    screen_non_touch_cost: Decimal = Field(default=Decimal("0"), ge=0)
    screen_touch: str = "ok"
    screen_touch_cost: Decimal = Field(default=Decimal("0"), ge=0)
    hinge: str = "ok"
    hinge_cost: Decimal = Field(default=Decimal("0"), ge=0)
    touch_pad: str = "ok"
    touch_pad_cost: Decimal = Field(default=Decimal("0"), ge=0)
    base: str = "ok"
    base_cost: Decimal = Field(default=Decimal("0"), ge=0)
    keyboard: str = "ok"
    keyboard_cost: Decimal = Field(default=Decimal("0"), ge=0)
    battery: str = "ok"
    battery_cost: Decimal = Field(default=Decimal("0"), ge=0)

    repair_cost: Decimal = Field(default=Decimal("0"), ge=0)
    sale_price: Decimal = Field(default=Decimal("0"), ge=0)
    suggested_sale_price: Decimal = Decimal("0")

    def to_row(self, *, include_excel_columns: bool = True) -> Dict[str, Any]:
        '''
        Column dict ready for INSERT / UPDATE.
        Money is quantized to cents; excel capacity columns are dropped when
        the destination table does not have them yet.
        '''
        exclude = set(EXCEL_CAPACITY_COLUMNS) if not include_excel_columns else None
        row = self.model_dump(exclude=exclude)
        for field in MONEY_FIELDS:
            row[field] = to_money(row[field])
        return row


class PriceCalculationDTO(BaseDTO):
    id: str
    product_name: str
    tag_no: Optional[str] = None
    grade: Optional[str] = None
    lot_number: Optional[str] = None
    make: Optional[str] = None
    model_number: Optional[str] = None
    cpu: Optional[str] = None
    generation: Optional[str] = None
    ram_present: bool = False
    ram_capacity: Optional[str] = None
    hdd_present: bool = False
    hdd: Optional[str] = None
    ssd_present: bool = False
    ssd: Optional[str] = None
    excel_ram_capacity: Optional[str] = None
    excel_hdd: Optional[str] = None
    excel_ssd: Optional[str] = None
    front_panel: str = "ok"
    front_panel_cost: float = 0.0
    panel: str = "ok"
    panel_cost: float = 0.0
    screen_non_touch: str = "ok"
    screen_non_touch_cost: float = 0.0
    screen_touch: str = "ok"
    screen_touch_cost: float = 0.0
    hinge: str = "ok"
    hinge_cost: float = 0.0
    touch_pad: str = "ok"
    touch_pad_cost: float = 0.0
    base: str = "ok"
    base_cost: float = 0.0
    keyboard: str = "ok"
    keyboard_cost: float = 0.0
    battery: str = "ok"
    battery_cost: float = 0.0
    repair_cost: float = 0.0
    sale_price: float = 0.0
    suggested_sale_price: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm_model(cls, calc) -> "PriceCalculationDTO":
        return cls.from_mapping({c: getattr(calc, c, None) for c in cls.model_fields})

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PriceCalculationDTO":
        '''
        Build from a column mapping (ORM object attributes or a selected Row).
        Missing excel capacity columns come through as None.
        '''
        data = {k: values.get(k) for k in cls.model_fields if k in values}
        for field in MONEY_FIELDS:
            data[field] = float(data.get(field) or 0)
        for flag in ("ram_present", "hdd_present", "ssd_present"):
            data[flag] = bool(data.get(flag))
        return cls(**data)
