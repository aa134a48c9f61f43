# refurb_pricing/services/spare_part_service.py
from typing import Any, Dict, List
from uuid import uuid4
from sqlalchemy.orm import Session

from refurb_pricing.db.enums import Component
from refurb_pricing.exceptions import RecordNotFoundError
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.services.cost_calculation_service import to_money
from refurb_pricing.services.validation_service import optional_text, validate_name, validate_price

# 校验报错时展示的部件名
_COMPONENT_LABELS = {
    Component.front_panel: "Front panel",
    Component.panel: "Panel",
    Component.screen_non_touch: "Screen (non-touch)",
    Component.screen_touch: "Screen (touch)",
    Component.hinge: "Hinge",
    Component.touch_pad: "Touch pad",
    Component.base: "Base",
    Component.keyboard: "Keyboard",
    Component.battery: "Battery",
}


class SparePartService:
    """
    SparePart master maintenance (manual entry).
    Every component price is optional; None means unknown / not applicable.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_spare_parts(self) -> List[SparePart]:
        return (
            self.db.query(SparePart)
            .order_by(SparePart.created_at.desc())
            .all()
        )

    def get_spare_part(self, spare_part_id: str) -> SparePart:
        part = self.db.get(SparePart, spare_part_id)
        if not part:
            raise RecordNotFoundError(f"Spare part not found: {spare_part_id}")
        return part

    def create_spare_part(self, **fields: Any) -> SparePart:
        '''
        :param fields: make, model_number, cpu, generation, product_name and the
            nine component prices (front_panel ... battery)
        '''
        part = SparePart(id=str(uuid4()))
        self._apply(part, self._validated(fields))
        self.db.add(part)
        self.db.flush()
        return part

    def update_spare_part(self, spare_part_id: str, **fields: Any) -> SparePart:
        part = self.get_spare_part(spare_part_id)
        self._apply(part, self._validated(fields))
        self.db.flush()
        return part

    def delete_spare_part(self, spare_part_id: str) -> None:
        part = self.get_spare_part(spare_part_id)
        self.db.delete(part)
        self.db.flush()

    def bulk_delete(self, ids: List[str]) -> int:
        if not ids:
            return 0
        deleted = (
            self.db.query(SparePart)
            .filter(SparePart.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted

    @staticmethod
    def _validated(fields: Dict[str, Any]) -> Dict[str, Any]:
        values = {
            "make": validate_name(fields.get("make"), "Make"),
            "model_number": validate_name(fields.get("model_number"), "Model number"),
            "cpu": optional_text(fields.get("cpu")),
            "generation": optional_text(fields.get("generation")),
            "product_name": optional_text(fields.get("product_name")),
        }
        for component in Component:
            price = validate_price(fields.get(component.name), _COMPONENT_LABELS[component])
            values[component.name] = to_money(price) if price is not None else None
        return values

    @staticmethod
    def _apply(part: SparePart, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            setattr(part, key, value)
