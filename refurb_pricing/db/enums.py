# refurb_pricing/db/enums.py
import enum


class Component(enum.Enum):
    '''
    The nine physical laptop parts tracked for condition and repair cost.
    value is the canonical spreadsheet field name used by the field resolver.
    '''
    front_panel = "frontPanel"
    panel = "panel"
    screen_non_touch = "screenNonTouch"
    screen_touch = "screenTouch"
    hinge = "hinge"
    touch_pad = "touchPad"
    base = "base"
    keyboard = "keyboard"
    battery = "battery"

    @property
    def cost_attr(self) -> str:
        # PriceCalculation 上对应的费用列
        return f"{self.name}_cost"


class MasterType(enum.Enum):
    PRODUCT = "Product"
    SPARE_PART = "Spare Part"
