from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart
from refurb_pricing.models.price_calculation import PriceCalculation

__all__ = ["Product", "SparePart", "PriceCalculation"]
