# refurb_pricing/exceptions.py
class NoValidRowsError(ValueError):
    """Raised when a bulk upload admits zero rows."""


class RecordNotFoundError(ValueError):
    """Raised when a master or calculation id does not exist."""
