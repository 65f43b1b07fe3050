"""Domain errors raised by the engine and the persistence gateway."""

from agriwise.utils.numbers import format_number


class AgriwiseError(Exception):
    """Base class for recoverable domain errors."""


class InsufficientStock(AgriwiseError):
    def __init__(self, listing_id, requested, available, unit="kg"):
        self.listing_id = listing_id
        self.requested = requested
        self.available = available
        self.unit = unit
        super().__init__(f"Only {format_number(available)} {unit} available")


class OwnListingOrder(AgriwiseError):
    def __init__(self, listing_id):
        self.listing_id = listing_id
        super().__init__("You cannot order from your own listing")


class NotFound(AgriwiseError):
    def __init__(self, kind, key):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key} not found")
