"""
Marketplace arithmetic: produce categories and order settlement.

``place_order`` only computes the outcome of an order against a listing
snapshot. Making the read-check-write atomic is the job of the persistence
gateway that calls it.
"""

import logging
import uuid
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from agriwise.errors import InsufficientStock, OwnListingOrder
from agriwise.models.marketplace import Category, Listing, Order, OrderRequest

logger = logging.getLogger(__name__)

# Checked in this order; the first set with a matching keyword wins
CATEGORY_KEYWORDS = (
    (Category.VEGETABLE, ("tomato", "potato", "onion", "carrot", "cabbage", "spinach",
                          "brinjal", "cauliflower", "beans", "peas")),
    (Category.FRUIT, ("mango", "banana", "apple", "orange", "grape", "papaya", "guava",
                      "pomegranate", "watermelon")),
    (Category.GRAIN, ("rice", "wheat", "maize", "corn", "millet", "barley", "oats", "sorghum")),
)


def classify_crop(crop_name: str) -> Category:
    name = crop_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return Category.OTHER


def count_by_category(listings: Iterable[Listing]) -> Dict[Category, int]:
    """Count available listings per category (every category present, zero if empty)."""
    counts = {category: 0 for category in Category}
    for listing in listings:
        if listing.is_available:
            counts[classify_crop(listing.crop_name)] += 1
    return counts


def filter_by_category(listings: Iterable[Listing], category: Optional[Category]):
    if category is None:
        return list(listings)
    return [listing for listing in listings if classify_crop(listing.crop_name) == category]


def _decimal(value) -> Decimal:
    return Decimal(str(value))


def place_order(listing: Listing, request: OrderRequest, buyer_id: str,
                order_id: Optional[str] = None) -> Tuple[Order, Listing]:
    """
    Settle an order against a listing snapshot.

    Args:
        listing: Current state of the listing
        request: Quantity the buyer asked for
        buyer_id: Opaque id of the ordering user
        order_id: Id for the new order, generated when omitted

    Returns:
        The pending order and the listing with its quantity decremented

    Raises:
        InsufficientStock: requested quantity exceeds what is listed
        OwnListingOrder: buyer is the seller of the listing
    """
    if buyer_id == listing.seller_id:
        raise OwnListingOrder(listing.id)

    requested = _decimal(request.requested_quantity)
    available = _decimal(listing.quantity)
    if requested > available:
        logger.warning(
            f"Rejected order on {listing.id}: requested {request.requested_quantity}, "
            f"available {listing.quantity}"
        )
        raise InsufficientStock(listing.id, request.requested_quantity, listing.quantity, listing.unit)

    total = requested * _decimal(listing.price_per_unit)
    remaining = available - requested

    order = Order(
        id=order_id or uuid.uuid4().hex,
        listing_id=listing.id,
        buyer_id=buyer_id,
        seller_id=listing.seller_id,
        quantity=request.requested_quantity,
        unit=listing.unit,
        total_amount=float(total),
        status="pending",
        payment_status="pending",
    )
    updated = listing.model_copy(update={"quantity": float(remaining)})
    return order, updated
