import logging
import threading
import uuid

from agriwise.config import PREDICTION_COLLECTIONS
from agriwise.errors import NotFound
from agriwise.models.land import Inquiry, Land
from agriwise.models.marketplace import Listing
from agriwise.services.repository import crop_prediction_record, disease_record, fertilizer_record
from agriwise.utils.market import place_order

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """Process-local store with the same contract as FirebaseService.

    A single lock guards every write and every read snapshot, so order
    settlement is an atomic conditional decrement just like the Firestore
    transaction.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._predictions = {kind: [] for kind in PREDICTION_COLLECTIONS}
        self._listings = {}
        self._orders = {}
        self._lands = {}
        self._inquiries = {}
        self._profiles = {}

    @staticmethod
    def _new_id():
        return uuid.uuid4().hex

    # Predictions

    def _save_prediction(self, kind, record):
        record["id"] = self._new_id()
        with self._lock:
            self._predictions[kind].append(record)
        return record["id"]

    def save_crop_prediction(self, user_id, sample, recommendation):
        return self._save_prediction("crop", crop_prediction_record(user_id, sample, recommendation))

    def save_fertilizer_recommendation(self, user_id, fertilizer_input, recommendation):
        return self._save_prediction("fertilizer",
                                     fertilizer_record(user_id, fertilizer_input, recommendation))

    def save_disease_detection(self, user_id, detection):
        return self._save_prediction("disease", disease_record(user_id, detection))

    def list_predictions(self, user_id, kind):
        if kind not in self._predictions:
            raise NotFound("Prediction kind", kind)
        with self._lock:
            records = [dict(r) for r in self._predictions[kind] if r["user_id"] == user_id]
        return list(reversed(records))

    # Marketplace

    def create_listing(self, seller_id, listing):
        created = Listing(id=self._new_id(), seller_id=seller_id, **listing.model_dump())
        with self._lock:
            self._listings[created.id] = created
        logger.info(f"Seller {seller_id} listed {created.quantity:g} {created.unit} of {created.crop_name}")
        return created

    def get_listing(self, listing_id):
        with self._lock:
            listing = self._listings.get(listing_id)
        if listing is None:
            raise NotFound("Listing", listing_id)
        return listing

    def list_listings(self, available_only=True):
        with self._lock:
            listings = list(self._listings.values())
        listings = [l for l in listings if l.is_available or not available_only]
        return sorted(listings, key=lambda l: l.created_at, reverse=True)

    def settle_order(self, request, buyer_id):
        with self._lock:
            listing = self._listings.get(request.listing_id)
            if listing is None:
                raise NotFound("Listing", request.listing_id)
            order, updated = place_order(listing, request, buyer_id, order_id=self._new_id())
            self._listings[updated.id] = updated
            self._orders[order.id] = order
        logger.info(f"Order {order.id} placed on listing {order.listing_id} for {order.total_amount}")
        return order

    def list_orders(self, user_id):
        with self._lock:
            orders = list(self._orders.values())
        orders = [o for o in orders if user_id in (o.buyer_id, o.seller_id)]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # Lands and inquiries

    def create_land(self, owner_id, land):
        created = Land(id=self._new_id(), owner_id=owner_id, **land.model_dump())
        with self._lock:
            self._lands[created.id] = created
        return created

    def get_land(self, land_id):
        with self._lock:
            land = self._lands.get(land_id)
        if land is None:
            raise NotFound("Land", land_id)
        return land

    def list_lands(self, owner_id=None, available_only=False):
        with self._lock:
            lands = list(self._lands.values())
        lands = [
            land for land in lands
            if (owner_id is None or land.owner_id == owner_id)
            and (land.is_available or not available_only)
        ]
        return sorted(lands, key=lambda l: l.created_at, reverse=True)

    def create_inquiry(self, buyer_id, seller_id, listing_type, listing_id, message=None):
        inquiry = Inquiry(id=self._new_id(), buyer_id=buyer_id, seller_id=seller_id,
                          listing_type=listing_type, listing_id=listing_id, message=message)
        with self._lock:
            self._inquiries[inquiry.id] = inquiry
        return inquiry

    def list_inquiries(self, seller_id, listing_type=None):
        with self._lock:
            inquiries = list(self._inquiries.values())
        inquiries = [
            i for i in inquiries
            if i.seller_id == seller_id and (listing_type is None or i.listing_type == listing_type)
        ]
        return sorted(inquiries, key=lambda i: i.created_at, reverse=True)

    def mark_inquiry_read(self, inquiry_id, seller_id):
        with self._lock:
            inquiry = self._inquiries.get(inquiry_id)
            if inquiry is None or inquiry.seller_id != seller_id:
                raise NotFound("Inquiry", inquiry_id)
            inquiry = inquiry.model_copy(update={"is_read": True})
            self._inquiries[inquiry_id] = inquiry
        return inquiry

    # Profiles

    def get_profile(self, user_id):
        with self._lock:
            return self._profiles.get(user_id)

    def save_profile(self, profile):
        with self._lock:
            self._profiles[profile.id] = profile
        return profile
