import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from enum import Enum
import json
import os
import logging
import traceback

from agriwise.config import (
    FIREBASE_CREDENTIALS_PATH,
    CROP_PREDICTIONS_COLLECTION,
    FERTILIZER_RECOMMENDATIONS_COLLECTION,
    DISEASE_DETECTIONS_COLLECTION,
    LISTINGS_COLLECTION,
    ORDERS_COLLECTION,
    LANDS_COLLECTION,
    INQUIRIES_COLLECTION,
    PROFILES_COLLECTION,
    PREDICTION_COLLECTIONS,
)
from agriwise.errors import NotFound
from agriwise.models.land import Inquiry, Land
from agriwise.models.marketplace import Listing, Order
from agriwise.models.user import Profile
from agriwise.services.repository import crop_prediction_record, disease_record, fertilizer_record
from agriwise.utils.market import place_order

logger = logging.getLogger(__name__)


def initialize_firebase():
    """Initialize the default Firebase app once per process"""
    if firebase_admin._apps:
        return firebase_admin.get_app()

    logger.info("Initializing Firebase app")
    # First try to read from environment variable
    cred_json = os.getenv("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        logger.info("Using credentials from environment variable")
        try:
            cred = credentials.Certificate(json.loads(cred_json))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse credentials JSON: {e}")
            logger.info("Falling back to credentials file")
            cred = credentials.Certificate(FIREBASE_CREDENTIALS_PATH)
    else:
        logger.info("Using credentials from file path")
        cred = credentials.Certificate(FIREBASE_CREDENTIALS_PATH)

    return firebase_admin.initialize_app(cred)


class FirebaseService:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            logger.info("Creating new FirebaseService instance")
            instance = super(FirebaseService, cls).__new__(cls)
            try:
                initialize_firebase()
                instance.db = firestore.client()
                logger.info("Firebase initialized successfully")
            except Exception as e:
                logger.error(f"Error initializing Firebase: {e}")
                logger.error(traceback.format_exc())
                instance.db = None
                logger.warning("Setting db to None, every request will fail until restart")

            cls._instance = instance

        return cls._instance

    def _collection(self, name):
        if self.db is None:
            logger.error("Firestore client is not initialized")
            raise RuntimeError("Firestore client is not initialized")
        return self.db.collection(name)

    def _add(self, collection, data):
        doc_ref = self._collection(collection).document()
        doc_ref.set(self._prepare_for_firestore(data))
        logger.info(f"Created document {doc_ref.id} in {collection}")
        return doc_ref.id

    def _get(self, collection, doc_id, kind):
        doc = self._collection(collection).document(doc_id).get()
        if not doc.exists:
            logger.warning(f"Document {doc_id} does not exist in {collection}")
            raise NotFound(kind, doc_id)
        data = doc.to_dict()
        data["id"] = doc.id
        return data

    def _where(self, collection, **equals):
        query = self._collection(collection)
        for field, value in equals.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        return [dict(doc.to_dict(), id=doc.id) for doc in query.stream()]

    # Predictions

    def save_crop_prediction(self, user_id, sample, recommendation):
        return self._add(CROP_PREDICTIONS_COLLECTION,
                         crop_prediction_record(user_id, sample, recommendation))

    def save_fertilizer_recommendation(self, user_id, fertilizer_input, recommendation):
        return self._add(FERTILIZER_RECOMMENDATIONS_COLLECTION,
                         fertilizer_record(user_id, fertilizer_input, recommendation))

    def save_disease_detection(self, user_id, detection):
        return self._add(DISEASE_DETECTIONS_COLLECTION, disease_record(user_id, detection))

    def list_predictions(self, user_id, kind):
        collection = PREDICTION_COLLECTIONS.get(kind)
        if collection is None:
            raise NotFound("Prediction kind", kind)
        records = self._where(collection, user_id=user_id)
        return sorted(records, key=lambda r: r.get("created_at"), reverse=True)

    # Marketplace

    def create_listing(self, seller_id, listing):
        doc_ref = self._collection(LISTINGS_COLLECTION).document()
        created = Listing(id=doc_ref.id, seller_id=seller_id, **listing.model_dump())
        doc_ref.set(self._prepare_for_firestore(created))
        logger.info(f"Seller {seller_id} listed {created.quantity:g} {created.unit} of {created.crop_name}")
        return created

    def get_listing(self, listing_id):
        return Listing(**self._get(LISTINGS_COLLECTION, listing_id, "Listing"))

    def list_listings(self, available_only=True):
        if available_only:
            records = self._where(LISTINGS_COLLECTION, is_available=True)
        else:
            records = [dict(doc.to_dict(), id=doc.id)
                       for doc in self._collection(LISTINGS_COLLECTION).stream()]
        listings = [Listing(**record) for record in records]
        return sorted(listings, key=lambda l: l.created_at, reverse=True)

    def settle_order(self, request, buyer_id):
        """Check stock, decrement it and write the order in one transaction"""
        listing_ref = self._collection(LISTINGS_COLLECTION).document(request.listing_id)
        order_ref = self._collection(ORDERS_COLLECTION).document()
        transaction = self.db.transaction()

        @firestore.transactional
        def settle_in_transaction(transaction):
            snapshot = listing_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFound("Listing", request.listing_id)
            listing = Listing(**dict(snapshot.to_dict(), id=snapshot.id))
            order, updated = place_order(listing, request, buyer_id, order_id=order_ref.id)
            transaction.update(listing_ref, {
                "quantity": updated.quantity,
                "is_available": updated.is_available,
                "updated_at": firestore.SERVER_TIMESTAMP,
            })
            transaction.set(order_ref, self._prepare_for_firestore(order))
            return order

        order = settle_in_transaction(transaction)
        logger.info(f"Order {order.id} placed on listing {order.listing_id} for {order.total_amount}")
        return order

    def list_orders(self, user_id):
        records = {r["id"]: r for r in self._where(ORDERS_COLLECTION, buyer_id=user_id)}
        records.update({r["id"]: r for r in self._where(ORDERS_COLLECTION, seller_id=user_id)})
        orders = [Order(**record) for record in records.values()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # Lands and inquiries

    def create_land(self, owner_id, land):
        doc_ref = self._collection(LANDS_COLLECTION).document()
        created = Land(id=doc_ref.id, owner_id=owner_id, **land.model_dump())
        doc_ref.set(self._prepare_for_firestore(created))
        logger.info(f"Owner {owner_id} listed land {doc_ref.id}")
        return created

    def get_land(self, land_id):
        return Land(**self._get(LANDS_COLLECTION, land_id, "Land"))

    def list_lands(self, owner_id=None, available_only=False):
        equals = {}
        if owner_id is not None:
            equals["owner_id"] = owner_id
        if available_only:
            equals["is_available"] = True
        lands = [Land(**record) for record in self._where(LANDS_COLLECTION, **equals)]
        return sorted(lands, key=lambda l: l.created_at, reverse=True)

    def create_inquiry(self, buyer_id, seller_id, listing_type, listing_id, message=None):
        doc_ref = self._collection(INQUIRIES_COLLECTION).document()
        inquiry = Inquiry(id=doc_ref.id, buyer_id=buyer_id, seller_id=seller_id,
                          listing_type=listing_type, listing_id=listing_id, message=message)
        doc_ref.set(self._prepare_for_firestore(inquiry))
        return inquiry

    def list_inquiries(self, seller_id, listing_type=None):
        equals = {"seller_id": seller_id}
        if listing_type is not None:
            equals["listing_type"] = listing_type
        inquiries = [Inquiry(**record) for record in self._where(INQUIRIES_COLLECTION, **equals)]
        return sorted(inquiries, key=lambda i: i.created_at, reverse=True)

    def mark_inquiry_read(self, inquiry_id, seller_id):
        inquiry = Inquiry(**self._get(INQUIRIES_COLLECTION, inquiry_id, "Inquiry"))
        if inquiry.seller_id != seller_id:
            raise NotFound("Inquiry", inquiry_id)
        self._collection(INQUIRIES_COLLECTION).document(inquiry_id).update({"is_read": True})
        return inquiry.model_copy(update={"is_read": True})

    # Profiles

    def get_profile(self, user_id):
        try:
            return Profile(**self._get(PROFILES_COLLECTION, user_id, "Profile"))
        except NotFound:
            return None

    def save_profile(self, profile):
        data = self._prepare_for_firestore(profile)
        data.pop("id", None)
        self._collection(PROFILES_COLLECTION).document(profile.id).set(data, merge=True)
        logger.info(f"Saved profile {profile.id}")
        return profile

    def _prepare_for_firestore(self, data):
        """Convert Pydantic models or complex objects to dictionaries for Firestore"""
        if hasattr(data, "model_dump"):
            # It's a Pydantic model, use its model_dump() method
            return self._prepare_for_firestore(data.model_dump())
        elif isinstance(data, Enum):
            return data.value
        elif isinstance(data, dict):
            return {k: self._prepare_for_firestore(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._prepare_for_firestore(item) for item in data]
        else:
            # Return as is for primitive types
            return data
