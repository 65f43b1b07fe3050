"""
Persistence gateway shared by the Firestore and in-memory stores.

Handlers and services depend on ``Repository`` only. Prediction history is
stored as flat documents whose fields are built by the ``*_record`` helpers
below, so both stores keep identical shapes.
"""

from datetime import datetime, timezone
from typing import List, Optional, Protocol

from agriwise.models.disease import DiseaseDetection
from agriwise.models.fertilizer import FertilizerInput, FertilizerRecommendation
from agriwise.models.land import Inquiry, Land, LandCreate
from agriwise.models.marketplace import Listing, ListingCreate, Order, OrderRequest
from agriwise.models.soil import CropRecommendation, SoilSample
from agriwise.models.user import Profile


class Repository(Protocol):
    def save_crop_prediction(self, user_id: str, sample: SoilSample,
                             recommendation: CropRecommendation) -> str: ...

    def save_fertilizer_recommendation(self, user_id: str, fertilizer_input: FertilizerInput,
                                       recommendation: FertilizerRecommendation) -> str: ...

    def save_disease_detection(self, user_id: str, detection: DiseaseDetection) -> str: ...

    def list_predictions(self, user_id: str, kind: str) -> List[dict]: ...

    def create_listing(self, seller_id: str, listing: ListingCreate) -> Listing: ...

    def get_listing(self, listing_id: str) -> Listing: ...

    def list_listings(self, available_only: bool = True) -> List[Listing]: ...

    def settle_order(self, request: OrderRequest, buyer_id: str) -> Order: ...

    def list_orders(self, user_id: str) -> List[Order]: ...

    def create_land(self, owner_id: str, land: LandCreate) -> Land: ...

    def get_land(self, land_id: str) -> Land: ...

    def list_lands(self, owner_id: Optional[str] = None, available_only: bool = False) -> List[Land]: ...

    def create_inquiry(self, buyer_id: str, seller_id: str, listing_type: str,
                       listing_id: str, message: Optional[str] = None) -> Inquiry: ...

    def list_inquiries(self, seller_id: str, listing_type: Optional[str] = None) -> List[Inquiry]: ...

    def mark_inquiry_read(self, inquiry_id: str, seller_id: str) -> Inquiry: ...

    def get_profile(self, user_id: str) -> Optional[Profile]: ...

    def save_profile(self, profile: Profile) -> Profile: ...


def _now():
    return datetime.now(timezone.utc)


def crop_prediction_record(user_id, sample, recommendation):
    return {
        "user_id": user_id,
        "nitrogen": sample.nitrogen,
        "phosphorus": sample.phosphorus,
        "potassium": sample.potassium,
        "ph_level": sample.ph_level,
        "temperature": sample.temperature,
        "humidity": sample.humidity,
        "rainfall": sample.rainfall,
        "season": sample.season.value,
        "recommended_crop": recommendation.crop,
        "confidence": recommendation.confidence,
        "created_at": _now(),
    }


def fertilizer_record(user_id, fertilizer_input, recommendation):
    return {
        "user_id": user_id,
        "crop_type": fertilizer_input.crop,
        "nitrogen_level": fertilizer_input.current_n,
        "phosphorus_level": fertilizer_input.current_p,
        "potassium_level": fertilizer_input.current_k,
        "recommended_fertilizer": recommendation.fertilizer_name,
        "quantity_per_acre": recommendation.quantity_per_acre,
        "application_schedule": recommendation.schedule,
        "created_at": _now(),
    }


def disease_record(user_id, detection):
    return {
        "user_id": user_id,
        "crop_type": detection.crop_type,
        "disease_name": detection.disease_name,
        "severity": detection.severity.value,
        "causes": detection.causes,
        "prevention": detection.prevention,
        "treatment": detection.treatment,
        "confidence": detection.confidence,
        "created_at": _now(),
    }
