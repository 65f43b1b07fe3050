import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends, Query
from fastapi.middleware.cors import CORSMiddleware

from agriwise.authorization import get_current_user, require_role
from agriwise.config import CORS_ALLOWED_ORIGINS, LOG_LEVEL
from agriwise.errors import AgriwiseError, InsufficientStock, NotFound
from agriwise.models.disease import DiseaseDetection, DiseaseRequest
from agriwise.models.fertilizer import FertilizerInput, FertilizerRecommendation
from agriwise.models.land import InquiryView, Inquiry, Land, LandCreate, OwnerContact
from agriwise.models.marketplace import Category, Listing, ListingCreate, Order, OrderRequest
from agriwise.models.soil import CropRecommendation, SoilSample
from agriwise.models.user import Profile, ProfileUpdate, Role, UserContext
from agriwise.models.water import IrrigationStatus
from agriwise.services.land_service import LandService
from agriwise.services.marketplace_service import MarketplaceService
from agriwise.services.prediction_service import PredictionService
from agriwise.services.storage import get_repository
from agriwise.utils.data_processing import irrigation_status

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="AgriWise Connect API",
    description="Crop and fertilizer recommendations, produce marketplace and land listings "
                "for farmers, landowners and buyers",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

FARMER_QUICK_ACTIONS = [
    {"title": "Crop Prediction", "href": "/crop-recommendation",
     "description": "Get crop recommendations based on your soil and weather conditions"},
    {"title": "Fertilizer Guide", "href": "/fertilizer-recommendation",
     "description": "Calculate optimal fertilizer requirements for maximum yield"},
    {"title": "Disease Detection", "href": "/disease-detection",
     "description": "Detect diseases and get treatment advice"},
    {"title": "Water Management", "href": "/water-status",
     "description": "Monitor soil moisture and optimize your irrigation schedules"},
    {"title": "Sell Your Produce", "href": "/listings",
     "description": "List your harvested crops directly to buyers, no middlemen"},
]


# Dependency injections
def get_prediction_service(repository=Depends(get_repository)):
    return PredictionService(repository)


def get_marketplace_service(repository=Depends(get_repository)):
    return MarketplaceService(repository)


def get_land_service(repository=Depends(get_repository)):
    return LandService(repository)


def to_http_exception(error: AgriwiseError) -> HTTPException:
    """Map a domain error to the HTTP status the client should see, 400 unless listed"""
    if isinstance(error, InsufficientStock):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, NotFound):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


@app.get("/health")
async def health_check():
    """
    Health check endpoint
    """
    return {"status": "healthy"}


@app.post("/crop-recommendation", response_model=CropRecommendation)
def crop_recommendation(
        sample: SoilSample,
        user: UserContext = Depends(require_role(Role.FARMER)),
        prediction_service: PredictionService = Depends(get_prediction_service)
):
    """
    Recommend a crop from soil NPK, pH and season.

    Returns:
    - Recommended crop
    - Confidence percentage
    - Growing tips
    """
    try:
        return prediction_service.recommend_crop(user, sample)
    except Exception as e:
        logger.error(f"Error processing crop recommendation: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/fertilizer-recommendation", response_model=FertilizerRecommendation)
def fertilizer_recommendation(
        fertilizer_input: FertilizerInput,
        user: UserContext = Depends(require_role(Role.FARMER)),
        prediction_service: PredictionService = Depends(get_prediction_service)
):
    """
    Recommend a fertilizer, kg per acre and schedule from the crop's NPK deficit.
    """
    try:
        return prediction_service.recommend_fertilizer(user, fertilizer_input)
    except Exception as e:
        logger.error(f"Error processing fertilizer recommendation: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/disease-detection", response_model=DiseaseDetection)
def disease_detection(
        request: DiseaseRequest,
        user: UserContext = Depends(require_role(Role.FARMER)),
        prediction_service: PredictionService = Depends(get_prediction_service)
):
    """
    Simulated disease detection: a known disease of the crop with a confidence score.
    """
    try:
        return prediction_service.detect_disease(user, request.crop_type)
    except Exception as e:
        logger.error(f"Error processing disease detection: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/predictions/{kind}")
def prediction_history(
        kind: str,
        user: UserContext = Depends(get_current_user),
        prediction_service: PredictionService = Depends(get_prediction_service)
):
    """
    Stored predictions of the current user; kind is crop, fertilizer or disease.
    """
    try:
        return prediction_service.history(user, kind)
    except AgriwiseError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error reading prediction history: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/water-status", response_model=IrrigationStatus)
def water_status(
        moisture: float = Query(..., ge=0, le=100),
        temperature: Optional[float] = Query(None, ge=-50, le=60)
):
    """
    Irrigation advice for a soil moisture reading (percent) and optional air temperature (Celsius).
    """
    return irrigation_status(moisture, temperature)


@app.post("/listings", response_model=Listing, status_code=201)
def add_listing(
        listing: ListingCreate,
        user: UserContext = Depends(require_role(Role.FARMER)),
        marketplace: MarketplaceService = Depends(get_marketplace_service)
):
    try:
        return marketplace.add_listing(user, listing)
    except Exception as e:
        logger.error(f"Error adding listing: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/listings", response_model=List[Listing])
def browse_listings(
        category: Optional[Category] = None,
        user: UserContext = Depends(get_current_user),
        marketplace: MarketplaceService = Depends(get_marketplace_service)
):
    """
    Available produce, newest first, optionally filtered by category.
    """
    try:
        return marketplace.browse(category)
    except Exception as e:
        logger.error(f"Error listing produce: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/listings/{listing_id}", response_model=Listing)
def get_listing(
        listing_id: str,
        user: UserContext = Depends(get_current_user),
        marketplace: MarketplaceService = Depends(get_marketplace_service)
):
    try:
        return marketplace.get_listing(listing_id)
    except AgriwiseError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting listing {listing_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/orders", response_model=Order, status_code=201)
def place_order(
        request: OrderRequest,
        user: UserContext = Depends(require_role(Role.BUYER, Role.FARMER)),
        marketplace: MarketplaceService = Depends(get_marketplace_service)
):
    """
    Order from a listing. Fails with 409 when the listing has less than requested.
    """
    try:
        return marketplace.place_order(user, request)
    except AgriwiseError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error placing order: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/orders", response_model=List[Order])
def list_orders(
        user: UserContext = Depends(get_current_user),
        marketplace: MarketplaceService = Depends(get_marketplace_service)
):
    """
    Orders the current user placed or received.
    """
    try:
        return marketplace.orders(user)
    except Exception as e:
        logger.error(f"Error listing orders: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/lands", response_model=Land, status_code=201)
def add_land(
        land: LandCreate,
        user: UserContext = Depends(require_role(Role.LANDOWNER)),
        land_service: LandService = Depends(get_land_service)
):
    try:
        return land_service.add_land(user, land)
    except Exception as e:
        logger.error(f"Error adding land: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/lands", response_model=List[Land])
def list_lands(
        user: UserContext = Depends(get_current_user),
        land_service: LandService = Depends(get_land_service)
):
    try:
        return land_service.list_lands()
    except Exception as e:
        logger.error(f"Error listing lands: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/lands/{land_id}/contact", response_model=OwnerContact)
def contact_owner(
        land_id: str,
        user: UserContext = Depends(get_current_user),
        land_service: LandService = Depends(get_land_service)
):
    """
    Owner contact details for a land; the owner sees an inquiry from the caller.
    """
    try:
        return land_service.contact_owner(user, land_id)
    except AgriwiseError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error contacting owner of land {land_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/inquiries", response_model=List[InquiryView])
def list_inquiries(
        user: UserContext = Depends(require_role(Role.LANDOWNER)),
        land_service: LandService = Depends(get_land_service)
):
    try:
        return land_service.inquiries(user)
    except Exception as e:
        logger.error(f"Error listing inquiries: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/inquiries/{inquiry_id}/read", response_model=Inquiry)
def mark_inquiry_read(
        inquiry_id: str,
        user: UserContext = Depends(require_role(Role.LANDOWNER)),
        land_service: LandService = Depends(get_land_service)
):
    try:
        return land_service.mark_read(user, inquiry_id)
    except AgriwiseError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error marking inquiry {inquiry_id} read: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/profile", response_model=Profile)
def get_profile(
        user: UserContext = Depends(get_current_user),
        repository=Depends(get_repository)
):
    profile = repository.get_profile(user.user_id)
    if profile is None:
        return Profile(id=user.user_id, email=user.email or "", role=user.role)
    return profile


@app.put("/profile", response_model=Profile)
def update_profile(
        update: ProfileUpdate,
        user: UserContext = Depends(get_current_user),
        repository=Depends(get_repository)
):
    """
    Update name and phone; the role always comes from the authenticated user.
    """
    try:
        current = repository.get_profile(user.user_id) or Profile(
            id=user.user_id, email=user.email or "", role=user.role
        )
        changes = update.model_dump(exclude_unset=True)
        changes["role"] = user.role
        return repository.save_profile(current.model_copy(update=changes))
    except Exception as e:
        logger.error(f"Error updating profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/dashboard")
def dashboard(
        user: UserContext = Depends(get_current_user),
        marketplace: MarketplaceService = Depends(get_marketplace_service),
        land_service: LandService = Depends(get_land_service)
):
    """
    Role-specific dashboard data.
    """
    try:
        match user.role:
            case Role.FARMER:
                return {"role": user.role, "quick_actions": FARMER_QUICK_ACTIONS}
            case Role.LANDOWNER:
                return {"role": user.role, "summary": land_service.summary(user)}
            case Role.BUYER:
                counts = {category.value: count for category, count in marketplace.category_counts().items()}
                counts["Lands"] = len(land_service.list_lands(available_only=True))
                return {"role": user.role, "category_counts": counts}
    except Exception as e:
        logger.error(f"Error building dashboard: {e}")
        raise HTTPException(status_code=500, detail=str(e))
