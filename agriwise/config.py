import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Firebase settings
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH")

# "firestore" for the managed store, "memory" for local runs
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "firestore").lower()

# "firebase" verifies ID tokens, "header" trusts X-User-Id / X-User-Role (local only)
AUTH_MODE = os.getenv("AUTH_MODE", "firebase").lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Firestore collections
CROP_PREDICTIONS_COLLECTION = "crop_predictions"
FERTILIZER_RECOMMENDATIONS_COLLECTION = "fertilizer_recommendations"
DISEASE_DETECTIONS_COLLECTION = "disease_detections"
LISTINGS_COLLECTION = "marketplace_listings"
ORDERS_COLLECTION = "orders"
LANDS_COLLECTION = "lands"
INQUIRIES_COLLECTION = "buyer_inquiries"
PROFILES_COLLECTION = "profiles"

PREDICTION_COLLECTIONS = {
    "crop": CROP_PREDICTIONS_COLLECTION,
    "fertilizer": FERTILIZER_RECOMMENDATIONS_COLLECTION,
    "disease": DISEASE_DETECTIONS_COLLECTION,
}
