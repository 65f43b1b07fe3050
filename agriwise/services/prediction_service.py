import logging

from agriwise.utils.crop_rules import recommend_crop
from agriwise.utils.disease_lookup import detect_disease
from agriwise.utils.fertilizer_quantity import recommend_fertilizer

logger = logging.getLogger(__name__)


class PredictionService:
    def __init__(self, repository, rng=None):
        self.repository = repository
        self.rng = rng

    def recommend_crop(self, user, sample):
        """Run the crop rules and store the prediction for the user"""
        recommendation = recommend_crop(sample)
        logger.info(f"Crop recommendation for {user.user_id}: {recommendation.crop} "
                    f"({recommendation.confidence}%)")
        self.repository.save_crop_prediction(user.user_id, sample, recommendation)
        return recommendation

    def recommend_fertilizer(self, user, fertilizer_input):
        """Compute the fertilizer plan and store it for the user"""
        recommendation = recommend_fertilizer(fertilizer_input)
        self.repository.save_fertilizer_recommendation(user.user_id, fertilizer_input, recommendation)
        return recommendation

    def detect_disease(self, user, crop_type):
        """Simulated detection, stored like a real one"""
        detection = detect_disease(crop_type, self.rng)
        self.repository.save_disease_detection(user.user_id, detection)
        return detection

    def history(self, user, kind):
        return self.repository.list_predictions(user.user_id, kind)
