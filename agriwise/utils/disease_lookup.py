"""
Simulated disease detection.

There is no classifier behind this: a record is drawn at random from the
crop's table together with a random confidence. Pass a seeded
``random.Random`` to get repeatable results.
"""

import logging
import random
from typing import Dict, List, Optional

from agriwise.models.disease import DiseaseDetection, DiseaseRecord, Severity

logger = logging.getLogger(__name__)

DEFAULT_CROP = "tomato"
CONFIDENCE_RANGE = (75, 95)


def _record(name, severity, causes, prevention, treatment):
    return DiseaseRecord(
        disease_name=name, severity=severity, causes=causes,
        prevention=prevention, treatment=treatment,
    )


DISEASE_DATABASE: Dict[str, List[DiseaseRecord]] = {
    "rice": [
        _record("Blast Disease", Severity.HIGH,
                "Fungus Magnaporthe oryzae; humid conditions",
                "Use resistant varieties, balanced fertilization",
                "Apply Tricyclazole or Isoprothiolane fungicides"),
        _record("Bacterial Leaf Blight", Severity.MEDIUM,
                "Xanthomonas oryzae bacteria; infected seeds",
                "Use certified seeds, proper drainage",
                "Copper-based bactericides, remove infected plants"),
    ],
    "wheat": [
        _record("Rust Disease", Severity.HIGH,
                "Puccinia fungi; cool moist conditions",
                "Plant resistant varieties, early sowing",
                "Apply propiconazole or tebuconazole"),
        _record("Powdery Mildew", Severity.MEDIUM,
                "Blumeria graminis fungus; high humidity",
                "Adequate spacing, avoid excess nitrogen",
                "Sulfur-based fungicides"),
    ],
    "tomato": [
        _record("Early Blight", Severity.MEDIUM,
                "Alternaria solani fungus; warm wet weather",
                "Crop rotation, remove infected debris",
                "Chlorothalonil or mancozeb sprays"),
        _record("Late Blight", Severity.HIGH,
                "Phytophthora infestans; cool moist conditions",
                "Resistant varieties, good air circulation",
                "Metalaxyl or copper fungicides"),
    ],
    "potato": [
        _record("Late Blight", Severity.HIGH,
                "Phytophthora infestans; humid conditions",
                "Use certified tubers, proper hilling",
                "Mancozeb or metalaxyl applications"),
        _record("Common Scab", Severity.LOW,
                "Streptomyces scabies; alkaline soil",
                "Maintain soil pH 5.0-5.2, avoid lime",
                "No chemical control; use resistant varieties"),
    ],
    "cotton": [
        _record("Bacterial Blight", Severity.MEDIUM,
                "Xanthomonas citri; infected seeds",
                "Acid-delinted certified seeds",
                "Streptocycline sprays"),
        _record("Verticillium Wilt", Severity.HIGH,
                "Verticillium dahliae fungus; soil-borne",
                "Long crop rotation, resistant varieties",
                "No effective chemical control"),
    ],
}


def diseases_for(crop_type: str) -> List[DiseaseRecord]:
    return DISEASE_DATABASE.get(crop_type.strip().lower(), DISEASE_DATABASE[DEFAULT_CROP])


def detect_disease(crop_type: str, rng: Optional[random.Random] = None) -> DiseaseDetection:
    """Pick a disease record for the crop and attach a confidence score."""
    rng = rng or random.Random()
    record = rng.choice(diseases_for(crop_type))
    confidence = rng.randint(*CONFIDENCE_RANGE)
    logger.info(f"Simulated detection for {crop_type}: {record.disease_name} ({confidence}%)")
    return DiseaseDetection(crop_type=crop_type, confidence=confidence, **record.model_dump())
