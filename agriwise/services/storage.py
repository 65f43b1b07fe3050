import logging
from functools import lru_cache

from agriwise.config import STORAGE_BACKEND

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_repository():
    """Store selected by STORAGE_BACKEND, created once per process"""
    if STORAGE_BACKEND == "memory":
        from agriwise.services.memory_repository import InMemoryRepository

        logger.warning("Using in-memory storage, data is lost on restart")
        return InMemoryRepository()

    if STORAGE_BACKEND != "firestore":
        raise ValueError(f"Unknown STORAGE_BACKEND '{STORAGE_BACKEND}', expected 'firestore' or 'memory'")

    from agriwise.services.firebase_service import FirebaseService

    return FirebaseService()
