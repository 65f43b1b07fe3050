"""Tests for the Firestore gateway that need no Firebase project."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from agriwise.models.disease import Severity
from agriwise.models.marketplace import Listing
from agriwise.services.firebase_service import FirebaseService


@pytest.fixture
def offline_service() -> FirebaseService:
    # Skip __new__ so no Firebase app is initialized
    service = object.__new__(FirebaseService)
    service.db = None
    return service


def test_collection_requires_client(offline_service):
    with pytest.raises(RuntimeError):
        offline_service._collection("orders")


def test_prepare_listing_keeps_availability(offline_service):
    created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    listing = Listing(id="l1", seller_id="s1", crop_name="Onion", quantity=0,
                      price_per_unit=20, created_at=created_at)
    data = offline_service._prepare_for_firestore(listing)
    assert data["is_available"] is False
    assert data["created_at"] == created_at


def test_prepare_converts_enums_in_nested_values(offline_service):
    data = offline_service._prepare_for_firestore({"history": [{"severity": Severity.HIGH}]})
    assert data == {"history": [{"severity": "High"}]}
