"""
Tests for the service layer over an InMemoryRepository.

What we test
------------
PredictionService:
  - Each recommendation is stored in the user's history for its kind.
  - A seeded rng makes disease detection repeatable.
MarketplaceService:
  - browse() hides sold-out listings and filters by category.
LandService:
  - contact_owner() returns the owner's details and records an inquiry.
  - inquiries() fills in buyer and land names, with fallbacks.
  - summary() only counts the landowner's own lands.
"""

from __future__ import annotations

import random

import pytest

from agriwise.errors import NotFound
from agriwise.models.fertilizer import FertilizerInput
from agriwise.models.land import LandCreate
from agriwise.models.marketplace import Category, ListingCreate, OrderRequest
from agriwise.models.soil import Season, SoilSample
from agriwise.models.user import Profile, Role
from agriwise.services.land_service import CONTACT_MESSAGE, LandService
from agriwise.services.marketplace_service import MarketplaceService
from agriwise.services.prediction_service import PredictionService


def _land(title="North field", price=4000) -> LandCreate:
    return LandCreate(title=title, location="Nashik", area_acres=2, price_per_month=price)


class TestPredictionService:
    def test_crop_prediction_is_stored(self, repository, farmer):
        service = PredictionService(repository)
        sample = SoilSample(nitrogen=60, phosphorus=30, potassium=30, ph_level=6.5, season=Season.WINTER)
        recommendation = service.recommend_crop(farmer, sample)
        assert recommendation.crop == "Wheat"
        history = service.history(farmer, "crop")
        assert len(history) == 1
        assert history[0]["recommended_crop"] == "Wheat"
        assert history[0]["confidence"] == 90

    def test_fertilizer_recommendation_is_stored(self, repository, farmer):
        service = PredictionService(repository)
        result = service.recommend_fertilizer(
            farmer, FertilizerInput(crop="Potato", current_n=100, current_p=80, current_k=40)
        )
        history = service.history(farmer, "fertilizer")
        assert history[0]["recommended_fertilizer"] == result.fertilizer_name
        assert history[0]["crop_type"] == "Potato"

    def test_disease_detection_with_seeded_rng(self, repository, farmer):
        first = PredictionService(repository, rng=random.Random(3)).detect_disease(farmer, "rice")
        second = PredictionService(repository, rng=random.Random(3)).detect_disease(farmer, "rice")
        assert first == second
        history = PredictionService(repository).history(farmer, "disease")
        assert len(history) == 2
        assert history[0]["severity"] == first.severity.value

    def test_history_is_private(self, repository, farmer, buyer):
        service = PredictionService(repository)
        service.detect_disease(farmer, "wheat")
        assert service.history(buyer, "disease") == []


class TestMarketplaceService:
    def test_browse_by_category(self, repository, farmer, tomato_listing):
        service = MarketplaceService(repository)
        service.add_listing(farmer, ListingCreate(crop_name="Mango", quantity=20, price_per_unit=80))
        assert {l.crop_name for l in service.browse()} == {"Red Tomato", "Mango"}
        assert [l.crop_name for l in service.browse(Category.FRUIT)] == ["Mango"]
        assert service.browse(Category.GRAIN) == []

    def test_sold_out_listing_leaves_browse(self, repository, buyer, tomato_listing):
        service = MarketplaceService(repository)
        service.place_order(buyer, OrderRequest(listing_id=tomato_listing.id, requested_quantity=10))
        assert service.browse() == []
        assert service.category_counts()[Category.VEGETABLE] == 0
        assert service.get_listing(tomato_listing.id).quantity == 0


class TestLandService:
    def test_contact_owner_records_inquiry(self, repository, landowner, buyer):
        repository.save_profile(Profile(id=landowner.user_id, email="owner@example.com",
                                        full_name="Asha Patil", phone="98200 00000",
                                        role=Role.LANDOWNER))
        service = LandService(repository)
        land = service.add_land(landowner, _land())

        contact = service.contact_owner(buyer, land.id)
        assert contact.full_name == "Asha Patil"
        assert contact.email == "owner@example.com"

        inquiries = service.inquiries(landowner)
        assert len(inquiries) == 1
        assert inquiries[0].message == CONTACT_MESSAGE
        assert inquiries[0].land_title == "North field"
        assert inquiries[0].buyer_name == "Unknown Buyer"
        assert inquiries[0].is_read is False

    def test_contact_owner_without_profile(self, repository, landowner, buyer):
        service = LandService(repository)
        land = service.add_land(landowner, _land())
        with pytest.raises(NotFound):
            service.contact_owner(buyer, land.id)
        assert repository.list_inquiries(landowner.user_id) == []

    def test_contact_unknown_land(self, repository, buyer):
        with pytest.raises(NotFound):
            LandService(repository).contact_owner(buyer, "missing")

    def test_inquiry_for_deleted_land(self, repository, landowner, buyer):
        repository.save_profile(Profile(id=buyer.user_id, full_name="Ravi", role=Role.BUYER))
        repository.create_inquiry(buyer.user_id, landowner.user_id, "land", "gone")
        views = LandService(repository).inquiries(landowner)
        assert views[0].land_title == "Unknown Land"
        assert views[0].buyer_name == "Ravi"

    def test_summary_counts_own_lands(self, repository, landowner):
        service = LandService(repository)
        service.add_land(landowner, _land(price=5000))
        service.add_land(landowner, _land(price=2500))
        repository.create_land("owner-2", _land(price=9999))
        inquiry = repository.create_inquiry("buyer-1", landowner.user_id, "land", "x")
        repository.create_inquiry("buyer-2", landowner.user_id, "land", "y")
        service.mark_read(landowner, inquiry.id)

        summary = service.summary(landowner)
        assert summary.total_lands == 2
        assert summary.available_lands == 2
        assert summary.monthly_income == 7500
        assert summary.unread_inquiries == 1
