"""Tests for agriwise/utils/data_processing.py."""

from __future__ import annotations

import pytest

from agriwise.models.land import Inquiry, Land
from agriwise.utils.data_processing import irrigation_status, landowner_summary


@pytest.mark.parametrize("moisture,status", [
    (0, "critical"),
    (29.9, "critical"),
    (30, "warning"),
    (49, "warning"),
    (50, "optimal"),
    (80, "optimal"),
    (80.1, "excess"),
    (100, "excess"),
])
def test_irrigation_thresholds(moisture, status):
    result = irrigation_status(moisture)
    assert result.status == status
    assert result.moisture_level == moisture


def test_irrigation_messages():
    assert irrigation_status(10).message == "Irrigation Required Immediately"
    assert irrigation_status(45).message == "Irrigation Recommended Soon"
    assert irrigation_status(90).message == "Excess Moisture - Stop Irrigation"
    assert irrigation_status(65).message == "Moisture Level Optimal"


def _land(land_id, price, available=True) -> Land:
    return Land(id=land_id, owner_id="owner-1", title=f"Plot {land_id}", location="Nashik",
                area_acres=2.5, price_per_month=price, is_available=available)


def _inquiry(inquiry_id, is_read) -> Inquiry:
    return Inquiry(id=inquiry_id, buyer_id="buyer-1", seller_id="owner-1",
                   listing_type="land", listing_id="l1", is_read=is_read)


def test_landowner_summary():
    lands = [_land("l1", 5000), _land("l2", 3000), _land("l3", 9000, available=False)]
    inquiries = [_inquiry("i1", False), _inquiry("i2", True), _inquiry("i3", False)]
    summary = landowner_summary(lands, inquiries)
    assert summary.total_lands == 3
    assert summary.available_lands == 2
    assert summary.monthly_income == 8000
    assert summary.unread_inquiries == 2


def test_landowner_summary_empty():
    summary = landowner_summary([], [])
    assert summary.total_lands == 0
    assert summary.monthly_income == 0


@pytest.mark.parametrize("moisture,quantity,next_irrigation", [
    (10, "Heavy irrigation (50-60 mm)", "Immediately required"),
    (29.9, "Heavy irrigation (50-60 mm)", "Immediately required"),
    (30, "Medium irrigation (30-40 mm)", "Within 24-48 hours"),
    (49.9, "Medium irrigation (30-40 mm)", "Within 24-48 hours"),
    (50, "Light irrigation (10-20 mm) or none", "In 3-5 days (monitor levels)"),
    (95, "Light irrigation (10-20 mm) or none", "In 3-5 days (monitor levels)"),
])
def test_water_quantity_and_next_irrigation(moisture, quantity, next_irrigation):
    result = irrigation_status(moisture)
    assert result.water_quantity == quantity
    assert result.next_irrigation == next_irrigation


@pytest.mark.parametrize("temperature,best_time", [
    (None, "Morning hours (6-10 AM)"),
    (28, "Morning hours (6-10 AM)"),
    (30, "Morning hours (6-10 AM)"),
    (30.5, "Early morning (5-7 AM) or evening (5-7 PM)"),
    (38, "Early morning (5-7 AM) or evening (5-7 PM)"),
])
def test_best_time_follows_temperature(temperature, best_time):
    result = irrigation_status(45, temperature)
    assert result.best_time == best_time
    assert result.temperature == temperature
