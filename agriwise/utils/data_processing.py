from agriwise.models.land import LandownerSummary
from agriwise.models.water import IrrigationStatus


HOT_TEMPERATURE = 30


def irrigation_status(moisture_level, temperature=None):
    """
    Irrigation advice for a soil moisture reading (percent)

    Args:
        moisture_level: Soil moisture in percent
        temperature: Air temperature in Celsius, if known

    Returns:
        Status, how much water to apply, when to irrigate next and the best time of day
    """
    if moisture_level < 30:
        status, message = "critical", "Irrigation Required Immediately"
    elif moisture_level < 50:
        status, message = "warning", "Irrigation Recommended Soon"
    elif moisture_level > 80:
        status, message = "excess", "Excess Moisture - Stop Irrigation"
    else:
        status, message = "optimal", "Moisture Level Optimal"

    if moisture_level < 30:
        water_quantity, next_irrigation = "Heavy irrigation (50-60 mm)", "Immediately required"
    elif moisture_level < 50:
        water_quantity, next_irrigation = "Medium irrigation (30-40 mm)", "Within 24-48 hours"
    else:
        water_quantity, next_irrigation = "Light irrigation (10-20 mm) or none", "In 3-5 days (monitor levels)"

    if temperature is not None and temperature > HOT_TEMPERATURE:
        best_time = "Early morning (5-7 AM) or evening (5-7 PM)"
    else:
        best_time = "Morning hours (6-10 AM)"

    return IrrigationStatus(
        status=status,
        message=message,
        moisture_level=moisture_level,
        temperature=temperature,
        water_quantity=water_quantity,
        next_irrigation=next_irrigation,
        best_time=best_time,
    )



def landowner_summary(lands, inquiries):
    """Dashboard figures for a landowner's own lands and the inquiries sent to them"""
    available = [land for land in lands if land.is_available]
    return LandownerSummary(
        total_lands=len(lands),
        available_lands=len(available),
        monthly_income=sum(land.price_per_month for land in available),
        unread_inquiries=sum(1 for inquiry in inquiries if not inquiry.is_read),
    )
