import logging

from agriwise.errors import NotFound
from agriwise.models.land import InquiryView, OwnerContact
from agriwise.utils.data_processing import landowner_summary

logger = logging.getLogger(__name__)

CONTACT_MESSAGE = "Viewed contact details"


class LandService:
    def __init__(self, repository):
        self.repository = repository

    def add_land(self, user, land):
        created = self.repository.create_land(user.user_id, land)
        logger.info(f"Landowner {user.user_id} added land {created.id}")
        return created

    def list_lands(self, available_only=True):
        return self.repository.list_lands(available_only=available_only)

    def contact_owner(self, user, land_id):
        """Return the owner's contact details and record that the user viewed them"""
        land = self.repository.get_land(land_id)
        profile = self.repository.get_profile(land.owner_id)
        if profile is None:
            raise NotFound("Profile", land.owner_id)

        self.repository.create_inquiry(
            buyer_id=user.user_id,
            seller_id=land.owner_id,
            listing_type="land",
            listing_id=land.id,
            message=CONTACT_MESSAGE,
        )
        return OwnerContact(full_name=profile.full_name, phone=profile.phone, email=profile.email)

    def inquiries(self, user):
        """Land inquiries addressed to the user, newest first, with buyer and land names"""
        views = []
        for inquiry in self.repository.list_inquiries(user.user_id, listing_type="land"):
            buyer = self.repository.get_profile(inquiry.buyer_id)
            try:
                land_title = self.repository.get_land(inquiry.listing_id).title
            except NotFound:
                land_title = "Unknown Land"
            views.append(InquiryView(
                **inquiry.model_dump(),
                buyer_name=(buyer.full_name if buyer and buyer.full_name else "Unknown Buyer"),
                land_title=land_title,
            ))
        return views

    def mark_read(self, user, inquiry_id):
        return self.repository.mark_inquiry_read(inquiry_id, user.user_id)

    def summary(self, user):
        lands = self.repository.list_lands(owner_id=user.user_id)
        inquiries = self.repository.list_inquiries(user.user_id, listing_type="land")
        return landowner_summary(lands, inquiries)
