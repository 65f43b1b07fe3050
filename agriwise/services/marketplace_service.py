import logging

from agriwise.utils.market import count_by_category, filter_by_category

logger = logging.getLogger(__name__)


class MarketplaceService:
    def __init__(self, repository):
        self.repository = repository

    def add_listing(self, user, listing):
        return self.repository.create_listing(user.user_id, listing)

    def browse(self, category=None):
        """Available listings, newest first, optionally narrowed to one category"""
        return filter_by_category(self.repository.list_listings(available_only=True), category)

    def get_listing(self, listing_id):
        return self.repository.get_listing(listing_id)

    def place_order(self, user, request):
        """Stock check, decrement and order creation happen atomically in the store"""
        logger.info(f"User {user.user_id} ordering {request.requested_quantity:g} "
                    f"from listing {request.listing_id}")
        return self.repository.settle_order(request, user.user_id)

    def orders(self, user):
        return self.repository.list_orders(user.user_id)

    def category_counts(self):
        return count_by_category(self.repository.list_listings(available_only=True))
