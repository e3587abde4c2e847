from .listing_repository import ListingRepository as ListingRepository
