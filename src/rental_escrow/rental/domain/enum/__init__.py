from .listing_status import ListingStatus as ListingStatus
