from .listing_factory import ListingDetails as ListingDetails
from .listing_factory import ListingFactory as ListingFactory
