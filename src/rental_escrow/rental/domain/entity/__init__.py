from .listing import Listing as Listing
