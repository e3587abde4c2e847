from .listing_queries import ListingQueryService as ListingQueryService
from .rental_state_machine import RentalStateMachine as RentalStateMachine
from .settlement_engine import SettlementEngine as SettlementEngine
