from .listing_id import ListingId as ListingId
from .listing_title import ListingTitle as ListingTitle
from .return_quote import ReturnQuote as ReturnQuote
from .settlement_plan import SettlementPlan as SettlementPlan
