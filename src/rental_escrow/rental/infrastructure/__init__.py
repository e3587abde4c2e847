from .event_dispatcher import OrderedEventDispatcher as OrderedEventDispatcher
from .in_memory_event_log import InMemoryEventLog as InMemoryEventLog
from .in_memory_funds_ledger import InMemoryFundsLedger as InMemoryFundsLedger
from .in_memory_listing_repository import (
    InMemoryListingRepository as InMemoryListingRepository,
)
from .system_clock import SystemClock as SystemClock
