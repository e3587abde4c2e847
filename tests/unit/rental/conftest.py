import pytest

from rental_escrow.rental.applications import (
    ListingQueryService,
    RentalStateMachine,
    SettlementEngine,
)
from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.domain.enum import ListingStatus
from rental_escrow.rental.domain.factory import ListingFactory
from rental_escrow.rental.domain.port import Clock
from rental_escrow.rental.domain.value_object import ListingId, ListingTitle
from rental_escrow.rental.infrastructure import (
    InMemoryEventLog,
    InMemoryFundsLedger,
    InMemoryListingRepository,
)
from rental_escrow.shared.domain import Address, Amount, Timestamp


class FakeClock(Clock):
    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = start

    def now(self) -> Timestamp:
        return Timestamp(self._now)

    def advance(self, seconds: int) -> None:
        self._now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository():
    return InMemoryListingRepository()


@pytest.fixture
def ledger():
    return InMemoryFundsLedger()


@pytest.fixture
def event_log():
    return InMemoryEventLog()


@pytest.fixture
def state_machine(repository, ledger, event_log, clock):
    return RentalStateMachine(
        repository=repository,
        factory=ListingFactory(),
        settlement_engine=SettlementEngine(funds_gateway=ledger),
        event_log=event_log,
        clock=clock,
    )


@pytest.fixture
def query_service(repository, clock):
    return ListingQueryService(repository=repository, clock=clock)


@pytest.fixture
def create_listing(owner):
    """Listing を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        listing_id: int = 0,
        price_per_minute: int = 10,
        deposit: int = 100,
        status: ListingStatus = ListingStatus.AVAILABLE,
        renter: Address | None = None,
        rental_start_time: int | None = None,
        escrowed_value: int | None = None,
    ) -> Listing:
        return Listing(
            id=ListingId(listing_id),
            owner=owner,
            title=ListingTitle("Test Book"),
            price_per_minute=Amount(price_per_minute),
            deposit=Amount(deposit),
            status=status,
            renter=renter,
            rental_start_time=(
                Timestamp(rental_start_time) if rental_start_time is not None else None
            ),
            escrowed_value=(
                Amount(escrowed_value) if escrowed_value is not None else None
            ),
        )

    return _factory


@pytest.fixture
def list_book(state_machine, owner):
    """状態機械経由で出品する fixture"""

    def _list(price_per_minute: int = 10, deposit: int = 100) -> ListingId:
        listing = state_machine.list_item(
            owner=owner,
            title="Test Book",
            price_per_minute=Amount(price_per_minute),
            deposit=Amount(deposit),
        )
        return listing.id

    return _list
