import os
from dataclasses import dataclass

from rental_escrow.rental.applications import (
    ListingQueryService,
    RentalStateMachine,
    SettlementEngine,
)
from rental_escrow.rental.domain.factory import ListingFactory
from rental_escrow.rental.domain.port import Clock, EventLog, FundsGateway
from rental_escrow.rental.domain.repository import ListingRepository
from rental_escrow.rental.infrastructure import (
    InMemoryEventLog,
    InMemoryFundsLedger,
    InMemoryListingRepository,
    SystemClock,
)
from rental_escrow.rental.infrastructure.dynamodb_event_log import DynamoDBEventLog
from rental_escrow.rental.infrastructure.dynamodb_funds_ledger import (
    DynamoDBFundsLedger,
)
from rental_escrow.rental.infrastructure.dynamodb_listing_repository import (
    DynamoDBListingRepository,
)


@dataclass(frozen=True)
class Components:
    """Handler が共有するアプリケーションサービスと永続化先"""

    repository: ListingRepository
    funds_ledger: FundsGateway
    event_log: EventLog
    clock: Clock
    state_machine: RentalStateMachine
    query_service: ListingQueryService


def build_components(store: str | None = None) -> Components:
    """LISTING_STORE に応じて依存関係を組み立てる

    dynamodb の場合は出品・資金台帳・イベントログの全てを DynamoDB に置き、
    どの Lambda インスタンスからも同じ状態を参照する。
    """
    store = store or os.getenv("LISTING_STORE", "memory")
    if store == "memory":
        repository: ListingRepository = InMemoryListingRepository()
        funds_ledger: FundsGateway = InMemoryFundsLedger()
        event_log: EventLog = InMemoryEventLog()
    elif store == "dynamodb":
        repository = DynamoDBListingRepository()
        funds_ledger = DynamoDBFundsLedger()
        event_log = DynamoDBEventLog()
    else:
        raise ValueError(f"Unsupported LISTING_STORE: {store}")

    clock = SystemClock()
    return Components(
        repository=repository,
        funds_ledger=funds_ledger,
        event_log=event_log,
        clock=clock,
        state_machine=RentalStateMachine(
            repository=repository,
            factory=ListingFactory(),
            settlement_engine=SettlementEngine(funds_gateway=funds_ledger),
            event_log=event_log,
            clock=clock,
        ),
        query_service=ListingQueryService(repository=repository, clock=clock),
    )


components = build_components()
