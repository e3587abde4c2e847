import copy
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from rental_escrow.rental.applications.settlement_engine import SettlementEngine
from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.domain.enum import ListingStatus
from rental_escrow.rental.domain.exception import ReentrancyRiskException
from rental_escrow.rental.domain.factory import ListingDetails, ListingFactory
from rental_escrow.rental.domain.port import Clock, EventLog
from rental_escrow.rental.domain.repository import ListingRepository
from rental_escrow.rental.domain.service import BillingCalculator
from rental_escrow.rental.domain.value_object import ListingId, SettlementPlan
from rental_escrow.shared.domain import Address, Amount
from rental_escrow.shared.utils import get_logger

logger = get_logger("rental")


class RentalStateMachine:
    """出品・貸出・返却ユースケース

    出品レジストリへの唯一の書き込み経路。更新操作は単一のコミットロックで
    直列化され、処理中の更新操作への再入は ReentrancyRiskException になる。
    イベントはすべての処理が成功した後にまとめてログへ追記し、
    購読者への通知はロック解放後に行う。
    """

    def __init__(
        self,
        repository: ListingRepository,
        factory: ListingFactory,
        settlement_engine: SettlementEngine,
        event_log: EventLog,
        clock: Clock,
        billing_calculator: BillingCalculator | None = None,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._settlement = settlement_engine
        self._event_log = event_log
        self._clock = clock
        self._billing = billing_calculator or BillingCalculator()
        self._commit_lock = threading.RLock()
        self._in_operation = False

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        with self._commit_lock:
            if self._in_operation:
                raise ReentrancyRiskException(
                    f"Cannot {operation} while another operation is in progress"
                )
            self._in_operation = True
            try:
                yield
            finally:
                self._in_operation = False

    def list_item(
        self,
        owner: Address,
        title: str,
        price_per_minute: Amount,
        deposit: Amount,
    ) -> Listing:
        """出品する"""
        with self._exclusive("list"):
            listing_details: ListingDetails = {
                "title": title,
                "price_per_minute": price_per_minute.value,
                "deposit": deposit.value,
            }
            listing_id = self._repository.next_id()
            listing = self._factory.create(listing_id, owner, listing_details)
            self._repository.save(listing)
            self._commit_events(listing)

        self._event_log.publish()
        logger.info("Listing created", extra={"listing_id": str(listing.id)})
        return listing

    def rent_item(
        self, listing_id: ListingId, renter: Address, paid_value: Amount
    ) -> Listing:
        """借りる。支払額はエスクローに預けられる"""
        with self._exclusive("rent"):
            listing = self._repository.get(listing_id)
            listing.rent(renter, paid_value, self._clock.now())

            self._settlement.hold_escrow(paid_value)
            try:
                self._repository.update(
                    listing, expected_status=ListingStatus.AVAILABLE
                )
            except Exception:
                self._settlement.release_escrow(paid_value)
                raise
            self._commit_events(listing)

        self._event_log.publish()
        logger.info(
            "Listing rented",
            extra={"listing_id": str(listing_id), "escrowed_value": str(paid_value)},
        )
        return listing

    def return_item(
        self,
        listing_id: ListingId,
        caller: Address,
        extra_value: Amount | None = None,
    ) -> SettlementPlan:
        """返却して精算する

        出品の状態を AVAILABLE として保存してから送金を行う。
        精算に失敗した場合は理由を問わず保存前の状態に戻して例外を送出する。
        """
        extra_value = extra_value or Amount.zero()
        with self._exclusive("return"):
            listing = self._repository.get(listing_id)
            listing.ensure_returnable_by(caller)
            snapshot = copy.deepcopy(listing)

            billing = self._billing.compute(
                listing.price_per_minute,
                listing.deposit,
                listing.rental_start_time,
                self._clock.now(),
            )
            plan = SettlementPlan.for_return(
                owner=listing.owner,
                renter=caller,
                deposit=listing.deposit,
                price_per_minute=listing.price_per_minute,
                escrowed_value=listing.escrowed_value,
                billing=billing,
                extra_value=extra_value,
            )

            listing.complete_return(plan)
            self._repository.update(listing, expected_status=ListingStatus.RENTED)
            try:
                self._settlement.settle(plan)
            except Exception as e:
                listing.flush_domain_events()
                self._repository.update(
                    snapshot, expected_status=ListingStatus.AVAILABLE
                )
                logger.warning(
                    "Return rolled back after settlement failure",
                    extra={"listing_id": str(listing_id), "error": repr(e)},
                )
                raise
            self._commit_events(listing)

        self._event_log.publish()
        logger.info(
            "Listing returned",
            extra={
                "listing_id": str(listing_id),
                "billed_minutes": plan.billed_minutes,
                "total_rent": str(plan.total_rent),
                "refund": str(plan.refund),
            },
        )
        return plan

    def _commit_events(self, listing: Listing) -> None:
        events = listing.flush_domain_events()
        if events:
            self._event_log.append(events)
