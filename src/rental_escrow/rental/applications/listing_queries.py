from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.domain.exception import NotRentedException
from rental_escrow.rental.domain.port import Clock
from rental_escrow.rental.domain.repository import ListingRepository
from rental_escrow.rental.domain.service import BillingCalculator
from rental_escrow.rental.domain.value_object import (
    ListingId,
    ReturnQuote,
    SettlementPlan,
)
from rental_escrow.shared.domain import Address, Timestamp


class ListingQueryService:
    """出品の参照系ユースケース（コミットロックは取らない）"""

    def __init__(
        self,
        repository: ListingRepository,
        clock: Clock,
        billing_calculator: BillingCalculator | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._billing = billing_calculator or BillingCalculator()

    def get_book(self, listing_id: ListingId) -> Listing:
        return self._repository.get(listing_id)

    def get_book_count(self) -> int:
        return self._repository.count()

    def list_available(self, viewer: Address | None = None) -> list[Listing]:
        """貸出可能な出品（viewer 自身の出品は除く）"""
        return [
            listing
            for listing in self._repository.find_all()
            if listing.is_available and listing.owner != viewer
        ]

    def list_rented_by(self, renter: Address) -> list[Listing]:
        return [
            listing
            for listing in self._repository.find_all()
            if listing.renter == renter
        ]

    def list_owned_by(self, owner: Address) -> list[Listing]:
        return [
            listing
            for listing in self._repository.find_all()
            if listing.owner == owner
        ]

    def quote_return(
        self, listing_id: ListingId, now: Timestamp | None = None
    ) -> ReturnQuote:
        """now の時点で返却した場合の賃料・返金額・必要な追加支払額"""
        listing = self._repository.get(listing_id)
        if listing.is_available:
            raise NotRentedException(f"Listing {listing_id} is not rented")

        billing = self._billing.compute(
            listing.price_per_minute,
            listing.deposit,
            listing.rental_start_time,
            now or self._clock.now(),
        )
        # 不足額ちょうどを追加で支払った場合の精算
        plan = SettlementPlan.for_return(
            owner=listing.owner,
            renter=listing.renter,
            deposit=listing.deposit,
            price_per_minute=listing.price_per_minute,
            escrowed_value=listing.escrowed_value,
            billing=billing,
            extra_value=billing.shortfall,
        )
        return ReturnQuote(
            billed_minutes=plan.billed_minutes,
            total_rent=plan.total_rent,
            refund=plan.refund,
            required_extra=billing.shortfall,
        )
