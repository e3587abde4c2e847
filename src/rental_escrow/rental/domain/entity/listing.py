from rental_escrow.rental.domain.enum import ListingStatus
from rental_escrow.rental.domain.event import (
    DebugRefund,
    ItemRented,
    ItemReturned,
    PaymentSent,
    RefundSent,
)
from rental_escrow.rental.domain.exception import (
    InsufficientPaymentException,
    InvalidPriceException,
    NotAvailableException,
    NotRentedException,
    NotRenterException,
    SelfRentalException,
)
from rental_escrow.rental.domain.value_object import (
    ListingId,
    ListingTitle,
    SettlementPlan,
)
from rental_escrow.shared.domain import AggregateRoot, Address, Amount, Timestamp


class Listing(AggregateRoot[ListingId]):
    """出品エンティティ

    AVAILABLE ⇄ RENTED を繰り返す。終端状態はない。
    renter / rental_start_time / escrowed_value は RENTED の間だけ設定される。
    """

    def __init__(
        self,
        id: ListingId,
        owner: Address,
        title: ListingTitle,
        price_per_minute: Amount,
        deposit: Amount,
        status: ListingStatus = ListingStatus.AVAILABLE,
        renter: Address | None = None,
        rental_start_time: Timestamp | None = None,
        escrowed_value: Amount | None = None,
    ) -> None:
        super().__init__(id)
        if price_per_minute.is_zero():
            raise InvalidPriceException("Price per minute must be greater than zero")

        rental_fields = (renter, rental_start_time, escrowed_value)
        if status == ListingStatus.AVAILABLE and any(
            f is not None for f in rental_fields
        ):
            raise ValueError("Available listing cannot carry rental data")
        if status == ListingStatus.RENTED and any(f is None for f in rental_fields):
            raise ValueError("Rented listing requires renter, start time and escrow")

        self._owner = owner
        self._title = title
        self._price_per_minute = price_per_minute
        self._deposit = deposit
        self._status = status
        self._renter = renter
        self._rental_start_time = rental_start_time
        self._escrowed_value = escrowed_value

    @property
    def owner(self) -> Address:
        return self._owner

    @property
    def title(self) -> ListingTitle:
        return self._title

    @property
    def price_per_minute(self) -> Amount:
        return self._price_per_minute

    @property
    def deposit(self) -> Amount:
        return self._deposit

    @property
    def status(self) -> ListingStatus:
        return self._status

    @property
    def is_available(self) -> bool:
        return self._status == ListingStatus.AVAILABLE

    @property
    def renter(self) -> Address | None:
        return self._renter

    @property
    def rental_start_time(self) -> Timestamp | None:
        return self._rental_start_time

    @property
    def escrowed_value(self) -> Amount | None:
        return self._escrowed_value

    def minimum_rent_payment(self) -> Amount:
        """貸出に必要な最低支払額（保証金 + 初回 1 分）"""
        return self._deposit.add(self._price_per_minute)

    def rent(self, renter: Address, paid_value: Amount, now: Timestamp) -> None:
        """貸し出す。検証がすべて通るまで状態は変更しない"""
        if self._status != ListingStatus.AVAILABLE:
            raise NotAvailableException(f"Listing {self.id} is not available")
        if renter == self._owner:
            raise SelfRentalException("Owner cannot rent their own listing")
        required = self.minimum_rent_payment()
        if paid_value < required:
            raise InsufficientPaymentException(
                f"Payment must cover deposit and first minute: "
                f"required {required}, got {paid_value}"
            )

        self._status = ListingStatus.RENTED
        self._renter = renter
        self._rental_start_time = now
        self._escrowed_value = paid_value
        self.add_domain_event(ItemRented(listing_id=self.id, renter=renter))

    def ensure_returnable_by(self, caller: Address) -> None:
        """返却可能か検証する"""
        if self._status != ListingStatus.RENTED:
            raise NotRentedException(f"Listing {self.id} is not rented")
        if caller != self._renter:
            raise NotRenterException("Only the renter can return this listing")

    def complete_return(self, plan: SettlementPlan) -> None:
        """返却を確定し、精算イベントを決められた順序で記録する"""
        renter = self._renter
        if self._status != ListingStatus.RENTED or renter is None:
            raise NotRentedException(f"Listing {self.id} is not rented")

        self._status = ListingStatus.AVAILABLE
        self._renter = None
        self._rental_start_time = None
        self._escrowed_value = None

        self.add_domain_event(
            DebugRefund(
                deposit=plan.deposit,
                total_rent=plan.total_rent,
                refund_amount=plan.refund,
            )
        )
        if not plan.refund.is_zero():
            self.add_domain_event(RefundSent(to=renter, amount=plan.refund))
        self.add_domain_event(PaymentSent(to=self._owner, amount=plan.owner_payment))
        self.add_domain_event(
            ItemReturned(listing_id=self.id, renter=renter, refund_amount=plan.refund)
        )
