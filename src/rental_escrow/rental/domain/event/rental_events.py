from dataclasses import dataclass

from rental_escrow.rental.domain.value_object.listing_id import ListingId
from rental_escrow.shared.domain import Address, Amount, DomainEvent


@dataclass(frozen=True)
class ItemListed(DomainEvent):
    listing_id: ListingId
    owner: Address
    title: str
    price_per_minute: Amount
    deposit: Amount


@dataclass(frozen=True)
class ItemRented(DomainEvent):
    listing_id: ListingId
    renter: Address


@dataclass(frozen=True)
class ItemReturned(DomainEvent):
    listing_id: ListingId
    renter: Address
    refund_amount: Amount


@dataclass(frozen=True)
class RefundSent(DomainEvent):
    to: Address
    amount: Amount


@dataclass(frozen=True)
class PaymentSent(DomainEvent):
    to: Address
    amount: Amount


@dataclass(frozen=True)
class DebugRefund(DomainEvent):
    """返却時の精算内訳"""

    deposit: Amount
    total_rent: Amount
    refund_amount: Amount
