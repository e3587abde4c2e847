from __future__ import annotations

from pydantic import BaseModel

from rental_escrow.rental.domain.entity.listing import Listing
from rental_escrow.rental.domain.port import RecordedEvent
from rental_escrow.rental.domain.value_object import (
    ListingId,
    ReturnQuote,
    SettlementPlan,
)


class ListingData(BaseModel):
    """出品データのレスポンスモデル"""

    listing_id: int
    title: str
    owner: str
    price_per_minute: str
    deposit: str
    status: str
    is_available: bool
    renter: str | None
    rental_start_time: int | None


class SettlementData(BaseModel):
    """精算結果のレスポンスモデル"""

    listing_id: int
    billed_minutes: int
    total_rent: str
    owner_payment: str
    refund: str
    extra_value: str


class QuoteData(BaseModel):
    """返却見積りのレスポンスモデル"""

    listing_id: int
    billed_minutes: int
    total_rent: str
    refund: str
    required_extra: str


class EventData(BaseModel):
    """ドメインイベントのレスポンスモデル"""

    offset: int
    event_type: str
    payload: dict[str, int | str]


def listing_data(listing: Listing) -> ListingData:
    """Listing エンティティをレスポンスモデルに変換する"""
    return ListingData(
        listing_id=listing.id.value,
        title=str(listing.title),
        owner=str(listing.owner),
        price_per_minute=str(listing.price_per_minute),
        deposit=str(listing.deposit),
        status=listing.status.value,
        is_available=listing.is_available,
        renter=str(listing.renter) if listing.renter is not None else None,
        rental_start_time=(
            listing.rental_start_time.value
            if listing.rental_start_time is not None
            else None
        ),
    )


def settlement_data(listing_id: ListingId, plan: SettlementPlan) -> SettlementData:
    return SettlementData(
        listing_id=listing_id.value,
        billed_minutes=plan.billed_minutes,
        total_rent=str(plan.total_rent),
        owner_payment=str(plan.owner_payment),
        refund=str(plan.refund),
        extra_value=str(plan.extra_value),
    )


def quote_data(listing_id: ListingId, quote: ReturnQuote) -> QuoteData:
    return QuoteData(
        listing_id=listing_id.value,
        billed_minutes=quote.billed_minutes,
        total_rent=str(quote.total_rent),
        refund=str(quote.refund),
        required_extra=str(quote.required_extra),
    )


def event_data(record: RecordedEvent) -> EventData:
    """金額・アドレスは文字列、出品IDは整数で表す"""
    payload = {
        name: value.value if isinstance(value, ListingId) else str(value)
        for name, value in record.event.payload().items()
    }
    return EventData(
        offset=record.offset,
        event_type=record.event.event_type,
        payload=payload,
    )


def success_body(data: BaseModel | list[BaseModel]) -> dict:
    """成功レスポンスの本文"""
    if isinstance(data, list):
        return {"status": "success", "data": [item.model_dump() for item in data]}
    return {"status": "success", "data": data.model_dump()}
