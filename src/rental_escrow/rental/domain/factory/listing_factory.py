from typing import TypedDict

from rental_escrow.rental.domain.entity.listing import Listing
from rental_escrow.rental.domain.enum.listing_status import ListingStatus
from rental_escrow.rental.domain.event import ItemListed
from rental_escrow.rental.domain.value_object import ListingId, ListingTitle
from rental_escrow.shared.domain import Address, Amount


class ListingDetails(TypedDict):
    """出品の入力データ構造（TypedDict）"""

    title: str
    price_per_minute: int
    deposit: int


class ListingFactory:
    """出品ファクトリ"""

    def create(
        self,
        listing_id: ListingId,
        owner: Address,
        listing_details: ListingDetails,
    ) -> Listing:
        """新規出品エンティティを生成する"""
        listing = Listing(
            id=listing_id,
            owner=owner,
            title=ListingTitle(listing_details["title"]),
            price_per_minute=Amount(listing_details["price_per_minute"]),
            deposit=Amount(listing_details["deposit"]),
            status=ListingStatus.AVAILABLE,
        )
        listing.add_domain_event(
            ItemListed(
                listing_id=listing.id,
                owner=listing.owner,
                title=str(listing.title),
                price_per_minute=listing.price_per_minute,
                deposit=listing.deposit,
            )
        )
        return listing
