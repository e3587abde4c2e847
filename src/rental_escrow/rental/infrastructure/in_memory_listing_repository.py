import copy
import threading

from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.domain.enum import ListingStatus
from rental_escrow.rental.domain.repository import ListingRepository
from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryListingRepository(ListingRepository):
    """プロセス内メモリを使用した ListingRepository の具象実装

    保存・取得ともにディープコピーを扱うため、読み取り側は常に
    最後にコミットされた状態のスナップショットを得る。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[int, Listing] = {}

    def next_id(self) -> ListingId:
        with self._lock:
            return ListingId(len(self._items))

    def save(self, listing: Listing) -> None:
        stored = self._detached(listing)
        with self._lock:
            if listing.id.value in self._items:
                raise DuplicateResourceException(
                    f"Listing already exists: {listing.id}"
                )
            if listing.id.value != len(self._items):
                raise OptimisticLockException(
                    f"Listing id is not the next id: {listing.id}, "
                    f"expected {len(self._items)}"
                )
            self._items[listing.id.value] = stored

    def find_by_id(self, listing_id: ListingId) -> Listing | None:
        with self._lock:
            stored = self._items.get(listing_id.value)
        if stored is None:
            return None
        return copy.deepcopy(stored)

    def find_all(self) -> list[Listing]:
        with self._lock:
            stored = [self._items[key] for key in sorted(self._items)]
        return [copy.deepcopy(listing) for listing in stored]

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def update(self, listing: Listing, expected_status: ListingStatus) -> None:
        stored = self._detached(listing)
        with self._lock:
            current = self._items.get(listing.id.value)
            if current is None or current.status != expected_status:
                raise OptimisticLockException(
                    f"Listing status conflict: "
                    f"expected {expected_status}, "
                    f"listing_id={listing.id}"
                )
            self._items[listing.id.value] = stored

    def _detached(self, listing: Listing) -> Listing:
        """保留中のドメインイベントを持たないコピー"""
        stored = copy.deepcopy(listing)
        stored.flush_domain_events()
        return stored
