from abc import abstractmethod

from rental_escrow.rental.domain.entity.listing import Listing
from rental_escrow.rental.domain.enum.listing_status import ListingStatus
from rental_escrow.rental.domain.exception import ListingNotFoundException
from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.shared.domain import Repository


class ListingRepository(Repository[Listing, ListingId]):
    """出品レジストリのインターフェース

    出品は削除されない。ID は 0 からの連番で再利用しない。
    返すエンティティは保存内容のコピーで、呼び出し側が変更しても
    保存内容には影響しない。
    """

    @abstractmethod
    def next_id(self) -> ListingId:
        """次に保存される出品ID

        ID は save が成功した時点で確定する。検証に失敗して保存されなかった
        出品は ID を消費しない。
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, listing: Listing) -> None:
        """新規出品を保存する

        listing.id が next_id と一致しない場合は OptimisticLockException、
        保存済みの場合は DuplicateResourceException。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, listing_id: ListingId) -> Listing | None:
        """出品IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Listing]:
        """全出品をID順に返す"""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        """これまでに作成された出品数"""
        raise NotImplementedError

    @abstractmethod
    def update(self, listing: Listing, expected_status: ListingStatus) -> None:
        """保存済みステータスが expected_status の場合のみ更新する"""
        raise NotImplementedError

    def not_found_error(self, listing_id: ListingId) -> ListingNotFoundException:
        return ListingNotFoundException(f"Listing not found: {listing_id}")
