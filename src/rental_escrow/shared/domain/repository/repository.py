from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from rental_escrow.shared.domain.exception import ResourceNotFoundException

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    - 集約の永続化を抽象化する
    - 返す集約は保存内容のコピーとし、呼び出し側の変更は save/update まで反映しない
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """集約を永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する"""
        raise NotImplementedError

    def get(self, id: ID) -> T:
        """IDで集約を取得する。存在しなければ not_found_error を送出"""
        aggregate = self.find_by_id(id)
        if aggregate is None:
            raise self.not_found_error(id)
        return aggregate

    def not_found_error(self, id: ID) -> ResourceNotFoundException:
        return ResourceNotFoundException(f"Resource not found: {id}")
