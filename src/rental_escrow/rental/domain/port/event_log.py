from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from rental_escrow.shared.domain import DomainEvent

EventHandler = Callable[["RecordedEvent"], None]


@dataclass(frozen=True)
class RecordedEvent:
    """ログに記録されたイベントとその位置"""

    offset: int
    event: DomainEvent


class EventLog(ABC):
    """追記専用のドメインイベントログ

    一度記録したイベントは削除も並べ替えもしない。購読者には offset 順に
    1 件ずつ配信する。
    """

    @abstractmethod
    def append(self, events: list[DomainEvent]) -> list[RecordedEvent]:
        """イベント列をまとめて追記し、配信待ちにする（配信は行わない）"""
        raise NotImplementedError

    @abstractmethod
    def publish(self) -> None:
        """配信待ちのイベントを offset 順に購読者へ配信する

        別の配信が進行中の場合（購読者から呼ばれた操作や他スレッド）は
        何もせずに戻り、進行中の配信が続けて配信する。
        """
        raise NotImplementedError

    @abstractmethod
    def read(self, offset: int = 0, limit: int | None = None) -> list[RecordedEvent]:
        """offset 以降のイベントを記録順に返す"""
        raise NotImplementedError

    @abstractmethod
    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """event_type（サブクラス含む）の新規イベントを購読する"""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError
