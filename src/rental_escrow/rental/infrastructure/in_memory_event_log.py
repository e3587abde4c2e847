import threading

from rental_escrow.rental.domain.port import EventLog, RecordedEvent
from rental_escrow.rental.domain.port.event_log import EventHandler
from rental_escrow.rental.infrastructure.event_dispatcher import (
    OrderedEventDispatcher,
)
from rental_escrow.shared.domain import DomainEvent


class InMemoryEventLog(EventLog):
    """プロセス内メモリを使用した EventLog の具象実装"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[RecordedEvent] = []
        self._dispatcher = OrderedEventDispatcher()

    def append(self, events: list[DomainEvent]) -> list[RecordedEvent]:
        with self._lock:
            start = len(self._records)
            batch = [
                RecordedEvent(offset=start + i, event=event)
                for i, event in enumerate(events)
            ]
            self._records.extend(batch)
            self._dispatcher.enqueue(batch)
        return batch

    def publish(self) -> None:
        self._dispatcher.drain()

    def read(self, offset: int = 0, limit: int | None = None) -> list[RecordedEvent]:
        if offset < 0:
            raise ValueError("Offset cannot be negative")
        if limit is not None and limit < 0:
            raise ValueError("Limit cannot be negative")
        with self._lock:
            end = None if limit is None else offset + limit
            return self._records[offset:end]

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        self._dispatcher.subscribe(event_type, handler)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
