import threading
from collections import deque

from rental_escrow.rental.domain.port import RecordedEvent
from rental_escrow.rental.domain.port.event_log import EventHandler
from rental_escrow.shared.domain import DomainEvent
from rental_escrow.shared.utils import get_logger

logger = get_logger("rental")


class OrderedEventDispatcher:
    """購読者への配信を記録順に直列化する

    enqueue は記録と同じ順序で呼ぶこと。配信は常に 1 つのループだけが行い、
    配信中に積まれたイベントも同じループが offset 順に続けて配信する。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: deque[RecordedEvent] = deque()
        self._subscriptions: list[tuple[type[DomainEvent], EventHandler]] = []
        self._delivering = False

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        with self._lock:
            self._subscriptions.append((event_type, handler))

    def enqueue(self, records: list[RecordedEvent]) -> None:
        with self._lock:
            self._pending.extend(records)

    def drain(self) -> None:
        with self._lock:
            if self._delivering:
                return
            self._delivering = True

        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._delivering = False
                        return
                    record = self._pending.popleft()
                    subscriptions = list(self._subscriptions)
                self._deliver(record, subscriptions)
        except BaseException:
            with self._lock:
                self._delivering = False
            raise

    def _deliver(
        self,
        record: RecordedEvent,
        subscriptions: list[tuple[type[DomainEvent], EventHandler]],
    ) -> None:
        for event_type, handler in subscriptions:
            if not isinstance(record.event, event_type):
                continue
            try:
                handler(record)
            except Exception:
                # 記録済みのイベントは取り消さない
                logger.exception(
                    "Event subscriber failed",
                    extra={
                        "event_type": record.event.event_type,
                        "offset": record.offset,
                    },
                )
