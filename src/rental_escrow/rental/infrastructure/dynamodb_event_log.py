import os
import threading
from dataclasses import fields

import boto3
from botocore.exceptions import ClientError

from rental_escrow.rental.domain.event import (
    DebugRefund,
    ItemListed,
    ItemRented,
    ItemReturned,
    PaymentSent,
    RefundSent,
)
from rental_escrow.rental.domain.port import EventLog, RecordedEvent
from rental_escrow.rental.domain.port.event_log import EventHandler
from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.rental.infrastructure.dynamodb_transactions import (
    advance_counter,
    is_transaction_canceled,
    put_if_absent,
)
from rental_escrow.rental.infrastructure.event_dispatcher import (
    OrderedEventDispatcher,
)
from rental_escrow.shared.domain import Address, Amount, DomainEvent
from rental_escrow.shared.domain.exception.exceptions import OptimisticLockException
from rental_escrow.shared.utils import get_logger

logger = get_logger("rental")

COUNTER_KEY = {"PK": "EVENT_COUNTER", "SK": "COUNTER"}
MAX_APPEND_ATTEMPTS = 3
BATCH_GET_LIMIT = 100

EVENT_TYPES: dict[str, type[DomainEvent]] = {
    event_type.__name__: event_type
    for event_type in (
        ItemListed,
        ItemRented,
        ItemReturned,
        RefundSent,
        PaymentSent,
        DebugRefund,
    )
}

_FIELD_PARSERS = {
    ListingId: lambda v: ListingId(int(v)),
    Address: Address,
    Amount: Amount.from_string,
    str: str,
}


class DynamoDBEventLog(EventLog):
    """DynamoDBを使用した EventLog の具象実装

    イベントは EVENT#<offset> アイテムとして保存し、追記カウンタと同じ
    トランザクションで書き込むため、バッチ単位で全件記録されるか全く
    記録されないかのどちらかになる。購読者はプロセス内で管理し、
    このプロセスが追記したイベントを offset 順に配信する。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.dynamodb.meta.client
        self._lock = threading.Lock()
        self._dispatcher = OrderedEventDispatcher()

    def append(self, events: list[DomainEvent]) -> list[RecordedEvent]:
        """他プロセスとの競合時は最新の件数を読み直して再試行する"""
        with self._lock:
            for attempt in range(1, MAX_APPEND_ATTEMPTS + 1):
                start = len(self)
                batch = [
                    RecordedEvent(offset=start + i, event=event)
                    for i, event in enumerate(events)
                ]
                try:
                    self._write(start, batch)
                except ClientError as e:
                    if not is_transaction_canceled(e):
                        raise
                    logger.warning(
                        "Event append conflicted, retrying",
                        extra={"offset": start, "attempt": attempt},
                    )
                    continue
                self._dispatcher.enqueue(batch)
                return batch

        raise OptimisticLockException(
            f"Event append conflicted {MAX_APPEND_ATTEMPTS} times"
        )

    def publish(self) -> None:
        self._dispatcher.drain()

    def read(self, offset: int = 0, limit: int | None = None) -> list[RecordedEvent]:
        if offset < 0:
            raise ValueError("Offset cannot be negative")
        if limit is not None and limit < 0:
            raise ValueError("Limit cannot be negative")

        end = len(self)
        if limit is not None:
            end = min(end, offset + limit)
        offsets = list(range(offset, end))

        items: dict[int, dict] = {}
        for i in range(0, len(offsets), BATCH_GET_LIMIT):
            chunk = offsets[i : i + BATCH_GET_LIMIT]
            for item in self._batch_get([self._key(o) for o in chunk]):
                items[int(item["offset"])] = item
        return [self._to_record(items[o]) for o in offsets]

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        self._dispatcher.subscribe(event_type, handler)

    def __len__(self) -> int:
        response = self.table.get_item(Key=COUNTER_KEY, ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return 0
        return int(item["appended"])

    def _write(self, start: int, batch: list[RecordedEvent]) -> None:
        self.client.transact_write_items(
            TransactItems=[
                advance_counter(
                    self.table_name,
                    COUNTER_KEY,
                    "appended",
                    current=start,
                    new=start + len(batch),
                ),
                *[put_if_absent(self.table_name, self._to_item(r)) for r in batch],
            ]
        )

    def _batch_get(self, keys: list[dict]) -> list[dict]:
        items: list[dict] = []
        request = {self.table_name: {"Keys": keys, "ConsistentRead": True}}
        while request:
            response = self.dynamodb.batch_get_item(RequestItems=request)
            items.extend(response.get("Responses", {}).get(self.table_name, []))
            request = response.get("UnprocessedKeys") or {}
        return items

    def _key(self, offset: int) -> dict:
        return {"PK": f"EVENT#{offset}", "SK": "EVENT"}

    def _to_item(self, record: RecordedEvent) -> dict:
        payload = {
            name: value.value if isinstance(value, ListingId) else str(value)
            for name, value in record.event.payload().items()
        }
        return {
            **self._key(record.offset),
            "entity_type": "EVENT",
            "offset": record.offset,
            "event_type": record.event.event_type,
            "payload": payload,
        }

    def _to_record(self, item: dict) -> RecordedEvent:
        """DynamoDB アイテムをドメインイベントに変換する"""
        event_type = EVENT_TYPES[item["event_type"]]
        payload = item["payload"]
        values = {
            f.name: _FIELD_PARSERS[f.type](payload[f.name]) for f in fields(event_type)
        }
        return RecordedEvent(offset=int(item["offset"]), event=event_type(**values))
