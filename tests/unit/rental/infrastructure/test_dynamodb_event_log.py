from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from rental_escrow.rental.domain.event import ItemRented, RefundSent
from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.rental.infrastructure.dynamodb_event_log import DynamoDBEventLog
from rental_escrow.shared.domain import Amount, DomainEvent
from rental_escrow.shared.domain.exception.exceptions import OptimisticLockException


def _transaction_canceled() -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "canceled"},
            "CancellationReasons": [{"Code": "ConditionalCheckFailed"}],
        },
        "TransactWriteItems",
    )


class TestDynamoDBEventLog:
    @pytest.fixture
    def table(self):
        table = MagicMock()
        table.get_item.return_value = {}
        return table

    @pytest.fixture
    def resource(self, table):
        resource = MagicMock()
        resource.Table.return_value = table
        return resource

    @pytest.fixture
    def event_log(self, resource):
        with patch(
            "rental_escrow.rental.infrastructure.dynamodb_event_log.boto3"
        ) as mock_boto3:
            mock_boto3.resource.return_value = resource
            yield DynamoDBEventLog(table_name="rental-table")

    @pytest.fixture
    def events(self, renter):
        return [
            ItemRented(listing_id=ListingId(0), renter=renter),
            RefundSent(to=renter, amount=Amount(70)),
        ]

    def test_append_writes_counter_and_events_in_one_transaction(
        self, event_log, resource, events
    ):
        records = event_log.append(events)

        assert [record.offset for record in records] == [0, 1]
        kwargs = resource.meta.client.transact_write_items.call_args.kwargs
        counter, first, second = kwargs["TransactItems"]
        assert counter["Update"]["Key"] == {
            "PK": {"S": "EVENT_COUNTER"},
            "SK": {"S": "COUNTER"},
        }
        assert counter["Update"]["ExpressionAttributeValues"] == {":new": {"N": "2"}}
        assert first["Put"]["Item"]["PK"] == {"S": "EVENT#0"}
        assert first["Put"]["Item"]["event_type"] == {"S": "ItemRented"}
        assert first["Put"]["Item"]["payload"] == {
            "M": {"listing_id": {"N": "0"}, "renter": {"S": "0xrenter"}}
        }
        assert second["Put"]["Item"]["PK"] == {"S": "EVENT#1"}

    def test_append_retries_after_conflict(self, event_log, resource, table, events):
        table.get_item.side_effect = [{}, {"Item": {"appended": Decimal(3)}}]
        resource.meta.client.transact_write_items.side_effect = [
            _transaction_canceled(),
            None,
        ]

        records = event_log.append(events[:1])

        assert [record.offset for record in records] == [3]
        assert resource.meta.client.transact_write_items.call_count == 2

    def test_append_gives_up_after_repeated_conflicts(
        self, event_log, resource, events
    ):
        resource.meta.client.transact_write_items.side_effect = _transaction_canceled()

        with pytest.raises(OptimisticLockException):
            event_log.append(events)

    def test_other_client_errors_propagate(self, event_log, resource, events):
        resource.meta.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException"}},
            "TransactWriteItems",
        )

        with pytest.raises(ClientError):
            event_log.append(events)

    def test_read_rebuilds_events_in_offset_order(
        self, event_log, resource, table, events
    ):
        table.get_item.return_value = {"Item": {"appended": Decimal(2)}}
        resource.batch_get_item.return_value = {
            "Responses": {
                "rental-table": [
                    {
                        "offset": Decimal(1),
                        "event_type": "RefundSent",
                        "payload": {"to": "0xrenter", "amount": "70"},
                    },
                    {
                        "offset": Decimal(0),
                        "event_type": "ItemRented",
                        "payload": {"listing_id": Decimal(0), "renter": "0xrenter"},
                    },
                ]
            }
        }

        records = event_log.read()

        assert [record.offset for record in records] == [0, 1]
        assert [record.event for record in records] == events

    def test_read_beyond_end_is_empty(self, event_log, resource):
        assert event_log.read(offset=5) == []
        resource.batch_get_item.assert_not_called()

    def test_publish_delivers_appended_events(self, event_log, events):
        delivered = []
        event_log.subscribe(DomainEvent, lambda r: delivered.append(r.event))

        event_log.append(events)
        event_log.publish()

        assert delivered == events
