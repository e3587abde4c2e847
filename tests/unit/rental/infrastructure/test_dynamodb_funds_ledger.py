from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from rental_escrow.rental.infrastructure.dynamodb_funds_ledger import (
    MAX_UPDATE_ATTEMPTS,
    DynamoDBFundsLedger,
)
from rental_escrow.shared.domain import Amount
from rental_escrow.shared.domain.exception import ArithmeticOverflowException
from rental_escrow.shared.domain.exception.exceptions import OptimisticLockException


def _transaction_canceled() -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "canceled"},
            "CancellationReasons": [{"Code": "ConditionalCheckFailed"}],
        },
        "TransactWriteItems",
    )


class TestDynamoDBFundsLedger:
    @pytest.fixture
    def balances(self):
        return {}

    @pytest.fixture
    def table(self, balances):
        table = MagicMock()
        table.get_item.side_effect = lambda Key, ConsistentRead: {
            "Item": balances.get(Key["PK"], {})
        }
        return table

    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def ledger(self, table, client):
        with patch(
            "rental_escrow.rental.infrastructure.dynamodb_funds_ledger.boto3"
        ) as mock_boto3:
            mock_boto3.resource.return_value.Table.return_value = table
            mock_boto3.resource.return_value.meta.client = client
            yield DynamoDBFundsLedger(table_name="rental-table")

    def _updates(self, client) -> list[dict]:
        kwargs = client.transact_write_items.call_args.kwargs
        return [item["Update"] for item in kwargs["TransactItems"]]

    def test_first_hold_creates_escrow_balance(self, ledger, client):
        ledger.hold(Amount(110))

        (update,) = self._updates(client)
        assert update["Key"] == {"PK": {"S": "ACCOUNT#ESCROW"}, "SK": {"S": "BALANCE"}}
        assert update["ConditionExpression"] == "attribute_not_exists(#balance)"
        assert update["ExpressionAttributeNames"] == {"#balance": "received"}
        assert update["ExpressionAttributeValues"][":new"] == {"S": "110"}

    def test_transfer_updates_paid_out_and_recipient_together(
        self, ledger, client, balances, owner
    ):
        balances["ACCOUNT#ESCROW"] = {"paid_out": "10"}

        ledger.transfer(owner, Amount(30))

        escrow, recipient = self._updates(client)
        assert escrow["ConditionExpression"] == "#balance = :current"
        assert escrow["ExpressionAttributeValues"][":current"] == {"S": "10"}
        assert escrow["ExpressionAttributeValues"][":new"] == {"S": "40"}
        assert recipient["Key"]["PK"] == {"S": "ACCOUNT#0xowner"}
        assert recipient["ExpressionAttributeNames"] == {"#balance": "credited"}
        assert recipient["ExpressionAttributeValues"][":new"] == {"S": "30"}

    def test_reclaim_beyond_credited_writes_nothing(self, ledger, client, renter):
        with pytest.raises(ArithmeticOverflowException):
            ledger.reclaim(renter, Amount(1))

        client.transact_write_items.assert_not_called()

    def test_conflict_rereads_and_retries(self, ledger, client):
        client.transact_write_items.side_effect = [_transaction_canceled(), None]

        ledger.retain(Amount(10))

        assert client.transact_write_items.call_count == 2

    def test_repeated_conflicts_raise_optimistic_lock(self, ledger, client):
        client.transact_write_items.side_effect = _transaction_canceled()

        with pytest.raises(OptimisticLockException):
            ledger.retain(Amount(10))

        assert client.transact_write_items.call_count == MAX_UPDATE_ATTEMPTS

    def test_balance_of_reads_credited(self, ledger, balances, owner):
        balances["ACCOUNT#0xowner"] = {"credited": "30"}

        assert ledger.balance_of(owner) == Amount(30)
        assert ledger.total("received") == Amount.zero()
