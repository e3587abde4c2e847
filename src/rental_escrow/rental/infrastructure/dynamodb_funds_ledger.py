import os
from dataclasses import dataclass

import boto3
from botocore.exceptions import ClientError

from rental_escrow.rental.domain.port import FundsGateway
from rental_escrow.rental.infrastructure.dynamodb_transactions import (
    is_transaction_canceled,
    to_attribute_values,
)
from rental_escrow.shared.domain import Address, Amount
from rental_escrow.shared.domain.exception.exceptions import OptimisticLockException
from rental_escrow.shared.utils import get_logger

logger = get_logger("rental")

ESCROW_ACCOUNT = "ESCROW"
MAX_UPDATE_ATTEMPTS = 5


@dataclass(frozen=True)
class _Change:
    account: str
    attribute: str
    amount: Amount
    increase: bool


class DynamoDBFundsLedger(FundsGateway):
    """DynamoDBを使用した資金台帳

    ACCOUNT#ESCROW に received / paid_out / retained を、
    ACCOUNT#<address> に credited を10進数文字列で保存する。
    更新は読み取った値を条件とする書き込みで行い、競合時は読み直して再試行する。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.dynamodb.meta.client

    def balance_of(self, address: Address) -> Amount:
        return self._read(str(address), "credited") or Amount.zero()

    def total(self, attribute: str) -> Amount:
        """エスクロー口座の received / paid_out / retained"""
        return self._read(ESCROW_ACCOUNT, attribute) or Amount.zero()

    def hold(self, amount: Amount) -> None:
        self._apply([_Change(ESCROW_ACCOUNT, "received", amount, increase=True)])

    def release_hold(self, amount: Amount) -> None:
        self._apply([_Change(ESCROW_ACCOUNT, "received", amount, increase=False)])

    def transfer(self, recipient: Address, amount: Amount) -> None:
        self._apply(
            [
                _Change(ESCROW_ACCOUNT, "paid_out", amount, increase=True),
                _Change(str(recipient), "credited", amount, increase=True),
            ]
        )

    def reclaim(self, recipient: Address, amount: Amount) -> None:
        self._apply(
            [
                _Change(ESCROW_ACCOUNT, "paid_out", amount, increase=False),
                _Change(str(recipient), "credited", amount, increase=False),
            ]
        )

    def retain(self, amount: Amount) -> None:
        self._apply([_Change(ESCROW_ACCOUNT, "retained", amount, increase=True)])

    def _apply(self, changes: list[_Change]) -> None:
        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            # 新しい残高を全て計算してから書き込む（溢れた場合は何も書かない）
            updates = []
            for change in changes:
                current = self._read(change.account, change.attribute)
                base = current or Amount.zero()
                new = (
                    base.add(change.amount)
                    if change.increase
                    else base.sub(change.amount)
                )
                updates.append(self._update(change, current, new))
            try:
                self.client.transact_write_items(TransactItems=updates)
                return
            except ClientError as e:
                if not is_transaction_canceled(e):
                    raise
                logger.warning(
                    "Ledger update conflicted, retrying",
                    extra={"attempt": attempt},
                )

        raise OptimisticLockException(
            f"Ledger update conflicted {MAX_UPDATE_ATTEMPTS} times"
        )

    def _read(self, account: str, attribute: str) -> Amount | None:
        response = self.table.get_item(Key=self._key(account), ConsistentRead=True)
        item = response.get("Item") or {}
        if attribute not in item:
            return None
        return Amount.from_string(item[attribute])

    def _update(self, change: _Change, current: Amount | None, new: Amount) -> dict:
        values = {":new": str(new)}
        if current is None:
            condition = "attribute_not_exists(#balance)"
        else:
            condition = "#balance = :current"
            values[":current"] = str(current)
        return {
            "Update": {
                "TableName": self.table_name,
                "Key": to_attribute_values(self._key(change.account)),
                "UpdateExpression": "SET #balance = :new, entity_type = :type",
                "ConditionExpression": condition,
                "ExpressionAttributeNames": {"#balance": change.attribute},
                "ExpressionAttributeValues": to_attribute_values(
                    {**values, ":type": "ACCOUNT"}
                ),
            }
        }

    def _key(self, account: str) -> dict:
        return {"PK": f"ACCOUNT#{account}", "SK": "BALANCE"}
