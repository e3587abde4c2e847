import os

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.domain.enum import ListingStatus
from rental_escrow.rental.domain.repository import ListingRepository
from rental_escrow.rental.domain.value_object import ListingId, ListingTitle
from rental_escrow.rental.infrastructure.dynamodb_transactions import (
    advance_counter,
    cancellation_codes,
    is_transaction_canceled,
    put_if_absent,
)
from rental_escrow.shared.domain import Address, Amount, Timestamp
from rental_escrow.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)

COUNTER_KEY = {"PK": "LISTING_COUNTER", "SK": "COUNTER"}


class DynamoDBListingRepository(ListingRepository):
    """DynamoDBを使用したListingRepository の具象実装

    金額は uint256 を表現するため10進数文字列で保存する。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.dynamodb.meta.client

    def next_id(self) -> ListingId:
        """保存済みの出品数が次の出品ID"""
        return ListingId(self.count())

    def save(self, listing: Listing) -> None:
        """出品の書き込みと採番カウンタの更新を1トランザクションで行う"""
        listing_id = listing.id.value
        try:
            self.client.transact_write_items(
                TransactItems=[
                    put_if_absent(self.table_name, self._to_item(listing)),
                    advance_counter(
                        self.table_name,
                        COUNTER_KEY,
                        "issued",
                        current=listing_id,
                        new=listing_id + 1,
                    ),
                ]
            )
        except ClientError as e:
            if not is_transaction_canceled(e):
                raise
            if cancellation_codes(e)[:1] == ["ConditionalCheckFailed"]:
                raise DuplicateResourceException(
                    f"Listing already exists: {listing.id}"
                )
            raise OptimisticLockException(
                f"Listing id is not the next id: {listing.id}"
            )

    def find_by_id(self, listing_id: ListingId) -> Listing | None:
        """出品IDで検索"""
        response = self.table.get_item(
            Key=self._key(listing_id),
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_all(self) -> list[Listing]:
        """全出品をID順に返す"""
        items: list[dict] = []
        kwargs: dict = {
            "FilterExpression": Attr("entity_type").eq("LISTING"),
            "ConsistentRead": True,
        }
        while True:
            response = self.table.scan(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key

        listings = [self._to_entity(item) for item in items]
        return sorted(listings, key=lambda listing: listing.id)

    def count(self) -> int:
        """保存済みの出品数"""
        response = self.table.get_item(Key=COUNTER_KEY, ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return 0
        return int(item["issued"])

    def update(self, listing: Listing, expected_status: ListingStatus) -> None:
        """貸出状態を更新する"""
        values: dict = {
            ":status": listing.status.value,
            ":expected": expected_status.value,
        }
        if listing.is_available:
            update_expression = (
                "SET #status = :status "
                "REMOVE renter, rental_start_time, escrowed_value"
            )
        else:
            update_expression = (
                "SET #status = :status, renter = :renter, "
                "rental_start_time = :start, escrowed_value = :escrow"
            )
            values[":renter"] = str(listing.renter)
            values[":start"] = listing.rental_start_time.value
            values[":escrow"] = str(listing.escrowed_value)

        try:
            self.table.update_item(
                Key=self._key(listing.id),
                UpdateExpression=update_expression,
                ConditionExpression="#status = :expected",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Listing status conflict: "
                    f"expected {expected_status}, "
                    f"listing_id={listing.id}"
                )
            raise

    def _key(self, listing_id: ListingId) -> dict:
        return {"PK": f"LISTING#{listing_id}", "SK": "LISTING"}

    def _to_item(self, listing: Listing) -> dict:
        item = {
            **self._key(listing.id),
            "entity_type": "LISTING",
            "listing_id": listing.id.value,
            "owner": str(listing.owner),
            "title": str(listing.title),
            "price_per_minute": str(listing.price_per_minute),
            "deposit": str(listing.deposit),
            "status": listing.status.value,
        }
        if not listing.is_available:
            item["renter"] = str(listing.renter)
            item["rental_start_time"] = listing.rental_start_time.value
            item["escrowed_value"] = str(listing.escrowed_value)
        return item

    def _to_entity(self, item: dict) -> Listing:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        renter = item.get("renter")
        start = item.get("rental_start_time")
        escrow = item.get("escrowed_value")
        return Listing(
            id=ListingId(int(item["listing_id"])),
            owner=Address(item["owner"]),
            title=ListingTitle(item["title"]),
            price_per_minute=Amount.from_string(item["price_per_minute"]),
            deposit=Amount.from_string(item["deposit"]),
            status=ListingStatus(item["status"]),
            renter=Address(renter) if renter is not None else None,
            rental_start_time=Timestamp(int(start)) if start is not None else None,
            escrowed_value=Amount.from_string(escrow) if escrow is not None else None,
        )
