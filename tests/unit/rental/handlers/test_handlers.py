import json
from unittest.mock import patch

import pytest

from rental_escrow.rental.handlers import (
    dependencies,
    get_book,
    get_book_count,
    get_events,
    list_books,
    list_item,
    quote_return,
    rent_item,
    return_item,
)

OWNER = "0xHandlerOwner"
RENTER = "0xHandlerRenter"


def _body(response: dict) -> dict:
    return json.loads(response["body"])


@pytest.fixture
def listed_id(lambda_context):
    response = list_item.lambda_handler(
        {
            "caller": OWNER,
            "title": "Handler Book",
            "price_per_minute": "10",
            "deposit": 100,
        },
        lambda_context,
    )
    assert response["statusCode"] == 201
    return _body(response)["data"]["listing_id"]


class TestListItemHandler:
    def test_list_item(self, lambda_context):
        response = list_item.lambda_handler(
            {
                "Payload": {
                    "caller": OWNER,
                    "title": "Payload Book",
                    "price_per_minute": "50000000000000000",
                    "deposit": "500000000000000000",
                }
            },
            lambda_context,
        )

        body = _body(response)
        assert response["statusCode"] == 201
        assert body["status"] == "success"
        assert body["data"]["owner"] == OWNER.lower()
        assert body["data"]["price_per_minute"] == "50000000000000000"
        assert body["data"]["is_available"] is True
        assert body["data"]["renter"] is None

    def test_zero_price_is_rejected(self, lambda_context):
        response = list_item.lambda_handler(
            {"caller": OWNER, "title": "Free", "price_per_minute": 0, "deposit": 1},
            lambda_context,
        )

        assert response["statusCode"] == 400
        assert _body(response)["error"] == "InvalidPrice"

    def test_invalid_amount_is_rejected(self, lambda_context):
        response = list_item.lambda_handler(
            {"caller": OWNER, "title": "Bad", "price_per_minute": "0.5", "deposit": 1},
            lambda_context,
        )

        assert response["statusCode"] == 400
        assert _body(response)["error"] == "ValidationError"


class TestRentAndReturnHandlers:
    def test_rent_and_return(self, lambda_context, listed_id):
        rent_response = rent_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id, "value": "110"},
            lambda_context,
        )
        assert rent_response["statusCode"] == 200
        assert _body(rent_response)["data"]["renter"] == RENTER.lower()

        return_response = return_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id},
            lambda_context,
        )

        data = _body(return_response)["data"]
        assert return_response["statusCode"] == 200
        assert data["billed_minutes"] == 1
        assert data["total_rent"] == "10"
        assert data["owner_payment"] == "10"
        assert data["refund"] == "90"

    def test_owner_cannot_rent(self, lambda_context, listed_id):
        response = rent_item.lambda_handler(
            {"caller": OWNER, "listing_id": listed_id, "value": "110"},
            lambda_context,
        )

        assert response["statusCode"] == 403
        assert _body(response)["error"] == "SelfRental"

    def test_insufficient_payment(self, lambda_context, listed_id):
        response = rent_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id, "value": "109"},
            lambda_context,
        )

        assert response["statusCode"] == 400
        assert _body(response)["error"] == "InsufficientPayment"

    def test_return_by_non_renter(self, lambda_context, listed_id):
        rent_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id, "value": "110"},
            lambda_context,
        )

        response = return_item.lambda_handler(
            {"caller": "0xSomeoneElse", "listing_id": listed_id},
            lambda_context,
        )

        assert response["statusCode"] == 403
        assert _body(response)["error"] == "NotRenter"

    def test_return_available_listing(self, lambda_context, listed_id):
        response = return_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id},
            lambda_context,
        )

        assert response["statusCode"] == 409
        assert _body(response)["error"] == "NotRented"


class TestQueryHandlers:
    def test_get_book(self, lambda_context, listed_id):
        response = get_book.lambda_handler(
            {"pathParameters": {"listing_id": str(listed_id)}}, lambda_context
        )

        data = _body(response)["data"]
        assert response["statusCode"] == 200
        assert data["listing_id"] == listed_id
        assert data["title"] == "Handler Book"
        assert data["status"] == "AVAILABLE"

    def test_get_unknown_book(self, lambda_context):
        response = get_book.lambda_handler(
            {"pathParameters": {"listing_id": "999999"}}, lambda_context
        )

        assert response["statusCode"] == 404
        assert _body(response)["error"] == "NotFound"

    def test_get_book_requires_id(self, lambda_context):
        response = get_book.lambda_handler({"pathParameters": {}}, lambda_context)
        assert response["statusCode"] == 400

    def test_get_book_count(self, lambda_context, listed_id):
        response = get_book_count.lambda_handler({}, lambda_context)

        assert response["statusCode"] == 200
        assert listed_id == 0
        assert _body(response)["data"]["count"] == 1

    def test_list_available_books(self, lambda_context, listed_id):
        response = list_books.lambda_handler(
            {"queryStringParameters": {"view": "available"}}, lambda_context
        )

        ids = [item["listing_id"] for item in _body(response)["data"]]
        assert response["statusCode"] == 200
        assert listed_id in ids

    def test_list_owned_books_requires_address(self, lambda_context):
        response = list_books.lambda_handler(
            {"queryStringParameters": {"view": "owned"}}, lambda_context
        )
        assert response["statusCode"] == 400

    def test_list_rented_books(self, lambda_context, listed_id):
        rent_item.lambda_handler(
            {"caller": "0xListRenter", "listing_id": listed_id, "value": "110"},
            lambda_context,
        )

        response = list_books.lambda_handler(
            {"queryStringParameters": {"view": "rented", "address": "0xListRenter"}},
            lambda_context,
        )

        ids = [item["listing_id"] for item in _body(response)["data"]]
        assert ids == [listed_id]

    def test_quote_return(self, lambda_context, listed_id):
        rent_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id, "value": "110"},
            lambda_context,
        )

        response = quote_return.lambda_handler(
            {"pathParameters": {"listing_id": str(listed_id)}}, lambda_context
        )

        data = _body(response)["data"]
        assert response["statusCode"] == 200
        assert data["total_rent"] == "10"
        assert data["refund"] == "90"
        assert data["required_extra"] == "0"

    def test_get_events_from_offset(self, lambda_context, listed_id):
        first = _body(
            get_events.lambda_handler(
                {"queryStringParameters": {"offset": "0"}}, lambda_context
            )
        )
        offset = first["next_offset"]

        rent_item.lambda_handler(
            {"caller": RENTER, "listing_id": listed_id, "value": "110"},
            lambda_context,
        )
        response = get_events.lambda_handler(
            {"queryStringParameters": {"offset": str(offset)}}, lambda_context
        )

        body = _body(response)
        assert response["statusCode"] == 200
        assert [event["event_type"] for event in body["data"]] == ["ItemRented"]
        assert body["data"][0]["payload"] == {
            "listing_id": listed_id,
            "renter": RENTER.lower(),
        }
        assert body["next_offset"] == offset + 1


class TestDependencies:
    def test_each_test_starts_with_empty_state(self, lambda_context):
        response = get_book_count.lambda_handler({}, lambda_context)

        assert _body(response)["data"]["count"] == 0

    def test_unsupported_store_is_rejected(self):
        with pytest.raises(ValueError, match="Unsupported LISTING_STORE"):
            dependencies.build_components("sqlite")

    def test_dynamodb_store_keeps_all_state_in_dynamodb(self, monkeypatch):
        monkeypatch.setenv("TABLE_NAME", "rental-table")
        infrastructure = "rental_escrow.rental.infrastructure"
        with (
            patch(f"{infrastructure}.dynamodb_listing_repository.boto3"),
            patch(f"{infrastructure}.dynamodb_funds_ledger.boto3"),
            patch(f"{infrastructure}.dynamodb_event_log.boto3"),
        ):
            built = dependencies.build_components("dynamodb")

        assert isinstance(built.repository, dependencies.DynamoDBListingRepository)
        assert isinstance(built.funds_ledger, dependencies.DynamoDBFundsLedger)
        assert isinstance(built.event_log, dependencies.DynamoDBEventLog)
