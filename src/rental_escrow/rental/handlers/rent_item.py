from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.request_models import RentItemRequest
from rental_escrow.rental.handlers.response_models import listing_data, success_body
from rental_escrow.shared.domain import Address, Amount
from rental_escrow.shared.utils import api_response

logger = Logger()


@logger.inject_lambda_context
@handle_errors
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """貸出 Lambda Handler"""
    logger.info("Received rent item request")

    payload = event.get("Payload", event)
    request = RentItemRequest.model_validate(payload)

    listing = dependencies.components.state_machine.rent_item(
        listing_id=ListingId(request.listing_id),
        renter=Address(request.caller),
        paid_value=Amount(request.value),
    )
    return api_response(200, success_body(listing_data(listing)))
