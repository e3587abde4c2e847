from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.request_models import ReturnItemRequest
from rental_escrow.rental.handlers.response_models import (
    settlement_data,
    success_body,
)
from rental_escrow.shared.domain import Address, Amount
from rental_escrow.shared.utils import api_response

logger = Logger()


@logger.inject_lambda_context
@handle_errors
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """返却 Lambda Handler"""
    logger.info("Received return item request")

    payload = event.get("Payload", event)
    request = ReturnItemRequest.model_validate(payload)
    listing_id = ListingId(request.listing_id)

    plan = dependencies.components.state_machine.return_item(
        listing_id=listing_id,
        caller=Address(request.caller),
        extra_value=Amount(request.extra_value),
    )
    return api_response(200, success_body(settlement_data(listing_id, plan)))
