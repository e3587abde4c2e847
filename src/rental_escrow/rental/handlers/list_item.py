from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.request_models import ListItemRequest
from rental_escrow.rental.handlers.response_models import listing_data, success_body
from rental_escrow.shared.domain import Address, Amount
from rental_escrow.shared.utils import api_response

logger = Logger()


@logger.inject_lambda_context
@handle_errors
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """出品 Lambda Handler"""
    logger.info("Received list item request")

    payload = event.get("Payload", event)
    request = ListItemRequest.model_validate(payload)

    listing = dependencies.components.state_machine.list_item(
        owner=Address(request.caller),
        title=request.title,
        price_per_minute=Amount(request.price_per_minute),
        deposit=Amount(request.deposit),
    )
    return api_response(201, success_body(listing_data(listing)))
