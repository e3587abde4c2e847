from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.domain.value_object import ListingId
from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.response_models import quote_data, success_body
from rental_escrow.shared.utils import api_error, api_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """返却見積り Lambda Handler"""
    path_params = event.path_parameters or {}
    raw_id = path_params.get("listing_id")

    if not raw_id:
        return api_error(400, "ValidationError", "listing_id is required")

    listing_id = ListingId.from_string(raw_id)
    quote = dependencies.components.query_service.quote_return(listing_id)
    return api_response(200, success_body(quote_data(listing_id, quote)))
