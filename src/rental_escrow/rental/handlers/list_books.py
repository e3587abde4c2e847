from typing import Callable

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.applications import ListingQueryService
from rental_escrow.rental.domain.entity import Listing
from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.response_models import listing_data, success_body
from rental_escrow.shared.domain import Address
from rental_escrow.shared.utils import api_error, api_response

logger = Logger()

_VIEWS: dict[str, Callable[[ListingQueryService, Address], list[Listing]]] = {
    "rented": ListingQueryService.list_rented_by,
    "owned": ListingQueryService.list_owned_by,
}


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """出品一覧 Lambda Handler

    view=available（既定）: 貸出可能な出品。address 指定時はその出品を除く
    view=rented: address が借りている出品
    view=owned: address の出品
    """
    params = event.query_string_parameters or {}
    view = params.get("view", "available")
    address = params.get("address")

    logger.info("Listing books", extra={"view": view})
    query_service = dependencies.components.query_service

    if view == "available":
        viewer = Address(address) if address else None
        listings = query_service.list_available(viewer)
    elif view in _VIEWS:
        if not address:
            return api_error(400, "ValidationError", "address is required")
        listings = _VIEWS[view](query_service, Address(address))
    else:
        return api_error(400, "ValidationError", f"Unsupported view: {view}")

    return api_response(
        200, success_body([listing_data(listing) for listing in listings])
    )
