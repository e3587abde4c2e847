from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.handlers import dependencies
from rental_escrow.rental.handlers.error_response import handle_errors
from rental_escrow.rental.handlers.response_models import event_data
from rental_escrow.shared.utils import api_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@handle_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """イベントログ取得 Lambda Handler（offset 以降をポーリング）"""
    params = event.query_string_parameters or {}
    offset = int(params.get("offset", "0"))
    limit = int(params["limit"]) if "limit" in params else None

    records = dependencies.components.event_log.read(offset=offset, limit=limit)
    next_offset = records[-1].offset + 1 if records else offset
    return api_response(
        200,
        {
            "status": "success",
            "data": [event_data(record).model_dump() for record in records],
            "next_offset": next_offset,
        },
    )
