from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental_escrow.rental.handlers import dependencies
from rental_escrow.shared.utils import api_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """出品数取得 Lambda Handler"""
    count = dependencies.components.query_service.get_book_count()
    return api_response(200, {"status": "success", "data": {"count": count}})
