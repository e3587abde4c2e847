import functools
from typing import Callable

from pydantic import ValidationError

from rental_escrow.rental.domain.exception import (
    InsufficientPaymentException,
    InvalidPaymentException,
    InvalidPriceException,
    NotAvailableException,
    NotRentedException,
    NotRenterException,
    ReentrancyRiskException,
    SelfRentalException,
    TransferFailedException,
)
from rental_escrow.shared.domain.exception import (
    ArithmeticOverflowException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from rental_escrow.shared.utils import api_error, get_logger

logger = get_logger("rental")

_STATUS_BY_EXCEPTION: list[tuple[type[DomainException], int]] = [
    (ResourceNotFoundException, 404),
    (InvalidPriceException, 400),
    (InsufficientPaymentException, 400),
    (InvalidPaymentException, 400),
    (ArithmeticOverflowException, 400),
    (SelfRentalException, 403),
    (NotRenterException, 403),
    (NotAvailableException, 409),
    (NotRentedException, 409),
    (ReentrancyRiskException, 409),
    (OptimisticLockException, 409),
    (DuplicateResourceException, 409),
    (TransferFailedException, 502),
]


def status_code_for(error: DomainException) -> int:
    for exception_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(error, exception_type):
            return status_code
    return 422


def error_response(error: DomainException) -> dict:
    """ドメイン例外をエラーレスポンスに変換する"""
    return api_error(status_code_for(error), error.code, str(error))


def handle_errors(handler: Callable[..., dict]) -> Callable[..., dict]:
    """リクエスト検証エラーとドメイン例外を HTTP レスポンスに変換する"""

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return handler(*args, **kwargs)
        except ValidationError as e:
            logger.warning("Invalid request", extra={"errors": e.errors()})
            return api_error(400, "ValidationError", str(e))
        except ValueError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            return api_error(400, "ValidationError", str(e))
        except DomainException as e:
            logger.warning(
                "Operation rejected",
                extra={"error": e.code, "reason": str(e)},
            )
            return error_response(e)

    return wrapper
