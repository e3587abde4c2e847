from rental_escrow.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    ResourceNotFoundException,
)


class ListingNotFoundException(ResourceNotFoundException):
    """存在しない（未発行の）出品IDが指定された"""

    code = "NotFound"


class InvalidPriceException(BusinessRuleViolationException):
    """分単価が 0"""

    code = "InvalidPrice"


class NotAvailableException(BusinessRuleViolationException):
    """貸出中の出品を借りようとした"""

    code = "NotAvailable"


class SelfRentalException(BusinessRuleViolationException):
    """出品者が自分の出品を借りようとした"""

    code = "SelfRental"


class InsufficientPaymentException(BusinessRuleViolationException):
    """支払額が必要額に満たない"""

    code = "InsufficientPayment"


class InvalidPaymentException(BusinessRuleViolationException):
    """不要な追加支払いが指定された"""

    code = "InvalidPayment"


class NotRentedException(BusinessRuleViolationException):
    """貸出中でない出品を返却しようとした"""

    code = "NotRented"


class NotRenterException(BusinessRuleViolationException):
    """借り手以外が返却しようとした"""

    code = "NotRenter"


class ReentrancyRiskException(BusinessRuleViolationException):
    """処理中の更新操作に再入しようとした"""

    code = "ReentrancyRisk"


class TransferFailedException(DomainException):
    """送金先が資金を受け取れなかった"""

    code = "TransferFailed"
