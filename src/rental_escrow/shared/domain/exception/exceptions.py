class DomainException(Exception):
    """ドメイン層で発生する基底例外

    code は呼び出し側が失敗理由を識別するための安定した名前。
    """

    code = "DomainError"


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    code = "NotFound"


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    code = "BusinessRuleViolation"


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    code = "DuplicateResource"


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    code = "OptimisticLock"


class ArithmeticOverflowException(DomainException):
    """金額演算が uint256 の範囲を超えた場合"""

    code = "ArithmeticOverflow"
