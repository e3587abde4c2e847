import os

from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = "rental-escrow"


def get_logger(service_name: str | None = None) -> Logger:
    """サービス名付きの Logger を返す

    service_name を省略した場合は POWERTOOLS_SERVICE_NAME、
    未設定なら rental-escrow を使う。
    """
    service = service_name or os.getenv("POWERTOOLS_SERVICE_NAME", DEFAULT_SERVICE_NAME)
    return Logger(service=service)
