import json


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def api_error(status_code: int, error: str, message: str) -> dict:
    """エラーレスポンス。error は失敗理由を識別する安定した名前"""
    return api_response(
        status_code, {"status": "error", "error": error, "message": message}
    )
