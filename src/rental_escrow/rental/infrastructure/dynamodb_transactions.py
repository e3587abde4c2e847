from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

_serializer = TypeSerializer()


def to_attribute_values(item: dict) -> dict:
    """低レベルクライアント（transact_write_items）用の型付き属性値に変換する"""
    return {name: _serializer.serialize(value) for name, value in item.items()}


def put_if_absent(table_name: str, item: dict) -> dict:
    """PK が存在しない場合のみ書き込む Put"""
    return {
        "Put": {
            "TableName": table_name,
            "Item": to_attribute_values(item),
            "ConditionExpression": "attribute_not_exists(PK)",
        }
    }


def advance_counter(
    table_name: str, key: dict, attribute: str, current: int, new: int
) -> dict:
    """カウンタが current の場合のみ new に進める Update"""
    values = {":new": new}
    if current == 0:
        condition = "attribute_not_exists(#counter)"
    else:
        condition = "#counter = :current"
        values[":current"] = current
    return {
        "Update": {
            "TableName": table_name,
            "Key": to_attribute_values(key),
            "UpdateExpression": "SET #counter = :new",
            "ConditionExpression": condition,
            "ExpressionAttributeNames": {"#counter": attribute},
            "ExpressionAttributeValues": to_attribute_values(values),
        }
    }


def is_transaction_canceled(error: ClientError) -> bool:
    return error.response["Error"]["Code"] == "TransactionCanceledException"


def cancellation_codes(error: ClientError) -> list[str]:
    """TransactItems と同じ順序の取り消し理由コード"""
    reasons = error.response.get("CancellationReasons", [])
    return [reason.get("Code", "None") for reason in reasons]
