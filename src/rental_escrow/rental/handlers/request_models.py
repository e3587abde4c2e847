from pydantic import BaseModel, Field, field_validator

from rental_escrow.shared.utils import to_uint


class ListItemRequest(BaseModel):
    """出品リクエストモデル"""

    caller: str = Field(..., min_length=1, description="出品者のアドレス")
    title: str = Field(..., min_length=1, max_length=200, description="タイトル")
    price_per_minute: int = Field(
        ...,
        description="分単価（最小通貨単位、0 より大きい値）",
        examples=["50000000000000000"],
    )
    deposit: int = Field(
        ...,
        description="保証金（最小通貨単位）",
        examples=["500000000000000000"],
    )

    @field_validator("price_per_minute", "deposit", mode="before")
    @classmethod
    def convert_to_uint(cls, v):
        return to_uint(v)


class RentItemRequest(BaseModel):
    """貸出リクエストモデル"""

    caller: str = Field(..., min_length=1, description="借り手のアドレス")
    listing_id: int = Field(..., ge=0)
    value: int = Field(..., description="支払額（保証金 + 初回 1 分以上）")

    @field_validator("value", mode="before")
    @classmethod
    def convert_value_to_uint(cls, v):
        return to_uint(v)


class ReturnItemRequest(BaseModel):
    """返却リクエストモデル"""

    caller: str = Field(..., min_length=1, description="借り手のアドレス")
    listing_id: int = Field(..., ge=0)
    extra_value: int = Field(
        default=0,
        description="追加支払額（賃料が保証金を超えた場合のみ）",
    )

    @field_validator("extra_value", mode="before")
    @classmethod
    def convert_extra_value_to_uint(cls, v):
        return to_uint(v)
