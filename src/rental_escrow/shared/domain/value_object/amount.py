from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from rental_escrow.shared.domain.exception import ArithmeticOverflowException


@dataclass(frozen=True, order=True)
class Amount:
    """金額（最小通貨単位の符号なし 256bit 整数）

    演算はすべて範囲チェック付き。範囲外になる演算は
    ArithmeticOverflowException を送出する。
    """

    MAX: ClassVar[int] = 2**256 - 1

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Amount must be an integer: {self.value!r}")
        if self.value < 0:
            raise ValueError("Amount cannot be negative")
        if self.value > self.MAX:
            raise ValueError("Amount exceeds uint256 range")

    def __str__(self) -> str:
        return str(self.value)

    def is_zero(self) -> bool:
        return self.value == 0

    def add(self, other: Amount) -> Amount:
        """加算する"""
        result = self.value + other.value
        if result > self.MAX:
            raise ArithmeticOverflowException(f"Addition overflow: {self} + {other}")
        return Amount(result)

    def sub(self, other: Amount) -> Amount:
        """減算する"""
        if other.value > self.value:
            raise ArithmeticOverflowException(
                f"Subtraction underflow: {self} - {other}"
            )
        return Amount(self.value - other.value)

    def mul(self, factor: int) -> Amount:
        """非負整数倍する"""
        if factor < 0:
            raise ValueError("Factor cannot be negative")
        result = self.value * factor
        if result > self.MAX:
            raise ArithmeticOverflowException(
                f"Multiplication overflow: {self} * {factor}"
            )
        return Amount(result)

    @classmethod
    def zero(cls) -> Amount:
        return cls(0)

    @classmethod
    def from_string(cls, s: str) -> Amount:
        """10進数文字列から生成"""
        try:
            value = int(s)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid amount: {s!r}") from e
        return cls(value)
