from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ListingId:
    """出品ID（0 から始まる連番）"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"ListingId must be an integer: {self.value!r}")
        if self.value < 0:
            raise ValueError("ListingId cannot be negative")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def from_string(cls, s: str) -> ListingId:
        """パスパラメータ等の文字列から生成"""
        if not s.isdigit():
            raise ValueError(f"Invalid listing id: {s!r}")
        return cls(value=int(s))
