from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Timestamp:
    """UNIX 時刻（秒）"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Timestamp must be an integer: {self.value!r}")
        if self.value < 0:
            raise ValueError("Timestamp cannot be negative")

    def __str__(self) -> str:
        return str(self.value)

    def seconds_since(self, earlier: Timestamp) -> int:
        """earlier からの経過秒数。時刻が逆行している場合は 0"""
        return max(0, self.value - earlier.value)

    def plus_seconds(self, seconds: int) -> Timestamp:
        return Timestamp(self.value + seconds)
