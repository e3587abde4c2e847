from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """外部アイデンティティのアドレス

    等価比較のみに使う。大文字小文字は区別しない（小文字に正規化）。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Address cannot be empty")
        object.__setattr__(self, "value", self.value.strip().lower())

    def __str__(self) -> str:
        return self.value
