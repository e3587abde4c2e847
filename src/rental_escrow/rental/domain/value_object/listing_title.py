from dataclasses import dataclass


@dataclass(frozen=True)
class ListingTitle:
    """出品タイトル"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Listing title cannot be empty")
        if len(self.value) > 200:
            raise ValueError("Listing title is too long (max 200 characters)")

    def __str__(self) -> str:
        return self.value
