from enum import Enum


class ListingStatus(str, Enum):
    """出品ステータス"""

    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
