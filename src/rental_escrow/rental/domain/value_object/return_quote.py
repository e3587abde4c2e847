from dataclasses import dataclass

from rental_escrow.shared.domain import Amount


@dataclass(frozen=True)
class ReturnQuote:
    """指定時刻に返却した場合の見積り"""

    billed_minutes: int
    total_rent: Amount
    refund: Amount
    required_extra: Amount
