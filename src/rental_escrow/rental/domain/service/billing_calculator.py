from __future__ import annotations

from dataclasses import dataclass

from rental_escrow.shared.domain import Amount, Timestamp

SECONDS_PER_MINUTE = 60
MINIMUM_BILLED_MINUTES = 1


@dataclass(frozen=True)
class BillingResult:
    """返却時点の請求計算結果

    settlement_amount は is_shortfall が False なら返金額、
    True なら不足額（追加で支払うべき額）を表す。
    """

    billed_minutes: int
    total_rent: Amount
    settlement_amount: Amount
    is_shortfall: bool

    @property
    def refund(self) -> Amount:
        return Amount.zero() if self.is_shortfall else self.settlement_amount

    @property
    def shortfall(self) -> Amount:
        return self.settlement_amount if self.is_shortfall else Amount.zero()


class BillingCalculator:
    """分単位の賃料計算（副作用なし）"""

    def billed_minutes(self, start_time: Timestamp, now: Timestamp) -> int:
        """課金対象の分数。端数は切り捨て、最低 1 分"""
        elapsed = now.seconds_since(start_time)
        return max(MINIMUM_BILLED_MINUTES, elapsed // SECONDS_PER_MINUTE)

    def compute(
        self,
        price_per_minute: Amount,
        deposit_at_rent: Amount,
        start_time: Timestamp,
        now: Timestamp,
    ) -> BillingResult:
        """賃料と、保証金に対する返金額または不足額を計算する"""
        minutes = self.billed_minutes(start_time, now)
        total_rent = price_per_minute.mul(minutes)

        if total_rent <= deposit_at_rent:
            return BillingResult(
                billed_minutes=minutes,
                total_rent=total_rent,
                settlement_amount=deposit_at_rent.sub(total_rent),
                is_shortfall=False,
            )
        return BillingResult(
            billed_minutes=minutes,
            total_rent=total_rent,
            settlement_amount=total_rent.sub(deposit_at_rent),
            is_shortfall=True,
        )
