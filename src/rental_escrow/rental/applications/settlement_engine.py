from typing import Callable

from rental_escrow.rental.domain.port import FundsGateway
from rental_escrow.rental.domain.value_object import SettlementPlan
from rental_escrow.shared.domain import Amount
from rental_escrow.shared.utils import get_logger

logger = get_logger("rental")

Compensation = Callable[[], None]


class SettlementEngine:
    """精算の資金移動を実行する

    払い出しの原資は精算内容（出品ごとの預託額 + 追加支払額）で、
    プロセス内の残高には依存しない。送金は 借り手への返金 → 出品者への支払い
    の固定順序で行う。途中で失敗した場合は完了済みの処理を逆順に補償し、
    元の例外をそのまま送出する。
    """

    def __init__(self, funds_gateway: FundsGateway) -> None:
        self._funds = funds_gateway

    def hold_escrow(self, amount: Amount) -> None:
        """貸出時の支払いをエスクローに入れる"""
        self._funds.hold(amount)

    def release_escrow(self, amount: Amount) -> None:
        """hold_escrow を取り消す"""
        self._funds.release_hold(amount)

    def settle(self, plan: SettlementPlan) -> None:
        """精算を実行する"""
        completed: list[Compensation] = []
        try:
            if not plan.extra_value.is_zero():
                self._funds.hold(plan.extra_value)
                completed.append(lambda: self._funds.release_hold(plan.extra_value))

            if not plan.refund.is_zero():
                self._funds.transfer(plan.renter, plan.refund)
                completed.append(
                    lambda: self._funds.reclaim(plan.renter, plan.refund)
                )

            if not plan.owner_payment.is_zero():
                self._funds.transfer(plan.owner, plan.owner_payment)
                completed.append(
                    lambda: self._funds.reclaim(plan.owner, plan.owner_payment)
                )

            if not plan.retained.is_zero():
                self._funds.retain(plan.retained)
        except Exception:
            logger.warning(
                "Settlement failed, compensating completed legs",
                extra={"completed_legs": len(completed)},
            )
            for compensate in reversed(completed):
                compensate()
            raise

        logger.info(
            "Settlement completed",
            extra={
                "funds": str(plan.funds),
                "owner_payment": str(plan.owner_payment),
                "refund": str(plan.refund),
                "retained": str(plan.retained),
            },
        )
