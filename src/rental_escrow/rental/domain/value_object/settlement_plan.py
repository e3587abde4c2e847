from __future__ import annotations

from dataclasses import dataclass

from rental_escrow.rental.domain.exception import (
    InsufficientPaymentException,
    InvalidPaymentException,
)
from rental_escrow.rental.domain.service.billing_calculator import BillingResult
from rental_escrow.shared.domain import Address, Amount


@dataclass(frozen=True)
class SettlementPlan:
    """返却時の精算内容

    原資は出品ごとの預託額（escrowed_value）と返却時の追加支払額で、
    escrowed_value + extra_value
        == owner_payment + refund + retained
    が常に成り立つ。retained は貸出時に前払いされた初回 1 分の賃料で、
    コア側の留保残高に移る。貸出時の過払い分は refund に含めて借り手に返す。
    """

    owner: Address
    renter: Address
    deposit: Amount
    escrowed_value: Amount
    billed_minutes: int
    total_rent: Amount
    owner_payment: Amount
    refund: Amount
    extra_value: Amount
    retained: Amount

    def __post_init__(self) -> None:
        paid_out = self.owner_payment.add(self.refund).add(self.retained)
        if self.funds != paid_out:
            raise ValueError(
                f"Settlement does not balance: funds {self.funds}, paid out {paid_out}"
            )

    @property
    def funds(self) -> Amount:
        """この精算で払い出せる資金"""
        return self.escrowed_value.add(self.extra_value)

    @classmethod
    def for_return(
        cls,
        owner: Address,
        renter: Address,
        deposit: Amount,
        price_per_minute: Amount,
        escrowed_value: Amount,
        billing: BillingResult,
        extra_value: Amount,
    ) -> SettlementPlan:
        """請求結果と追加支払額から精算内容を決定する"""
        prepayment = price_per_minute
        overpayment = escrowed_value.sub(deposit).sub(prepayment)

        if billing.is_shortfall:
            if extra_value < billing.shortfall:
                raise InsufficientPaymentException(
                    f"Extra payment required: {billing.shortfall}, got {extra_value}"
                )
            refund = extra_value.sub(billing.shortfall)
        else:
            if not extra_value.is_zero():
                raise InvalidPaymentException(
                    "Extra payment is only accepted when rent exceeds the deposit"
                )
            refund = billing.refund

        return cls(
            owner=owner,
            renter=renter,
            deposit=deposit,
            escrowed_value=escrowed_value,
            billed_minutes=billing.billed_minutes,
            total_rent=billing.total_rent,
            owner_payment=billing.total_rent,
            refund=refund.add(overpayment),
            extra_value=extra_value,
            retained=prepayment,
        )
