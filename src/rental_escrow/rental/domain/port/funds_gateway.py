from abc import ABC, abstractmethod

from rental_escrow.shared.domain import Address, Amount


class FundsGateway(ABC):
    """資金移動のインターフェース

    コアが預かる資金（エスクロー）からの払い出しを抽象化する。
    払い出し額の上限は呼び出し側（SettlementPlan.funds）が保証する。
    transfer は受取側が受け取れない場合 TransferFailedException を送出する。
    reclaim / release_hold は補償トランザクション用。
    """

    @abstractmethod
    def hold(self, amount: Amount) -> None:
        """受け取った資金をエスクローに入れる"""
        raise NotImplementedError

    @abstractmethod
    def release_hold(self, amount: Amount) -> None:
        """hold を取り消す"""
        raise NotImplementedError

    @abstractmethod
    def transfer(self, recipient: Address, amount: Amount) -> None:
        """エスクローから recipient に送金する"""
        raise NotImplementedError

    @abstractmethod
    def reclaim(self, recipient: Address, amount: Amount) -> None:
        """transfer を取り消し、エスクローに戻す"""
        raise NotImplementedError

    @abstractmethod
    def retain(self, amount: Amount) -> None:
        """エスクローからコアの留保残高に移す"""
        raise NotImplementedError
