import threading
from collections import defaultdict
from typing import Callable

from rental_escrow.rental.domain.exception import TransferFailedException
from rental_escrow.rental.domain.port import FundsGateway
from rental_escrow.shared.domain import Address, Amount

ReceiveHook = Callable[[Address, Amount], None]


class InMemoryFundsLedger(FundsGateway):
    """プロセス内メモリの資金台帳

    received: hold で受け入れた資金の累計
    paid_out: transfer で払い出した資金の累計
    retained: 精算後にコアに留保された資金
    credited: アドレスごとの受取総額

    払い出し可能額は各出品の預り金（SettlementPlan.funds）で決まるため、
    台帳自身は残高で送金を制限しない。別プロセスで預かった資金の精算も
    記録できるよう、outstanding は負になり得る。

    reject() したアドレスへの送金は失敗する。on_receive() で登録した
    フックは送金の受取時に呼ばれ、フックが例外を送出した場合も送金は失敗する。
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._received = Amount.zero()
        self._paid_out = Amount.zero()
        self._retained = Amount.zero()
        self._credited: dict[Address, Amount] = defaultdict(Amount.zero)
        self._rejecting: set[Address] = set()
        self._hooks: dict[Address, ReceiveHook] = {}

    @property
    def received(self) -> Amount:
        return self._received

    @property
    def paid_out(self) -> Amount:
        return self._paid_out

    @property
    def retained(self) -> Amount:
        return self._retained

    @property
    def outstanding(self) -> int:
        """このプロセスで預かったまま精算されていない額"""
        with self._lock:
            return (
                self._received.value - self._paid_out.value - self._retained.value
            )

    def balance_of(self, address: Address) -> Amount:
        with self._lock:
            return self._credited.get(address, Amount.zero())

    def reject(self, address: Address) -> None:
        """address を受取不能にする"""
        self._rejecting.add(address)

    def on_receive(self, address: Address, hook: ReceiveHook) -> None:
        self._hooks[address] = hook

    def hold(self, amount: Amount) -> None:
        with self._lock:
            self._received = self._received.add(amount)

    def release_hold(self, amount: Amount) -> None:
        with self._lock:
            self._received = self._received.sub(amount)

    def transfer(self, recipient: Address, amount: Amount) -> None:
        if recipient in self._rejecting:
            raise TransferFailedException(f"Recipient rejected funds: {recipient}")

        with self._lock:
            # 加算が溢れた場合は何も変更しない
            credited = self._credited[recipient].add(amount)
            paid_out = self._paid_out.add(amount)
            self._credited[recipient] = credited
            self._paid_out = paid_out

        hook = self._hooks.get(recipient)
        if hook is None:
            return
        try:
            hook(recipient, amount)
        except Exception as e:
            self.reclaim(recipient, amount)
            raise TransferFailedException(
                f"Recipient failed while receiving funds: {recipient}"
            ) from e

    def reclaim(self, recipient: Address, amount: Amount) -> None:
        with self._lock:
            credited = self._credited[recipient].sub(amount)
            paid_out = self._paid_out.sub(amount)
            self._credited[recipient] = credited
            self._paid_out = paid_out

    def retain(self, amount: Amount) -> None:
        with self._lock:
            self._retained = self._retained.add(amount)
