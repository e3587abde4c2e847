import time

from rental_escrow.rental.domain.port import Clock
from rental_escrow.shared.domain import Timestamp


class SystemClock(Clock):
    """システム時刻（UNIX 秒）"""

    def now(self) -> Timestamp:
        return Timestamp(int(time.time()))
