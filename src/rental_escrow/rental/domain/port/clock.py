from abc import ABC, abstractmethod

from rental_escrow.shared.domain import Timestamp


class Clock(ABC):
    """現在時刻の供給元"""

    @abstractmethod
    def now(self) -> Timestamp:
        raise NotImplementedError
