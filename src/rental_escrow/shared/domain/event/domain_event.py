from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class DomainEvent:
    """ドメインイベント基底クラス

    サブクラスはフィールドを持つ frozen dataclass とする。
    """

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def payload(self) -> dict[str, Any]:
        """フィールド名と値の辞書（宣言順）"""
        return {f.name: getattr(self, f.name) for f in fields(self)}
