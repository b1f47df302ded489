from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .answer import AnswerKind, classify_answer


@dataclass(frozen=True)
class Exchange:
    """一次成功完成的问答。创建后不可修改。"""

    query: str
    response: str

    @property
    def answer_kind(self) -> AnswerKind:
        return classify_answer(self.response)


@dataclass
class SessionState:
    pending_query: str = ""
    is_loading: bool = False
    last_error: Optional[str] = None
    # 最近一次失败的错误码，仅用于诊断
    last_error_code: Optional[str] = None


class HistoryStore(Protocol):
    def append(self, exchange: Exchange) -> None:
        ...

    def all(self) -> Tuple[Exchange, ...]:
        ...

    def __len__(self) -> int:
        ...
