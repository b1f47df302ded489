from typing import List, Tuple

from code_assistant.domain.conversation import Exchange, HistoryStore


class InMemoryHistoryStore(HistoryStore):
    """会话期内的问答历史，只追加、不删除、不重排，进程退出即丢弃。"""

    def __init__(self) -> None:
        self._items: List[Exchange] = []

    def append(self, exchange: Exchange) -> None:
        self._items.append(exchange)

    def all(self) -> Tuple[Exchange, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)
