"""会话控制器。

SessionController 持有单个会话的全部状态（SessionState + 问答历史），
驱动一次请求的生命周期：Idle -> InFlight -> Settled(成功/失败) -> Idle。

并发约束只有一条：is_loading 为 True 时再次 submit 会被直接忽略，
不排队、也不取消正在进行的请求。因为同一时刻最多只有一个请求，
历史记录的追加顺序天然等于提交顺序。
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from code_assistant.domain.conversation import Exchange, HistoryStore, SessionState
from code_assistant.domain.exceptions import BusinessError, EmptyResponseError
from code_assistant.infrastructure.logging.logger import logger
from code_assistant.infrastructure.storage.memory_store import InMemoryHistoryStore
from code_assistant.providers.base import ProviderClient


FAILURE_MESSAGE = "Failed to get response. Please check your API key."


class SessionController:
    def __init__(self, provider_client: ProviderClient, history: Optional[HistoryStore] = None):
        self._provider_client = provider_client
        self._history = history if history is not None else InMemoryHistoryStore()
        self._state = SessionState()
        self._session_id = f"s-{uuid4().hex}"

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> Tuple[Exchange, ...]:
        return self._history.all()

    def set_pending_query(self, text: str) -> None:
        """更新草稿文本。请求进行中也可以调用，只影响下一次提交。"""

        self._state.pending_query = text

    async def submit(self, raw_text: Optional[str] = None) -> None:
        """提交一次提问。

        raw_text 省略时提交当前草稿。空白输入与请求进行中的重复提交都会被静默忽略。
        Provider 的任何失败都不会抛给调用方，只会体现在 state.last_error 上。
        """

        if raw_text is None:
            raw_text = self._state.pending_query
        prompt = (raw_text or "").strip()
        if not prompt:
            return
        if self._state.is_loading:
            self._log(logging.INFO, "Rejected submit while in flight", {})
            return

        # 在第一次 await 之前加锁，同一事件循环中的后续 submit 必然看到 is_loading
        self._state.is_loading = True
        self._state.last_error = None
        self._state.last_error_code = None
        log_ctx: Dict[str, Any] = {"request_id": f"rq-{uuid4().hex}"}
        self._log(logging.INFO, "Submitted query", log_ctx, prompt_chars=len(prompt))
        start_time = time.time()

        try:
            result = await self._provider_client.complete(prompt)
            text = result.text if result is not None else None
            if not text:
                raise EmptyResponseError(provider=getattr(self._provider_client, "name", None))
        except BusinessError as e:
            self._fail(e.code, e.message, log_ctx)
        except Exception as e:
            self._fail("UNEXPECTED_ERROR", repr(e), log_ctx)
        else:
            self._history.append(Exchange(query=raw_text, response=text))
            self._state.pending_query = ""
            self._log(
                logging.INFO,
                "Completed query",
                log_ctx,
                response_chars=len(text),
                history_size=len(self._history),
                elapsed_seconds=round(time.time() - start_time, 2),
            )
        finally:
            self._state.is_loading = False

    def _fail(self, code: str, detail: str, log_ctx: Dict[str, Any]) -> None:
        # 草稿保持原样，不追加历史
        self._state.last_error = FAILURE_MESSAGE
        self._state.last_error_code = code
        self._log(logging.ERROR, "Query failed", log_ctx, error_code=code, error=detail)

    def _log(self, level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = {"session_id": self._session_id}
        payload.update(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
