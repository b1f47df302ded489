"""后台事件循环。

桌面 UI 的主线程不能 await，这里在一个守护线程里跑唯一的 asyncio 事件循环，
所有对 SessionController 的修改都被投递到这个循环上执行，
从而保持“单一逻辑线程 + 协作式挂起”的并发模型。
"""

import asyncio
import threading
from concurrent.futures import Future
from typing import Optional

from code_assistant.session.controller import SessionController


class SessionRunner:
    """在后台线程中驱动 SessionController。"""

    def __init__(self, controller: SessionController):
        self.controller = controller
        self._loop = asyncio.new_event_loop()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "SessionRunner":
        if self._loop.is_closed():
            raise RuntimeError("SessionRunner has been stopped and cannot be restarted")
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="session-loop", daemon=True)
            self._thread.start()
        return self

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            # 取消仍在进行的请求，让 controller.submit 的 finally 复位 is_loading
            pending = asyncio.all_tasks(self._loop)
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            self._loop.close()

    def submit(self, raw_text: Optional[str] = None) -> Future:
        """把一次 submit 投递到后台循环，返回 concurrent.futures.Future。"""

        return asyncio.run_coroutine_threadsafe(self.controller.submit(raw_text), self._loop)

    def set_pending_query(self, text: str) -> Future:
        return asyncio.run_coroutine_threadsafe(self._set_pending(text), self._loop)

    async def _set_pending(self, text: str) -> None:
        self.controller.set_pending_query(text)

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        self._thread = None
