"""对外 API 服务模块。

提供简化的函数接口供渲染层调用：渲染层只读取快照，
并通过 SessionController 的两个修改入口（submit / set_pending_query）驱动会话。
"""

from typing import Optional, Dict, Any

from code_assistant.providers import create_provider
from code_assistant.session.controller import SessionController
from code_assistant.infrastructure.storage.memory_store import InMemoryHistoryStore


_session: Optional[SessionController] = None


def get_default_session() -> SessionController:
    """获取默认的会话实例（单例）。"""
    global _session
    if _session is None:
        _session = SessionController(
            provider_client=create_provider(),
            history=InMemoryHistoryStore(),
        )
    return _session


def session_snapshot(session: SessionController) -> Dict[str, Any]:
    """把会话状态与历史转成纯字典，供渲染层展示。

    Returns:
        包含 pending_query、is_loading、last_error 与 history 列表的字典，
        history 中每项包含 query、response 与 answer_kind（"code" / "prose"）
    """
    state = session.state
    return {
        "pending_query": state.pending_query,
        "is_loading": state.is_loading,
        "last_error": state.last_error,
        "history": [
            {
                "query": ex.query,
                "response": ex.response,
                "answer_kind": ex.answer_kind,
            }
            for ex in session.history
        ],
    }
