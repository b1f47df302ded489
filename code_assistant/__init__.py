"""Code Assistant 顶层包。

该包提供单用户代码助手聊天的会话核心，
包括配置加载、领域模型、Gemini Provider 适配、
会话控制器、内存历史存储与桌面渲染层等能力。
"""

from code_assistant.session import SessionController, SessionRunner

__all__ = ["SessionController", "SessionRunner"]
