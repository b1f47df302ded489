"""统一的补全请求与结果数据模型。

本模块定义了会话核心与 Provider 之间共享的标准数据结构：

- CompletionRequest: 发给底层 LLM Provider 的一次请求。
- CompletionResult: 从 Provider 解析后的统一响应结果。

Provider 适配器（如 GeminiClient）只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CompletionRequest:
    """一次补全请求。

    prompt 已经由 SessionController 去除首尾空白。
    """

    provider: str  # 逻辑 Provider 名，如 "gemini"
    model: str  # 逻辑模型名，如 "code-assistant"（再由 registry 映射为真实模型名）
    prompt: str
    temperature: float = 0.7
    top_p: float = 0.95
    max_tokens: Optional[int] = None


@dataclass
class CompletionUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class CompletionResult:
    """一次补全调用的最终结果。

    - text: 回答文本，可能为空字符串（由上层判定为失败）。
    - finish_reason: Provider 给出的结束原因，如 "STOP"。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    provider: str
    model: str
    text: str
    finish_reason: Optional[str] = None
    usage: Optional[CompletionUsage] = None
    raw: Optional[dict] = None
