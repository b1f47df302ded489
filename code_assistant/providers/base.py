"""Provider 抽象接口。

SessionController 不直接依赖具体厂商的 HTTP 调用，而是依赖此协议：

- 每个厂商实现一个 ProviderClient（如 GeminiClient）。
- 负责：把提示文本转成具体 API 请求，并把响应 JSON 解析为 CompletionResult。
- 失败时抛出 domain.exceptions 中的 BusinessError 子类，且不在内部重试。
"""

from typing import Protocol

from code_assistant.domain.models import CompletionResult


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志/统计。
    - complete(prompt): 执行一次异步补全调用，返回统一的 CompletionResult。
    """

    name: str

    async def complete(self, prompt: str) -> CompletionResult:
        ...
