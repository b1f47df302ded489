"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (gemini_client)。
"""

from typing import Optional

from code_assistant.config.settings import settings
from code_assistant.domain.exceptions import ValidationError
from code_assistant.providers.base import ProviderClient
from code_assistant.providers.gemini_client import GeminiClient
from code_assistant.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = (name or getattr(settings, "default_provider", "gemini")).lower()
    try:
        cfg = get_provider_config(provider_name)
    except KeyError:
        cfg = None
    model = getattr(settings, "default_model", "code-assistant")
    if cfg is not None and cfg.name == "gemini":
        return GeminiClient(settings, model=model)
    # 未注册，或已注册但还没有对应的 Client 实现
    raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider_name!r}")
