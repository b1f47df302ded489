"""Gemini Provider 适配器。

本模块负责：

1. 接收已经去除首尾空白的提示文本。
2. 将其转换为 Gemini generateContent 的 HTTP 请求格式。
3. 异步调用 HTTP 接口并把网络/API 异常映射为统一的业务异常。
4. 将响应 JSON 解析为统一的 CompletionResult。

接口约定：
- URL: {base_url}/models/{provider_model}:generateContent
- 认证: x-goog-api-key: <api_key>

本客户端只发起一次请求，不做任何重试；超时由 http_timeout 控制。
"""

from typing import Any, Dict, List

import httpx

from code_assistant.config.settings import settings
from code_assistant.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from code_assistant.domain.models import CompletionRequest, CompletionResult, CompletionUsage
from code_assistant.providers.registry import GEMINI_CONFIG, ModelConfig


class GeminiClient:
    """Gemini 提供方客户端实现。"""

    name = "gemini"

    def __init__(self, cfg=settings, model: str = "code-assistant"):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = cfg
        self._model = model

    async def complete(self, prompt: str) -> CompletionResult:
        """执行一次非流式补全调用。

        步骤：
        1. 读取模型配置（logical model -> provider model）。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并捕获网络错误/限流/服务端错误。
        4. 使用统一的解析函数构造 CompletionResult。
        """

        api_key = getattr(self._settings, "gemini_api_key", None)
        if not api_key:
            # 配置缺失走 ValidationError，方便上层统一处理
            raise ValidationError(code="MISSING_API_KEY", message="GEMINI_API_KEY not set")
        model_cfg = GEMINI_CONFIG.models.get(self._model)
        if model_cfg is None:
            raise ValidationError(code="UNKNOWN_MODEL", message=f"Unknown model: {self._model!r}")
        req = CompletionRequest(
            provider=self.name,
            model=self._model,
            prompt=prompt,
            temperature=getattr(self._settings, "temperature", model_cfg.default_temperature),
        )
        payload = self._build_payload(req, model_cfg)
        base = getattr(self._settings, "gemini_base_url", None) or GEMINI_CONFIG.base_url
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    f"{base}/models/{model_cfg.provider_model}:generateContent",
                    json=payload,
                    headers={
                        "x-goog-api-key": api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Gemini rate limit", http_status=429)
        if resp.status_code >= 400:
            # 其他 HTTP 错误统一包装为 ApiError（401/403 多半是 API Key 无效）
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(code="MALFORMED_RESPONSE", message=f"Response is not JSON: {e}", http_status=502)
        return self._parse_response(data, req)

    def _build_payload(self, req: CompletionRequest, model_cfg: ModelConfig) -> Dict[str, Any]:
        """将 CompletionRequest 转成 Gemini 所需的请求 JSON。"""

        return {
            "contents": [{"role": "user", "parts": [{"text": req.prompt}]}],
            "generationConfig": {
                "temperature": req.temperature,
                "topP": req.top_p,
                "maxOutputTokens": req.max_tokens or model_cfg.max_tokens,
            },
        }

    def _parse_response(self, data: Any, req: CompletionRequest) -> CompletionResult:
        """将 Gemini 的原始响应 JSON 解析为统一的 CompletionResult。

        没有候选回答时返回空文本，是否视为失败由 SessionController 决定；
        只有结构本身不对（或提示被安全策略拦截）时才在这里抛错。
        """

        if not isinstance(data, dict):
            raise ApiError(code="MALFORMED_RESPONSE", message="Response body is not an object", http_status=502)
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise ApiError(code="MALFORMED_RESPONSE", message="'candidates' is not a list", http_status=502)
        feedback = data.get("promptFeedback") or {}
        if not isinstance(feedback, dict):
            raise ApiError(code="MALFORMED_RESPONSE", message="'promptFeedback' is not an object", http_status=502)
        if not candidates and feedback.get("blockReason"):
            raise ApiError(
                code="PROMPT_BLOCKED",
                message=f"Prompt blocked: {feedback['blockReason']}",
                http_status=400,
            )

        text = ""
        finish_reason = None
        if candidates:
            first = candidates[0]
            content = first.get("content") if isinstance(first, dict) else None
            if not isinstance(first, dict) or not isinstance(content or {}, dict):
                raise ApiError(code="MALFORMED_RESPONSE", message="Unexpected candidate shape", http_status=502)
            finish_reason = first.get("finishReason")
            parts = (content or {}).get("parts") or []
            text = "".join(self._part_texts(parts))

        usage_raw = data.get("usageMetadata") or {}
        if not isinstance(usage_raw, dict):
            raise ApiError(code="MALFORMED_RESPONSE", message="'usageMetadata' is not an object", http_status=502)
        usage = None
        if usage_raw:
            usage = CompletionUsage(
                prompt_tokens=usage_raw.get("promptTokenCount", 0),
                completion_tokens=usage_raw.get("candidatesTokenCount", 0),
                total_tokens=usage_raw.get("totalTokenCount", 0),
            )
        return CompletionResult(
            provider=self.name,
            model=req.model,
            text=text,
            finish_reason=finish_reason,
            usage=usage,
            raw=data,
        )

    @staticmethod
    def _part_texts(parts: Any) -> List[str]:
        if not isinstance(parts, list):
            raise ApiError(code="MALFORMED_RESPONSE", message="'parts' is not a list", http_status=502)
        return [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
