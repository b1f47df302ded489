"""统一业务异常模型。

Provider 抛出的所有业务级错误都继承自 BusinessError，
SessionController 在边界处统一捕获，并转换为固定的用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 错误详情，仅用于日志，不直接展示给用户。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、model 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """第三方 API 返回错误状态或无法解析的响应体时抛出。"""


class RateLimitError(BusinessError):
    """Provider 限流错误（HTTP 429）。本项目不做重试。"""


class ValidationError(BusinessError):
    """参数或配置校验失败，例如缺少 API Key。"""


class EmptyResponseError(BusinessError):
    """Provider 正常返回但没有任何回答文本。"""

    def __init__(self, message: str = "Invalid response from Gemini API.", **extra):
        super().__init__(code="EMPTY_RESPONSE", message=message, http_status=502, **extra)
