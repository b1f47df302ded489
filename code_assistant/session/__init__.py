"""会话层：SessionController 及其后台驱动 SessionRunner。"""

from .controller import FAILURE_MESSAGE, SessionController
from .runner import SessionRunner

__all__ = ["FAILURE_MESSAGE", "SessionController", "SessionRunner"]
