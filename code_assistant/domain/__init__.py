"""领域层模型与协议。

包含：
- models: 统一的 CompletionRequest / CompletionResult 模型。
- conversation: Exchange、SessionState 与 HistoryStore 抽象。
- answer: 回答类型（代码 / 文本）识别。
- exceptions: 业务异常类型定义。
"""
