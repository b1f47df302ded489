"""回答类型识别。

渲染层需要区分“文本回答”和“源代码回答”：代码回答用等宽编辑器展示并提供复制代码按钮。
判定规则很简单：回答中包含 Markdown 围栏代码块（```）即视为代码回答。
"""

import re
from typing import List, Literal

AnswerKind = Literal["code", "prose"]

_FENCE_RE = re.compile(r"```[^\n`]*\n(.*?)```", re.DOTALL)


def classify_answer(text: str) -> AnswerKind:
    """返回 "code" 或 "prose"。"""

    if _FENCE_RE.search(text or ""):
        return "code"
    return "prose"


def extract_code_blocks(text: str) -> List[str]:
    """按出现顺序返回所有围栏代码块的正文（不含语言标记行）。"""

    return [block.rstrip("\n") for block in _FENCE_RE.findall(text or "")]
