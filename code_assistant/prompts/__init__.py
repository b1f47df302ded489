"""示例提问。

界面上的 “Popular Examples” 按钮，点击后通过 set_pending_query 填入草稿框。
"""

from typing import Tuple


EXAMPLE_PROMPTS: Tuple[str, ...] = (
    "React useState example",
    "Python list comprehension example",
    "What is cloud computing?",
    "JavaScript async/await example",
    "Explain Docker containers",
    "React useEffect example",
)
