"""Base utilities for prompts module.

Contains shared helpers for reading model responses.
"""

import re

# ```json ... ``` (language tag optional, any case)
CODE_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def strip_markdown_code_blocks(text: str) -> str:
    """Strip a markdown code fence wrapped around a JSON answer.

    Args:
        text: Raw response text that may be fenced

    Returns:
        Text with the surrounding fence removed
    """
    text = text.strip()
    match = CODE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text
