"""Assemble the enhancer instruction from the static lookup tables.

Unknown target/style/mode keys degrade to defaults instead of failing.
"""

from models.enhance import AnalyzeMode
from services.prompts import (
    MODE_RULES,
    PROMPT_ENHANCER_IMAGE,
    PROMPT_ENHANCER_TEXT,
    style_line,
    style_negative,
    target_guide,
)


def build_enhance_prompt(idea: str, target: str, art_style: str) -> str:
    """Build the instruction for the text-only flow.

    Args:
        idea: User idea, inserted verbatim
        target: Target tool key (e.g. 'midjourney')
        art_style: Art style key (e.g. 'pixel-art')

    Returns:
        Instruction string for the model
    """
    return PROMPT_ENHANCER_TEXT.format(
        target=target,
        target_guide=target_guide(target),
        style_line=style_line(art_style),
        style_negative=style_negative(art_style),
        idea=idea,
    ).strip()


def build_analyze_prompt(idea: str, target: str, art_style: str, mode: str) -> str:
    """Build the instruction for the reference-image flow.

    Any mode other than 'style-only' is treated as 'recreate'.
    """
    if mode != AnalyzeMode.STYLE_ONLY.value:
        mode = AnalyzeMode.RECREATE.value

    return PROMPT_ENHANCER_IMAGE.format(
        target=target,
        target_guide=target_guide(target),
        style_line=style_line(art_style),
        mode_rule=MODE_RULES[mode],
        style_negative=style_negative(art_style),
        idea=idea or "(none)",
    ).strip()
