"""Prompt enhancer instruction templates.

Contains prompts for:
- PROMPT_ENHANCER_TEXT: Enhance a free-text idea
- PROMPT_ENHANCER_IMAGE: Enhance from a reference image (plus optional idea)
- MODE_RULES: Fidelity rules for the reference-image flow
"""

# Template placeholders: {target}, {target_guide}, {style_line}, {style_negative}, {idea}
PROMPT_ENHANCER_TEXT = """You are a Prompt Enhancer for GAME ASSET image generation.
Target tool: {target}
{target_guide}
{style_line}

IMPORTANT OUTPUT RULES:
- Return ONLY valid JSON matching the schema.
- "params" MUST be an object (not a string or array).
- If you suggest aspect ratio, put it in params.aspectRatio like "1:1" or "16:9".
- Do NOT include Midjourney flags like "--ar" in any prompt text.

NEGATIVE GUIDANCE (include in "negative"):
{style_negative}

SCHEMA:
{{
  "clean": string,
  "detailed": string,
  "extreme": string,
  "negative": string,
  "params": {{ "aspectRatio"?: string, "notes"?: string }}
}}

User idea:
{idea}"""


# Template placeholders: {target}, {target_guide}, {style_line}, {mode_rule},
# {style_negative}, {idea}
PROMPT_ENHANCER_IMAGE = """You are a Prompt Enhancer for GAME ASSET image generation based on a REFERENCE IMAGE.
Target tool: {target}
{target_guide}
{style_line}

{mode_rule}

IMPORTANT OUTPUT RULES:
- Return ONLY valid JSON matching the schema.
- "params" MUST be an object (not a string, not an array).
- If you suggest aspect ratio, put it in params.aspectRatio like "1:1" or "16:9".
- Do NOT include Midjourney flags like "--ar" in any prompt text.
- Do NOT transcribe or include any visible text from the image. If there is text, ignore it.

NEGATIVE GUIDANCE (include in "negative"):
{style_negative}

SCHEMA:
{{
  "clean": string,
  "detailed": string,
  "extreme": string,
  "negative": string,
  "params": {{ "aspectRatio"?: string, "notes"?: string }}
}}

User idea (optional):
{idea}"""


MODE_RULE_RECREATE = """MODE: RECREATE
- Recreate the content of the reference image as accurately as possible (subject, composition, mood).
- If the user provided "idea", use it as a light modifier (do NOT break the original composition too much unless asked)."""

MODE_RULE_STYLE_ONLY = """MODE: STYLE-ONLY
- Describe the VISUAL STYLE + lighting + composition + materials + rendering approach from the reference image.
- Avoid specific character names or unique identities.
- Output prompts as reusable templates (e.g., "a {SUBJECT} in the same style...")."""

MODE_RULES = {
    "recreate": MODE_RULE_RECREATE,
    "style-only": MODE_RULE_STYLE_ONLY,
}

# Last-resort prompt text when the model returns nothing usable
FALLBACK_PROMPT_TEXT = "A {SUBJECT} as a clean, stylized game asset illustration."
FALLBACK_PROMPT_IMAGE = "A {SUBJECT} in the same style as the reference image, game-asset friendly."

# JSON schema handed to Gemini as the response schema
ENHANCE_RESPONSE_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "clean": {"type": "string"},
        "detailed": {"type": "string"},
        "extreme": {"type": "string"},
        "negative": {"type": "string"},
        "params": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "aspectRatio": {"type": "string"},
                "notes": {"type": "string"},
            },
            "required": [],
        },
    },
    "required": ["clean", "detailed", "extreme", "negative", "params"],
}
