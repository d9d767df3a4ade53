"""Static lookup tables shaping the enhancer instruction.

Contains:
- STYLE_MAP: Art style description injected into the instruction
- STYLE_NEGATIVE: Canonical negative phrases per art style
- TARGET_GUIDE: Per-tool guidance on prompt phrasing
- BASELINE_NEGATIVE: Denylist merged into every negative prompt
"""

from models.enhance import ArtStyle, TargetTool

STYLE_MAP = {
    ArtStyle.NONE: "",
    ArtStyle.GAME_2D_TOON: (
        "Art style: stylized 2D game illustration, clean bold outlines, cel shading, "
        "vibrant but controlled palette, NO photorealism."
    ),
    ArtStyle.ANIME_CEL: (
        "Art style: anime game key art, crisp linework, cel shading, soft gradients, "
        "high readability, NO photorealism."
    ),
    ArtStyle.CHIBI: (
        "Art style: chibi game character style, big head small body, cute proportions, "
        "clean outlines, simple shading."
    ),
    ArtStyle.VECTOR_LOGO: (
        "Art style: professional vector logo, flat shapes, minimal gradients, strong "
        "silhouette, brand-ready, clean negative space."
    ),
    ArtStyle.PIXEL_ART: (
        "Art style: retro pixel art, 16-bit/32-bit look, limited palette, crisp pixels, "
        "NO anti-aliasing, game sprite style."
    ),
    ArtStyle.HANDPAINTED_FANTASY: (
        "Art style: hand-painted fantasy game concept art, painterly brushwork, cinematic "
        "lighting, stylized realism (NOT photo)."
    ),
    ArtStyle.STYLIZED_3D_PBR: (
        "Art style: stylized 3D game render (PBR), clean materials, soft studio lighting, "
        "slightly exaggerated shapes, NOT photoreal."
    ),
    ArtStyle.CLAY_VINYL_3D: (
        "Art style: 3D clay/vinyl toy look, smooth surfaces, soft subsurface feel, cute "
        "premium collectible vibe."
    ),
    ArtStyle.UI_ICON: (
        "Art style: mobile game UI icon, high contrast, simple readable shape, clean edges, "
        "minimal background, glossy highlight."
    ),
}

STYLE_NEGATIVE = {
    ArtStyle.NONE: "photorealistic, realistic skin pores, real photo, cinematic photo lighting",
    ArtStyle.GAME_2D_TOON: (
        "photorealistic, realistic, real photo, complex texture, noisy lighting, HDR photo, skin pores"
    ),
    ArtStyle.ANIME_CEL: "photorealistic, real photo, detailed skin pores, camera noise, HDR photo",
    ArtStyle.CHIBI: "photorealistic, realistic anatomy, adult proportions, real photo, creepy realism",
    ArtStyle.VECTOR_LOGO: (
        "photorealistic, 3d render, bevel, heavy texture, complex background, gradients everywhere"
    ),
    ArtStyle.PIXEL_ART: "photorealistic, smooth gradients, anti-aliasing, high-res photo, blur",
    ArtStyle.HANDPAINTED_FANTASY: (
        "photorealistic, real photo, modern camera artifacts, lens dirt, over-sharp"
    ),
    ArtStyle.STYLIZED_3D_PBR: (
        "photorealistic, real photo, ultra realistic skin, documentary lighting, film grain"
    ),
    ArtStyle.CLAY_VINYL_3D: (
        "photorealistic, hard-surface realism, sharp pores, gritty texture, harsh shadows"
    ),
    ArtStyle.UI_ICON: (
        "photorealistic, complex background, tiny unreadable details, low contrast, text"
    ),
}

TARGET_GUIDE = {
    TargetTool.NANO_BANANA: (
        "Target behavior: Nano Banana. Prompts should be game-asset friendly, stylized "
        "(not photoreal), strong shape language, controlled palette, clean shading, "
        "minimal camera/photography jargon."
    ),
    TargetTool.CHATGPT: (
        "Target behavior: ChatGPT-style prompt. Use clear natural language, structured "
        "phrasing, avoid tag spam, focus on readability and production intent."
    ),
    TargetTool.MIDJOURNEY: (
        "Target behavior: Midjourney. Keep it punchy, aesthetic keywords ok, but do NOT "
        "include MJ flags like --ar in prompt text."
    ),
    TargetTool.STABLE_DIFFUSION: (
        "Target behavior: Stable Diffusion. Use clear descriptive keywords, be explicit "
        "about style/material/lighting, negative is important."
    ),
    TargetTool.DALLE: (
        "Target behavior: DALL·E. Use natural language, composition-first, avoid excessive tags."
    ),
    TargetTool.GENERIC: "Target behavior: Generic. Balanced and tool-agnostic.",
}

# "logo" stays out of this list, it wrecks logo generation
BASELINE_NEGATIVE = (
    "text, words, letters, watermark, signature, UI overlay, frame, border, blurry, low quality"
)


def style_line(art_style: str) -> str:
    """Style description for a user-supplied key (empty when unknown)."""
    return STYLE_MAP[ArtStyle.from_key(art_style)]


def style_negative(art_style: str) -> str:
    """Negative phrases for a user-supplied key (``none`` list when unknown)."""
    return STYLE_NEGATIVE[ArtStyle.from_key(art_style)]


def target_guide(target: str) -> str:
    """Tool guidance for a user-supplied key (generic guidance when unknown)."""
    return TARGET_GUIDE[TargetTool.from_key(target)]
