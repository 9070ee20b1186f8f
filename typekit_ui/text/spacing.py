from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from typekit_ui.style.resolver import merge_styles

from .renderer import Child, Composite, PlainText, TextFragment

# U+200A HAIR SPACE between glyphs, U+00A0 NO-BREAK SPACE between words.
JOINER = "\u200a"
SEPARATOR = "\u00a0"
# Joiners inserted per unit of requested letter spacing.
SCALE_CONSTANT = 1
LETTER_SPACING = "letterSpacing"
# Joiner counts beyond this, either sign, are treated as unusable spacing.
MAX_SPACE_COUNT = 1000


def letter_spacing_value(style: Mapping[str, Any] | None) -> float | None:
    """Requested spacing from a caller style, or None if missing or unusable."""

    if not style:
        return None
    value = style.get(LETTER_SPACING)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    # Bounds ints of any size and infinities before any float conversion.
    if abs(value) > MAX_SPACE_COUNT + 1 or abs(space_count(value)) > MAX_SPACE_COUNT:
        return None
    return float(value)


def space_count(spacing: float) -> int:
    # Round half up. Negative spacing is not clamped.
    scaled = spacing * SCALE_CONSTANT
    whole = math.floor(scaled)
    return whole + (1 if scaled - whole >= 0.5 else 0)


def spaced_word(word: str, count: int) -> str:
    joiners = JOINER * count
    return joiners.join(word) + joiners + SEPARATOR + joiners


def render_fragments(
    children: Sequence[Child],
    text_style: Mapping[str, Any],
    style_override: Mapping[str, Any] | None,
    supports_native_spacing: bool,
) -> list[TextFragment]:
    style = merge_styles(text_style, style_override)
    spacing = letter_spacing_value(style_override)

    if supports_native_spacing or not spacing:
        return [
            TextFragment(
                content=child.text if isinstance(child, PlainText) else child.node,
                style=dict(style),
                is_plain_text=isinstance(child, PlainText),
            )
            for child in children
        ]

    count = space_count(spacing)
    out: list[TextFragment] = []
    for child in children:
        if isinstance(child, Composite):
            out.append(TextFragment(content=child.node, style=None, is_plain_text=False))
            continue
        if child.text == "":
            continue
        for word in child.text.split(" "):
            out.append(
                TextFragment(
                    content=spaced_word(word, count),
                    style=dict(style),
                    is_plain_text=True,
                    space_count=count,
                )
            )
    return out


class LetterSpacingStrategy:
    """Text render strategy that simulates letter spacing where it is missing."""

    def render(
        self,
        children: Sequence[Child],
        text_style: Mapping[str, Any],
        style_override: Mapping[str, Any] | None,
        supports_native_spacing: bool,
    ) -> list[TextFragment]:
        return render_fragments(children, text_style, style_override, supports_native_spacing)
