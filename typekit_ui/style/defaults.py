from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .mapping import TEXT_COMPONENT, TEXT_SLOT
from .theme import ThemeTokens

if TYPE_CHECKING:
    from .theme import Theme


def default_text_types(tokens: ThemeTokens) -> dict[str, dict[str, Any]]:
    """Built-in text types. Plain data; applications may overwrite any of them."""

    return {
        "primary": {"color": tokens.primary},
        "info": {"color": tokens.info},
        "warning": {"color": tokens.warning},
        "danger": {"color": tokens.danger},
        "success": {"color": tokens.success},
        "xxlarge": {"fontSize": tokens.font_size_xxlarge_px},
        "xlarge": {"fontSize": tokens.font_size_xlarge_px},
        "large": {"fontSize": tokens.font_size_large_px},
        "medium": {"fontSize": tokens.font_size_medium_px},
        "small": {"fontSize": tokens.font_size_small_px},
        "header": {
            "fontSize": tokens.font_size_header_px,
            TEXT_SLOT: {"fontWeight": "bold"},
        },
        "subtitle": {
            "color": tokens.subtitle,
            "fontSize": tokens.font_size_subtitle_px,
        },
    }


def register_default_types(theme: "Theme") -> None:
    for type_tag, fragment in default_text_types(theme.tokens).items():
        theme.register_type(TEXT_COMPONENT.component_kind, type_tag, fragment)
