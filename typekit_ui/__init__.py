"""Themeable text widget with type-tag styling and simulated letter spacing."""

from .platform import current_platform, supports_native_letter_spacing
from .style import (
    DEFAULT_TOKENS,
    TEXT_COMPONENT,
    TEXT_SLOT,
    AttributeMapping,
    ComponentConfig,
    Theme,
    ThemeSnapshot,
    ThemeTokens,
    load_theme_toml,
    merge_styles,
    resolve_styles,
    validate_theme_tokens,
)
from .text import (
    Composite,
    LetterSpacingStrategy,
    PlainText,
    TextFragment,
    TextNode,
    TextView,
    TextWidget,
    render_fragments,
)

__all__ = [
    "AttributeMapping",
    "ComponentConfig",
    "Composite",
    "DEFAULT_TOKENS",
    "LetterSpacingStrategy",
    "PlainText",
    "TEXT_COMPONENT",
    "TEXT_SLOT",
    "TextFragment",
    "TextNode",
    "TextView",
    "TextWidget",
    "Theme",
    "ThemeSnapshot",
    "ThemeTokens",
    "current_platform",
    "load_theme_toml",
    "merge_styles",
    "render_fragments",
    "resolve_styles",
    "supports_native_letter_spacing",
    "validate_theme_tokens",
]
