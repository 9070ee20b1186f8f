"""Theme registry and type-to-style resolution."""

from .defaults import default_text_types, register_default_types
from .mapping import TEXT_COMPONENT, TEXT_SLOT, AttributeMapping, ComponentConfig
from .resolver import ResolvedStyle, merge_styles, resolve_styles, split_type_tag
from .theme import DEFAULT_TOKENS, Theme, ThemeSnapshot, ThemeTokens, load_theme_toml, validate_theme_tokens

__all__ = [
    "AttributeMapping",
    "ComponentConfig",
    "DEFAULT_TOKENS",
    "ResolvedStyle",
    "TEXT_COMPONENT",
    "TEXT_SLOT",
    "Theme",
    "ThemeSnapshot",
    "ThemeTokens",
    "default_text_types",
    "load_theme_toml",
    "merge_styles",
    "register_default_types",
    "resolve_styles",
    "split_type_tag",
    "validate_theme_tokens",
]
