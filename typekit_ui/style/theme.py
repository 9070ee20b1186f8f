from __future__ import annotations

import copy
from dataclasses import asdict, dataclass
import logging
from pathlib import Path
import re
import threading
import tomllib
from types import MappingProxyType
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS = (
    "primary",
    "info",
    "warning",
    "danger",
    "success",
    "text",
    "subtitle",
)

_SIZE_TOKENS = (
    "font_size_xxlarge_px",
    "font_size_xlarge_px",
    "font_size_large_px",
    "font_size_medium_px",
    "font_size_small_px",
    "font_size_header_px",
    "font_size_subtitle_px",
)


@dataclass(frozen=True)
class ThemeTokens:
    """Palette and type scale the default text types are built from."""

    primary: str = "#6B48FF"
    info: str = "#19BFE5"
    warning: str = "#FFC107"
    danger: str = "#FF1744"
    success: str = "#4CAF50"
    text: str = "#111111"
    subtitle: str = "#6B7280"
    font_family: str = "System"
    font_size_xxlarge_px: float = 32.0
    font_size_xlarge_px: float = 24.0
    font_size_large_px: float = 18.0
    font_size_medium_px: float = 14.0
    font_size_small_px: float = 12.0
    font_size_header_px: float = 20.0
    font_size_subtitle_px: float = 16.0


DEFAULT_TOKENS = ThemeTokens()


def validate_theme_tokens(overrides: Mapping[str, Any] | None = None) -> ThemeTokens:
    """Validate and merge user token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_TOKENS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    for key in _SIZE_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    return ThemeTokens(**raw)


def _check_key(component_kind: str, type_tag: str) -> None:
    if not isinstance(component_kind, str) or not component_kind.strip():
        raise ValueError("component_kind must be a non-empty string")
    if not isinstance(type_tag, str) or not type_tag.strip():
        raise ValueError("type_tag must be a non-empty string")
    if len(type_tag.split()) != 1:
        raise ValueError(f"type_tag must be a single token, got `{type_tag}`")


class ThemeSnapshot:
    """Immutable view of a theme's registered types at one point in time."""

    def __init__(self, tokens: ThemeTokens, types: Mapping[str, Mapping[str, Mapping[str, Any]]]) -> None:
        self._tokens = tokens
        self._types = MappingProxyType(
            {kind: MappingProxyType(dict(by_tag)) for kind, by_tag in types.items()}
        )

    @property
    def tokens(self) -> ThemeTokens:
        return self._tokens

    def get_type(self, component_kind: str, type_tag: str) -> Mapping[str, Any] | None:
        by_tag = self._types.get(component_kind)
        if by_tag is None:
            return None
        return by_tag.get(type_tag)

    def types_for(self, component_kind: str) -> tuple[str, ...]:
        return tuple(self._types.get(component_kind, {}))


class Theme:
    """Registry of style fragments keyed by (component kind, type tag).

    Writes are serialised; `snapshot()` hands render passes a copy that later
    registrations cannot change.
    """

    def __init__(self, tokens: ThemeTokens | None = None) -> None:
        self._tokens = tokens or DEFAULT_TOKENS
        self._types: dict[str, dict[str, Mapping[str, Any]]] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_default_types(cls, tokens: ThemeTokens | None = None) -> "Theme":
        from .defaults import register_default_types

        theme = cls(tokens)
        register_default_types(theme)
        return theme

    @property
    def tokens(self) -> ThemeTokens:
        return self._tokens

    def register_type(self, component_kind: str, type_tag: str, fragment: Mapping[str, Any]) -> None:
        _check_key(component_kind, type_tag)
        if not isinstance(fragment, Mapping):
            raise TypeError(f"fragment for `{component_kind}.{type_tag}` must be a mapping")
        stored = MappingProxyType(copy.deepcopy(dict(fragment)))
        with self._lock:
            by_tag = dict(self._types.get(component_kind, {}))
            if type_tag in by_tag:
                LOGGER.debug("replacing type `%s` for component `%s`", type_tag, component_kind)
            by_tag[type_tag] = stored
            self._types[component_kind] = by_tag

    def get_type(self, component_kind: str, type_tag: str) -> Mapping[str, Any] | None:
        by_tag = self._types.get(component_kind)
        if by_tag is None:
            return None
        return by_tag.get(type_tag)

    def types_for(self, component_kind: str) -> tuple[str, ...]:
        return tuple(self._types.get(component_kind, {}))

    def snapshot(self) -> ThemeSnapshot:
        with self._lock:
            return ThemeSnapshot(self._tokens, self._types)


def load_theme_toml(path: str | Path, *, with_defaults: bool = True) -> Theme:
    """Build a theme from a TOML file.

    Expected layout::

        [tokens]
        danger = "#D50000"

        [types.Text.hero]
        fontSize = 40

        [types.Text.italic.text]
        fontStyle = "italic"
    """

    theme_path = Path(path)
    if not theme_path.exists():
        raise FileNotFoundError(f"theme file not found: {theme_path}")
    with theme_path.open("rb") as f:
        raw = tomllib.load(f)

    token_overrides = raw.get("tokens", {})
    if not isinstance(token_overrides, dict):
        raise ValueError("`tokens` must be a table")
    tokens = validate_theme_tokens(token_overrides)
    theme = Theme.with_default_types(tokens) if with_defaults else Theme(tokens)

    types = raw.get("types", {})
    if not isinstance(types, dict):
        raise ValueError("`types` must be a table")
    for component_kind, by_tag in types.items():
        if not isinstance(by_tag, dict):
            raise ValueError(f"`types.{component_kind}` must be a table")
        for type_tag, fragment in by_tag.items():
            if not isinstance(fragment, dict):
                raise ValueError(f"`types.{component_kind}.{type_tag}` must be a table")
            theme.register_type(component_kind, type_tag, fragment)
    LOGGER.debug("loaded theme from %s", theme_path)
    return theme
