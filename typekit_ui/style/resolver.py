from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Mapping, Protocol

from .mapping import ComponentConfig

LOGGER = logging.getLogger(__name__)

ResolvedStyle = dict[str, dict[str, Any]]
UnknownTypeHook = Callable[[str, str], None]


class TypeSource(Protocol):
    """Anything that can look up a registered fragment (`Theme` or `ThemeSnapshot`)."""

    def get_type(self, component_kind: str, type_tag: str) -> Mapping[str, Any] | None:
        ...


def split_type_tag(type_tag: str | None) -> list[str]:
    if not type_tag:
        return []
    return type_tag.split()


def merge_styles(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow left-to-right merge; later layers overwrite earlier keys."""

    out: dict[str, Any] = {}
    for layer in layers:
        if layer:
            out.update(layer)
    return out


def _apply_attributes(
    resolved: ResolvedStyle,
    config: ComponentConfig,
    attributes: Mapping[str, Any],
) -> None:
    mapping = config.attribute_mapping
    for attribute, value in attributes.items():
        if value is None:
            continue
        for slot, prop in mapping.targets(attribute):
            resolved[slot][prop] = copy.deepcopy(value)


def _apply_fragment(
    resolved: ResolvedStyle,
    config: ComponentConfig,
    type_tag: str,
    fragment: Mapping[str, Any],
    logger: logging.Logger,
) -> None:
    mapping = config.attribute_mapping
    flat: dict[str, Any] = {}
    slotted: list[tuple[str, Mapping[str, Any]]] = []
    for key, value in fragment.items():
        if mapping.has_slot(key):
            if isinstance(value, Mapping):
                slotted.append((key, value))
            else:
                logger.debug("type `%s`: slot `%s` is not a mapping, ignored", type_tag, key)
        elif mapping.targets(key):
            flat[key] = value
        else:
            logger.debug("type `%s`: unknown key `%s` ignored", type_tag, key)

    _apply_attributes(resolved, config, flat)
    for slot, props in slotted:
        for prop, value in props.items():
            resolved[slot][prop] = copy.deepcopy(value)


def resolve_styles(
    theme: TypeSource,
    config: ComponentConfig,
    type_tag: str | None,
    shortcuts: Mapping[str, Any] | None = None,
    *,
    logger: logging.Logger | None = None,
    on_unknown_type: UnknownTypeHook | None = None,
) -> ResolvedStyle:
    """Resolve a type-tag string into one style dict per declared slot.

    Fragments are merged in token order, then `shortcuts` are routed through
    the attribute mapping. Unknown tags are skipped.
    """

    log = logger or LOGGER
    resolved: ResolvedStyle = {slot: {} for slot in config.attribute_mapping.slot_names}
    for token in split_type_tag(type_tag):
        fragment = theme.get_type(config.component_kind, token)
        if fragment is None:
            log.debug("unknown type `%s` for component `%s`", token, config.component_kind)
            if on_unknown_type is not None:
                on_unknown_type(config.component_kind, token)
            continue
        _apply_fragment(resolved, config, token, fragment, log)

    if shortcuts:
        _apply_attributes(resolved, config, shortcuts)
    return resolved
