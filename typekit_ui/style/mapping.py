from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, init=False)
class AttributeMapping:
    """Slot -> semantic attribute -> underlying style property.

    Built once per component kind and read-only afterwards.
    """

    slots: Mapping[str, Mapping[str, str]]

    def __init__(self, slots: Mapping[str, Mapping[str, str]]) -> None:
        frozen: dict[str, Mapping[str, str]] = {}
        for slot, attrs in slots.items():
            if not isinstance(slot, str) or not slot.strip():
                raise ValueError("slot names must be non-empty strings")
            if not isinstance(attrs, Mapping):
                raise TypeError(f"slot `{slot}` must map attribute names to property names")
            frozen[slot] = MappingProxyType({str(k): str(v) for k, v in attrs.items()})
        object.__setattr__(self, "slots", MappingProxyType(frozen))

    @property
    def slot_names(self) -> tuple[str, ...]:
        return tuple(self.slots)

    def has_slot(self, slot: str) -> bool:
        return slot in self.slots

    def targets(self, attribute: str) -> tuple[tuple[str, str], ...]:
        """Return every `(slot, property)` an attribute fans out to."""

        return tuple(
            (slot, attrs[attribute])
            for slot, attrs in self.slots.items()
            if attribute in attrs
        )


@dataclass(frozen=True)
class ComponentConfig:
    component_kind: str
    attribute_mapping: AttributeMapping

    def __post_init__(self) -> None:
        if not self.component_kind.strip():
            raise ValueError("component_kind must be non-empty")


TEXT_SLOT = "text"

TEXT_COMPONENT = ComponentConfig(
    component_kind="Text",
    attribute_mapping=AttributeMapping(
        {
            TEXT_SLOT: {
                "color": "color",
                "backgroundColor": "backgroundColor",
                "fontSize": "fontSize",
                "fontFamily": "fontFamily",
                "letterSpacing": "letterSpacing",
            }
        }
    ),
)
