from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Protocol, Sequence, Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Composite:
    """Any non-string child; opaque to styling and spacing."""

    node: Any


Child = Union[PlainText, Composite]


def normalize_children(children: Any) -> tuple[Child, ...]:
    """Flatten `str | node | sequence of (str | node)` into tagged children.

    `None` renders nothing. Nested lists and tuples are flattened in order.
    """

    out: list[Child] = []
    _collect(children, out)
    return tuple(out)


def _collect(value: Any, out: list[Child]) -> None:
    if value is None:
        return
    if isinstance(value, (PlainText, Composite)):
        out.append(value)
    elif isinstance(value, str):
        out.append(PlainText(value))
    elif isinstance(value, (list, tuple)):
        for item in value:
            _collect(item, out)
    else:
        out.append(Composite(value))


@dataclass(frozen=True)
class TextFragment:
    """One renderable piece of output.

    `style is None` marks a composite child passed through untouched.
    """

    content: Any
    style: Mapping[str, Any] | None
    is_plain_text: bool
    space_count: int = 0

    @property
    def passthrough(self) -> bool:
        return self.style is None


CONTAINER_STYLE: Mapping[str, str] = MappingProxyType(
    {
        "flexDirection": "row",
        "flexWrap": "wrap",
        "alignItems": "flex-start",
    }
)


@dataclass(frozen=True)
class TextNode:
    """Underlying text primitive: content, style and pass-through props."""

    content: Any
    style: Mapping[str, Any]
    props: Mapping[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str | None:
        return self.content if isinstance(self.content, str) else None


@dataclass(frozen=True)
class TextView:
    """Wrapping row container handed to the view-tree consumer."""

    children: tuple[Any, ...]
    style: Mapping[str, Any] = field(default_factory=lambda: dict(CONTAINER_STYLE))
    component_id: str | None = None

    def text_nodes(self) -> tuple[TextNode, ...]:
        return tuple(child for child in self.children if isinstance(child, TextNode))


class RenderStrategy(Protocol):
    """Turns resolved text style plus children into fragments for one widget kind."""

    def render(
        self,
        children: Sequence[Child],
        text_style: Mapping[str, Any],
        style_override: Mapping[str, Any] | None,
        supports_native_spacing: bool,
    ) -> list[TextFragment]:
        ...


class ViewRenderer(Protocol):
    """Backend that lays out and draws a finished view."""

    def draw_view(self, view: TextView) -> None:
        ...
