from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Mapping

from typekit_ui.platform import supports_native_letter_spacing
from typekit_ui.style.mapping import TEXT_COMPONENT, TEXT_SLOT, ComponentConfig
from typekit_ui.style.resolver import ResolvedStyle, TypeSource, UnknownTypeHook, resolve_styles

from .renderer import RenderStrategy, TextNode, TextView, ViewRenderer, normalize_children
from .spacing import LetterSpacingStrategy


@dataclass
class TextWidget:
    """Themeable text block.

    - `type_tag` selects registered types, later tokens win.
    - `style` is merged last and may request `letterSpacing`.
    - Any other keyword prop is forwarded to every text node unchanged.
    """

    theme: TypeSource
    config: ComponentConfig = TEXT_COMPONENT
    supports_native_spacing: bool = field(default_factory=supports_native_letter_spacing)
    strategy: RenderStrategy = field(default_factory=LetterSpacingStrategy)
    component_id: str | None = None
    logger: logging.Logger | None = None
    on_unknown_type: UnknownTypeHook | None = None

    def resolve(self, type_tag: str | None, shortcuts: Mapping[str, Any] | None = None) -> ResolvedStyle:
        return resolve_styles(
            self.theme,
            self.config,
            type_tag,
            shortcuts,
            logger=self.logger,
            on_unknown_type=self.on_unknown_type,
        )

    def build(
        self,
        children: Any = None,
        *,
        type_tag: str | None = None,
        style: Mapping[str, Any] | None = None,
        shortcuts: Mapping[str, Any] | None = None,
        **props: Any,
    ) -> TextView:
        resolved = self.resolve(type_tag, shortcuts)
        fragments = self.strategy.render(
            normalize_children(children),
            resolved.get(TEXT_SLOT, {}),
            style,
            self.supports_native_spacing,
        )
        nodes: list[Any] = []
        for fragment in fragments:
            if fragment.passthrough:
                nodes.append(fragment.content)
            else:
                nodes.append(TextNode(content=fragment.content, style=dict(fragment.style), props=dict(props)))
        return TextView(children=tuple(nodes), component_id=self.component_id)

    def render(self, renderer: ViewRenderer, children: Any = None, **kwargs: Any) -> TextView:
        view = self.build(children, **kwargs)
        renderer.draw_view(view)
        return view
