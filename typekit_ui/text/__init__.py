"""Text widget, letter-spacing simulation and preview backend."""

from .component import TextWidget
from .renderer import (
    CONTAINER_STYLE,
    Child,
    Composite,
    PlainText,
    RenderStrategy,
    TextFragment,
    TextNode,
    TextView,
    ViewRenderer,
    normalize_children,
)
from .spacing import (
    JOINER,
    MAX_SPACE_COUNT,
    SCALE_CONSTANT,
    SEPARATOR,
    LetterSpacingStrategy,
    letter_spacing_value,
    render_fragments,
    space_count,
    spaced_word,
)

__all__ = [
    "CONTAINER_STYLE",
    "Child",
    "Composite",
    "JOINER",
    "LetterSpacingStrategy",
    "MAX_SPACE_COUNT",
    "PlainText",
    "RenderStrategy",
    "SCALE_CONSTANT",
    "SEPARATOR",
    "TextFragment",
    "TextNode",
    "TextView",
    "TextWidget",
    "ViewRenderer",
    "letter_spacing_value",
    "normalize_children",
    "render_fragments",
    "space_count",
    "spaced_word",
]
