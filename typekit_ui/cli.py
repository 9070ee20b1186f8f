from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence, TextIO

import numpy as np
from PIL import Image

from typekit_ui.platform import current_platform, supports_native_letter_spacing
from typekit_ui.style.theme import Theme, load_theme_toml
from typekit_ui.text.component import TextWidget
from typekit_ui.text.preview import MatrixTextPreviewRenderer
from typekit_ui.text.renderer import TextNode, TextView


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = argparse.ArgumentParser(prog="typekit")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level, e.g. DEBUG.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("fragments", "Print the text nodes a widget would emit, with joiners escaped."),
        ("preview", "Rasterise a widget to a PNG file."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("text")
        cmd.add_argument("--type", dest="type_tag", default="", help="Space-separated type tags.")
        cmd.add_argument("--letter-spacing", type=float, default=None)
        cmd.add_argument("--color", default=None)
        cmd.add_argument("--font-size", type=float, default=None)
        cmd.add_argument("--theme", type=Path, default=None, help="TOML theme file.")
        cmd.add_argument(
            "--platform",
            default=None,
            help="Platform to emulate (e.g. android). Default: the host platform.",
        )
        if name == "preview":
            cmd.add_argument("--out", type=Path, required=True)
            cmd.add_argument("--width", type=int, default=480)
            cmd.add_argument("--height", type=int, default=120)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    stream = out or sys.stdout

    theme = load_theme_toml(args.theme) if args.theme is not None else Theme.with_default_types()
    widget = TextWidget(
        theme=theme,
        supports_native_spacing=supports_native_letter_spacing(args.platform or current_platform()),
    )
    style = {"letterSpacing": args.letter_spacing} if args.letter_spacing is not None else None
    shortcuts = {"color": args.color, "fontSize": args.font_size}
    view = widget.build(args.text, type_tag=args.type_tag, style=style, shortcuts=shortcuts)

    if args.command == "fragments":
        _print_view(view, stream)
        return 0

    renderer = MatrixTextPreviewRenderer()
    renderer.begin_frame(args.width, args.height)
    renderer.draw_view(view)
    frame = renderer.end_frame()
    Image.fromarray(np.ascontiguousarray(frame.cpu().numpy())).save(args.out)
    print(f"wrote {args.out} ({len(renderer.last_layout)} text nodes)", file=stream)
    return 0


def _print_view(view: TextView, stream: TextIO) -> None:
    for node in view.children:
        if isinstance(node, TextNode):
            text = node.text if node.text is not None else repr(node.content)
            escaped = text.encode("unicode_escape").decode("ascii")
            print(f"\"{escaped}\" {dict(node.style)}", file=stream)
        else:
            print(f"<node {node!r}>", file=stream)


if __name__ == "__main__":
    raise SystemExit(main())
