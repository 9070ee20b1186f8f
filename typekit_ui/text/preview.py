from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
import logging
from pathlib import Path
from typing import Any, Mapping

import numpy as np
import torch

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .renderer import TextNode, TextView

LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_SIZE_PX = 14.0
DEFAULT_COLOR = "#111111"


@dataclass(frozen=True)
class PreviewBox:
    node_index: int
    x: int
    y: int
    width: int
    height: int


@dataclass
class _TextMask:
    alpha_mask: np.ndarray
    x_offset: int
    y_offset: int
    advance: int
    line_height: int


@dataclass
class MatrixTextPreviewRenderer:
    """Torch-backed raster preview of a `TextView`.

    Nodes flow left to right and wrap onto a new row when the next node would
    overflow the frame width. Composite children are not drawn.
    """

    _frame: torch.Tensor | None = None
    _width: int = 0
    _height: int = 0
    last_layout: tuple[PreviewBox, ...] = ()
    _font_path_cache: dict[str, str] = field(default_factory=dict)

    def begin_frame(self, width: int, height: int, clear_color: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame dimensions must be > 0")
        self._width = int(width)
        self._height = int(height)
        self._frame = torch.zeros((self._height, self._width, 4), dtype=torch.uint8)
        self._frame[:, :, 0] = clear_color[0]
        self._frame[:, :, 1] = clear_color[1]
        self._frame[:, :, 2] = clear_color[2]
        self._frame[:, :, 3] = clear_color[3]
        self.last_layout = ()

    def draw_view(self, view: TextView) -> None:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before draw_view")
        boxes: list[PreviewBox] = []
        cursor_x = 0
        cursor_y = 0
        row_height = 0
        for index, child in enumerate(view.children):
            if not isinstance(child, TextNode) or child.text is None:
                LOGGER.debug("preview skips non-text child %r", child)
                continue
            mask = _rasterize_text(child.text, self._font_path(child.style), _font_size(child.style))
            if cursor_x > 0 and cursor_x + mask.advance > self._width:
                cursor_x = 0
                cursor_y += row_height
                row_height = 0
            background = child.style.get("backgroundColor")
            if background is not None:
                self._fill_rect(cursor_x, cursor_y, mask.advance, mask.line_height, _parse_color(background, None))
            self._blend_alpha_mask(
                mask.alpha_mask,
                x=cursor_x + mask.x_offset,
                y=cursor_y + mask.y_offset,
                color=_parse_color(child.style.get("color"), DEFAULT_COLOR),
            )
            boxes.append(PreviewBox(index, cursor_x, cursor_y, mask.advance, mask.line_height))
            cursor_x += mask.advance
            row_height = max(row_height, mask.line_height)
        self.last_layout = tuple(boxes)

    def end_frame(self) -> torch.Tensor:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before end_frame")
        out = self._frame.clone()
        self._frame = None
        return out

    def _font_path(self, style: Mapping[str, Any]) -> str:
        family = style.get("fontFamily")
        key = family if isinstance(family, str) else ""
        cached = self._font_path_cache.get(key)
        if cached is None:
            cached = _resolve_system_font_path(key)
            self._font_path_cache[key] = cached
        return cached

    def _fill_rect(self, x: int, y: int, w: int, h: int, color: tuple[int, int, int, int] | None) -> None:
        if self._frame is None or color is None:
            return
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self._width, x + w), min(self._height, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        alpha = color[3] / 255.0
        dst = self._frame[y0:y1, x0:x1, :3].to(torch.float32)
        src = torch.tensor(color[:3], dtype=torch.float32).view(1, 1, 3)
        self._frame[y0:y1, x0:x1, :3] = torch.clamp(src * alpha + dst * (1.0 - alpha), 0, 255).to(torch.uint8)

    def _blend_alpha_mask(self, mask: np.ndarray, *, x: int, y: int, color: tuple[int, int, int, int] | None) -> None:
        if self._frame is None or color is None:
            return
        h, w = mask.shape
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self._width, x + w), min(self._height, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
        src_alpha = cov * (color[3] / 255.0)
        if not np.any(src_alpha > 0):
            return
        patch = self._frame[y0:y1, x0:x1, :3]
        dst_rgb = patch.to(torch.float32).cpu().numpy()
        src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
        a = src_alpha[:, :, None]
        out_rgb = src_rgb * a + dst_rgb * (1.0 - a)
        self._frame[y0:y1, x0:x1, :3] = torch.from_numpy(np.clip(out_rgb, 0, 255).astype(np.uint8))


def _font_size(style: Mapping[str, Any]) -> float:
    value = style.get("fontSize")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_FONT_SIZE_PX
    return float(value)


def _parse_color(value: Any, fallback: str | None) -> tuple[int, int, int, int] | None:
    if isinstance(value, str):
        try:
            return ImageColor.getcolor(value, "RGBA")
        except ValueError:
            LOGGER.debug("unparseable color %r, using %r", value, fallback)
    if fallback is None:
        return None
    return ImageColor.getcolor(fallback, "RGBA")


@lru_cache(maxsize=64)
def _load_font(font_path: str, size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(size_px)))
    if font_path:
        try:
            return ImageFont.truetype(font_path, size=size)
        except OSError:
            LOGGER.debug("could not load font %s, falling back to default", font_path)
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        return ImageFont.load_default()


def _rasterize_text(text: str, font_path: str, size_px: float) -> _TextMask:
    font = _load_font(font_path, size_px)
    try:
        ascent, descent = font.getmetrics()
        line_height = max(1, int(ascent + descent))
    except AttributeError:
        line_height = max(1, int(round(size_px * 1.2)))
    advance = max(1, int(round(font.getlength(text)))) if text else 1
    left, top, right, bottom = font.getbbox(text) if text else (0, 0, 0, 0)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return _TextMask(
        alpha_mask=np.asarray(image, dtype=np.uint8),
        x_offset=int(left),
        y_offset=int(top),
        advance=advance,
        line_height=max(line_height, height),
    )


def _resolve_system_font_path(family: str) -> str:
    wanted = family.strip().lower().replace(" ", "")
    patterns = tuple(p for p in (wanted, "dejavusans", "helvetica", "arial", "liberationsans") if p)
    font_dirs = (
        Path.home() / "Library/Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    )
    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf"):
            candidates.extend(base.rglob(ext))
    for pattern in patterns:
        for path in candidates:
            if pattern in path.stem.lower().replace(" ", ""):
                return str(path)
    if candidates:
        return str(candidates[0])
    return ""
