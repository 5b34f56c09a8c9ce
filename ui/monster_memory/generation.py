"""Off-screen rendering of the table view into a PNG.

The capture covers the title block, the selected category and the active
table. All geometry is laid out at 1x and multiplied by `scale`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from ui.monster_memory.constants import (
    COL_FAQ,
    COL_FLIP_FACE_DOWN,
    COL_INFO,
    COL_TEMP_BANISHED,
    EXPORT_SCALE,
    FAQ_GLYPH,
    TABLE_SUBTITLE,
    TABLE_TITLE,
)
from ui.monster_memory.view import CategoryView, RowView

WIDTH = 896
PADDING = 24
CELL_PAD = 16
TITLE_SIZE = 20
TEXT_SIZE = 14
SMALL_SIZE = 12
# info, temporary banished, flipped face-down, faq
COLUMN_WIDTHS = (448, 176, 176, 48)

BACKGROUND = (255, 255, 255)
TEXT_COLOR = (17, 24, 39)
MUTED_COLOR = (107, 114, 128)
BORDER_COLOR = (229, 231, 235)


@dataclass(frozen=True)
class SnapshotTarget:
    title: str
    subtitle: str
    category: str
    rows: Tuple[RowView, ...]


def build_snapshot_target(view: CategoryView) -> SnapshotTarget:
    return SnapshotTarget(
        title=TABLE_TITLE,
        subtitle=TABLE_SUBTITLE,
        category=view.selected,
        rows=tuple(view.render_rows()),
    )


@lru_cache(maxsize=8)
def _get_font(size: int) -> ImageFont.FreeTypeFont:
    return ImageFont.load_default(size=size)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    c = color.lstrip("#")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def _text_width(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.FreeTypeFont) -> int:
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0]


def _line_height(font: ImageFont.FreeTypeFont) -> int:
    ascent, descent = font.getmetrics()
    return ascent + descent


def _split_long_word(draw: ImageDraw.ImageDraw, word: str, font: ImageFont.FreeTypeFont, max_w: int) -> List[str]:
    """Break a word wider than `max_w` into character chunks that fit."""
    chunks: List[str] = []
    cur = ""
    for ch in word:
        if cur and _text_width(draw, cur + ch, font) > max_w:
            chunks.append(cur)
            cur = ch
        else:
            cur += ch
    if cur:
        chunks.append(cur)
    return chunks


def _wrap_text_to_lines(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.FreeTypeFont, max_w: int) -> List[str]:
    lines: List[str] = []
    for paragraph in str(text).splitlines() or [""]:
        words = []
        for w in paragraph.split():
            if _text_width(draw, w, font) > max_w:
                words.extend(_split_long_word(draw, w, font, max_w))
            else:
                words.append(w)
        if not words:
            lines.append("")
            continue
        cur = words[0]
        for w in words[1:]:
            candidate = cur + " " + w
            if _text_width(draw, candidate, font) <= max_w:
                cur = candidate
            else:
                lines.append(cur)
                cur = w
        lines.append(cur)
    return lines


def render_snapshot(target: SnapshotTarget, scale: int = EXPORT_SCALE) -> Image.Image:
    if target is None:
        raise ValueError("Nothing to capture: no snapshot target is mounted")
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    s = int(scale)
    width = WIDTH * s
    pad = PADDING * s
    cell_pad = CELL_PAD * s
    col_widths = [w * s for w in COLUMN_WIDTHS]

    title_font = _get_font(TITLE_SIZE * s)
    text_font = _get_font(TEXT_SIZE * s)
    small_font = _get_font(SMALL_SIZE * s)

    # Measure on a scratch surface first so the final canvas fits exactly.
    scratch = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    inner_w = width - 2 * pad
    title_lines = _wrap_text_to_lines(scratch, target.title.upper(), title_font, inner_w)
    subtitle_lines = _wrap_text_to_lines(scratch, target.subtitle, small_font, inner_w)
    selector_text = f"Category: {target.category}"

    text_h = _line_height(text_font)
    header_h = text_h + 2 * cell_pad

    row_layouts = []
    for row in target.rows:
        info_lines = _wrap_text_to_lines(scratch, row.info, text_font, col_widths[0] - 2 * cell_pad)
        row_h = max(1, len(info_lines)) * text_h + 2 * cell_pad
        row_layouts.append((row, info_lines, row_h))

    height = (
        pad
        + len(title_lines) * _line_height(title_font)
        + 8 * s
        + len(subtitle_lines) * _line_height(small_font)
        + 16 * s
        + text_h + cell_pad
        + 16 * s
        + header_h
        + sum(h for _, _, h in row_layouts)
        + pad
    )

    img = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(img)

    y = pad
    for line in title_lines:
        x = (width - _text_width(draw, line, title_font)) // 2
        draw.text((x, y), line, font=title_font, fill=TEXT_COLOR)
        y += _line_height(title_font)
    y += 8 * s
    for line in subtitle_lines:
        x = (width - _text_width(draw, line, small_font)) // 2
        draw.text((x, y), line, font=small_font, fill=MUTED_COLOR)
        y += _line_height(small_font)
    y += 16 * s

    # Category selector
    sel_h = text_h + cell_pad
    sel_w = max(180 * s, _text_width(draw, selector_text, text_font) + cell_pad * 2)
    draw.rounded_rectangle([pad, y, pad + sel_w, y + sel_h], radius=6 * s, outline=BORDER_COLOR, width=s)
    draw.text((pad + cell_pad, y + cell_pad // 2), selector_text, font=text_font, fill=TEXT_COLOR)
    y += sel_h + 16 * s

    table_top = y
    xs = [pad]
    for w in col_widths:
        xs.append(xs[-1] + w)

    headers = [COL_INFO, COL_TEMP_BANISHED, COL_FLIP_FACE_DOWN, COL_FAQ]
    for i, label in enumerate(headers):
        draw.text((xs[i] + cell_pad, y + cell_pad), label, font=text_font, fill=TEXT_COLOR)
    y += header_h
    draw.line([pad, y, xs[-1], y], fill=BORDER_COLOR, width=s)

    for row, info_lines, row_h in row_layouts:
        ty = y + cell_pad
        for line in info_lines:
            draw.text((xs[0] + cell_pad, ty), line, font=text_font, fill=TEXT_COLOR)
            ty += text_h
        draw.text(
            (xs[1] + cell_pad, y + cell_pad),
            row.temporary_banished.label,
            font=text_font,
            fill=_hex_to_rgb(row.temporary_banished.color),
        )
        draw.text(
            (xs[2] + cell_pad, y + cell_pad),
            row.flip_face_down.label,
            font=text_font,
            fill=_hex_to_rgb(row.flip_face_down.color),
        )
        draw.text((xs[3] + cell_pad, y + cell_pad), FAQ_GLYPH, font=text_font, fill=_hex_to_rgb(row.faq.color))
        y += row_h
        draw.line([pad, y, xs[-1], y], fill=BORDER_COLOR, width=s)

    # Outer border and column separators
    draw.rectangle([pad, table_top, xs[-1], y], outline=BORDER_COLOR, width=s)
    for x in xs[1:-1]:
        draw.line([x, table_top, x, y], fill=BORDER_COLOR, width=s)

    return img


def encode_png(img: Image.Image) -> bytes:
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_snapshot_png(target: SnapshotTarget, scale: int = EXPORT_SCALE) -> bytes:
    return encode_png(render_snapshot(target, scale))
