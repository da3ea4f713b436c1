"""Render Spectrum screen lines into 8-bit-per-pixel RGB scanline words.

Each 32-bit word holds four display bytes, i.e. two Spectrum pixels each
shown twice.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

_MASK32 = 0xFFFFFFFF
_BIT_MASKS = (0x00000000, 0xFFFF0000, 0x0000FFFF, 0xFFFFFFFF)

SCREEN_TOP = 24
SCREEN_LINES = 192
SCREEN_BYTES = 6144
ATTR_BYTES = 768


class ColourEncoding(enum.Enum):
    BGYR_1111 = "bgyr_1111"
    RGBY_1111 = "rgby_1111"
    RGB_222 = "rgb_222"
    RGB_332 = "rgb_332"


@dataclass(frozen=True)
class BorderLayout:
    """Border widths in Spectrum pixels either side of the 256-pixel screen."""

    left_blank: int = 0
    left_coloured: int = 32
    right_coloured: int = 32
    right_blank: int = 0

    @property
    def width(self) -> int:
        return self.left_blank + self.left_coloured + 256 + self.right_coloured + self.right_blank


def _encode(encoding: ColourEncoding, index: int) -> int:
    b = index & 1
    r = (index >> 1) & 1
    g = (index >> 2) & 1
    bright = (index >> 3) & 1
    if encoding is ColourEncoding.BGYR_1111:
        y = bright if (r | g | b) else 0
        return (y << 2) | (r << 3) | (g << 1) | b
    if encoding is ColourEncoding.RGBY_1111:
        y = bright if (r | g | b) else 0
        return (y << 3) | (r << 2) | (g << 1) | b
    if encoding is ColourEncoding.RGB_222:
        level = 3 if bright else 2
        return ((r * level) << 4) | ((g * level) << 2) | (b * level)
    rg_level = 7 if bright else 5
    b_level = 3 if bright else 2
    return ((r * rg_level) << 5) | ((g * rg_level) << 2) | (b * b_level)


@lru_cache(maxsize=None)
def colour_words(encoding: ColourEncoding = ColourEncoding.RGB_332) -> tuple[int, ...]:
    """The 16 Spectrum colours, each as a byte repeated four times."""
    return tuple(_encode(encoding, i) * 0x01010101 for i in range(16))


def screen_row_offset(line: int) -> int:
    """Offset in the bitmap of the first byte of a screen line (0-191)."""
    return ((line & 0x7) << 8) + ((line & 0x38) << 2) + ((line & 0xC0) << 5)


def prepare_rgb_scanline(
    y: int,
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    border_colour: int,
    layout: Optional[BorderLayout] = None,
    encoding: ColourEncoding = ColourEncoding.RGB_332,
) -> list[int]:
    """The words of display line ``y``, with the top border starting at line 0."""
    layout = layout or BorderLayout()
    words = colour_words(encoding)
    bw = words[border_colour]

    out = [0] * (layout.left_blank // 2)
    if y < SCREEN_TOP or y >= SCREEN_TOP + SCREEN_LINES:
        out += [bw] * ((layout.width - layout.left_blank - layout.right_blank) // 2)
    else:
        if len(screen) < SCREEN_BYTES or len(attrs) < ATTR_BYTES:
            raise ValueError("screen or attribute memory is too short")
        out += [bw] * (layout.left_coloured // 2)
        v = y - SCREEN_TOP
        base = screen_row_offset(v)
        attr_base = (v >> 3) << 5
        flash = (frame >> 5) & 1
        for c, p in zip(attrs[attr_base:attr_base + 32], screen[base:base + 32]):
            if (c >> 7) & flash:
                p ^= 0xFF
            bci = (c >> 3) & 0xF
            fci = (c & 7) | (bci & 0x8)
            bcw = words[bci]
            fcw = words[fci]
            for shift in (6, 4, 2, 0):
                fgm = _BIT_MASKS[(p >> shift) & 3]
                out.append((fgm & fcw) | (~fgm & _MASK32 & bcw))
        out += [bw] * (layout.right_coloured // 2)
    out += [0] * (layout.right_blank // 2)
    return out


def prepare_rgb_blankline(width: int) -> list[int]:
    """A black line ``width`` display pixels wide."""
    return [0] * (width // 4)