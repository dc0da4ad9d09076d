"""Bitmap fonts drawn into a blitter window.

A font is a header plus an image. Fixed and proportional fonts (types 1 and
2) are one bit per pixel and are expanded to pixels by the blitter. Type 3
fonts are plain images with the destination's pixel depth. Type 4 fonts are
8 bits per pixel with a colour look-up table after the image. Type 4 is
expanded into 16-bit destinations and copied into any other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from jagkit.blitter import Blitter, Command, Flags, Register

Text = Union[str, bytes]

_PIXEL_MASK = (
    Flags.PIXEL1 | Flags.PIXEL2 | Flags.PIXEL4 | Flags.PIXEL8 | Flags.PIXEL16 | Flags.PIXEL32
)
_DEPTH_MASK = Flags.PIXEL1 | Flags.PIXEL2 | Flags.PIXEL4 | Flags.PIXEL8 | Flags.PIXEL16

# image width in pixels -> blitter width bits
_WIDTHS = {
    0x0800: 2, 0x1000: 4, 0x1400: 6, 0x1800: 8, 0x1A00: 10, 0x1C00: 12,
    0x1E00: 14, 0x2000: 16, 0x2200: 20, 0x2400: 24, 0x2600: 28, 0x2800: 32,
    0x2A00: 40, 0x2C00: 48, 0x2E00: 56, 0x3000: 64, 0x3200: 80, 0x3400: 96,
    0x3600: 112, 0x3800: 128, 0x3A00: 160, 0x3C00: 192, 0x3E00: 224,
    0x4000: 256, 0x4200: 320, 0x4400: 384, 0x4600: 448, 0x4800: 512,
    0x4A00: 640, 0x4C00: 768, 0x4E00: 896, 0x5000: 1024, 0x5200: 1280,
    0x5400: 1536, 0x5600: 1792, 0x5800: 2048, 0x5A00: 2560, 0x5C00: 3072,
    0x5E00: 3584,
}


class FontType(IntEnum):
    """Kinds of font image."""

    FIXED = 1
    PROPORTIONAL = 2
    IMAGE = 3
    PALETTE = 4


@dataclass
class Font:
    """A font header and its image.

    ``data`` holds the image bytes and, for proportional fonts, the table of
    character widths at byte offset ``res * height * 2``; ``address`` is where
    the image lives in the blitter's address space.
    """

    type: int
    width: int
    height: int
    firstchar: int
    lastchar: int
    blitflags: int
    data: bytes = b""
    res: int = 0
    address: int = 0


def _s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


def _codes(text: Text) -> bytes:
    raw = text.encode("latin-1") if isinstance(text, str) else bytes(text)
    return raw.split(b"\0", 1)[0]


def _byte(font: Font, offset: int) -> int:
    if not 0 <= offset < len(font.data):
        raise ValueError(f"font data has no byte at offset {offset}")
    return font.data[offset]


def _word(font: Font, offset: int) -> int:
    if not 0 <= offset or offset + 2 > len(font.data):
        raise ValueError(f"font data has no word at offset {offset}")
    return int.from_bytes(font.data[offset:offset + 2], "big")


def _widths_offset(font: Font) -> int:
    return font.res * font.height * 2


def _index(font: Font, code: int) -> int:
    """Character index within the font; characters outside it count as the first."""
    if code < font.firstchar or code > font.lastchar:
        return 0
    return code - font.firstchar


def wid(blitflags: int) -> int:
    """Image width in pixels encoded in ``blitflags``; 1 if the width is unknown."""
    return _WIDTHS.get(blitflags & 0x7E00, 1)


def font_box(text: Text, font: Font) -> int:
    """Size of the box enclosing ``text``: height in the high word, width in the low."""
    total = 0
    if font.type == FontType.PROPORTIONAL:
        base = _widths_offset(font)
        for code in _codes(text):
            total += _byte(font, base + _index(font, code))
    else:
        total = len(_codes(text)) * font.width
    return (font.height << 16) | (total & 0xFFFF)


def phrase_step(pixel: int, width: int, pixels_per_phrase: int) -> int:
    """Step value for a blit ``width`` pixels wide starting at ``pixel``.

    ``pixels_per_phrase`` is the phrase size minus one, or 0 in pixel mode.
    """
    width &= 0xFFFF
    stepx = -width
    endx = ((pixel & 0xFFFF) + width) & pixels_per_phrase
    if endx > 0:
        stepx -= pixels_per_phrase + 1 - endx
    return 0x00010000 | (stepx & 0x0000FFFF)


def pixels_per_phrase(blitflags: int) -> int:
    """Pixels in a phrase minus one, or 0 where phrase mode is not allowed."""
    depth = blitflags & _PIXEL_MASK
    if depth in (Flags.PIXEL1, Flags.PIXEL2, Flags.PIXEL4):
        return 0
    if depth == Flags.PIXEL8:
        return 7
    if depth == Flags.PIXEL16:
        return 3
    return 1


def font_copy(
    blitter: Blitter, x: int, y: int, text: Text, dest: int, blitflags: int, font: Font
) -> int:
    """Copy fixed-width characters of an image font; colour 0 is transparent.

    The font and destination must have the same pixel depth. Characters not
    in the font are skipped. Returns the bounding box of the string.
    """
    cwidth = font.width
    cmd = (
        Command.SRCEN | Command.UPDA1 | Command.UPDA2
        | Command.LFU_REPLACE | Command.DSTEN | Command.DCOMPEN
    )
    a1pixel = (y << 16) | (x & 0xFFFF)

    blitter.write(Register.A2_BASE, font.address)
    blitter.write(Register.A1_BASE, dest)

    per_phrase = pixels_per_phrase(blitflags)
    xadd = Flags.XADDPHR if per_phrase != 0 else Flags.XADDPIX
    blitter.write(
        Register.A2_FLAGS, xadd | (_s16(font.blitflags) & ~Flags.XADDINC) | Flags.PITCH1
    )
    blitter.write(Register.A1_FLAGS, xadd | (blitflags & ~Flags.XADDINC))

    # transparent blit
    blitter.write(Register.B_PATD, 0)
    blitter.write(Register.B_PATD_1, 0)

    bndbox = font.height << 16
    count = (font.height << 16) | cwidth

    for code in _codes(text):
        if font.firstchar <= code <= font.lastchar:
            c = (code - font.firstchar) * cwidth
            a1step = phrase_step(a1pixel, cwidth, per_phrase)
            a2step = phrase_step(c, cwidth, per_phrase)
            if a1step < a2step:
                a2step -= per_phrase + 1

            blitter.write(Register.A1_STEP, a1step)
            blitter.write(Register.A2_STEP, a2step)
            blitter.write(Register.A2_PIXEL, c)
            blitter.write(Register.A1_PIXEL, a1pixel)
            blitter.write(Register.B_COUNT, count)
            # an unaligned source may need the extra realignment read
            if (c & per_phrase) != 0 and (c & per_phrase) > (a1pixel & per_phrase):
                blitter.write(Register.B_CMD, cmd | Command.SRCENX)
            else:
                blitter.write(Register.B_CMD, cmd)
        a1pixel += cwidth
        bndbox += cwidth
    return bndbox


def font_expand(
    blitter: Blitter,
    x: int,
    y: int,
    text: Text,
    dest: int,
    blitflags: int,
    font: Font,
    fgcolor: int,
) -> int:
    """Draw an 8-bit palette font into a 16-bit destination, one pixel per blit.

    The high byte of each non-transparent colour comes from ``fgcolor``; a
    palette entry of 0 is transparent. Returns the bounding box of the string.
    """
    fgcolor &= 0xFF00
    cwidth = font.width
    cheight = font.height
    srcwidth = wid(font.blitflags)
    palette = cheight * srcwidth + 2  # skip the entry count

    blitter.write(Register.A1_BASE, dest)
    blitter.write(
        Register.A2_FLAGS,
        Flags.XADDPIX | (_s16(font.blitflags) & ~Flags.XADDINC) | Flags.PITCH1,
    )
    blitter.write(Register.A1_FLAGS, Flags.XADDPIX | (blitflags & ~Flags.XADDINC))

    cmd = Command.LFU_REPLACE | Command.DCOMPEN

    blitter.write(Register.B_PATD, 0)
    blitter.write(Register.B_PATD_1, 0)

    bndbox = font_box(text, font)

    for code in _codes(text):
        if font.firstchar <= code <= font.lastchar:
            a1pixel = (y << 16) | (x & 0xFFFF)
            src = (code - font.firstchar) * cwidth
            for _row in range(cheight):
                blitter.write(Register.A1_PIXEL, a1pixel)
                for column in range(cwidth):
                    entry = _byte(font, src + column)
                    color = _word(font, palette + 2 * entry)
                    if color != 0:
                        color = fgcolor | (color & 0x00FF)
                    blitter.write(Register.B_SRCD, _s16(color))
                    blitter.write(Register.B_COUNT, 0x00010001)
                    blitter.write(Register.B_CMD, cmd)
                src += srcwidth
                a1pixel += 0x00010000
        x += cwidth
    return bndbox


def _spread(color: int, depth: int) -> int:
    if depth == Flags.PIXEL1:
        return 0xFF if color else 0
    if depth == Flags.PIXEL2:
        color = ((color << 2) | color) & 0xFFFF
        return ((color << 4) | color) & 0xFFFF
    if depth == Flags.PIXEL4:
        return ((color << 4) | color) & 0xFFFF
    return color


def font_str(
    blitter: Blitter,
    x: int,
    y: int,
    text: Text,
    dest: int,
    blitflags: int,
    font: Font,
    fgcolor: int,
    bgcolor: int,
) -> int:
    """Draw ``text`` at (x, y) in the window at ``dest`` with flags ``blitflags``.

    A ``bgcolor`` of 0 leaves the background untouched. Returns the bounding
    box of the string just drawn.
    """
    kind = font.type
    if kind == FontType.PALETTE and (blitflags & 0x38) == Flags.PIXEL16:
        return font_expand(blitter, x, y, text, dest, blitflags, font, fgcolor)
    if kind in (FontType.PALETTE, FontType.IMAGE):
        return font_copy(blitter, x, y, text, dest, blitflags, font)
    proportional = kind == FontType.PROPORTIONAL
    widths = _widths_offset(font)

    # characters are byte aligned; wider ones need one blit per byte
    rounded = (font.width + 7) & ~7
    if rounded == 16:
        bshift, numblits = 1, 2
    elif rounded in (24, 32):
        bshift, numblits = 2, 4
    else:
        bshift, numblits = 0, 1

    fwidth = 0
    count = 0
    if not proportional:
        fwidth = 1 + ((font.width - 1) & 0x7) if font.width > 8 else font.width
        count = (font.height << 16) | fwidth

    a1pixel = (y << 16) | (x & 0xFFFF)
    cmd = (
        Command.SRCENX | Command.UPDA1 | Command.UPDA2
        | Command.PATDSEL | Command.BCOMPEN | Command.BKGWREN
    )

    depth = blitflags & _DEPTH_MASK
    fgcolor &= 0xFFFF
    bgcolor &= 0xFFFF
    if depth in (Flags.PIXEL1, Flags.PIXEL2, Flags.PIXEL4):
        fgcolor = _spread(fgcolor, depth)
        bgcolor = _spread(bgcolor, depth)
        cmd |= Command.DSTEN

    blitter.write(Register.B_PATD, fgcolor)
    if bgcolor:
        blitter.write(Register.B_DSTD, bgcolor)
    else:
        cmd |= Command.DSTEN

    blitter.write(Register.A2_BASE, font.address)
    blitter.write(Register.A1_BASE, dest)
    blitter.write(
        Register.A2_FLAGS,
        Flags.XADDPIX | ((font.blitflags & 0x7E00) - 0x1800) | Flags.PITCH1 | Flags.PIXEL8,
    )
    blitter.write(Register.A1_FLAGS, Flags.XADDPIX | (blitflags & ~Flags.XADDINC))
    blitter.write(Register.A2_STEP, 0x0001FFFF)

    bndbox = font.height << 16

    for code in _codes(text):
        c = _index(font, code)
        if proportional:
            fwidth = _byte(font, widths + c)
            blitcount = ((fwidth + 7) & ~7) >> 3
            if fwidth > 8:
                fwidth = 1 + ((fwidth - 1) & 0x7)
            count = (font.height << 16) | fwidth
            # narrower characters are padded on the left
            c <<= bshift
            if numblits > blitcount:
                c += numblits - blitcount
        else:
            blitcount = numblits
            c <<= bshift

        blitter.write(Register.A2_PIXEL, c)
        blitter.write(Register.A1_PIXEL, a1pixel)
        blitter.write(Register.B_COUNT, count)
        blitter.write(Register.A1_STEP, 0x00010000 | ((-fwidth) & 0x0000FFFF))
        blitter.write(Register.B_CMD, cmd)

        a1pixel += fwidth
        bndbox += fwidth

        if blitcount > 1:
            c += 1
            blitter.write(Register.A1_STEP, 0x0001FFF8)
            for _ in range(blitcount - 1):
                blitter.write(Register.A2_PIXEL, c)
                blitter.write(Register.A1_PIXEL, a1pixel)
                blitter.write(Register.B_COUNT, (font.height << 16) | 8)
                blitter.write(Register.B_CMD, cmd)
                a1pixel += 8
                c += 1
                bndbox += 8
    return bndbox