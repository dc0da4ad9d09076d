import pytest

from jagkit.blitter import Blitter, Command, Flags, Register
from jagkit.font import (
    Font,
    FontType,
    font_box,
    font_copy,
    font_expand,
    font_str,
    phrase_step,
    pixels_per_phrase,
    wid,
)


def _fixed(width=8, height=12):
    return Font(
        type=FontType.FIXED,
        width=width,
        height=height,
        firstchar=ord("A"),
        lastchar=ord("Z"),
        blitflags=Flags.WID80,
        address=0x4000,
    )


def _proportional(widths=(3, 5, 7), width=8, height=10):
    return Font(
        type=FontType.PROPORTIONAL,
        width=width,
        height=height,
        firstchar=ord("A"),
        lastchar=ord("A") + len(widths) - 1,
        blitflags=Flags.WID16,
        data=bytes(widths),
        res=0,
        address=0x5000,
    )


def test_wid_known_widths():
    assert wid(Flags.WID320) == 320
    assert wid(Flags.WID2) == 2
    assert wid(Flags.WID3584) == 3584


def test_wid_ignores_other_bits_and_punts():
    assert wid(Flags.WID64 | Flags.PIXEL16 | Flags.XADDPIX) == 64
    assert wid(0) == 1


@pytest.mark.parametrize(
    "flags, expected",
    [
        (Flags.PIXEL1, 0),
        (Flags.PIXEL2, 0),
        (Flags.PIXEL4, 0),
        (Flags.PIXEL8, 7),
        (Flags.PIXEL16, 3),
        (Flags.PIXEL32, 1),
    ],
)
def test_pixels_per_phrase(flags, expected):
    assert pixels_per_phrase(flags | Flags.WID320) == expected


def test_phrase_step_aligned():
    assert phrase_step(0, 8, 3) == 0x0001FFF8
    assert phrase_step(0, 8, 0) == 0x0001FFF8


@pytest.mark.parametrize("pixel", range(0, 9))
@pytest.mark.parametrize("width", [1, 2, 3, 5, 8])
def test_phrase_step_returns_to_phrase_boundary(pixel, width):
    step = phrase_step(pixel, width, 3)
    assert step >> 16 == 1
    back = 0x10000 - (step & 0xFFFF)
    assert back >= width
    assert (pixel + back) % 4 == 0


def test_font_box_fixed():
    font = _fixed()
    assert font_box("ABC", font) == (font.height << 16) | (3 * font.width)


def test_font_box_stops_at_nul():
    font = _fixed()
    assert font_box("AB\0CD", font) == font_box("AB", font)
    assert font_box(b"AB", font) == font_box("AB", font)


def test_font_box_proportional():
    font = _proportional()
    assert font_box("AB", font) == (font.height << 16) | (3 + 5)
    # characters outside the font take the width of the first character
    assert font_box("Z", font) == font_box("A", font)


def test_font_box_proportional_short_data_raises():
    font = _proportional()
    font.data = b""
    with pytest.raises(ValueError):
        font_box("A", font)


def test_font_str_fixed_pixel16():
    blitter = Blitter()
    font = _fixed()
    box = font_str(blitter, 10, 20, "ABD", 0x100000, Flags.PIXEL16 | Flags.WID320, font, 0x7FFF, 0)
    assert box == font_box("ABD", font)
    cmds = blitter.commands()
    assert len(cmds) == 3
    assert [state[Register.A2_PIXEL] for state in cmds] == [0, 1, 3]
    assert [state[Register.A1_PIXEL] & 0xFFFF for state in cmds] == [10, 18, 26]
    assert all(state[Register.A1_PIXEL] >> 16 == 20 for state in cmds)
    expected_cmd = (
        Command.SRCENX | Command.UPDA1 | Command.UPDA2 | Command.PATDSEL
        | Command.BCOMPEN | Command.BKGWREN | Command.DSTEN
    )
    assert cmds[0][Register.B_CMD] == expected_cmd
    assert cmds[0][Register.B_PATD] == 0x7FFF
    assert cmds[0][Register.A2_STEP] == 0x0001FFFF
    assert cmds[0][Register.A2_BASE] == font.address
    assert cmds[0][Register.A1_BASE] == 0x100000


def test_font_str_background_colour_disables_destination_read():
    blitter = Blitter()
    font_str(blitter, 0, 0, "A", 0, Flags.PIXEL16, _fixed(), 0x7FFF, 0x27A0)
    state = blitter.commands()[0]
    assert state[Register.B_DSTD] == 0x27A0
    assert not state[Register.B_CMD] & Command.DSTEN


def test_font_str_low_depth_colours():
    blitter = Blitter()
    font_str(blitter, 0, 0, "A", 0, Flags.PIXEL4, _fixed(), 0x3, 0)
    assert blitter.read(Register.B_PATD) == 0x33

    blitter = Blitter()
    font_str(blitter, 0, 0, "A", 0, Flags.PIXEL1, _fixed(), 5, 9)
    assert blitter.read(Register.B_PATD) == 0xFF
    assert blitter.read(Register.B_DSTD) == 0xFF
    assert blitter.read(Register.B_CMD) & Command.DSTEN


def test_font_str_sixteen_wide_uses_two_blits():
    blitter = Blitter()
    font = _fixed(width=16)
    box = font_str(blitter, 0, 0, "B", 0, Flags.PIXEL16, font, 1, 0)
    assert box == font_box("B", font)
    cmds = blitter.commands()
    assert len(cmds) == 2
    assert cmds[0][Register.A2_PIXEL] == 2
    assert cmds[1][Register.A2_PIXEL] == 3
    assert cmds[1][Register.A1_STEP] == 0x0001FFF8
    assert cmds[1][Register.A1_PIXEL] == cmds[0][Register.A1_PIXEL] + 8


def test_font_str_proportional_wide_character():
    blitter = Blitter()
    font = _proportional(widths=(12, 4), width=16)
    box = font_str(blitter, 0, 0, "AB", 0, Flags.PIXEL16, font, 1, 0)
    assert box == font_box("AB", font)
    cmds = blitter.commands()
    # 12 wide: two blits; 4 wide: one blit padded on the left
    assert len(cmds) == 3
    assert cmds[1][Register.A1_PIXEL] - cmds[0][Register.A1_PIXEL] == 12 - 8
    assert cmds[2][Register.A2_PIXEL] == (1 << 1) + 1


def test_font_copy_image_font():
    blitter = Blitter()
    font = Font(
        type=FontType.IMAGE,
        width=4,
        height=6,
        firstchar=ord("0"),
        lastchar=ord("9"),
        blitflags=Flags.WID40 | Flags.PIXEL16,
        address=0x6000,
    )
    box = font_str(blitter, 0, 0, "1x2", 0x100000, Flags.PIXEL16 | Flags.WID320, font, 0, 0)
    assert box == font_box("1x2", font)
    cmds = blitter.commands()
    assert len(cmds) == 2
    assert [state[Register.A2_PIXEL] for state in cmds] == [4, 8]
    # the skipped character still advances the destination
    assert cmds[1][Register.A1_PIXEL] - cmds[0][Register.A1_PIXEL] == 2 * font.width
    base_cmd = (
        Command.SRCEN | Command.UPDA1 | Command.UPDA2
        | Command.LFU_REPLACE | Command.DSTEN | Command.DCOMPEN
    )
    assert cmds[0][Register.B_CMD] & ~Command.SRCENX == base_cmd
    assert cmds[0][Register.B_PATD] == 0


def test_font_copy_direct_matches_font_str():
    font = _fixed()
    font.type = FontType.IMAGE
    first, second = Blitter(), Blitter()
    a = font_copy(first, 3, 4, "AZ", 0, Flags.PIXEL8, font)
    b = font_str(second, 3, 4, "AZ", 0, Flags.PIXEL8, font, 0, 0)
    assert a == b
    assert first.commands() == second.commands()


def _palette_font():
    image = bytes([1, 0, 2, 1])  # one row, WID4 -> four bytes per row
    palette = bytes([0x00, 0x03, 0x00, 0x00, 0x00, 0x34, 0x12, 0x56])
    return Font(
        type=FontType.PALETTE,
        width=2,
        height=1,
        firstchar=ord("A"),
        lastchar=ord("B"),
        blitflags=Flags.WID4,
        data=image + palette,
    )


def test_font_expand_second_character_advances_x():
    blitter = Blitter()
    font = _palette_font()
    font_expand(blitter, 5, 0, "AB", 0, Flags.PIXEL16, font, 0x1100)
    cmds = blitter.commands()
    assert len(cmds) == 4
    assert cmds[2][Register.A1_PIXEL] - cmds[0][Register.A1_PIXEL] == font.width
    assert cmds[2][Register.B_SRCD] == 0x1156


def test_palette_font_copied_when_not_sixteen_bit():
    blitter = Blitter()
    font = _palette_font()
    font_str(blitter, 0, 0, "A", 0, Flags.PIXEL8, font, 0xAB00, 0)
    cmds = blitter.commands()
    assert len(cmds) == 1
    assert cmds[0][Register.B_CMD] & Command.SRCEN


def test_font_expand_short_data_raises():
    font = _palette_font()
    font.data = font.data[:5]
    with pytest.raises(ValueError):
        font_expand(Blitter(), 0, 0, "A", 0, Flags.PIXEL16, font, 0)