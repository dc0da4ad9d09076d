"""State and per-frame logic of the interactive 3D renderer demo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from jagkit.blitter import Blitter, Command, Flags, Register
from jagkit.joypad import Button
from jagkit.n3d import Bitmap, N3DObject, ObjectData
from jagkit.sprintf import sprintf

# camera and screen object size
CAMWIDTH = 320
CAMHEIGHT = 200
OBJWIDTH = 320
OBJHEIGHT = 200
WIDFLAG = Flags.WID320

# bytes in a screen line: two data buffers and a Z buffer, 2 bytes each
LINELEN = OBJWIDTH * 6

# 1/100th of the clock speed
MHZ = 265900

# the timestamp counts 300ths of a second
TICKS_PER_SECOND = 300

BACKGROUND_COLOR = 0x27A027A0
FAR_Z = 0xFFFFFFFF

# per-frame movement and rotation steps
DELTA = 4
ROTINC = 0x10
FAST_ZSTEP = 0x10
SLOW_ZSTEP = 0x02

_TEXTURE_BIAS = 0x0080


def _s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


@dataclass
class Angles:
    """Rotation and position of an object or of the viewer, as 16-bit values."""

    alpha: int = 0
    beta: int = 0
    gamma: int = 0
    xpos: int = 0
    ypos: int = 0
    zpos: int = 0

    def shift(self, name: str, amount: int) -> None:
        """Add ``amount`` to the field ``name``, wrapping like a 16-bit short."""
        setattr(self, name, _s16(getattr(self, name) + amount))

    def reset_rotation(self) -> None:
        self.alpha = self.beta = self.gamma = 0


@dataclass
class Renderer:
    """A rendering package: its name, and whether textures are relative to 0x80.

    ``package`` and ``entry`` identify the GPU code that draws with it.
    """

    name: str
    texflag: int = 0
    package: Any = None
    entry: Any = None


@dataclass
class Model:
    """Shape data and the position the object starts at."""

    data: ObjectData
    initx: int = 0
    inity: int = 0
    initz: int = 0


DEFAULT_RENDERERS: tuple[Renderer, ...] = (
    Renderer("Wire Frames", 0),
    Renderer("Gouraud Only", 0),
    Renderer("Phrase Mode Gouraud", 0),
    Renderer("Unshaded Textures", 0),
    Renderer("Flat Shaded Textures", 0),
    Renderer("Gouraud Shaded Textures", 1),
)


def clear_buffer(blitter: Blitter, bitmap: Bitmap) -> None:
    """Fill ``bitmap`` with the background colour and its Z buffer with the far value."""
    blitter.write(Register.B_PATD, BACKGROUND_COLOR)
    blitter.write(Register.B_PATD_1, BACKGROUND_COLOR)
    for register in (Register.B_Z3, Register.B_Z2, Register.B_Z1, Register.B_Z0):
        blitter.write(register, FAR_Z)
    blitter.write(Register.A1_BASE, bitmap.address)
    blitter.write(Register.A1_STEP, 0x00010000 | ((-bitmap.width) & 0x0000FFFF))
    blitter.write(Register.A1_FLAGS, bitmap.blitflags | Flags.XADDPHR)
    blitter.write(Register.A1_PIXEL, 0)
    blitter.write(Register.A1_CLIP, 0)
    blitter.write(Register.B_COUNT, (bitmap.height << 16) | (bitmap.width & 0xFFFF))
    blitter.write(Register.B_CMD, Command.UPDA1 | Command.DSTWRZ | Command.PATDSEL)


def fix_texture(texture: Bitmap) -> None:
    """Toggle the texture's intensities between plain and relative to 0x80.

    Pixels are handled four at a time, so any remainder beyond a multiple of
    four pixels is left alone. Applying it twice restores the texture.
    """
    count = (texture.width * texture.height) // 4 * 4
    if count > len(texture.data):
        raise ValueError(
            f"texture holds {len(texture.data)} pixels, {count} are needed"
        )
    texture.data[:count] = [pixel ^ _TEXTURE_BIAS for pixel in texture.data[:count]]


def status_lines(renderer_name: str, numpolys: int, fps: int, draw_time: int) -> list[str]:
    """The four lines of statistics printed over each frame."""
    if draw_time <= 0:
        raise ValueError("draw time must be positive")
    return [
        renderer_name,
        sprintf("%d faces/%d fps", numpolys, fps),
        sprintf("%ld polys/sec", 100 * ((MHZ * numpolys) // draw_time)),
        sprintf("%08lx draw time", draw_time),
    ]


def frames_per_second(elapsed: int) -> int:
    """Frame rate from the 300ths of a second a frame took."""
    if elapsed <= 0:
        raise ValueError("elapsed time must be positive")
    return TICKS_PER_SECOND // elapsed


class DemoState:
    """The models, renderers, and viewer and object positions of the demo."""

    def __init__(
        self,
        models: Sequence[Model],
        renderers: Optional[Sequence[Renderer]] = None,
    ) -> None:
        if not models:
            raise ValueError("at least one model is needed")
        self.models = list(models)
        self.renderers = list(DEFAULT_RENDERERS if renderers is None else renderers)
        if not self.renderers:
            raise ValueError("at least one renderer is needed")
        self.obj = N3DObject()
        self.objangles = Angles()
        self.camangles = Angles()
        self.controlling_camera = False
        self.current_model = 0
        self.current_renderer = 0
        self.texture_state = 0
        self.select_model(0)
        self.fix_all_textures(self.renderer.texflag)

    @property
    def renderer(self) -> Renderer:
        return self.renderers[self.current_renderer]

    @property
    def model(self) -> Model:
        return self.models[self.current_model]

    @property
    def active_angles(self) -> Angles:
        """The angles that joypad movement applies to."""
        return self.camangles if self.controlling_camera else self.objangles

    def fix_all_textures(self, new_flag: int) -> None:
        """Convert every model's textures if the shading model changes."""
        if self.texture_state == new_flag:
            return
        for model in self.models:
            for material in model.data.materials:
                if material.tmap is not None:
                    fix_texture(material.tmap)
        self.texture_state = new_flag

    def select_model(self, index: int) -> None:
        """Show model ``index`` at its starting position with no rotation."""
        if not 0 <= index < len(self.models):
            raise IndexError(f"no model {index}")
        self.current_model = index
        model = self.models[index]
        self.obj.data = model.data
        self.objangles.xpos = model.initx
        self.objangles.ypos = model.inity
        self.objangles.zpos = model.initz
        self.objangles.reset_rotation()

    def _select_renderer(self, index: int) -> None:
        self.current_renderer = index
        self.fix_all_textures(self.renderer.texflag)

    def handle_input(self, buttons: int, edges: int) -> None:
        """Apply one frame's held ``buttons`` and newly pressed ``edges``."""
        angles = self.active_angles

        if buttons & Button.FIRE_A:
            angles.shift("zpos", -FAST_ZSTEP)
        elif buttons & Button.FIRE_B:
            angles.shift("zpos", -SLOW_ZSTEP)
        elif buttons & Button.FIRE_C:
            angles.shift("zpos", FAST_ZSTEP)
        elif buttons & Button.KEY_2:
            angles.shift("ypos", -DELTA)
        elif buttons & Button.KEY_8:
            angles.shift("ypos", DELTA)
        elif buttons & Button.KEY_4:
            angles.shift("xpos", -DELTA)
        elif buttons & Button.KEY_6:
            angles.shift("xpos", DELTA)

        if buttons & Button.JOY_UP:
            angles.shift("alpha", -ROTINC)
        elif buttons & Button.JOY_DOWN:
            angles.shift("alpha", ROTINC)
        if buttons & Button.JOY_LEFT:
            angles.shift("beta", -ROTINC)
        elif buttons & Button.JOY_RIGHT:
            angles.shift("beta", ROTINC)
        if buttons & Button.KEY_1:
            angles.shift("gamma", -ROTINC)
        elif buttons & Button.KEY_3:
            angles.shift("gamma", ROTINC)

        # holding 0 moves the viewer rather than the object
        self.controlling_camera = bool(buttons & Button.KEY_0)

        if edges & Button.OPTION:
            self.select_model((self.current_model + 1) % len(self.models))

        if edges & Button.KEY_H:
            self._select_renderer((self.current_renderer + 1) % len(self.renderers))

        if edges & Button.KEY_S:
            self._select_renderer((self.current_renderer - 1) % len(self.renderers))