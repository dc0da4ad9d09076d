"""Data structures of the 3D renderer and the sample two-sided square model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

MAXLIGHTS = 6
MAXPOLYPOINTS = 8
MAXFACEPOINTS = 3

# 1.0 in the 0.14 fixed point used by matrices and normals
ONE = 0x4000

# clipping codes held in the low byte of TPoint.basei
CLIP_Z_NEAR = 0x01
CLIP_X_LOW = 0x02
CLIP_X_HIGH = 0x04
CLIP_Y_LOW = 0x08
CLIP_Y_HIGH = 0x10
UNTRANSFORMED = 0x80


def _s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


@dataclass
class Light:
    """A light in the scene, or sunlight when ``bright`` is 0."""

    x: int = 0
    y: int = 0
    z: int = 0
    bright: int = 0

    @property
    def is_sunlight(self) -> bool:
        return self.bright == 0


@dataclass
class LightModel:
    """Ambient illumination plus at most MAXLIGHTS lights."""

    ambient: int = 0
    lights: list[Light] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.lights) > MAXLIGHTS:
            raise ValueError(f"at most {MAXLIGHTS} lights are allowed")

    @property
    def numlights(self) -> int:
        return len(self.lights)


@dataclass
class Matrix:
    """A 4x3 transformation matrix of 0.14 fractions plus a position."""

    xrite: int = 0
    yrite: int = 0
    zrite: int = 0
    xdown: int = 0
    ydown: int = 0
    zdown: int = 0
    xhead: int = 0
    yhead: int = 0
    zhead: int = 0
    xposn: int = 0
    yposn: int = 0
    zposn: int = 0

    @classmethod
    def identity(cls) -> Matrix:
        return cls(xrite=ONE, ydown=ONE, zhead=ONE)


@dataclass
class Point:
    """A model point and its vertex normal."""

    x: int = 0
    y: int = 0
    z: int = 0
    vx: int = 0
    vy: int = 0
    vz: int = 0


@dataclass
class Bitmap:
    """A rectangle of 16-bit pixels with blitter flags and a base address."""

    width: int = 0
    height: int = 0
    blitflags: int = 0
    data: list[int] = field(default_factory=list)
    address: int = 0


@dataclass
class Material:
    """A shading colour, flags, and an optional texture."""

    color: int = 0
    flags: int = 0
    tmap: Optional[Bitmap] = None


@dataclass
class Face:
    """A polygon: plane equation, material index and (point index, uv) vertices.

    ``uv`` packs U in the high byte and V in the low byte.
    """

    fx: int = 0
    fy: int = 0
    fz: int = 0
    fd: int = 0
    material: int = 0
    vertices: tuple[tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        if len(self.vertices) > MAXFACEPOINTS:
            raise ValueError(f"a face holds at most {MAXFACEPOINTS} points")

    @property
    def npts(self) -> int:
        return len(self.vertices)

    def texture_coords(self) -> list[tuple[int, int]]:
        """The (U, V) byte pair of each vertex."""
        return [((uv >> 8) & 0xFF, uv & 0xFF) for _, uv in self.vertices]


@dataclass
class ObjectData:
    """Shape data that any number of objects may share."""

    faces: list[Face] = field(default_factory=list)
    points: list[Point] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    reserved: int = 0

    @property
    def numpolys(self) -> int:
        return len(self.faces)

    @property
    def numpoints(self) -> int:
        return len(self.points)

    @property
    def nummaterials(self) -> int:
        return len(self.materials)


@dataclass
class DeltaAnimation:
    """Velocity and pitch/yaw/roll deltas applied per 300th of a second."""

    type: ClassVar[int] = 0
    vx: int = 0
    vy: int = 0
    vz: int = 0
    pitch: int = 0
    yaw: int = 0
    roll: int = 0
    scale: int = 0


@dataclass
class FrameAnimation:
    """A sequence of matrices replacing the object's matrix frame by frame."""

    type: ClassVar[int] = 1
    frames: list[Matrix] = field(default_factory=list)
    frame_rate: int = 0
    frame_number: int = 0
    reserved: int = 0

    @property
    def total_frames(self) -> int:
        return len(self.frames)


@dataclass
class GpuAnimation:
    """A GPU program that updates the object's animation."""

    type: ClassVar[int] = 2
    gpupack: Any = None
    gpuenter: int = 0
    data0: int = 0
    data: Any = None


@dataclass
class N3DObject:
    """An object placed in the world, with optional tree links and animation."""

    data: Optional[ObjectData] = None
    M: Matrix = field(default_factory=Matrix)
    siblings: Optional[N3DObject] = None
    children: Optional[N3DObject] = None
    animation: Optional[Any] = None


@dataclass
class TPoint:
    """A transformed point; ``basei`` holds intensity and clipping codes."""

    basei: int = UNTRANSFORMED
    x: int = 0
    y: int = 0
    z: int = 0

    @property
    def clipcodes(self) -> int:
        return self.basei & 0xFF

    @property
    def intensity(self) -> int:
        return (self.basei >> 8) & 0xFFFF

    @property
    def transformed(self) -> bool:
        return not self.basei & UNTRANSFORMED


@dataclass
class XPoint:
    """A polygon vertex after clipping and perspective."""

    x: int = 0
    y: int = 0
    z: int = 0
    i: int = 0
    u: int = 0
    v: int = 0


@dataclass
class Polygon:
    """A clipped polygon of at most MAXPOLYPOINTS vertices."""

    pt: list[XPoint] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.pt) > MAXPOLYPOINTS:
            raise ValueError(f"a polygon holds at most {MAXPOLYPOINTS} points")

    @property
    def numpoints(self) -> int:
        return len(self.pt)

    def append(self, point: XPoint) -> None:
        if len(self.pt) >= MAXPOLYPOINTS:
            raise ValueError(f"a polygon holds at most {MAXPOLYPOINTS} points")
        self.pt.append(point)


_SIDE = 200
_NORMAL = 0x24F3


def make_cube(texture: Optional[Bitmap] = None) -> ObjectData:
    """The two-sided textured square: textured on the front, plain on the back."""
    n = _NORMAL
    points = [
        Point(-_SIDE, -_SIDE, 0, -n, -n, -n),
        Point(_SIDE, -_SIDE, 0, n, -n, -n),
        Point(_SIDE, _SIDE, 0, n, n, -n),
        Point(-_SIDE, _SIDE, 0, -n, n, -n),
    ]
    materials = [
        Material(color=0x78C0, flags=0, tmap=texture),
        Material(color=0x7FC0, flags=0, tmap=None),
    ]
    front = _s16(0xC000)
    back = 0x4000
    faces = [
        Face(0, 0, front, 0, 0, ((0, 0x0000), (1, 0xFF00), (3, 0x00FF))),
        Face(0, 0, front, 0, 0, ((1, 0xFF00), (2, 0xFFFF), (3, 0x00FF))),
        Face(0, 0, back, 0, 1, ((0, 0x0000), (3, 0x00FF), (1, 0xFF00))),
        Face(0, 0, back, 0, 1, ((1, 0xFF00), (3, 0x00FF), (2, 0xFFFF))),
    ]
    return ObjectData(faces=faces, points=points, materials=materials)