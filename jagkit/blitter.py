"""Blitter register map, command and flag bits, and a recording register file."""

from __future__ import annotations

from enum import IntEnum

_WORD_MASK = 0xFFFFFFFF


class Register(IntEnum):
    """Addresses of the 32-bit blitter registers."""

    A1_BASE = 0xF02200
    A1_FLAGS = 0xF02204
    A1_CLIP = 0xF02208
    A1_PIXEL = 0xF0220C
    A1_STEP = 0xF02210
    A1_FSTEP = 0xF02214
    A1_FPIXEL = 0xF02218
    A1_INC = 0xF0221C
    A1_FINC = 0xF02220
    A2_BASE = 0xF02224
    A2_FLAGS = 0xF02228
    A2_MASK = 0xF0222C
    A2_PIXEL = 0xF02230
    A2_STEP = 0xF02234

    B_CMD = 0xF02238
    B_COUNT = 0xF0223C
    B_SRCD = 0xF02240
    B_SRCD_1 = 0xF02244
    B_DSTD = 0xF02248
    B_DSTD_1 = 0xF0224C
    B_DSTZ = 0xF02250
    B_DSTZ_1 = 0xF02254
    B_SRCZ1 = 0xF02258
    B_SRCZ1_1 = 0xF0225C
    B_SRCZ2 = 0xF02260
    B_SRCZ2_1 = 0xF02264
    B_PATD = 0xF02268
    B_PATD_1 = 0xF0226C
    B_IINC = 0xF02270
    B_ZINC = 0xF02274
    B_STOP = 0xF02278

    B_I3 = 0xF0227C
    B_I2 = 0xF02280
    B_I1 = 0xF02284
    B_I0 = 0xF02288

    B_Z3 = 0xF0228C
    B_Z2 = 0xF02290
    B_Z1 = 0xF02294
    B_Z0 = 0xF02298


class Command(IntEnum):
    """Bits of the blitter command register; combine them with ``|``."""

    SRCEN = 0x00000001
    SRCENZ = 0x00000002
    SRCENX = 0x00000004
    DSTEN = 0x00000008
    DSTENZ = 0x00000010
    DSTWRZ = 0x00000020
    CLIP_A1 = 0x00000040
    NOGO = 0x00000080
    UPDA1F = 0x00000100
    UPDA1 = 0x00000200
    UPDA2 = 0x00000400
    DSTA2 = 0x00000800
    GOURD = 0x00001000
    ZBUFF = 0x00002000
    TOPBEN = 0x00004000
    TOPNEN = 0x00008000
    PATDSEL = 0x00010000
    ADDDSEL = 0x00020000
    ZMODELT = 0x00040000
    ZMODEEQ = 0x00080000
    ZMODEGT = 0x00100000
    LFU_NAN = 0x00200000
    LFU_NA = 0x00400000
    LFU_AN = 0x00800000
    LFU_A = 0x01000000

    # all sixteen logic functions
    LFU_ZERO = 0x00000000
    LFU_NSAND = 0x00200000
    LFU_NSAD = 0x00400000
    LFU_NOTS = 0x00600000
    LFU_SAND = 0x00800000
    LFU_NOTD = 0x00A00000
    LFU_N = 0x00C00000
    LFU_NSORND = 0x00E00000
    LFU_SAD = 0x01000000
    LFU_SXORD = 0x01200000
    LFU_D = 0x01400000
    LFU_NSORD = 0x01600000
    LFU_S = 0x01800000
    LFU_SORND = 0x01A00000
    LFU_SORD = 0x01C00000
    LFU_ONE = 0x01E00000

    LFU_REPLACE = 0x01800000
    LFU_XOR = 0x01200000
    LFU_CLEAR = 0x00000000

    CMPDST = 0x02000000
    BCOMPEN = 0x04000000
    DCOMPEN = 0x08000000
    BKGWREN = 0x10000000
    BUSHI = 0x20000000
    SRCSHADE = 0x40000000


class Flags(IntEnum):
    """Field values of the A1/A2 flags registers; combine them with ``|``."""

    # pitch: distance between pixel phrases
    PITCH1 = 0x00000000
    PITCH2 = 0x00000001
    PITCH4 = 0x00000002
    PITCH3 = 0x00000003

    # pixel depth
    PIXEL1 = 0x00000000
    PIXEL2 = 0x00000008
    PIXEL4 = 0x00000010
    PIXEL8 = 0x00000018
    PIXEL16 = 0x00000020
    PIXEL32 = 0x00000028

    # phrase offset of Z data from pixel data
    ZOFFS0 = 0x00000000
    ZOFFS1 = 0x00000040
    ZOFFS2 = 0x00000080
    ZOFFS3 = 0x000000C0
    ZOFFS4 = 0x00000100
    ZOFFS5 = 0x00000140
    ZOFFS6 = 0x00000180
    ZOFFS7 = 0x000001C0

    # window width, as a small floating point number
    WID2 = 0x00000800
    WID4 = 0x00001000
    WID6 = 0x00001400
    WID8 = 0x00001800
    WID10 = 0x00001A00
    WID12 = 0x00001C00
    WID14 = 0x00001E00
    WID16 = 0x00002000
    WID20 = 0x00002200
    WID24 = 0x00002400
    WID28 = 0x00002600
    WID32 = 0x00002800
    WID40 = 0x00002A00
    WID48 = 0x00002C00
    WID56 = 0x00002E00
    WID64 = 0x00003000
    WID80 = 0x00003200
    WID96 = 0x00003400
    WID112 = 0x00003600
    WID128 = 0x00003800
    WID160 = 0x00003A00
    WID192 = 0x00003C00
    WID224 = 0x00003E00
    WID256 = 0x00004000
    WID320 = 0x00004200
    WID384 = 0x00004400
    WID448 = 0x00004600
    WID512 = 0x00004800
    WID640 = 0x00004A00
    WID768 = 0x00004C00
    WID896 = 0x00004E00
    WID1024 = 0x00005000
    WID1280 = 0x00005200
    WID1536 = 0x00005400
    WID1792 = 0x00005600
    WID2048 = 0x00005800
    WID2560 = 0x00005A00
    WID3072 = 0x00005C00
    WID3584 = 0x00005E00

    # X add control
    XADDPHR = 0x00000000
    XADDPIX = 0x00010000
    XADD0 = 0x00020000
    XADDINC = 0x00030000

    # Y add control
    YADD0 = 0x00000000
    YADD1 = 0x00040000

    # X and Y sign
    XSIGNADD = 0x00000000
    XSIGNSUB = 0x00080000
    YSIGNADD = 0x00000000
    YSIGNSUB = 0x00100000


class Blitter:
    """A register file that keeps the 32-bit value of each register.

    Every write to ``B_CMD`` starts a blit; the register state at that moment
    is recorded and can be inspected with :meth:`commands`.
    """

    def __init__(self) -> None:
        self._registers: dict[Register, int] = {}
        self._log: list[dict[Register, int]] = []

    def write(self, register: Register | int, value: int) -> None:
        """Store ``value`` (truncated to 32 bits) in ``register``."""
        reg = Register(register)
        self._registers[reg] = int(value) & _WORD_MASK
        if reg is Register.B_CMD:
            self._log.append(dict(self._registers))

    def read(self, register: Register | int) -> int:
        """Return the last value written to ``register``, or 0."""
        return self._registers.get(Register(register), 0)

    def commands(self) -> list[dict[Register, int]]:
        """Return the register state captured at each command, oldest first."""
        return [dict(state) for state in self._log]

    def __getitem__(self, register: Register | int) -> int:
        return self.read(register)

    def __setitem__(self, register: Register | int, value: int) -> None:
        self.write(register, value)