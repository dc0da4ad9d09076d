# jagkit

`jagkit` models in plain Python the pieces that a small console 3D demo is
built from. These are the blitter's register interface, the object processor's
list format, bitmap fonts, the 3D renderer's data structures, the demo's
per-frame state and a small C-style runtime.

## Modules

- `jagkit.blitter`: the `Register` addresses, `Command` bits and `Flags`
  fields. It also has a `Blitter` register file. `write` stores a value
  truncated to 32 bits and `read` returns the last value, or 0. Each write to
  `B_CMD` records a snapshot of all registers, which `commands()` returns
  oldest first.
- `jagkit.ctype`: classification through a fixed 256-entry table (`classify`,
  `CharClass`, `isalpha`, `isdigit`, `isxdigit`, `isspace`, ...) and the
  conversions `toupper`, `tolower`, `toascii` and `toint`. Every function takes
  either a one-character string or an integer code.
- `jagkit.cstring`: `strcmp`, `strncmp`, `strrchr`, `strlen`, `strcat`,
  `strcpy`, `strdup`, `atoi` and `atol`.
  - Strings end at their first NUL.
  - Characters collate as signed 8-bit values.
  - `None` is accepted where the C routines accept a null pointer.
  - `strrchr` returns an index, or `None`.
- `jagkit.sprintf`: `sprintf(fmt, *args)`.
  - Supported conversions are `%c %s %d %o %x %u %%`, with a width, `0` fill
    and the `l`/`L` modifier.
  - Hexadecimal digits are upper case.
  - Output is capped at 254 characters.
  - Missing arguments raise `TypeError`.
- `jagkit.alloc`: `Heap`, a first-fit free-list allocator over integer
  addresses.
  - `sbrk` raises `MemoryError` past the limit.
  - `malloc` returns an address.
  - `free` merges the block with free neighbours. It raises
    `HeapCorruptionError` for an address that is not an allocated block.
- `jagkit.joypad`: the `Button` masks and `JoyStream`. A `JoyStream` takes a
  `reader` callable. `get()` takes a new reading and `edge()` reports the
  buttons that were newly pressed.
- `jagkit.olist`: the list entries `BitmapObject`, `GpuObject`,
  `BranchObject` and `StopObject`, with their `ObjectType` codes.
  - `packed_size` gives the packed size.
  - `pack` gives a list of 32-bit words for a given store address.
  - `pack_bytes` gives the same as big-endian bytes.
  - A list without a stop object, or a link outside the list, raises
    `ValueError`.
- `jagkit.n3d`: the 3D data structures `Light`, `LightModel`, `Matrix`,
  `Point`, `Bitmap`, `Material`, `Face`, `ObjectData`, the three animation
  kinds, `N3DObject`, `TPoint`, `XPoint` and `Polygon`. It also has
  `make_cube(texture)`, the sample two-sided textured square.
- `jagkit.font`: `Font` and `FontType`, plus `font_box` to measure a string.
  It has the blitter helpers `wid`, `phrase_step` and `pixels_per_phrase`.
  `font_str`, `font_copy` and `font_expand` issue the blits that draw a string
  into a `Blitter`, and each returns the string's bounding box with the height
  in the high word.
- `jagkit.demo`: the interactive demo's logic.
  - `DemoState` holds the model and renderer tables and the object and viewer
    `Angles`.
  - `handle_input(buttons, edges)` applies one frame of joypad input.
  - `fix_all_textures` and `fix_texture` switch textures between plain
    intensities and intensities relative to 0x80.
  - `clear_buffer` issues the blit that clears a frame.
  - `status_lines` and `frames_per_second` give the on-screen statistics.

No third-party libraries are needed. Python 3.10 or later is enough.

## Examples

```python
from jagkit.sprintf import sprintf

sprintf("%08lx draw time", 255)     # '000000FF draw time'
sprintf("%d faces/%d fps", 4, 60)   # '4 faces/60 fps'
```

```python
from jagkit.cstring import strcmp, atoi

strcmp("abc", "abd")   # -1
strcmp(None, "abc")    # -1
atoi("  42xyz")        # 42
```

```python
from jagkit.ctype import isxdigit, toupper

isxdigit("F")          # True
toupper("q")           # 'Q'
```

```python
from jagkit.joypad import Button, JoyStream

readings = iter([0, Button.FIRE_A])
pad = JoyStream(lambda: next(readings))
pad.get()
pad.get()
pad.edge() == Button.FIRE_A   # True
```

```python
from jagkit.demo import status_lines

status_lines("Wire Frames", 4, 60, 1000)
# ['Wire Frames', '4 faces/60 fps', '106300 polys/sec', '000003E8 draw time']
```

## What it does not do

`jagkit` has no command to run and draws nothing to a screen.

- `Blitter` only records register writes. Nothing carries out the blits, so no
  pixels are produced.
- The renderers in `jagkit.demo` are names and texture flags only. The package
  contains no code that transforms, lights or rasterises an `N3DObject`.
- Nothing builds matrices from `Angles`.
- `DemoState` keeps the state of the demo loop but does not run it.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.