"""Blitter, object list, font, 3D data and demo-state models with a small C-style runtime."""

__version__ = "0.1.0"

__all__ = [
    "alloc",
    "blitter",
    "cstring",
    "ctype",
    "demo",
    "font",
    "joypad",
    "n3d",
    "olist",
    "sprintf",
]