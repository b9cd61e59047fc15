"""A small kernel model: memory, scheduling, traps, shell parsing and filesystem, and a window manager."""

__version__ = "0.1.0"