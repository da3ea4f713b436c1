"""The Spectrum keyboard half-row matrix as read through port 0xfe."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .joystick import Joystick

LINE_COUNT = 8


class Keyboard:
    """Eight half-rows of five keys, active low, plus Sinclair joysticks."""

    def __init__(self, joystick: Optional["Joystick"] = None, mouse: Optional["Joystick"] = None):
        self._joystick = joystick
        self._mouse = mouse
        self._lines = bytearray(b"\xff" * LINE_COUNT)
        self._virtual_lines = bytearray(b"\xff" * LINE_COUNT)

    def reset(self) -> None:
        """Release every physical key."""
        self._lines[:] = b"\xff" * LINE_COUNT

    def press(self, line: int, mask: int) -> None:
        self._lines[line] &= ~mask & 0xFF

    def release(self, line: int, mask: int) -> None:
        self._lines[line] |= mask & 0xFF

    def virtual_press(self, line: int, mask: int) -> None:
        """Press a key until the next read of its line."""
        self._virtual_lines[line] &= ~mask & 0xFF

    def read(self, address: int) -> int:
        """Value of the keyboard port for a 16-bit I/O address."""
        selected = ~(address >> 8)
        value = 0xFF
        port = address | 0xF0
        if port == 0xF7FE:
            if self._joystick is not None:
                value = self._joystick.get_sinclair_left()
            if self._mouse is not None:
                value &= self._mouse.get_sinclair_left()
        if port == 0xEFFE:
            if self._joystick is not None:
                value = self._joystick.get_sinclair_right()
            if self._mouse is not None:
                value &= self._mouse.get_sinclair_right()
        for i in range(LINE_COUNT):
            if selected & (1 << i):
                value &= self._lines[i] & self._virtual_lines[i]
                self._virtual_lines[i] = 0xFF
        return value & 0xFF

    def is_mounted(self) -> bool:
        return False