"""Mouse interfaces: Kempston mouse or a mouse acting as a joystick."""

from __future__ import annotations

import abc
import enum

from .joystick import Joystick, JoystickMode

MOUSE_BUTTON_LEFT = 0x01
MOUSE_BUTTON_RIGHT = 0x02
MOUSE_BUTTON_MIDDLE = 0x04

AXIS_THRESHOLD = 32
AXIS_RELEASE = 28
AXIS_BAND = 28


def _i32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


class MouseMode(enum.IntEnum):
    KEMPSTON_MOUSE = 0
    JOYSTICK = 1


class Mouse(Joystick):
    """A pointing device that can also pose as a joystick."""

    def __init__(self):
        super().__init__()
        self._mouse_mode = MouseMode.KEMPSTON_MOUSE

    @property
    def mouse_mode(self) -> MouseMode:
        return self._mouse_mode

    @mouse_mode.setter
    def mouse_mode(self, value) -> None:
        self._apply_mouse_mode(MouseMode(value))

    def _apply_mouse_mode(self, mode: MouseMode) -> None:
        self._mouse_mode = mode

    @abc.abstractmethod
    def buttons(self) -> int: ...

    @abc.abstractmethod
    def x_axis(self) -> int: ...

    @abc.abstractmethod
    def y_axis(self) -> int: ...

    @abc.abstractmethod
    def is_mounted(self) -> bool: ...

    @abc.abstractmethod
    def reset(self) -> None: ...


class HidMouse(Mouse):
    """A USB HID mouse feeding relative movement and button state."""

    def __init__(self):
        super().__init__()
        self._mounted = 0
        self._clear()

    def _clear(self) -> None:
        self._x_acc = 0
        self._y_acc = 0
        self._w_acc = 0
        self._buttons = 0
        self._kempston = 0
        self._sinclair_left = 0
        self._sinclair_right = 0
        self._xp = 0
        self._yp = 0
        self._left = False
        self._right = False
        self._up = False
        self._down = False

    def _apply_mouse_mode(self, mode: MouseMode) -> None:
        super()._apply_mouse_mode(mode)
        self.reset()

    def reset(self) -> None:
        """Clear accumulated movement, buttons and derived joystick state."""
        self._clear()

    # Kempston mouse port

    def buttons(self) -> int:
        if self.mouse_mode != MouseMode.KEMPSTON_MOUSE:
            return 0xFF
        b = (
            (2 if self._buttons & MOUSE_BUTTON_LEFT else 0)
            | (4 if self._buttons & MOUSE_BUTTON_MIDDLE else 0)
            | (1 if self._buttons & MOUSE_BUTTON_RIGHT else 0)
        )
        return 0xFF & ~((self._w_acc << 4) | b)

    def x_axis(self) -> int:
        if self.mouse_mode != MouseMode.KEMPSTON_MOUSE:
            return 0
        return (self._x_acc >> 3) & 0xFF

    def y_axis(self) -> int:
        if self.mouse_mode != MouseMode.KEMPSTON_MOUSE:
            return 0
        return (self._y_acc >> 3) & 0xFF

    # Device events

    def is_mounted(self) -> bool:
        return self._mounted > 0

    def mount(self) -> None:
        self._mounted = (self._mounted + 1) & 0xFF

    def unmount(self) -> None:
        self._mounted = (self._mounted - 1) & 0xFF

    def x_delta(self, dx: int) -> None:
        self._x_acc = _i32(self._x_acc + dx)

    def y_delta(self, dy: int) -> None:
        self._y_acc = _i32(self._y_acc - dy)

    def w_delta(self, dw: int) -> None:
        self._w_acc = _i32(self._w_acc + dw)

    def set_buttons(self, buttons: int) -> None:
        self._buttons = buttons & 0xFF

    # Joystick emulation

    def decode(self) -> None:
        """Turn accumulated movement into joystick directions."""
        x, y = self._x_acc, self._y_acc

        if y > self._yp + AXIS_BAND or y < self._yp - AXIS_BAND:
            if x > self._xp + AXIS_THRESHOLD:
                self._xp = x - AXIS_THRESHOLD
                self._right = True
            elif x < self._xp + AXIS_RELEASE:
                self._right = False
            if x < self._xp - AXIS_THRESHOLD:
                self._xp = x + AXIS_THRESHOLD
                self._left = True
            elif x > self._xp - AXIS_RELEASE:
                self._left = False
        else:
            if x > self._xp + AXIS_THRESHOLD:
                self._xp = x - AXIS_THRESHOLD
                self._right, self._up, self._down = True, False, False
            elif x < self._xp + AXIS_RELEASE:
                self._right = False
            if x < self._xp - AXIS_THRESHOLD:
                self._xp = x + AXIS_THRESHOLD
                self._left, self._up, self._down = True, False, False
            elif x > self._xp - AXIS_RELEASE:
                self._left = False

        if x > self._xp + AXIS_BAND or x < self._xp - AXIS_BAND:
            if y > self._yp + AXIS_THRESHOLD:
                self._yp = y - AXIS_THRESHOLD
                self._up = True
            elif y < self._yp + AXIS_RELEASE:
                self._up = False
            if y < self._yp - AXIS_THRESHOLD:
                self._yp = y + AXIS_THRESHOLD
                self._down = True
            elif y > self._yp - AXIS_RELEASE:
                self._down = False
        else:
            if y > self._yp + AXIS_THRESHOLD:
                self._yp = y - AXIS_THRESHOLD
                self._up, self._right, self._left = True, False, False
            elif y < self._yp + AXIS_RELEASE:
                self._up = False
            if y < self._yp - AXIS_THRESHOLD:
                self._yp = y + AXIS_THRESHOLD
                self._down, self._right, self._left = True, False, False
            elif y > self._yp - AXIS_RELEASE:
                self._down = False

        kempston = (self._buttons << 4) & 0xFF
        sinclair_left = 0xFF
        sinclair_right = 0xFF
        is_left = self.mode == JoystickMode.SINCLAIR_LR

        # (kempston bit, left-port bit, right-port bit) for each input
        inputs = (
            (bool(self._buttons & MOUSE_BUTTON_LEFT), None, 4, 0),
            (self._right, 0, 1, 3),
            (self._left, 1, 0, 4),
            (self._up, 3, 3, 1),
            (self._down, 2, 2, 2),
        )
        for active, kbit, lbit, rbit in inputs:
            if not active:
                continue
            if kbit is not None:
                kempston |= 1 << kbit
            if is_left:
                sinclair_left &= ~(1 << lbit)
            else:
                sinclair_right &= ~(1 << rbit)

        self._kempston = kempston & 0xFF
        self._sinclair_left = sinclair_left & 0xFF
        self._sinclair_right = sinclair_right & 0xFF

    def kempston(self) -> int:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return 0
        self.decode()
        return self._kempston

    def sinclair_left(self) -> int:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return 0xFF
        self.decode()
        return self._sinclair_left

    def sinclair_right(self) -> int:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return 0xFF
        self.decode()
        return self._sinclair_right

    def joy1(self) -> int:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return 0
        self.decode()
        return self._kempston

    def is_connected_left(self) -> bool:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return False
        return self._mounted > 0 and self.mode == JoystickMode.SINCLAIR_LR

    def is_connected_right(self) -> bool:
        if self.mouse_mode != MouseMode.JOYSTICK:
            return False
        return self._mounted > 0 and self.mode == JoystickMode.SINCLAIR_RL