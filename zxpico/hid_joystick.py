"""USB HID game controllers mapped onto Spectrum joystick ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from .joystick import Joystick, JoystickMode

HAT_BITS_U = 0b10000011
HAT_BITS_D = 0b00111000
HAT_BITS_L = 0b11100000
HAT_BITS_R = 0b00001110

JOY_RIGHT = 0x01
JOY_LEFT = 0x02
JOY_DOWN = 0x04
JOY_UP = 0x08
JOY_BT1 = 0x10
JOY_BT2 = 0x20
JOY_BT3 = 0x40
JOY_BT0 = 0x80
JOY_FIRE = 0x80

SINCLAIR_RIGHT = ~(1 << 3)
SINCLAIR_LEFT = ~(1 << 4)
SINCLAIR_DOWN = ~(1 << 2)
SINCLAIR_UP = ~(1 << 1)
SINCLAIR_FIRE = ~(1 << 0)


@dataclass
class Axis:
    """Thresholds at which an analogue axis counts as deflected."""

    threshold_min: int = 64
    threshold_max: int = 192


@dataclass
class SimpleJoystick:
    """Decoded state of one HID game controller."""

    x1: int = 128
    y1: int = 128
    x2: int = 128
    y2: int = 128
    hat: int = 0
    buttons: int = 0
    axis_x1: Axis = field(default_factory=Axis)
    axis_y1: Axis = field(default_factory=Axis)
    axis_x2: Axis = field(default_factory=Axis)
    axis_y2: Axis = field(default_factory=Axis)
    hat_length: int = 0
    hat_logical_max: int = 7
    updated: int = 0


def _axis_bits(x: int, y: int, axis_x: Axis, axis_y: Axis) -> int:
    joy = 0
    if y <= axis_y.threshold_min:
        joy |= JOY_UP
    elif y >= axis_y.threshold_max:
        joy |= JOY_DOWN
    if x <= axis_x.threshold_min:
        joy |= JOY_LEFT
    elif x >= axis_x.threshold_max:
        joy |= JOY_RIGHT
    return joy


def joystick_state(joystick: SimpleJoystick) -> int:
    """Digital state: direction bits from stick 1, stick 2 or hat, plus buttons."""
    joy = _axis_bits(joystick.x1, joystick.y1, joystick.axis_x1, joystick.axis_y1)
    if joy == 0:
        joy = _axis_bits(joystick.x2, joystick.y2, joystick.axis_x2, joystick.axis_y2)
    if joy == 0:
        hatm = 0
        if joystick.hat_length > 0:
            hat = joystick.hat
            span = joystick.hat_logical_max + 1
            while span > 8:
                span >>= 1
                hat >>= 1
            hatm = 1 << hat
        if hatm & HAT_BITS_U:
            joy |= JOY_UP
        elif hatm & HAT_BITS_D:
            joy |= JOY_DOWN
        if hatm & HAT_BITS_L:
            joy |= JOY_LEFT
        elif hatm & HAT_BITS_R:
            joy |= JOY_RIGHT
    joy |= (joystick.buttons & 0x0E) << 3
    joy |= (joystick.buttons & 1) << 7
    return joy & 0xFF


def joy_to_sinclair(joy: int) -> int:
    """Convert a digital state into active-low Sinclair port bits."""
    sinclair = 0xFF
    if joy & JOY_RIGHT:
        sinclair &= SINCLAIR_RIGHT
    elif joy & JOY_LEFT:
        sinclair &= SINCLAIR_LEFT
    if joy & JOY_DOWN:
        sinclair &= SINCLAIR_DOWN
    elif joy & JOY_UP:
        sinclair &= SINCLAIR_UP
    if joy & 0x0B:
        sinclair &= SINCLAIR_FIRE
    return sinclair & 0xFF


class HidJoystick(Joystick):
    """Up to two HID controllers supplied by a callable."""

    def __init__(self, source: Callable[[], Sequence[SimpleJoystick]]):
        super().__init__()
        self._source = source
        self._updated1 = 0
        self._updated2 = 0
        self._joy1 = 0
        self._joy2 = 0
        self._kempston = 0
        self._sinclair_left = 0xFF
        self._sinclair_right = 0xFF

    def _joysticks(self) -> list[SimpleJoystick]:
        return list(self._source())[:2]

    def decode(self) -> None:
        """Refresh cached state from any controller that has been updated."""
        sticks = self._joysticks()
        swapped = self.mode == JoystickMode.SINCLAIR_RL
        if sticks:
            stick = sticks[0]
            if self._updated1 != stick.updated:
                self._joy1 = joystick_state(stick)
                sinclair = joy_to_sinclair(self._joy1)
                if swapped:
                    self._sinclair_right = sinclair
                else:
                    self._sinclair_left = sinclair
                self._kempston = self._joy1
                self._updated1 = stick.updated
        if len(sticks) > 1:
            stick = sticks[1]
            if self._updated2 != stick.updated:
                self._joy2 = joystick_state(stick)
                sinclair = joy_to_sinclair(self._joy2)
                if swapped:
                    self._sinclair_left = sinclair
                else:
                    self._sinclair_right = sinclair
                self._updated2 = stick.updated

    def kempston(self) -> int:
        self.decode()
        return self._kempston

    def sinclair_left(self) -> int:
        self.decode()
        return self._sinclair_left

    def sinclair_right(self) -> int:
        self.decode()
        return self._sinclair_right

    def joy1(self) -> int:
        self.decode()
        return self._joy1

    def is_connected_left(self) -> bool:
        return len(self._joysticks()) > 0

    def is_connected_right(self) -> bool:
        return len(self._joysticks()) > 1