"""Joystick interfaces as seen by the Spectrum ports."""

from __future__ import annotations

import abc
import enum
from typing import Callable


class JoystickMode(enum.IntEnum):
    KEMPSTON = 0
    SINCLAIR_LR = 1
    SINCLAIR_RL = 2


_SINCLAIR_MODES = (JoystickMode.SINCLAIR_LR, JoystickMode.SINCLAIR_RL)


class Joystick(abc.ABC):
    """A source of Kempston and Sinclair joystick bits."""

    def __init__(self):
        self._mode = JoystickMode.KEMPSTON

    @property
    def mode(self) -> JoystickMode:
        return self._mode

    @mode.setter
    def mode(self, value) -> None:
        self._apply_mode(JoystickMode(value))

    def _apply_mode(self, mode: JoystickMode) -> None:
        self._mode = mode

    @abc.abstractmethod
    def kempston(self) -> int: ...

    @abc.abstractmethod
    def sinclair_left(self) -> int: ...

    @abc.abstractmethod
    def sinclair_right(self) -> int: ...

    @abc.abstractmethod
    def is_connected_left(self) -> bool: ...

    @abc.abstractmethod
    def is_connected_right(self) -> bool: ...

    @abc.abstractmethod
    def joy1(self) -> int: ...

    def get_kempston(self) -> int:
        """Kempston port bits, zero unless in Kempston mode."""
        return self.kempston() if self._mode == JoystickMode.KEMPSTON else 0

    def get_sinclair_left(self) -> int:
        """Left Sinclair bits (active low), 0xff unless in a Sinclair mode."""
        return self.sinclair_left() if self._mode in _SINCLAIR_MODES else 0xFF

    def get_sinclair_right(self) -> int:
        """Right Sinclair bits (active low), 0xff unless in a Sinclair mode."""
        return self.sinclair_right() if self._mode in _SINCLAIR_MODES else 0xFF


class DualJoystick(Joystick):
    """Two joysticks merged into one."""

    def __init__(self, first: Joystick, second: Joystick):
        super().__init__()
        self._first = first
        self._second = second

    def _apply_mode(self, mode: JoystickMode) -> None:
        self._first.mode = mode
        self._second.mode = mode
        super()._apply_mode(mode)

    def kempston(self) -> int:
        return self._first.kempston() | self._second.kempston()

    def sinclair_left(self) -> int:
        return self._first.sinclair_left() & self._second.sinclair_left()

    def sinclair_right(self) -> int:
        return self._first.sinclair_right() & self._second.sinclair_right()

    def is_connected_left(self) -> bool:
        return self._first.is_connected_left()

    def is_connected_right(self) -> bool:
        return self._first.is_connected_right()

    def joy1(self) -> int:
        return self._first.joy1() | self._second.joy1()


class MatrixJoystick(Joystick):
    """Kempston joystick driven by keys of a scanned key matrix."""

    def __init__(self, kempston_source: Callable[[], int]):
        super().__init__()
        self._source = kempston_source
        self.enabled = True

    def kempston(self) -> int:
        return self._source() if self.enabled else 0

    def sinclair_left(self) -> int:
        return 0xFF

    def sinclair_right(self) -> int:
        return 0xFF

    def is_connected_left(self) -> bool:
        return True

    def is_connected_right(self) -> bool:
        return False

    def joy1(self) -> int:
        return 0