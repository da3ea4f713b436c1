"""Scanned key matrices that produce HID keyboard reports.

Two layouts are supported.  ``SimpleKeyMatrix`` is an 8x8 matrix whose rows
are driven through a shift register and whose columns are read on GPIO 2-9.
``JoystickKeyMatrix`` is an 8x6 matrix with a sixth column of special keys
that can act as a Kempston joystick.

Each call to ``scan_row`` takes the value read from the GPIO input register
while the current line is selected.  A key only changes state once every
sample held for its line agrees.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .hid_keyboard import (
    HID_KEY_0, HID_KEY_1, HID_KEY_2, HID_KEY_3, HID_KEY_4, HID_KEY_5,
    HID_KEY_6, HID_KEY_7, HID_KEY_8, HID_KEY_9,
    HID_KEY_A, HID_KEY_B, HID_KEY_C, HID_KEY_D, HID_KEY_E, HID_KEY_F,
    HID_KEY_G, HID_KEY_H, HID_KEY_I, HID_KEY_J, HID_KEY_K, HID_KEY_L,
    HID_KEY_M, HID_KEY_N, HID_KEY_O, HID_KEY_P, HID_KEY_Q, HID_KEY_R,
    HID_KEY_S, HID_KEY_T, HID_KEY_U, HID_KEY_V, HID_KEY_W, HID_KEY_X,
    HID_KEY_Y, HID_KEY_Z,
    HID_KEY_ALT_RIGHT, HID_KEY_APOSTROPHE, HID_KEY_ARROW_DOWN,
    HID_KEY_ARROW_LEFT, HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_UP,
    HID_KEY_BACKSLASH, HID_KEY_BACKSPACE, HID_KEY_BRACKET_LEFT,
    HID_KEY_BRACKET_RIGHT, HID_KEY_COMMA, HID_KEY_ENTER, HID_KEY_EQUAL,
    HID_KEY_ESCAPE, HID_KEY_F1, HID_KEY_F2, HID_KEY_F3, HID_KEY_F4,
    HID_KEY_F5, HID_KEY_F6, HID_KEY_F9, HID_KEY_F10, HID_KEY_GRAVE,
    HID_KEY_MINUS, HID_KEY_PERIOD, HID_KEY_SEMICOLON, HID_KEY_SHIFT_LEFT,
    HID_KEY_SLASH, HID_KEY_SPACE,
    REPORT_KEYS, KeyboardReport,
)

_MASK32 = 0xFFFFFFFF
_OVERFLOW = 1

# Row input pins of the joystick matrix, in the order of the report bits.
ROW_PINS = (4, 5, 8, 1, 9, 15)

JOYSTICK_OFFSET = 2


def join_row_pins(gpio: int) -> int:
    """Gather the six row pins of the joystick matrix into bits 0-5."""
    gpio &= _MASK32
    bits = 0
    for bit, pin in enumerate(ROW_PINS):
        if (gpio >> pin) & 1:
            bits |= 1 << bit
    return bits


class _KeyMatrix(ABC):
    """Shared scanning, debouncing and report building."""

    LINES = 8
    SAMPLES = 1
    WIDTH = 8

    def __init__(self):
        self._samples = [[0] * self.SAMPLES for _ in range(self.LINES)]
        self._debounced = [0] * self.LINES
        self._line = 0
        self._sample = 0
        self._previous = KeyboardReport()
        self.menu = False

    @abstractmethod
    def _join(self, gpio: int) -> int:
        """Turn a GPIO reading into the pressed-key bits of one line."""

    def scan_row(self, gpio: int) -> None:
        """Record the GPIO inputs for the selected line and move to the next."""
        self._samples[self._line][self._sample] = self._join(gpio) & 0xFF
        self._line += 1
        if self._line >= self.LINES:
            self._line = 0
            self._sample = (self._sample + 1) % self.SAMPLES

        any_on = 0
        all_on = (1 << self.WIDTH) - 1
        for sample in self._samples[self._line]:
            any_on |= sample
            all_on &= sample
        line = self._line
        self._debounced[line] = (all_on | self._debounced[line]) & any_on

    def _report(self, modifier: int, layer) -> tuple[KeyboardReport, KeyboardReport]:
        codes: list[int] = []
        overflow = False
        for bits, line_codes in zip(self._debounced, layer):
            for column, code in enumerate(line_codes):
                if not (bits >> column) & 1:
                    continue
                if len(codes) >= REPORT_KEYS:
                    overflow = True
                    break
                if code:
                    codes.append(code)
            if overflow:
                codes = [_OVERFLOW] * REPORT_KEYS
                break
        current = KeyboardReport(modifier, tuple(codes))
        previous = self._previous
        self._previous = current
        return current, previous


_SIMPLE_LAYOUT = (
    (HID_KEY_1, HID_KEY_Q, HID_KEY_A, HID_KEY_0, HID_KEY_P, 0, HID_KEY_ENTER, HID_KEY_SPACE),
    (HID_KEY_2, HID_KEY_W, HID_KEY_S, HID_KEY_9, HID_KEY_O, HID_KEY_Z, HID_KEY_L, HID_KEY_ALT_RIGHT),
    (HID_KEY_3, HID_KEY_E, HID_KEY_D, HID_KEY_8, HID_KEY_I, HID_KEY_X, HID_KEY_K, HID_KEY_M),
    (HID_KEY_4, HID_KEY_R, HID_KEY_F, HID_KEY_7, HID_KEY_U, HID_KEY_C, HID_KEY_J, HID_KEY_N),
    (HID_KEY_5, HID_KEY_T, HID_KEY_G, HID_KEY_6, HID_KEY_Y, HID_KEY_V, HID_KEY_H, HID_KEY_B),
    (0, HID_KEY_ESCAPE, HID_KEY_BACKSPACE, HID_KEY_COMMA, HID_KEY_PERIOD,
     HID_KEY_SLASH, HID_KEY_APOSTROPHE, HID_KEY_MINUS),
    (HID_KEY_ARROW_LEFT, HID_KEY_ARROW_UP, HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_DOWN,
     HID_KEY_EQUAL, HID_KEY_SEMICOLON, HID_KEY_BRACKET_RIGHT, HID_KEY_BRACKET_LEFT),
    (HID_KEY_GRAVE, HID_KEY_BACKSLASH, HID_KEY_F1, HID_KEY_F2,
     HID_KEY_F3, HID_KEY_F4, HID_KEY_F5, HID_KEY_F6),
)


class SimpleKeyMatrix(_KeyMatrix):
    """8x8 matrix read on GPIO 2-9 with shift and control keys."""

    SAMPLES = 4
    WIDTH = 8
    COLUMN_SHIFT = 2
    SHIFT_LINE, SHIFT_BIT = 0, 0x20
    CTRL_LINE, CTRL_BIT = 5, 0x01

    def __init__(self):
        super().__init__()

    def _join(self, gpio: int) -> int:
        return ~((gpio & _MASK32) >> self.COLUMN_SHIFT) & _MASK32

    def scan_row(self, gpio: int) -> None:
        super().scan_row(gpio)

    def hid_reports(self) -> tuple[KeyboardReport, KeyboardReport]:
        """The report for the keys held now and the report built before it."""
        modifier = 0
        if self._debounced[self.SHIFT_LINE] & self.SHIFT_BIT:
            modifier |= 2
        if self._debounced[self.CTRL_LINE] & self.CTRL_BIT:
            modifier |= 1
        return self._report(modifier, _SIMPLE_LAYOUT)

    def kempston(self) -> int:
        """This matrix has no joystick keys."""
        return 0

    def fire_raw(self) -> bool:
        return False


_LEFT_COLUMNS = (
    (HID_KEY_1, HID_KEY_2, HID_KEY_3, HID_KEY_4, HID_KEY_5),
    (HID_KEY_Q, HID_KEY_W, HID_KEY_E, HID_KEY_R, HID_KEY_T),
    (HID_KEY_A, HID_KEY_S, HID_KEY_D, HID_KEY_F, HID_KEY_G),
    (HID_KEY_0, HID_KEY_9, HID_KEY_8, HID_KEY_7, HID_KEY_6),
    (HID_KEY_P, HID_KEY_O, HID_KEY_I, HID_KEY_U, HID_KEY_Y),
    (HID_KEY_SHIFT_LEFT, HID_KEY_Z, HID_KEY_X, HID_KEY_C, HID_KEY_V),
    (HID_KEY_ENTER, HID_KEY_L, HID_KEY_K, HID_KEY_J, HID_KEY_H),
    (HID_KEY_SPACE, HID_KEY_ALT_RIGHT, HID_KEY_M, HID_KEY_N, HID_KEY_B),
)


def _layer(extra, enter=HID_KEY_ENTER):
    rows = []
    for index, (left, code) in enumerate(zip(_LEFT_COLUMNS, extra)):
        if index == 6:
            left = (enter,) + left[1:]
        rows.append(left + (code,))
    return tuple(rows)


_JOYSTICK_LAYERS = (
    # Normal + cursor
    _layer((HID_KEY_F10, HID_KEY_F9, HID_KEY_F1, HID_KEY_ARROW_DOWN,
            HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_UP, HID_KEY_ARROW_LEFT, HID_KEY_0)),
    # Shifted + cursor
    _layer((0, 0, HID_KEY_F1, HID_KEY_ARROW_DOWN,
            HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_UP, HID_KEY_ARROW_LEFT, HID_KEY_ENTER)),
    # Normal + joystick
    _layer((HID_KEY_F10, HID_KEY_F9, HID_KEY_F1, 0, 0, 0, 0, 0)),
    # Shifted + joystick
    _layer((0, 0, HID_KEY_F1, 0, 0, 0, 0, 0)),
    # Menu
    _layer((0, 0, HID_KEY_F1, HID_KEY_ARROW_DOWN,
            HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_UP, HID_KEY_ARROW_LEFT, HID_KEY_ENTER)),
    # Shifted menu
    _layer((0, 0, HID_KEY_ESCAPE, HID_KEY_ARROW_DOWN,
            HID_KEY_ARROW_RIGHT, HID_KEY_ARROW_UP, HID_KEY_ARROW_LEFT, HID_KEY_ESCAPE),
           enter=HID_KEY_ESCAPE),
)

_SPECIAL_BIT = 0x20
_UP_COL, _DOWN_COL, _LEFT_COL, _RIGHT_COL, _FIRE_COL = 5, 3, 6, 4, 7
_CURSOR_COL, _KEMPSTON_COL = 1, 0
_SHIFT_COL, _SHIFT_BIT = 5, 0x01


class JoystickKeyMatrix(_KeyMatrix):
    """8x6 matrix whose special column doubles as a Kempston joystick."""

    SAMPLES = 2
    WIDTH = 6

    def __init__(self):
        super().__init__()
        self._joystick_offset = 0

    @property
    def joystick_mode(self) -> bool:
        """True when the special keys act as a joystick, False for cursor keys."""
        return self._joystick_offset != 0

    def _join(self, gpio: int) -> int:
        return join_row_pins(~gpio & _MASK32)

    def scan_row(self, gpio: int) -> None:
        super().scan_row(gpio)

    def hid_reports(self) -> tuple[KeyboardReport, KeyboardReport]:
        """The report for the keys held now and the report built before it.

        Shift with the cursor key selects cursor mode; shift with the
        Kempston key selects joystick mode.
        """
        deb = self._debounced
        shift = bool(deb[_SHIFT_COL] & _SHIFT_BIT)
        if shift:
            if deb[_CURSOR_COL] & _SPECIAL_BIT:
                self._joystick_offset = 0
            if deb[_KEMPSTON_COL] & _SPECIAL_BIT:
                self._joystick_offset = JOYSTICK_OFFSET
        layer = (4 if self.menu else self._joystick_offset) + (1 if shift else 0)
        modifier = 2 if shift else 0
        return self._report(modifier, _JOYSTICK_LAYERS[layer])

    def kempston(self) -> int:
        """Kempston bits 000FUDLR from the special keys in joystick mode."""
        if not self._joystick_offset or self.menu:
            return 0
        deb = self._debounced
        return (
            ((deb[_FIRE_COL] & _SPECIAL_BIT) >> 1)
            | ((deb[_LEFT_COL] & _SPECIAL_BIT) >> 4)
            | ((deb[_UP_COL] & _SPECIAL_BIT) >> 2)
            | ((deb[_RIGHT_COL] & _SPECIAL_BIT) >> 5)
            | ((deb[_DOWN_COL] & _SPECIAL_BIT) >> 3)
        )

    def fire_raw(self) -> bool:
        """True if any held sample shows the fire key down, before debouncing."""
        return any(s & _SPECIAL_BIT for s in self._samples[_FIRE_COL])