"""USB HID keyboard reports mapped onto the Spectrum key matrix."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .keyboard import Keyboard

BIT0 = 0x01
BIT1 = 0x02
BIT2 = 0x04
BIT3 = 0x08
BIT4 = 0x10

# HID usage codes
HID_KEY_A = 0x04
HID_KEY_B = 0x05
HID_KEY_C = 0x06
HID_KEY_D = 0x07
HID_KEY_E = 0x08
HID_KEY_F = 0x09
HID_KEY_G = 0x0A
HID_KEY_H = 0x0B
HID_KEY_I = 0x0C
HID_KEY_J = 0x0D
HID_KEY_K = 0x0E
HID_KEY_L = 0x0F
HID_KEY_M = 0x10
HID_KEY_N = 0x11
HID_KEY_O = 0x12
HID_KEY_P = 0x13
HID_KEY_Q = 0x14
HID_KEY_R = 0x15
HID_KEY_S = 0x16
HID_KEY_T = 0x17
HID_KEY_U = 0x18
HID_KEY_V = 0x19
HID_KEY_W = 0x1A
HID_KEY_X = 0x1B
HID_KEY_Y = 0x1C
HID_KEY_Z = 0x1D
HID_KEY_1 = 0x1E
HID_KEY_2 = 0x1F
HID_KEY_3 = 0x20
HID_KEY_4 = 0x21
HID_KEY_5 = 0x22
HID_KEY_6 = 0x23
HID_KEY_7 = 0x24
HID_KEY_8 = 0x25
HID_KEY_9 = 0x26
HID_KEY_0 = 0x27
HID_KEY_ENTER = 0x28
HID_KEY_ESCAPE = 0x29
HID_KEY_BACKSPACE = 0x2A
HID_KEY_TAB = 0x2B
HID_KEY_SPACE = 0x2C
HID_KEY_MINUS = 0x2D
HID_KEY_EQUAL = 0x2E
HID_KEY_BRACKET_LEFT = 0x2F
HID_KEY_BRACKET_RIGHT = 0x30
HID_KEY_BACKSLASH = 0x31
HID_KEY_EUROPE_1 = 0x32
HID_KEY_SEMICOLON = 0x33
HID_KEY_APOSTROPHE = 0x34
HID_KEY_GRAVE = 0x35
HID_KEY_COMMA = 0x36
HID_KEY_PERIOD = 0x37
HID_KEY_SLASH = 0x38
HID_KEY_F1 = 0x3A
HID_KEY_F2 = 0x3B
HID_KEY_F3 = 0x3C
HID_KEY_F4 = 0x3D
HID_KEY_F5 = 0x3E
HID_KEY_F6 = 0x3F
HID_KEY_F7 = 0x40
HID_KEY_F8 = 0x41
HID_KEY_F9 = 0x42
HID_KEY_F10 = 0x43
HID_KEY_F11 = 0x44
HID_KEY_F12 = 0x45
HID_KEY_PAUSE = 0x48
HID_KEY_ARROW_RIGHT = 0x4F
HID_KEY_ARROW_LEFT = 0x50
HID_KEY_ARROW_DOWN = 0x51
HID_KEY_ARROW_UP = 0x52
HID_KEY_F13 = 0x68
HID_KEY_F14 = 0x69
HID_KEY_CONTROL_LEFT = 0xE0
HID_KEY_SHIFT_LEFT = 0xE1
HID_KEY_ALT_LEFT = 0xE2
HID_KEY_GUI_LEFT = 0xE3
HID_KEY_CONTROL_RIGHT = 0xE4
HID_KEY_SHIFT_RIGHT = 0xE5
HID_KEY_ALT_RIGHT = 0xE6

# Modifier bits
KEYBOARD_MODIFIER_LEFTCTRL = 0x01
KEYBOARD_MODIFIER_LEFTSHIFT = 0x02
KEYBOARD_MODIFIER_LEFTALT = 0x04
KEYBOARD_MODIFIER_LEFTGUI = 0x08
KEYBOARD_MODIFIER_RIGHTCTRL = 0x10
KEYBOARD_MODIFIER_RIGHTSHIFT = 0x20
KEYBOARD_MODIFIER_RIGHTALT = 0x40

HID_KEY_MOD_SAVE = KEYBOARD_MODIFIER_LEFTCTRL
HID_KEY_MOD_LOAD = KEYBOARD_MODIFIER_LEFTALT

SPECTRUM_48K = 0
SPECTRUM_128K = 1

REPORT_KEYS = 6


@dataclass(frozen=True)
class HidKey:
    """A HID key and the Spectrum matrix contacts (line, bit) it closes."""

    keycode: int
    contacts: tuple[tuple[int, int], ...]


def _key(keycode: int, *contacts: tuple[int, int]) -> HidKey:
    return HidKey(keycode, tuple(contacts))


_KEY_TABLE = (
    _key(HID_KEY_SHIFT_LEFT, (0, BIT0)),
    _key(HID_KEY_SHIFT_RIGHT, (0, BIT0)),
    _key(HID_KEY_Z, (0, BIT1)),
    _key(HID_KEY_X, (0, BIT2)),
    _key(HID_KEY_C, (0, BIT3)),
    _key(HID_KEY_V, (0, BIT4)),
    _key(HID_KEY_A, (1, BIT0)),
    _key(HID_KEY_S, (1, BIT1)),
    _key(HID_KEY_D, (1, BIT2)),
    _key(HID_KEY_F, (1, BIT3)),
    _key(HID_KEY_G, (1, BIT4)),
    _key(HID_KEY_Q, (2, BIT0)),
    _key(HID_KEY_W, (2, BIT1)),
    _key(HID_KEY_E, (2, BIT2)),
    _key(HID_KEY_R, (2, BIT3)),
    _key(HID_KEY_T, (2, BIT4)),
    _key(HID_KEY_1, (3, BIT0)),
    _key(HID_KEY_2, (3, BIT1)),
    _key(HID_KEY_3, (3, BIT2)),
    _key(HID_KEY_4, (3, BIT3)),
    _key(HID_KEY_5, (3, BIT4)),
    _key(HID_KEY_0, (4, BIT0)),
    _key(HID_KEY_9, (4, BIT1)),
    _key(HID_KEY_8, (4, BIT2)),
    _key(HID_KEY_7, (4, BIT3)),
    _key(HID_KEY_6, (4, BIT4)),
    _key(HID_KEY_P, (5, BIT0)),
    _key(HID_KEY_O, (5, BIT1)),
    _key(HID_KEY_I, (5, BIT2)),
    _key(HID_KEY_U, (5, BIT3)),
    _key(HID_KEY_Y, (5, BIT4)),
    _key(HID_KEY_ENTER, (6, BIT0)),
    _key(HID_KEY_L, (6, BIT1)),
    _key(HID_KEY_K, (6, BIT2)),
    _key(HID_KEY_J, (6, BIT3)),
    _key(HID_KEY_H, (6, BIT4)),
    _key(HID_KEY_SPACE, (7, BIT0)),
    _key(HID_KEY_ALT_RIGHT, (7, BIT1)),
    _key(HID_KEY_M, (7, BIT2)),
    _key(HID_KEY_N, (7, BIT3)),
    _key(HID_KEY_B, (7, BIT4)),
    _key(HID_KEY_BACKSPACE, (0, BIT0), (4, BIT0)),
    _key(HID_KEY_PAUSE, (0, BIT0), (7, BIT0)),
    _key(HID_KEY_COMMA, (7, BIT1), (7, BIT3)),
    _key(HID_KEY_PERIOD, (7, BIT1), (7, BIT2)),
    _key(HID_KEY_SLASH, (7, BIT1), (0, BIT4)),
    _key(HID_KEY_SEMICOLON, (7, BIT1), (5, BIT1)),
    _key(HID_KEY_APOSTROPHE, (7, BIT1), (4, BIT3)),
    _key(HID_KEY_MINUS, (7, BIT1), (6, BIT3)),
    _key(HID_KEY_EQUAL, (7, BIT1), (6, BIT1)),
    _key(HID_KEY_EUROPE_1, (7, BIT1), (3, BIT2)),
    _key(HID_KEY_ARROW_LEFT, (0, BIT0), (3, BIT4)),
    _key(HID_KEY_ARROW_DOWN, (0, BIT0), (4, BIT4)),
    _key(HID_KEY_ARROW_UP, (0, BIT0), (4, BIT3)),
    _key(HID_KEY_ARROW_RIGHT, (0, BIT0), (4, BIT2)),
)

KEYS: dict[int, HidKey] = {key.keycode: key for key in _KEY_TABLE}

FUNC_KEYS: tuple[int, ...] = (
    HID_KEY_F1, HID_KEY_F2, HID_KEY_F3, HID_KEY_F4, HID_KEY_F5, HID_KEY_F6,
    HID_KEY_F7, HID_KEY_F8, HID_KEY_F9, HID_KEY_F10, HID_KEY_F11, HID_KEY_F12,
    HID_KEY_F13, HID_KEY_F14,
)


def find_key(keycode: int) -> Optional[HidKey]:
    """The matrix mapping for a HID key, or None if it has none."""
    if keycode <= 1:
        return None
    return KEYS.get(keycode)


@dataclass(frozen=True)
class KeyboardReport:
    """A boot-protocol keyboard report: modifiers and up to six keys."""

    modifier: int = 0
    keycode: tuple[int, ...] = (0,) * REPORT_KEYS

    def __post_init__(self):
        codes = tuple(self.keycode)
        if len(codes) > REPORT_KEYS:
            raise ValueError(f"a report holds at most {REPORT_KEYS} keys")
        object.__setattr__(self, "keycode", codes + (0,) * (REPORT_KEYS - len(codes)))


class HidKeyboard(Keyboard):
    """A HID keyboard driving the Spectrum matrix and emulator hot keys."""

    def __init__(self, quick_save=None, joystick=None, mouse=None, snap_list=None):
        super().__init__(joystick, mouse)
        self._quick_save = quick_save
        self._snap_list = snap_list
        self.spectrum = None
        self.kiosk = False
        self._mounted = 0

    def process_hid_report(self, report: KeyboardReport, prev_report: KeyboardReport) -> bool:
        """Apply a report; True when the menu should be toggled."""
        open_menu = False
        self.reset()
        if report.keycode[0] == 1:
            return open_menu
        m = report.modifier

        if m & 0x22:
            self.press(0, BIT0)
        if m & 0x40:
            self.press(7, BIT1)

        pressed = 0
        for code in report.keycode:
            for index, func in enumerate(FUNC_KEYS):
                if code == func and func not in prev_report.keycode:
                    pressed |= 1 << index
            key = find_key(code)
            if key is not None:
                for line, mask in key.contacts:
                    self.press(line, mask)

        def hit(index: int) -> bool:
            return bool(pressed & (1 << index))

        if (m & HID_KEY_MOD_SAVE) and not self.kiosk:
            if self._quick_save is not None:
                for slot in range(12):
                    if hit(slot):
                        self._quick_save.save(self.spectrum, slot)
        elif m & HID_KEY_MOD_LOAD:
            if self._quick_save is not None:
                for slot in range(12):
                    if hit(slot):
                        self._quick_save.load(self.spectrum, slot)
        else:
            if hit(0) and not self.kiosk:
                open_menu = True
            if hit(2):
                self.spectrum.toggle_mute()
            if hit(12) and self._quick_save is not None:
                self._quick_save.save(self.spectrum, 0)
            if hit(13) and self._quick_save is not None:
                self._quick_save.load(self.spectrum, 0)
            if hit(10):
                self.spectrum.reset(SPECTRUM_48K)
            if hit(11):
                self.spectrum.reset(SPECTRUM_128K)
            if hit(3):
                self.spectrum.toggle_moderate()
            if self._snap_list is not None:
                if hit(7):
                    self._snap_list.curr(self.spectrum)
                if hit(8):
                    self._snap_list.prev(self.spectrum)
                if hit(9):
                    self._snap_list.next(self.spectrum)
        return open_menu

    def is_mounted(self) -> bool:
        return self._mounted > 0

    def mount(self) -> None:
        self._mounted = (self._mounted + 1) & 0xFF

    def unmount(self) -> None:
        self._mounted = (self._mounted - 1) & 0xFF