from zxpico.joystick import Joystick, JoystickMode
from zxpico.keyboard import Keyboard


class FixedJoystick(Joystick):
    def __init__(self, left, right):
        super().__init__()
        self._left = left
        self._right = right

    def kempston(self):
        return 0

    def sinclair_left(self):
        return self._left

    def sinclair_right(self):
        return self._right

    def is_connected_left(self):
        return True

    def is_connected_right(self):
        return True

    def joy1(self):
        return 0


def test_idle_keyboard_reads_ff():
    kb = Keyboard()
    assert kb.read(0xFEFE) == 0xFF
    assert kb.read(0x7FFE) == 0xFF


def test_press_shows_on_selected_line():
    kb = Keyboard()
    kb.press(0, 0x02)
    assert kb.read(0xFEFE) == 0xFF & ~0x02


def test_press_not_visible_on_other_line():
    kb = Keyboard()
    kb.press(0, 0x02)
    assert kb.read(0x7FFE) == 0xFF


def test_release_restores_line():
    kb = Keyboard()
    kb.press(3, 0x01)
    kb.release(3, 0x01)
    assert kb.read(0xF7FE) == 0xFF


def test_reading_all_lines_combines_keys():
    kb = Keyboard()
    kb.press(0, 0x01)
    kb.press(7, 0x10)
    assert kb.read(0x00FE) == 0xFF & ~0x01 & ~0x10


def test_reset_releases_everything():
    kb = Keyboard()
    kb.press(5, 0x1F)
    kb.reset()
    assert kb.read(0x00FE) == 0xFF


def test_virtual_press_lasts_one_read():
    kb = Keyboard()
    kb.virtual_press(1, 0x04)
    assert kb.read(0xFDFE) == 0xFF & ~0x04
    assert kb.read(0xFDFE) == 0xFF


def test_virtual_press_survives_unrelated_read():
    kb = Keyboard()
    kb.virtual_press(1, 0x04)
    assert kb.read(0xFEFE) == 0xFF
    assert kb.read(0xFDFE) == 0xFF & ~0x04


def test_sinclair_joystick_on_left_port():
    joy = FixedJoystick(0xEF, 0xFE)
    joy.mode = JoystickMode.SINCLAIR_LR
    kb = Keyboard(joy, None)
    assert kb.read(0xF7FE) == 0xEF
    assert kb.read(0xEFFE) == 0xFE


def test_kempston_mode_joystick_invisible():
    joy = FixedJoystick(0xEF, 0xFE)
    kb = Keyboard(joy, None)
    assert kb.read(0xF7FE) == 0xFF
    assert kb.read(0xEFFE) == 0xFF


def test_mouse_and_joystick_combined():
    joy = FixedJoystick(0xEF, 0xFF)
    joy.mode = JoystickMode.SINCLAIR_LR
    mouse = FixedJoystick(0xFE, 0xFF)
    mouse.mode = JoystickMode.SINCLAIR_LR
    kb = Keyboard(joy, mouse)
    assert kb.read(0xF7FE) == 0xEF & 0xFE


def test_joystick_combined_with_keys():
    joy = FixedJoystick(0xEF, 0xFF)
    joy.mode = JoystickMode.SINCLAIR_RL
    kb = Keyboard(joy, None)
    kb.press(3, 0x01)
    assert kb.read(0xF7FE) == 0xEF & ~0x01


def test_plain_keyboard_not_mounted():
    assert Keyboard().is_mounted() is False