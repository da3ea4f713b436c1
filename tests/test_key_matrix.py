from zxpico.hid_keyboard import (
    HID_KEY_1, HID_KEY_2, HID_KEY_9, HID_KEY_O, HID_KEY_S, HID_KEY_W, HID_KEY_Z,
    HID_KEY_SHIFT_LEFT, KeyboardReport,
)
from zxpico.key_matrix import (
    JoystickKeyMatrix,
    SimpleKeyMatrix,
    join_row_pins,
)

PASSES = 5
ROW_PINS = (4, 5, 8, 1, 9, 15)


def simple_gpio(bits):
    return 0xFFFFFFFF & ~(bits << 2)


def joystick_gpio(bits):
    value = 0xFFFFFFFF
    for bit, pin in enumerate(ROW_PINS):
        if bits & (1 << bit):
            value &= ~(1 << pin)
    return value


def settle(matrix, pressed, to_gpio, passes=PASSES):
    for _ in range(passes):
        for line in range(8):
            matrix.scan_row(to_gpio(pressed.get(line, 0)))


def test_join_row_pins_maps_pins():
    assert join_row_pins(1 << 4) == 0x01
    assert join_row_pins(1 << 1) == 0x08
    assert join_row_pins(1 << 15) == 0x20
    assert join_row_pins(0) == 0


def test_join_row_pins_all():
    value = sum(1 << p for p in ROW_PINS)
    assert join_row_pins(value) == 0x3F


def test_simple_no_keys():
    m = SimpleKeyMatrix()
    settle(m, {}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr == KeyboardReport()


def test_simple_single_key():
    m = SimpleKeyMatrix()
    settle(m, {0: 0x01}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr.keycode[0] == HID_KEY_1
    assert curr.keycode[1:] == (0,) * 5


def test_simple_shift_sets_modifier():
    m = SimpleKeyMatrix()
    settle(m, {0: 0x20}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr.modifier == 2
    assert curr.keycode == (0,) * 6


def test_simple_needs_all_samples():
    m = SimpleKeyMatrix()
    settle(m, {0: 0x01}, simple_gpio, passes=1)
    curr, _ = m.hid_reports()
    assert curr.keycode[0] == 0


def test_simple_six_keys_in_order():
    m = SimpleKeyMatrix()
    settle(m, {1: 0x3F}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr.keycode == (HID_KEY_2, HID_KEY_W, HID_KEY_S, HID_KEY_9, HID_KEY_O, HID_KEY_Z)


def test_simple_overflow_fills_with_ones():
    m = SimpleKeyMatrix()
    settle(m, {1: 0x7F}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr.keycode == (1,) * 6


def test_simple_previous_report_is_last():
    m = SimpleKeyMatrix()
    settle(m, {0: 0x01}, simple_gpio)
    first, prev0 = m.hid_reports()
    assert prev0 == KeyboardReport()
    settle(m, {}, simple_gpio)
    second, prev1 = m.hid_reports()
    assert prev1 == first
    assert second.keycode[0] == 0


def test_simple_release_after_samples():
    m = SimpleKeyMatrix()
    settle(m, {0: 0x01}, simple_gpio)
    settle(m, {}, simple_gpio)
    curr, _ = m.hid_reports()
    assert curr.keycode[0] == 0
    assert m.kempston() == 0
    assert m.fire_raw() is False


def test_joystick_matrix_single_key():
    m = JoystickKeyMatrix()
    settle(m, {0: 0x01}, joystick_gpio)
    curr, _ = m.hid_reports()
    assert curr.keycode[0] == HID_KEY_1


def test_joystick_mode_switch_and_kempston():
    m = JoystickKeyMatrix()
    assert m.joystick_mode is False
    settle(m, {5: 0x01, 0: 0x20}, joystick_gpio)
    curr, _ = m.hid_reports()
    assert m.joystick_mode is True
    assert curr.modifier == 2
    assert curr.keycode[0] == HID_KEY_SHIFT_LEFT
    assert curr.keycode[1:] == (0,) * 5

    settle(m, {7: 0x20}, joystick_gpio)
    assert m.kempston() == 0x10
    curr, _ = m.hid_reports()
    assert curr.keycode == (0,) * 6


def test_joystick_kempston_zero_in_cursor_mode():
    m = JoystickKeyMatrix()
    settle(m, {7: 0x20}, joystick_gpio)
    assert m.kempston() == 0


def test_joystick_kempston_zero_in_menu():
    m = JoystickKeyMatrix()
    settle(m, {5: 0x01, 0: 0x20}, joystick_gpio)
    m.hid_reports()
    settle(m, {7: 0x20}, joystick_gpio)
    m.menu = True
    assert m.kempston() == 0
    m.menu = False
    assert m.kempston() == 0x10


def test_joystick_back_to_cursor_mode():
    m = JoystickKeyMatrix()
    settle(m, {5: 0x01, 0: 0x20}, joystick_gpio)
    m.hid_reports()
    settle(m, {5: 0x01, 1: 0x20}, joystick_gpio)
    m.hid_reports()
    assert m.joystick_mode is False


def test_joystick_fire_raw():
    m = JoystickKeyMatrix()
    assert m.fire_raw() is False
    settle(m, {7: 0x20}, joystick_gpio)
    assert m.fire_raw() is True


def test_joystick_previous_report():
    m = JoystickKeyMatrix()
    settle(m, {0: 0x01}, joystick_gpio)
    first, _ = m.hid_reports()
    _, prev = m.hid_reports()
    assert prev == first