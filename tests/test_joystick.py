import pytest

from zxpico.joystick import DualJoystick, Joystick, JoystickMode, MatrixJoystick


class FixedJoystick(Joystick):
    def __init__(self, kempston=0, left=0xFF, right=0xFF, joy=0, conn_l=False, conn_r=False):
        super().__init__()
        self._k = kempston
        self._l = left
        self._r = right
        self._j = joy
        self._cl = conn_l
        self._cr = conn_r

    def kempston(self):
        return self._k

    def sinclair_left(self):
        return self._l

    def sinclair_right(self):
        return self._r

    def is_connected_left(self):
        return self._cl

    def is_connected_right(self):
        return self._cr

    def joy1(self):
        return self._j


def test_base_is_abstract():
    with pytest.raises(TypeError):
        Joystick()


def test_default_mode_is_kempston():
    stick = MatrixJoystick(lambda: 0x10)
    assert stick.mode == JoystickMode.KEMPSTON
    assert stick.get_kempston() == 0x10
    assert stick.get_sinclair_left() == 0xFF
    assert stick.get_sinclair_right() == 0xFF


@pytest.mark.parametrize("mode", [JoystickMode.SINCLAIR_LR, JoystickMode.SINCLAIR_RL])
def test_sinclair_modes(mode):
    dual = DualJoystick(
        FixedJoystick(kempston=0x10, left=0xEF, right=0xFE), FixedJoystick()
    )
    dual.mode = mode
    assert dual.get_kempston() == 0
    assert dual.get_sinclair_left() == 0xEF
    assert dual.get_sinclair_right() == 0xFE


def test_invalid_mode_rejected():
    stick = MatrixJoystick(lambda: 0)
    with pytest.raises(ValueError):
        stick.mode = 7
    assert stick.mode == JoystickMode.KEMPSTON


def test_dual_merges_values():
    a = FixedJoystick(kempston=0x01, left=0xFE, right=0xF7, joy=0x01, conn_l=True)
    b = FixedJoystick(kempston=0x10, left=0xEF, right=0xFF, joy=0x80, conn_r=True)
    dual = DualJoystick(a, b)
    assert dual.kempston() == 0x11
    assert dual.sinclair_left() == 0xFE & 0xEF
    assert dual.sinclair_right() == 0xF7
    assert dual.joy1() == 0x81
    assert dual.is_connected_left() is True
    assert dual.is_connected_right() is False


def test_dual_propagates_mode():
    a = FixedJoystick()
    b = FixedJoystick()
    dual = DualJoystick(a, b)
    dual.mode = JoystickMode.SINCLAIR_RL
    assert a.mode == JoystickMode.SINCLAIR_RL
    assert b.mode == JoystickMode.SINCLAIR_RL
    assert dual.mode == JoystickMode.SINCLAIR_RL


def test_matrix_joystick_uses_source_when_enabled():
    stick = MatrixJoystick(lambda: 0x1F)
    assert stick.get_kempston() == 0x1F
    stick.enabled = False
    assert stick.kempston() == 0


def test_matrix_joystick_fixed_answers():
    stick = MatrixJoystick(lambda: 0x1F)
    assert stick.sinclair_left() == 0xFF
    assert stick.sinclair_right() == 0xFF
    assert stick.is_connected_left() is True
    assert stick.is_connected_right() is False
    assert stick.joy1() == 0