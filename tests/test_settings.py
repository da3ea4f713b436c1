import pytest

from zxpico.joystick import JoystickMode
from zxpico.mouse import MouseMode
from zxpico.settings import FileSettings, Settings, SettingValues
from zxpico.video_driver import (
    AudioDriverIndex,
    VideoDriver,
    VideoDriverIndex,
    VideoDrivers,
)


def _registry():
    return VideoDrivers(
        [
            VideoDriver("VGA"),
            VideoDriver("DVI", init=lambda: None, audio_default=lambda: AudioDriverIndex.HDMI),
            VideoDriver("LCD"),
        ]
    )


def test_bytes_round_trip():
    values = SettingValues(0x80, JoystickMode.SINCLAIR_RL, MouseMode.JOYSTICK,
                           JoystickMode.SINCLAIR_LR, 1, [2, 4, 0])
    data = values.to_bytes()
    assert len(data) == SettingValues.SIZE
    assert SettingValues.from_bytes(data) == values


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        SettingValues.from_bytes(b"\x00" * 3)


def test_defaults_follow_video_drivers():
    values = Settings(_registry()).defaults()
    assert values.volume == 0x100
    assert values.video_driver_default == VideoDriverIndex.DVI
    assert values.audio_driver_default == [0, AudioDriverIndex.HDMI, 0]
    assert values.joystick_mode == JoystickMode.KEMPSTON


def test_sanitise_clamps_volume():
    settings = Settings(_registry())
    values = settings.defaults()
    values.volume = 0x500
    settings.sanitise(values)
    assert values.volume == 0x100
    values.volume = 0x80
    settings.sanitise(values)
    assert values.volume == 0x80


def test_sanitise_resets_invalid_modes():
    settings = Settings(_registry())
    values = SettingValues(joystick_mode=9, mouse_mode=-1, mouse_joystick_mode=5,
                           video_driver_default=VideoDriverIndex.DVI)
    settings.sanitise(values)
    assert values.joystick_mode == JoystickMode.KEMPSTON
    assert values.mouse_mode == MouseMode.KEMPSTON_MOUSE
    assert values.mouse_joystick_mode == JoystickMode.KEMPSTON


def test_sanitise_fixes_video_and_audio_defaults():
    settings = Settings(_registry())
    values = SettingValues(video_driver_default=7, audio_driver_default=[1, 9, 200])
    settings.sanitise(values)
    assert values.video_driver_default == VideoDriverIndex.DVI
    assert values.audio_driver_default == [1, AudioDriverIndex.HDMI, 0]

    values = SettingValues(video_driver_default=VideoDriverIndex.LCD)
    settings.sanitise(values)
    assert values.video_driver_default == VideoDriverIndex.DVI


def test_base_settings_do_not_store():
    settings = Settings(_registry())
    values, loaded = settings.load()
    assert loaded is False
    assert values == settings.defaults()
    assert settings.save(values) is False


def test_file_settings_round_trip(tmp_path):
    settings = FileSettings(_registry(), tmp_path, ".config")
    values = settings.defaults()
    values.volume = 0x40
    values.joystick_mode = JoystickMode.SINCLAIR_LR
    values.mouse_mode = MouseMode.JOYSTICK
    assert settings.save(values) is True
    loaded, ok = settings.load()
    assert ok is True
    assert loaded == values


def test_file_settings_save_sanitises(tmp_path):
    settings = FileSettings(_registry(), tmp_path, ".config")
    values = settings.defaults()
    values.volume = 0x9999
    settings.save(values)
    loaded, _ = settings.load()
    assert loaded.volume == 0x100


def test_file_settings_missing_file(tmp_path):
    settings = FileSettings(_registry(), tmp_path, "absent")
    values, ok = settings.load()
    assert ok is False
    assert values == settings.defaults()


def test_file_settings_truncated_file(tmp_path):
    (tmp_path / ".config").write_bytes(b"\x01\x02")
    settings = FileSettings(_registry(), tmp_path, ".config")
    values, ok = settings.load()
    assert ok is False
    assert values == settings.defaults()