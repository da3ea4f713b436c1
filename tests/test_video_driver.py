import pytest

from zxpico.video_driver import (
    AudioDriverIndex,
    VideoDriver,
    VideoDriverIndex,
    VideoDrivers,
)


def _drivers(installed, calls=None):
    calls = [] if calls is None else calls
    result = []
    for index in VideoDriverIndex:
        if index.name in installed:
            result.append(
                VideoDriver(
                    index.name,
                    init=lambda n=index.name: calls.append(n),
                    loop=lambda *a, n=index.name: calls.append((n, a)),
                    audio_default=lambda: AudioDriverIndex.HDMI,
                )
            )
        else:
            result.append(VideoDriver(index.name))
    return result, calls


def test_default_prefers_lcd_then_dvi():
    drivers, _ = _drivers({"LCD", "DVI"})
    assert VideoDrivers(drivers).index == VideoDriverIndex.LCD
    drivers, _ = _drivers({"VGA", "DVI"})
    assert VideoDrivers(drivers).index == VideoDriverIndex.DVI


def test_explicit_default_is_used():
    drivers, _ = _drivers({"LCD", "DVI"})
    assert VideoDrivers(drivers, VideoDriverIndex.DVI).index == VideoDriverIndex.DVI


def test_no_installed_driver_raises():
    drivers, _ = _drivers(set())
    with pytest.raises(ValueError):
        VideoDrivers(drivers)


def test_wrong_driver_count_raises():
    with pytest.raises(ValueError):
        VideoDrivers([VideoDriver("DVI", init=lambda: None)])


def test_name_and_installed():
    drivers, _ = _drivers({"DVI"})
    registry = VideoDrivers(drivers)
    assert registry.name() == "DVI"
    assert registry.is_installed(VideoDriverIndex.DVI) is True
    assert registry.is_installed(VideoDriverIndex.VGA) is False


def test_next_skips_uninstalled_and_wraps():
    drivers, _ = _drivers({"VGA", "LCD"})
    registry = VideoDrivers(drivers)
    assert registry.index == VideoDriverIndex.LCD
    assert registry.next() == VideoDriverIndex.VGA
    assert registry.next() == VideoDriverIndex.LCD


def test_next_with_single_driver_stays():
    drivers, _ = _drivers({"DVI"})
    registry = VideoDrivers(drivers)
    assert registry.next() == VideoDriverIndex.DVI


def test_init_and_loop_call_selected_driver_only():
    drivers, calls = _drivers({"VGA", "DVI"})
    registry = VideoDrivers(drivers)
    registry.init()
    registry.loop("spectrum", 3)
    assert calls == ["DVI", ("DVI", ("spectrum", 3))]


def test_index_setter_rejects_unknown():
    drivers, _ = _drivers({"DVI"})
    registry = VideoDrivers(drivers)
    with pytest.raises(ValueError):
        registry.index = 7
    registry.index = 0
    assert registry.index == VideoDriverIndex.VGA