"""Persistent emulator settings: volume, input modes and output drivers."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass, field
from pathlib import Path

from .joystick import JoystickMode
from .mouse import MouseMode
from .video_driver import AudioDriverIndex, VideoDriverIndex, VideoDrivers

MAX_VOLUME = 0x100

_VIDEO_COUNT = len(VideoDriverIndex)
_AUDIO_COUNT = len(AudioDriverIndex)
_FORMAT = struct.Struct(f"<IiiiB{_VIDEO_COUNT}B")


def _default_audio() -> list[int]:
    return [0] * _VIDEO_COUNT


@dataclass
class SettingValues:
    """The stored settings; audio defaults are kept per video driver."""

    volume: int = MAX_VOLUME
    joystick_mode: int = JoystickMode.KEMPSTON
    mouse_mode: int = MouseMode.KEMPSTON_MOUSE
    mouse_joystick_mode: int = JoystickMode.KEMPSTON
    video_driver_default: int = 0
    audio_driver_default: list[int] = field(default_factory=_default_audio)

    SIZE = _FORMAT.size

    def to_bytes(self) -> bytes:
        return _FORMAT.pack(
            self.volume & 0xFFFFFFFF,
            int(self.joystick_mode),
            int(self.mouse_mode),
            int(self.mouse_joystick_mode),
            self.video_driver_default & 0xFF,
            *(int(a) & 0xFF for a in self.audio_driver_default),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "SettingValues":
        if len(data) != _FORMAT.size:
            raise ValueError(f"settings must be {_FORMAT.size} bytes, got {len(data)}")
        volume, joystick, mouse, mouse_joystick, video, *audio = _FORMAT.unpack(data)
        return cls(volume, joystick, mouse, mouse_joystick, video, list(audio))


def _member(enum_cls, value, fallback):
    try:
        return enum_cls(value)
    except ValueError:
        return fallback


class Settings:
    """Settings with defaults and sanitising; storage is left to subclasses."""

    def __init__(self, video_drivers: VideoDrivers):
        self._video_drivers = video_drivers

    def _audio_default(self, index: int) -> int:
        driver = self._video_drivers.driver(index)
        return int(driver.audio_default()) if driver.audio_default is not None else 0

    def sanitise(self, values: SettingValues) -> None:
        """Replace any out-of-range value in place."""
        if values.volume > MAX_VOLUME:
            values.volume = MAX_VOLUME
        values.joystick_mode = _member(JoystickMode, values.joystick_mode, JoystickMode.KEMPSTON)
        values.mouse_mode = _member(MouseMode, values.mouse_mode, MouseMode.KEMPSTON_MOUSE)
        values.mouse_joystick_mode = _member(
            JoystickMode, values.mouse_joystick_mode, JoystickMode.KEMPSTON
        )
        video = values.video_driver_default
        if video >= _VIDEO_COUNT or not self._video_drivers.is_installed(video):
            values.video_driver_default = int(self._video_drivers.index)
        for i, audio in enumerate(values.audio_driver_default):
            if audio >= _AUDIO_COUNT:
                values.audio_driver_default[i] = self._audio_default(i)

    def on_save(self, values: SettingValues) -> bool:
        return False

    def on_load(self, values: SettingValues) -> bool:
        return False

    def save(self, values: SettingValues) -> bool:
        """Sanitise and store the values; True if they were stored."""
        self.sanitise(values)
        return self.on_save(values)

    def load(self) -> tuple[SettingValues, bool]:
        """The stored settings over the defaults, and whether loading worked."""
        values = self.defaults()
        loaded = self.on_load(values)
        if not loaded:
            loaded = self.on_load(values)
        self.sanitise(values)
        return values, loaded

    def defaults(self) -> SettingValues:
        return SettingValues(
            volume=MAX_VOLUME,
            joystick_mode=JoystickMode.KEMPSTON,
            mouse_mode=MouseMode.KEMPSTON_MOUSE,
            mouse_joystick_mode=JoystickMode.KEMPSTON,
            video_driver_default=int(self._video_drivers.index),
            audio_driver_default=[self._audio_default(i) for i in range(_VIDEO_COUNT)],
        )


class FileSettings(Settings):
    """Settings kept as a binary record in a file."""

    def __init__(self, video_drivers: VideoDrivers, folder, file):
        super().__init__(video_drivers)
        self.path = Path(folder) / file

    def on_save(self, values: SettingValues) -> bool:
        try:
            self.path.write_bytes(values.to_bytes())
        except OSError:
            return False
        return True

    def on_load(self, values: SettingValues) -> bool:
        try:
            data = self.path.read_bytes()
        except OSError:
            return False
        if len(data) != SettingValues.SIZE:
            return False
        loaded = SettingValues.from_bytes(data)
        for f in dataclasses.fields(SettingValues):
            setattr(values, f.name, getattr(loaded, f.name))
        return True