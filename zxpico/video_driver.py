"""Registry of the video output drivers and the one currently selected."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Sequence


class AudioDriverIndex(enum.IntEnum):
    NULL = 0
    PIO_PWM = 1
    PWM = 2
    I2S = 3
    HDMI = 4


class VideoDriverIndex(enum.IntEnum):
    VGA = 0
    DVI = 1
    LCD = 2


# Which installed driver is chosen when no default is given.
_DEFAULT_PREFERENCE = (VideoDriverIndex.LCD, VideoDriverIndex.DVI, VideoDriverIndex.VGA)


@dataclass(frozen=True)
class VideoDriver:
    """A video output; a driver without an init function is not installed."""

    name: str
    init: Optional[Callable[[], None]] = None
    loop: Optional[Callable[..., None]] = None
    audio_default: Optional[Callable[[], AudioDriverIndex]] = None

    @property
    def installed(self) -> bool:
        return self.init is not None


class VideoDrivers:
    """The video drivers, one per VideoDriverIndex, and the selected one."""

    def __init__(self, drivers: Optional[Sequence[VideoDriver]] = None, default=None):
        if drivers is None:
            drivers = [VideoDriver(index.name) for index in VideoDriverIndex]
        drivers = tuple(drivers)
        if len(drivers) != len(VideoDriverIndex):
            raise ValueError(f"expected {len(VideoDriverIndex)} video drivers, got {len(drivers)}")
        self._drivers = drivers
        if default is None:
            default = next(
                (index for index in _DEFAULT_PREFERENCE if drivers[index].installed),
                None,
            )
            if default is None:
                raise ValueError("no video driver is installed")
        self._index = VideoDriverIndex(default)

    @property
    def index(self) -> VideoDriverIndex:
        return self._index

    @index.setter
    def index(self, value) -> None:
        self._index = VideoDriverIndex(value)

    def driver(self, index) -> VideoDriver:
        return self._drivers[VideoDriverIndex(index)]

    def is_installed(self, index) -> bool:
        return self.driver(index).installed

    def name(self) -> str:
        """Name of the selected driver."""
        return self._drivers[self._index].name

    def next(self) -> VideoDriverIndex:
        """Select the next installed driver after the current one."""
        count = len(self._drivers)
        for step in range(1, count):
            k = (self._index + step) % count
            if self._drivers[k].installed:
                self._index = VideoDriverIndex(k)
                break
        return self._index

    def init(self) -> None:
        """Initialise the selected driver, if it is installed."""
        init = self._drivers[self._index].init
        if init is not None:
            init()

    def loop(self, *args) -> None:
        """Run the render loop of the selected driver."""
        loop = self._drivers[self._index].loop
        if loop is not None:
            loop(*args)