"""AY-3-8912 sound chip model used for the 128K Spectrum audio."""

from __future__ import annotations

STEP = 230
_MASK32 = 0xFFFFFFFF

_DOWN = tuple(range(15, -1, -1))
_UP = tuple(range(16))
_ZERO = (0,) * 16
_FULL = (15,) * 16

ENVELOPES: tuple[tuple[int, ...], ...] = (
    _DOWN + _ZERO,
    _DOWN + _ZERO,
    _DOWN + _ZERO,
    _DOWN + _ZERO,
    _UP + _ZERO,
    _UP + _ZERO,
    _UP + _ZERO,
    _UP + _ZERO,
    _DOWN + _DOWN,
    _DOWN + _ZERO,
    _DOWN + _UP,
    _DOWN + _FULL,
    _UP + _UP,
    _UP + _FULL,
    _UP + _DOWN,
    _UP + _ZERO,
)

ALT_VOLUME_MAP: tuple[int, ...] = (
    0x0000, 0x0000, 0x00F8, 0x01C2, 0x029E, 0x033A, 0x03F2, 0x04D7,
    0x0610, 0x077F, 0x090A, 0x0A42, 0x0C3B, 0x0EC2, 0x1137, 0x13A7,
    0x1750, 0x1BF9, 0x20DF, 0x2596, 0x2C9D, 0x3579, 0x3E55, 0x4768,
    0x54FF, 0x6624, 0x773B, 0x883F, 0xA1DA, 0xC0FC, 0xE094, 0xFFFF,
)

VOLUME_MAP: tuple[int, ...] = (
    0x0000, 0x0000, 0x0340, 0x0340, 0x04C0, 0x04C0, 0x06F2, 0x06F2,
    0x0A44, 0x0A44, 0x0F13, 0x0F13, 0x1510, 0x1510, 0x227E, 0x227E,
    0x289F, 0x289F, 0x414E, 0x414E, 0x5B21, 0x5B21, 0x7258, 0x7258,
    0x905E, 0x905E, 0xB550, 0xB550, 0xD7A0, 0xD7A0, 0xFFFF, 0xFFFF,
)


class Ay:
    """Three tone channels, a noise generator and an envelope generator."""

    def __init__(self, alt_volume_map=False):
        table = ALT_VOLUME_MAP if alt_volume_map else VOLUME_MAP
        self._volumes = tuple(min(0xFF, (table[j << 1] + 128) >> 8) for j in range(16))
        self._envelopes = tuple(
            tuple(self._volumes[level] for level in row) for row in ENVELOPES
        )
        self._latch = 0
        self._regs = bytearray(16)
        self.reset()

    # Register derived values

    def _tone_period(self, channel: int) -> int:
        regs = self._regs
        value = (regs[2 * channel] | (regs[2 * channel + 1] << 8)) & 0x0FFF
        return (value or 1) << 15

    def _envelope_period(self) -> int:
        value = (self._regs[11] + (self._regs[12] << 8)) << 1
        return (value or 1) << 14

    def _noise_period(self) -> int:
        return ((self._regs[6] & 0x1F) or 1) << 16

    def _register_volume(self, channel: int) -> int:
        return self._volumes[self._regs[8 + channel] & 0xF]

    def reset(self) -> None:
        """Clear every register and generator to the power-on state."""
        self._regs[:] = bytes(16)
        self._regs[7] = 0xFD
        self._regs[14] = 0xFF
        self._tone_counters = [0, 0, 0]
        self._env_counter = 0
        self._noise_counter = 0
        self._env_index = 0
        self._tone_bits = 0
        self._noise_bits = 0
        self._channel_volumes = [0, 0, 0]
        self._env = self._envelopes[self._regs[13] & 0xF]
        self._env_enabled = [False, False, False]
        self._noise_shift = 0xFFFF
        self._tone_periods = [self._tone_period(ch) for ch in range(3)]
        self._noise_period_value = self._noise_period()
        self._env_period = self._envelope_period()

    def step(self, ticks: int) -> None:
        """Advance the generators by the given number of CPU ticks."""
        s = (ticks * STEP) & _MASK32
        for channel in range(3):
            count = (self._tone_counters[channel] + s) & _MASK32
            toggles, count = divmod(count, self._tone_periods[channel])
            self._tone_counters[channel] = count
            self._tone_bits ^= (toggles & 1) << channel

        count = (self._env_counter + (s >> 1)) & _MASK32
        steps, self._env_counter = divmod(count, self._env_period)
        self._env_index += steps
        if self._env_index > 0x1F:
            repeat = (self._regs[13] & 9) == 8
            self._env_index = (self._env_index & 0x1F) if repeat else 0x1F

        count = (self._noise_counter + s) & _MASK32
        shifts, self._noise_counter = divmod(count, self._noise_period_value)
        ns = self._noise_shift
        for _ in range(shifts):
            ns = (ns >> 1) | ((((ns >> 3) ^ ns) & 1) << 16)
        self._noise_shift = ns
        self._noise_bits = -(ns & 1)

    def write_ctrl(self, value: int) -> None:
        """Latch the register number for following data accesses."""
        self._latch = value & 0xF

    def read_ctrl(self) -> int:
        return self._latch

    def read_data(self, register=None) -> int:
        """Read a register; the latched one when none is given."""
        return self._regs[self._latch if register is None else register]

    def write_data(self, value: int) -> None:
        """Write to the latched register and update derived state."""
        value &= 0xFF
        latch = self._latch
        self._regs[latch] = value
        if latch <= 5:
            channel = latch >> 1
            self._tone_periods[channel] = self._tone_period(channel)
        elif latch == 6:
            self._noise_period_value = self._noise_period()
        elif 8 <= latch <= 10:
            channel = latch - 8
            self._channel_volumes[channel] = self._register_volume(channel)
            self._env_enabled[channel] = bool(value & 0x10)
        elif latch in (11, 12):
            self._env_period = self._envelope_period()
        elif latch == 13:
            self._env = self._envelopes[value & 0xF]
            self._env_index = 0

    def channel_volumes(self) -> tuple[int, int, int]:
        """Current output level of channels A, B and C."""
        m = self._regs[7]
        mtb = (self._tone_bits | m) & (self._noise_bits | (m >> 3))
        envelope = self._env[self._env_index]
        return tuple(
            ((mtb >> channel) & 1)
            * (envelope if self._env_enabled[channel] else self._channel_volumes[channel])
            for channel in range(3)
        )

    def volume(self) -> int:
        """Sum of the three channel levels."""
        return sum(self.channel_volumes())