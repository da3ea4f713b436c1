"""ZX Spectrum peripherals: AY sound, keyboards, joysticks, mouse, settings and scanlines."""

__version__ = "0.36.0"