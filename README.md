# zxpico

Building blocks for a ZX Spectrum emulator: the devices around the Z80
rather than the CPU itself. The package has no dependencies beyond the
standard library.

## Modules

- `zxpico.ay` – `Ay`, an AY-3-8912 sound chip model with three tone
  channels, a noise generator and an envelope generator. Select a register
  with `write_ctrl`, write it with `write_data`, read it back with
  `read_data`, advance time with `step(ticks)` and read the output with
  `channel_volumes()` (levels of A, B and C) or `volume()` (their sum).
  `Ay(alt_volume_map=True)` uses the alternative volume table.
- `zxpico.joystick` – `JoystickMode` (`KEMPSTON`, `SINCLAIR_LR`,
  `SINCLAIR_RL`), the abstract `Joystick` base class with its `mode`
  property and the mode-aware `get_kempston`, `get_sinclair_left` and
  `get_sinclair_right`; `DualJoystick` merges two joysticks (Kempston bits
  ORed, active-low Sinclair bits ANDed) and passes mode changes to both;
  `MatrixJoystick` reads Kempston bits from a callable and can be switched
  off through its `enabled` attribute.
- `zxpico.hid_joystick` – `HidJoystick` takes a callable returning up to two
  `SimpleJoystick` readings (axes with `Axis` thresholds, hat, buttons and an
  `updated` counter) and turns them into Kempston and Sinclair values.
  `joystick_state` and `joy_to_sinclair` do the conversion.
- `zxpico.mouse` – `MouseMode` (`KEMPSTON_MOUSE`, `JOYSTICK`), the abstract
  `Mouse` and `HidMouse`. Feed it with `x_delta`, `y_delta`, `w_delta` and
  `set_buttons`; in Kempston mouse mode `x_axis`, `y_axis` and `buttons`
  give the port values, in joystick mode movement is turned into Kempston
  or Sinclair directions. Changing `mouse_mode` resets the accumulated state.
- `zxpico.keyboard` – `Keyboard`, the eight half-row keyboard matrix read
  through port `0xFE`. `press`, `release` and `virtual_press` (held only
  until the next read of that line); `read(address)` also merges in the
  Sinclair joystick bits of the attached joystick and mouse.
- `zxpico.hid_keyboard` – `HidKeyboard.process_hid_report(report, prev_report)`
  maps boot-protocol `KeyboardReport`s onto the Spectrum matrix and handles
  the function keys. It returns `True` when F1 asks for the menu. With left
  Ctrl, F1–F12 quick-save to slots 0–11; with left Alt they quick-load.
  Otherwise F3 toggles mute, F4 toggles CPU moderation, F11/F12 reset to
  48K/128K, F13/F14 save/load slot 0, and F8/F9/F10 step through snapshots.
  Set its `spectrum` attribute to an object with `toggle_mute()`,
  `toggle_moderate()` and `reset(model)`; the quick-save object needs
  `save(spectrum, slot)` and `load(spectrum, slot)`. Setting `kiosk` stops
  saving and opening the menu. `find_key` gives the matrix contacts of a
  HID key code.
- `zxpico.key_matrix` – `SimpleKeyMatrix` (8x8) and `JoystickKeyMatrix`
  (8x6, with a column of special keys that act as cursor keys or a Kempston
  joystick). Call `scan_row(gpio)` with the GPIO input value for each line;
  keys change state only when all stored samples agree. `hid_reports()`
  returns the current and previous `KeyboardReport`. `join_row_pins`
  gathers the joystick matrix's row pins into bits.
- `zxpico.video_driver` – `VideoDriver` entries and `VideoDrivers`, one per
  `VideoDriverIndex` (`VGA`, `DVI`, `LCD`), with the current selection.
  A driver counts as installed when it has an `init` function. Without an
  explicit default the first installed of LCD, DVI, VGA is chosen, and a
  `ValueError` is raised if none is installed. `next()` moves to the next
  installed driver; `init()` and `loop(*args)` call the selected driver's
  functions. `AudioDriverIndex` numbers the audio outputs.
- `zxpico.settings` – `SettingValues` (volume, joystick mode, mouse mode,
  mouse joystick mode, default video driver and one default audio driver
  per video driver) with `to_bytes`/`from_bytes`. `Settings.load()` returns
  the values and whether they were loaded; `save(values)` sanitises first.
  `FileSettings(video_drivers, folder, file)` stores the record in a file.
- `zxpico.storage` – `FileExists`, `Kiosk`, `FileKiosk` (kiosk mode when
  the folder holds `kiosk.txt`), `SpectrumFile` (a circular doubly linked
  list of names) and `FileLoop`, which calls `next_snap(1)`, `next_snap(-1)`
  or `next_snap(0)` on its `menu` attribute when one is set.
- `zxpico.scanline` – `prepare_rgb_scanline` renders one display line of
  screen and attribute memory (with flash and border) into 32-bit words,
  each holding two Spectrum pixels shown twice, in one of the
  `ColourEncoding`s; `BorderLayout` sets the border widths.
  `prepare_rgb_blankline`, `colour_words` and `screen_row_offset` help.

## Example

```python
from zxpico.ay import Ay

ay = Ay(alt_volume_map=False)
ay.write_ctrl(7)
ay.write_data(0b00111110)   # tone A on, everything else off
ay.write_ctrl(8)
ay.write_data(15)           # channel A at full volume
ay.write_ctrl(0)
ay.write_data(100)          # tone A period

samples = []
for _ in range(100):
    ay.step(1)
    samples.append(ay.volume())
```

```python
from zxpico.keyboard import Keyboard

kb = Keyboard(None, None)
kb.press(0, 0x02)              # "Z" on the Caps Shift half row
assert kb.read(0xFEFE) == 0xFD
```

## What it does not do

There is no Z80 CPU, memory map, tape or snapshot loading, menu, sound
output or display here, and no command to run. The input classes take
already-decoded device readings; reading real USB devices or GPIO pins is
left to the caller, as are the emulator object and the menu that
`HidKeyboard` and `FileLoop` call into.

## Tests

```
pip install -e .[test]
pytest
```