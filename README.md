# airnode

Pure-Python building blocks for a small air-quality monitoring node. The
package has no third-party dependencies.

## Modules

### `airnode.nmea`

- `nmea_checksum(sentence)` returns the two-digit upper-case hex XOR of the
  characters between the leading `$` and the trailing `*HH`.
- `GllSentence(sentence, gmt=0, log_path=None)` splits a GLL sentence into
  latitude and longitude (converted from `dddmm.mmmm` to decimal degrees)
  and a time shifted by `gmt` hours and formatted as `hh:mm:ss`. It checks
  the checksum and sets `valid`. When `log_path` is given, a short decoding
  log is written to that file. A sentence with fewer than six commas raises
  `ValueError`.
- `GllSentence.get(attribute)` takes an `NmeaAttribute` (`LATITUDE`,
  `LONGITUDE`, `TIME`) and returns the value as text (coordinates with six
  decimals), or `"#"` when the checksum failed or the field is empty.

### `airnode.mq7`

`co_concentration(millivolts, temperature=25, humidity=85)` turns an MQ-7
output voltage in millivolts into a carbon monoxide concentration in ppm,
corrected for temperature (degrees C) and relative humidity (percent). A
reading of 0 mV gives 0 ppm; a reading above the 3.3 V supply raises
`ValueError`.

### `airnode.pms7003`

- `decode_frame(data)` decodes a 32-byte PMS7003 frame into a frozen
  `PmReading` (`pm1_0`, `pm2_5`, `pm10` and their `_atm` counterparts). It
  raises `StartCharError` when the frame does not start with `0x42 0x4D`,
  `ChecksumError` when the sum does not match, and `FrameError` (the base of
  both, itself a `ValueError`) when the length is wrong.
- `PMS7003(port, clock=time.monotonic)` drives the sensor over any object
  with `in_waiting`, `read(size)`, `write(data)` and `flush()`, such as an
  open serial port:
  - `set_mode(mode)` sends the command for a `Mode` (`ACTIVE`, `PASSIVE`,
    `SLEEP`, `WAKE`) only when the mode changes; a sleep request puts the
    sensor in passive mode. `UNKNOWN` raises `ValueError`.
  - `mode()` returns the mode last set.
  - `read_frame()` waits for the start characters and returns the frame,
    raising `TimeoutError` after 0.1 s without one.
  - `read_frame_for_mode()` requests a frame first when in passive mode and
    raises `RuntimeError` in any mode other than active or passive.
  - `decode()` decodes the last frame read and stores it in `reading`.
  - `get_data(target)` reads, decodes and returns one `DataTarget` value, or
    0 when no valid frame arrives.
  - `reset()` clears the stored frame and reading.

### `airnode.neo6m`

`NEO6M(port, clock=time.monotonic, gmt=7)` reads NMEA text from a GNSS
receiver over any object with `in_waiting`, `read(size)` and
`read_until(expected, size)`. `read_gll()` returns the text after the next
`$GNGLL`, `read_sentence()` and `read_gnss()` look for `$GNGLL`, `$GNRMC` or
`$GNGGA`, and all three return `"#"` on timeout. The last text read is kept
in `sentence`; `get(attribute)` decodes it as a GLL sentence and returns an
`NmeaAttribute` as text, or `"#"`.

### `airnode.display`

`Display(canvas=None, clock=time.monotonic)` lays out the node's status
screen on any canvas with a `draw(operation, *args)` method;
`RecordingCanvas` is such a canvas and keeps every call in `operations`.

- `begin()` and `background()` set up the screen, the reading titles with
  their toggle buttons, and the WiFi, 4G, SMS and call icons.
- `show_sht`, `show_pm`, `show_co`, `show_gps`, `show_sound` and
  `show_notification` print readings in rows, coloured by `color_for(value,
  component)` using per-`Component` thresholds and `Color` values (RGB565).
- `process_touch(x, y)` toggles the button or icon under the touch, ignoring
  touches within 0.3 s of the last accepted one, and returns whether
  anything changed. `component_state`, `icon_state` and `set_icon_state`
  read and set the toggles.
- `draw_button`, `draw_wifi_icon`, `draw_4g_icon`, `draw_sms_icon`,
  `draw_call_icon`, `draw_battery_icon` and `draw_sim_signal_icon` issue the
  drawing operations for each element.

## Example

```python
from airnode.nmea import GllSentence, NmeaAttribute, nmea_checksum

draft = "$GPGLL,2059.90773,N,10550.87083,E,035157.00,A,A*00"
sentence = draft[:-2] + nmea_checksum(draft)

gll = GllSentence(sentence, gmt=7)
print(gll.get(NmeaAttribute.LATITUDE))   # decimal degrees, six decimals
print(gll.get(NmeaAttribute.TIME))       # local time as hh:mm:ss
```

## What this package does not do

- It does not open serial ports or screens itself: `PMS7003` and `NEO6M`
  take an already open port object, and `Display` only issues drawing
  operations to the canvas it is given.
- It has no command-line program and no main loop tying the sensors to the
  screen.
- It does not store readings or send them anywhere; logging to a file is
  limited to the optional decoding log of `GllSentence`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```