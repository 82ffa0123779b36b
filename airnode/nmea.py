"""Decoding of NMEA GLL (geographic position) sentences."""

from __future__ import annotations

from enum import Enum, auto
from os import PathLike

MISSING = "#"
_LOG_RULE = "#" * 39


class NmeaAttribute(Enum):
    """Values that can be read out of a decoded GLL sentence."""

    LATITUDE = auto()
    LONGITUDE = auto()
    TIME = auto()


def nmea_checksum(sentence: str) -> str:
    """Return the two-digit hex checksum of a ``$...*HH`` sentence.

    The checksum is the XOR of every character between the leading ``$``
    and the ``*HH`` suffix; the suffix itself is not read.
    """
    value = 0
    for char in sentence[1:-3]:
        value ^= ord(char)
    return f"{value & 0xFF:02X}"


def _to_degrees(field: str) -> float:
    """Convert an NMEA ``dddmm.mmmm`` field to decimal degrees."""
    value = float(field) / 100 if field else 0.0
    whole = int(value)
    return whole + (value - whole) * 100 / 60


def _shift_time(field: str, gmt: int) -> str:
    """Shift an ``hhmmss`` UTC time by ``gmt`` hours and insert colons."""
    digits = str(int(field) + gmt * 10000)
    if len(digits) < 4:
        raise ValueError(f"time field too short to format: {field!r}")
    digits = digits[:2] + ":" + digits[2:]
    return digits[:5] + ":" + digits[5:]


class GllSentence:
    """A GLL sentence split into latitude, longitude and local time."""

    def __init__(self, sentence: str, gmt: int = 0, log_path: str | PathLike | None = None):
        self.sentence = sentence
        self.gmt = gmt
        self.latitude = 0.0
        self.longitude = 0.0
        self.time = ""

        commas = [index + 1 for index, char in enumerate(sentence) if char == ","]
        if len(commas) < 6:
            raise ValueError(f"not a GLL sentence, too few fields: {sentence!r}")

        lat_field = sentence[commas[0]:commas[1] - 1]
        long_field = sentence[commas[2]:commas[3] - 1]
        time_field = sentence[commas[4]:commas[5] - 1]
        checksum = sentence[-2:]

        log = [
            f"LATITUDE STRING: {lat_field}",
            f"LONGITUDE STRING: {long_field}",
            f"TIME_GPS_NEO STRING: {time_field}",
            f"CHECKSUM STRING: {checksum}",
        ]

        calculated = nmea_checksum(sentence)
        self.valid = calculated == checksum
        if not self.valid:
            log.append("ERROR: INVALID CHECKSUM")
            log.append(f"CALCULATED CHECKSUM: {calculated}")
        else:
            log.append(_LOG_RULE)
            self.latitude = _to_degrees(lat_field)
            self.longitude = _to_degrees(long_field)
            hhmmss = time_field[:6]
            if hhmmss:
                self.time = _shift_time(hhmmss, gmt)
                log.append(f"TIME_GPS_NEO: {self.time}")
            else:
                log.append("NONE TIME_GPS_NEO")
            log.append("NONE LATITUDE" if self.latitude == 0 else f"LATITUDE: {self.latitude:g}")
            log.append("NONE LONGITUDE" if self.longitude == 0 else f"LONGITUDE: {self.longitude:g}")

        if log_path is not None:
            with open(log_path, "w", encoding="utf-8") as handle:
                handle.writelines(line + "\n" for line in log)

    def get(self, attribute: NmeaAttribute) -> str:
        """Return the attribute as text, or ``"#"`` when it is absent or invalid."""
        attribute = NmeaAttribute(attribute)
        if not self.valid:
            return MISSING
        if attribute is NmeaAttribute.LATITUDE:
            return MISSING if self.latitude == 0 else f"{self.latitude:.6f}"
        if attribute is NmeaAttribute.LONGITUDE:
            return MISSING if self.longitude == 0 else f"{self.longitude:.6f}"
        return self.time or MISSING