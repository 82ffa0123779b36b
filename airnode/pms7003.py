"""PMS7003 particulate matter sensor over a serial port."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

FRAME_LENGTH = 32
START_CHAR1 = 0x42
START_CHAR2 = 0x4D
TIMEOUT = 0.1
WAIT_PASSIVE_REQUEST = 0.1

ACTIVE_COMMAND = bytes([0x42, 0x4D, 0xE2, 0x00, 0x00, 0x01, 0x71])
PASSIVE_COMMAND = bytes([0x42, 0x4D, 0xE1, 0x00, 0x00, 0x01, 0x70])
PASSIVE_REQUEST_COMMAND = bytes([0x42, 0x4D, 0xE2, 0x00, 0x00, 0x01, 0x71])
SLEEP_COMMAND = bytes([0x42, 0x4D, 0xE4, 0x00, 0x00, 0x01, 0x73])
WAKE_COMMAND = bytes([0x42, 0x4D, 0xE4, 0x00, 0x01, 0x01, 0x74])

_ACTIVE_BIT = 7
_PASSIVE_BIT = 6
_SLEEP_BIT = 5


class Mode(Enum):
    ACTIVE = auto()
    PASSIVE = auto()
    SLEEP = auto()
    WAKE = auto()
    UNKNOWN = auto()


class DataTarget(Enum):
    PM1_0 = "pm1_0"
    PM2_5 = "pm2_5"
    PM10 = "pm10"
    PM1_0_ATM = "pm1_0_atm"
    PM2_5_ATM = "pm2_5_atm"
    PM10_ATM = "pm10_atm"


@dataclass(frozen=True)
class PmReading:
    """Concentrations in ug/m3, standard and atmospheric."""

    pm1_0: int = 0
    pm2_5: int = 0
    pm10: int = 0
    pm1_0_atm: int = 0
    pm2_5_atm: int = 0
    pm10_atm: int = 0


class FrameError(ValueError):
    """A sensor frame could not be decoded."""


class StartCharError(FrameError):
    """The frame does not begin with the start characters."""


class ChecksumError(FrameError):
    """The frame checksum does not match its contents."""


def _word(data: bytes, index: int) -> int:
    return (data[index] << 8) | data[index + 1]


def decode_frame(data: bytes) -> PmReading:
    """Decode a 32-byte sensor frame."""
    if len(data) != FRAME_LENGTH:
        raise FrameError(f"frame must be {FRAME_LENGTH} bytes, got {len(data)}")
    if data[0] != START_CHAR1 or data[1] != START_CHAR2:
        raise StartCharError("frame does not start with 0x42 0x4D")
    calculated = sum(data[:FRAME_LENGTH - 2]) & 0xFFFF
    if calculated != _word(data, FRAME_LENGTH - 2):
        raise ChecksumError("frame checksum mismatch")
    return PmReading(*(_word(data, index) for index in range(4, 16, 2)))


class PMS7003:
    """Driver for a PMS7003 attached to a pyserial-like port.

    The port needs ``in_waiting``, ``read(size)``, ``write(data)`` and
    ``flush()``.
    """

    def __init__(self, port, clock: Callable[[], float] = time.monotonic):
        self._port = port
        self._clock = clock
        self._mode_bits = 0
        self._frame = bytearray(FRAME_LENGTH)
        self.reading = PmReading()

    def set_mode(self, mode: Mode) -> None:
        """Switch the sensor to ``mode``, sending a command only when needed."""
        mode = Mode(mode)
        current = self.mode()
        if mode is Mode.ACTIVE:
            if current is not Mode.ACTIVE:
                self._port.write(ACTIVE_COMMAND)
                self._mode_bits = 1 << _ACTIVE_BIT
        elif mode in (Mode.PASSIVE, Mode.SLEEP):
            # A sleep request parks the sensor in passive mode.
            if current is not mode:
                self._port.write(PASSIVE_COMMAND)
                self._mode_bits = 1 << _PASSIVE_BIT
        elif mode is Mode.WAKE:
            if current is Mode.SLEEP:
                self._port.write(WAKE_COMMAND)
                self._mode_bits &= ~(1 << _SLEEP_BIT)
        else:
            raise ValueError(f"cannot set sensor mode {mode.name}")

    def mode(self) -> Mode:
        """Return the mode the sensor was last put in."""
        if self._mode_bits == 1 << _ACTIVE_BIT:
            return Mode.ACTIVE
        if self._mode_bits == 1 << _PASSIVE_BIT:
            return Mode.PASSIVE
        if self._mode_bits & (1 << _SLEEP_BIT):
            return Mode.SLEEP
        return Mode.UNKNOWN

    def read_frame(self) -> bytes:
        """Wait for the start characters and read one frame.

        Raises TimeoutError, after clearing stored data, when no frame
        starts within the timeout.
        """
        start = self._clock()
        while True:
            if self._port.in_waiting:
                if (
                    self._port.read(1) == bytes([START_CHAR1])
                    and self._port.read(1) == bytes([START_CHAR2])
                ):
                    self._frame[0] = START_CHAR1
                    self._frame[1] = START_CHAR2
                    if self._port.in_waiting >= FRAME_LENGTH - 2:
                        chunk = self._port.read(FRAME_LENGTH - 2)
                        self._frame[2:2 + len(chunk)] = chunk
                    return bytes(self._frame)
            if self._clock() - start > TIMEOUT:
                self.reset()
                raise TimeoutError("no frame from PMS7003")

    def read_frame_for_mode(self) -> bytes:
        """Read a frame, requesting one first when in passive mode."""
        mode = self.mode()
        if mode is Mode.ACTIVE:
            return self.read_frame()
        if mode is Mode.PASSIVE:
            while self._port.in_waiting:
                self._port.read(self._port.in_waiting)
            self._port.write(PASSIVE_REQUEST_COMMAND)
            self._port.flush()
            self._port.write(PASSIVE_REQUEST_COMMAND)
            time.sleep(WAIT_PASSIVE_REQUEST)
            return self.read_frame()
        raise RuntimeError(f"cannot read in mode {mode.name}")

    def decode(self) -> PmReading:
        """Decode the last frame read; clears stored data on error."""
        try:
            reading = decode_frame(bytes(self._frame))
        except FrameError:
            self.reset()
            raise
        self.reading = reading
        return reading

    def get_data(self, target: DataTarget) -> int:
        """Read, decode and return one value; 0 when no valid data arrives."""
        target = DataTarget(target)
        try:
            self.read_frame_for_mode()
            reading = self.decode()
        except (TimeoutError, RuntimeError, FrameError):
            return 0
        return getattr(reading, target.value)

    def reset(self) -> None:
        """Clear the stored frame and readings."""
        self._frame = bytearray(FRAME_LENGTH)
        self.reading = PmReading()