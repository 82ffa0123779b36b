"""NEO-6M GNSS receiver read over a serial port."""

from __future__ import annotations

import time
from typing import Callable

from airnode.nmea import MISSING, GllSentence, NmeaAttribute

BAUD_RATE = 9600
GLL_PREFIX = "$GNGLL"
GNSS_PREFIXES = ("$GNGLL", "$GNRMC", "$GNGGA")
MAX_SENTENCE = 99

FIRST_BYTE_TIMEOUT_GLL = 0.1
FIRST_BYTE_TIMEOUT = 0.05
SENTENCE_TIMEOUT = 2.0


class NEO6M:
    """Reads NMEA sentences from a NEO-6M on a pyserial-like port.

    The port needs ``in_waiting``, ``read(size)`` and
    ``read_until(expected, size)``. The last sentence read is kept in
    ``sentence``; ``"#"`` there means that nothing was received.
    """

    def __init__(self, port, clock: Callable[[], float] = time.monotonic, gmt: int = 7):
        self._port = port
        self._clock = clock
        self.gmt = gmt
        self.sentence = ""
        self.prefix: str | None = None

    def _read_char(self) -> str:
        return self._port.read(1).decode("latin-1")

    def _read_line(self) -> str:
        raw = self._port.read_until(b"\n", MAX_SENTENCE)
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        return raw.decode("latin-1")

    def _missing(self) -> str:
        self.sentence = MISSING
        return MISSING

    def _wait_for_data(self, timeout: float) -> bool:
        start = self._clock()
        while not self._port.in_waiting:
            if self._clock() - start >= timeout:
                return False
        return True

    def read_gll(self) -> str:
        """Return the text following the next ``$GNGLL`` prefix, or ``"#"``.

        Gives up when no byte arrives within 0.1 s, or when 2 s pass
        without a byte while looking for the prefix.
        """
        if not self._wait_for_data(FIRST_BYTE_TIMEOUT_GLL):
            return self._missing()
        position = 0
        start = self._clock()
        while self._clock() - start < SENTENCE_TIMEOUT:
            if not self._port.in_waiting:
                continue
            char = self._read_char()
            start = self._clock()
            if char == GLL_PREFIX[position]:
                position += 1
                if position == len(GLL_PREFIX):
                    self.sentence = self._read_line()
                    return self.sentence
            else:
                position = 0
        return self._missing()

    def read_sentence(self) -> str:
        """Return a known sentence found after a ``$``, prefixed, or ``"#"``.

        Gives up after 50 ms without data. Once a byte has arrived, lines
        are read while it is a ``$`` until one holds a known prefix or 2 s
        have passed.
        """
        start = self._clock()
        while True:
            if self._clock() - start >= FIRST_BYTE_TIMEOUT:
                return self._missing()
            if not self._port.in_waiting:
                continue
            char = self._read_char()
            start = self._clock()
            while True:
                if char == "$":
                    self.sentence = self._read_line()
                    for prefix in GNSS_PREFIXES:
                        if prefix in self.sentence:
                            self.prefix = prefix
                            return prefix + self.sentence
                if self._clock() - start >= SENTENCE_TIMEOUT:
                    return self._missing()

    def read_gnss(self) -> str:
        """Return the first line part starting at a known prefix, or ``"#"``.

        Gives up after 50 ms without data, or 2 s after the first check.
        """
        start = self._clock()
        while not self._port.in_waiting:
            if self._clock() - start >= FIRST_BYTE_TIMEOUT:
                return self._missing()
        while self._clock() - start < SENTENCE_TIMEOUT:
            if not self._port.in_waiting:
                continue
            self.sentence = self._read_line()
            for prefix in GNSS_PREFIXES:
                index = self.sentence.find(prefix)
                if index >= 0:
                    self.prefix = prefix
                    return self.sentence[index:]
        return self._missing()

    def get(self, attribute: NmeaAttribute) -> str:
        """Decode the last GLL text read and return one attribute, or ``"#"``.

        The stored text loses its last character (the carriage return) and
        is decoded as a ``$GPGLL`` sentence.
        """
        if self.sentence == MISSING:
            return MISSING
        body = self.sentence[:-1]
        return GllSentence("$GPGLL" + body, self.gmt).get(attribute)