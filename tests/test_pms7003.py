import pytest

from airnode.pms7003 import (
    ACTIVE_COMMAND,
    PASSIVE_COMMAND,
    PASSIVE_REQUEST_COMMAND,
    PMS7003,
    ChecksumError,
    DataTarget,
    FrameError,
    Mode,
    PmReading,
    StartCharError,
    decode_frame,
)


def make_frame(*values):
    words = list(values) + [0] * (13 - len(values))
    body = bytes([0x42, 0x4D, 0x00, 0x1C]) + b"".join(w.to_bytes(2, "big") for w in words)
    return body + (sum(body) & 0xFFFF).to_bytes(2, "big")


class FakePort:
    def __init__(self, data=b"", reply=None):
        self.buffer = bytearray(data)
        self.written = []
        self.reply = reply

    @property
    def in_waiting(self):
        return len(self.buffer)

    def read(self, size=1):
        chunk = bytes(self.buffer[:size])
        del self.buffer[:size]
        return chunk

    def write(self, data):
        self.written.append(bytes(data))
        if self.reply is not None and bytes(data) == PASSIVE_REQUEST_COMMAND:
            self.buffer += self.reply
        return len(data)

    def flush(self):
        pass


class FakeClock:
    def __init__(self, step=0.05):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def test_decode_frame_reads_all_six_values():
    reading = decode_frame(make_frame(1, 2, 3, 4, 5, 6))
    assert reading == PmReading(1, 2, 3, 4, 5, 6)


def test_decode_frame_big_endian_values():
    reading = decode_frame(make_frame(0x0102, 300, 65535))
    assert (reading.pm1_0, reading.pm2_5, reading.pm10) == (0x0102, 300, 65535)


def test_decode_frame_bad_start():
    frame = bytearray(make_frame(1, 2, 3))
    frame[0] = 0x00
    with pytest.raises(StartCharError):
        decode_frame(bytes(frame))


def test_decode_frame_bad_checksum():
    frame = bytearray(make_frame(1, 2, 3))
    frame[5] ^= 0x01
    with pytest.raises(ChecksumError):
        decode_frame(bytes(frame))


def test_decode_frame_wrong_length():
    with pytest.raises(FrameError):
        decode_frame(make_frame(1)[:20])


def test_initial_mode_unknown():
    assert PMS7003(FakePort()).mode() is Mode.UNKNOWN


def test_set_active_sends_command_once():
    port = FakePort()
    sensor = PMS7003(port)
    sensor.set_mode(Mode.ACTIVE)
    sensor.set_mode(Mode.ACTIVE)
    assert port.written == [bytes([0x42, 0x4D, 0xE2, 0x00, 0x00, 0x01, 0x71])]
    assert sensor.mode() is Mode.ACTIVE


def test_set_passive_sends_command():
    port = FakePort()
    sensor = PMS7003(port)
    sensor.set_mode(Mode.PASSIVE)
    assert port.written == [bytes([0x42, 0x4D, 0xE1, 0x00, 0x00, 0x01, 0x70])]
    assert sensor.mode() is Mode.PASSIVE


def test_sleep_parks_in_passive_mode():
    port = FakePort()
    sensor = PMS7003(port)
    sensor.set_mode(Mode.SLEEP)
    assert port.written == [PASSIVE_COMMAND]
    assert sensor.mode() is Mode.PASSIVE


def test_wake_when_not_sleeping_sends_nothing():
    port = FakePort()
    sensor = PMS7003(port)
    sensor.set_mode(Mode.ACTIVE)
    sensor.set_mode(Mode.WAKE)
    assert port.written == [ACTIVE_COMMAND]
    assert sensor.mode() is Mode.ACTIVE


def test_set_unknown_mode_rejected():
    with pytest.raises(ValueError):
        PMS7003(FakePort()).set_mode(Mode.UNKNOWN)


def test_read_frame_timeout_clears_reading():
    port = FakePort(reply=make_frame(7, 8, 9))
    sensor = PMS7003(port, FakeClock())
    sensor.set_mode(Mode.ACTIVE)
    sensor.read_frame()
    assert sensor.decode().pm10 == 9
    with pytest.raises(TimeoutError):
        sensor.read_frame()
    assert sensor.reading == PmReading()


def test_active_mode_get_data():
    port = FakePort(make_frame(11, 22, 33, 44, 55, 66))
    sensor = PMS7003(port, FakeClock())
    sensor.set_mode(Mode.ACTIVE)
    port.buffer[:] = make_frame(11, 22, 33, 44, 55, 66)
    assert sensor.get_data(DataTarget.PM2_5_ATM) == 55


def test_passive_mode_reads_pm2_5_and_pm10():
    port = FakePort(reply=make_frame(12, 25, 40))
    sensor = PMS7003(port, FakeClock())
    sensor.set_mode(Mode.PASSIVE)
    assert sensor.get_data(DataTarget.PM2_5) == 25
    assert sensor.get_data(DataTarget.PM10) == 40
    assert port.written.count(PASSIVE_REQUEST_COMMAND) == 4


def test_get_data_unknown_mode_returns_zero():
    sensor = PMS7003(FakePort(make_frame(5, 6, 7)), FakeClock())
    assert sensor.get_data(DataTarget.PM1_0) == 0


def test_get_data_corrupt_frame_returns_zero_and_resets():
    frame = bytearray(make_frame(5, 6, 7))
    frame[-1] ^= 0xFF
    port = FakePort(reply=bytes(frame))
    sensor = PMS7003(port, FakeClock())
    sensor.set_mode(Mode.PASSIVE)
    assert sensor.get_data(DataTarget.PM1_0) == 0
    assert sensor.reading == PmReading()


def test_decode_error_resets_state():
    frame = bytearray(make_frame(1, 2, 3))
    frame[0] = 0x00
    sensor = PMS7003(FakePort(b"\x42\x4d" + bytes(frame[2:])), FakeClock())
    sensor.read_frame()
    sensor._frame[1] = 0x00
    with pytest.raises(StartCharError):
        sensor.decode()
    assert sensor.reading == PmReading()