"""Sensor decoding, serial drivers and screen layout for an air-quality monitoring node."""

__version__ = "0.1.0"
__all__ = ["display", "mq7", "neo6m", "nmea", "pms7003"]