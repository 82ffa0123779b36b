"""Carbon monoxide concentration from an MQ-7 sensor voltage."""

from __future__ import annotations

import math

ALPHA1 = 2.43
ALPHA2 = 0.097
BETA1 = 0.99
BETA2 = 0.242
GAMMA1 = 106.03
GAMMA2 = -1.492
VCC = 3.3


def co_concentration(millivolts: float, temperature: float = 25, humidity: float = 85) -> float:
    """Return the CO concentration in ppm for a sensor output in millivolts.

    The resistance ratio is corrected for temperature (degrees C) and
    relative humidity (percent). A zero reading yields 0 ppm; a reading
    above the supply voltage has no physical meaning and raises ValueError.
    """
    v_out = millivolts / 1000.0
    if v_out == 0:
        return 0.0
    rs_over_r0 = (VCC - v_out) / v_out
    correction = (ALPHA1 - humidity / 100 * BETA1) * math.pow(
        temperature + 15, ALPHA2 * humidity / 100 - BETA2
    )
    base = rs_over_r0 * correction
    if base < 0:
        raise ValueError(f"reading of {millivolts} mV is outside the sensor range")
    if base == 0:
        return math.inf
    return math.pow(base, GAMMA2) * GAMMA1