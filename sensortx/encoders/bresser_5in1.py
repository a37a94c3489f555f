"""
Bresser 5-in-1 weather station encoder.

Payload (26 bytes). Bytes 0-12 are the bitwise complement of bytes 13-25,
which receivers use as an integrity check alongside the bit-count checksum.

    Byte   Content
    13     checksum: number of set bits in bytes 14-25
    14     sensor ID, low byte
    15     [startup ? 0 : 8 | subtype]
    16     wind gust in 0.1 m/s, bits 0-7
    17     [wind direction sector (0-15) | wind gust bits 8-11]
    18     wind average [units | tenths]       (BCD)
    19     wind average [0 | tens]             (BCD)
    20     temperature [units | tenths]        (BCD, absolute value)
    21     temperature [0 | tens]              (BCD)
    22     humidity [tens | units]             (BCD)
    23     rain [units | tenths]               (BCD)
    24     rain [hundreds | tens]              (BCD)
    25     [battery low ? 8 : 0 | temperature negative ? 1 : 0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from sensortx.encoders.base import PayloadEncoder
from sensortx.exceptions import FieldRangeError
from sensortx.models.reading import SensorSubtype
from sensortx.protocol.checksums import count_set_bits
from sensortx.protocol.constants import WIND_DIRECTION_STEP, Protocol
from sensortx.protocol.encoding import pack_nibbles

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading

_MIRROR_LENGTH = 13


class Weather5in1Encoder(PayloadEncoder):
    """
    Encoder for the Bresser 5-in-1 protocol.

    Stateless: encoding the same reading twice gives identical payloads.

    Example:
        >>> encoder = Weather5in1Encoder()
        >>> payload = encoder.encode(SensorReading(sensor_id=255, temp_c=12.3))
        >>> len(payload)
        26
    """

    @property
    def protocol(self) -> Protocol:
        """Returns BRESSER_5IN1."""
        return Protocol.BRESSER_5IN1

    @property
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        """Weather stations only."""
        return frozenset({SensorSubtype.WEATHER0, SensorSubtype.WEATHER})

    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        msg[14] = reading.sensor_id & 0xFF
        msg[15] = pack_nibbles(0 if reading.startup else 8, reading.subtype)

        if not math.isfinite(reading.wind_gust):
            raise FieldRangeError("wind_gust", reading.wind_gust, minimum=0, maximum=409.5)
        gust = self._unsigned(round(reading.wind_gust * 10), 12, field="wind_gust")
        msg[16] = gust & 0xFF
        msg[17] = pack_nibbles(self._direction_sector(reading.wind_direction_deg), gust >> 8)

        avg = self._digits(reading.wind_avg, 3, 1, field="wind_avg")
        msg[18] = pack_nibbles(avg[1], avg[2])
        msg[19] = avg[0]

        temp_c = self._temperature(reading.temp_c)
        negative = temp_c < 0
        temp = self._digits(abs(temp_c), 3, 1, field="temp_c")
        msg[20] = pack_nibbles(temp[1], temp[2])
        msg[21] = temp[0]

        humidity = self._digits(reading.humidity, 2, field="humidity")
        msg[22] = pack_nibbles(humidity[0], humidity[1])

        rain = self._digits(reading.rain_mm, 4, 1, field="rain_mm")
        msg[23] = pack_nibbles(rain[2], rain[3])
        msg[24] = pack_nibbles(rain[0], rain[1])

        msg[25] = pack_nibbles(0 if reading.battery_ok else 8, 1 if negative else 0)

        msg[13] = count_set_bits(msg[14:26])
        for i in range(_MIRROR_LENGTH):
            msg[i] = msg[i + _MIRROR_LENGTH] ^ 0xFF

    def _direction_sector(self, direction: float) -> int:
        """Nearest of the 16 wind direction sectors (0 = north)."""
        direction = self._wind_direction(direction)
        return round(direction / WIND_DIRECTION_STEP) % 16
