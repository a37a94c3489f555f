"""
Bresser 6-in-1 family encoder (weather, thermo-hygro, pool, soil).

Payload (18 bytes):

    Byte   Content
    0-1    LFSR-16 digest of bytes 2-16 (gen 0x8810, key 0x5412), high first
    2-5    sensor ID, 32 bits, MSB first
    6      [subtype | startup ? 0 : 8 | channel]
    7      ~wind gust [tens | units]
    8      ~[wind gust tenths | wind average tenths]
    9      ~wind average [tens | units]
    10     wind direction [hundreds | tens]
    11     [wind direction units | 0]
    12-14  measurement report: temperature, flags, humidity / moisture
           rain report: ~rain, six BCD digits
    15     ~UV [tens | units]
    16     [~UV tenths | report flag (0 = measurement, 1 = rain)]
    17     0xFF - (sum of bytes 2-16 & 0xFF)

Real weather stations alternate between a measurement report and a rain
report on every transmission; the encoder instance carries that phase.
"""

from __future__ import annotations

import bisect
import threading
from enum import Enum
from typing import TYPE_CHECKING

from sensortx.encoders.base import PayloadEncoder
from sensortx.exceptions import FieldRangeError
from sensortx.models.reading import SensorSubtype
from sensortx.protocol.checksums import add_bytes, lfsr_digest16
from sensortx.protocol.constants import SOIL_MOISTURE_MAP, Protocol, ProtocolConstants
from sensortx.protocol.encoding import invert_bytes, pack_nibbles, put_uint16_be, put_uint32_be

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading


class ReportPhase(Enum):
    """Which report a 6-in-1 weather station sends next."""

    MEASUREMENT = 0
    """Temperature, humidity and UV report."""

    RAIN = 1
    """Rain counter report (no temperature)."""


class Weather6in1Encoder(PayloadEncoder):
    """
    Encoder for the Bresser 6-in-1 protocol.

    State machine (weather subtype):
        MEASUREMENT -> encode() -> RAIN
        RAIN        -> encode() -> MEASUREMENT

    The initial phase is MEASUREMENT. Other subtypes always send a
    measurement report and never leave MEASUREMENT. A RAIN phase is
    consumed by the next call whatever its subtype.

    One instance represents one logical sensor stream; use separate
    instances for independent streams. Calls on one instance are
    serialised with an internal lock.

    Attributes:
        phase: Report that the next weather reading produces.
    """

    def __init__(self, *, strict: bool = True) -> None:
        super().__init__(strict=strict)
        self._phase = ReportPhase.MEASUREMENT
        self._lock = threading.Lock()

    @property
    def protocol(self) -> Protocol:
        """Returns BRESSER_6IN1."""
        return Protocol.BRESSER_6IN1

    @property
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        """Weather, thermo-hygro, pool and soil sensors."""
        return frozenset({
            SensorSubtype.WEATHER,
            SensorSubtype.THERMO_HYGRO,
            SensorSubtype.POOL_THERMO,
            SensorSubtype.SOIL,
        })

    @property
    def phase(self) -> ReportPhase:
        """Get the report phase used by the next weather reading."""
        return self._phase

    def reset(self) -> None:
        """Return to the initial MEASUREMENT phase."""
        with self._lock:
            self._phase = ReportPhase.MEASUREMENT

    def encode(self, reading: SensorReading) -> bytes:
        with self._lock:
            return super().encode(reading)

    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        is_weather = reading.subtype == SensorSubtype.WEATHER
        rain_report = is_weather and self._phase is ReportPhase.RAIN

        put_uint32_be(msg, 2, reading.sensor_id)
        msg[6] = (reading.subtype << 4) | (0 if reading.startup else 8) | (reading.channel & 0x07)

        gust = self._digits(reading.wind_gust, 3, 1, field="wind_gust")
        avg = self._digits(reading.wind_avg, 3, 1, field="wind_avg")
        msg[7] = pack_nibbles(gust[0], gust[1])
        msg[8] = pack_nibbles(gust[2], avg[2])
        msg[9] = pack_nibbles(avg[0], avg[1])
        invert_bytes(msg, 7, 10)

        direction = self._digits(
            self._wind_direction(reading.wind_direction_deg), 3, field="wind_direction_deg"
        )
        msg[10] = pack_nibbles(direction[0], direction[1])
        msg[11] = pack_nibbles(direction[2], 0)

        if rain_report:
            rain = self._digits(reading.rain_mm, 6, 1, field="rain_mm")
            msg[12] = pack_nibbles(rain[0], rain[1])
            msg[13] = pack_nibbles(rain[2], rain[3])
            msg[14] = pack_nibbles(rain[4], rain[5])
            invert_bytes(msg, 12, 15)
            report_flag = 1
        else:
            self._encode_measurement(msg, reading)
            report_flag = 0

        uv = self._digits(reading.uv, 3, 1, field="uv")
        msg[15] = pack_nibbles(uv[0], uv[1]) ^ 0xFF
        msg[16] = (pack_nibbles(uv[2], 0) ^ 0xF0) | report_flag

        msg[17] = 0xFF - (add_bytes(msg[2:17]) & 0xFF)
        digest = lfsr_digest16(
            msg[2:17],
            ProtocolConstants.LFSR_GENERATOR,
            ProtocolConstants.DIGEST_KEY_6IN1,
        )
        put_uint16_be(msg, 0, digest)

        # Only advance once the whole payload has been built
        if self._phase is ReportPhase.RAIN:
            self._phase = ReportPhase.MEASUREMENT
        elif is_weather:
            self._phase = ReportPhase.RAIN

    def _encode_measurement(self, msg: bytearray, reading: SensorReading) -> None:
        """Temperature, battery and humidity/moisture into bytes 12-14."""
        temp_c = self._temperature(reading.temp_c)
        negative = temp_c < 0
        temp_value = temp_c + 100 if negative else temp_c
        temp = self._digits(temp_value, 3, 1, field="temp_c")
        flags = (0x08 if negative else 0) | (0x02 if reading.battery_ok else 0)
        msg[12] = pack_nibbles(temp[0], temp[1])
        msg[13] = pack_nibbles(temp[2], flags)

        if reading.subtype == SensorSubtype.SOIL:
            level = self._moisture_level(reading.moisture)
            humidity = self._digits(level + 1, 2, field="moisture")
            msg[14] = pack_nibbles(humidity[0], humidity[1])
        elif reading.subtype != SensorSubtype.POOL_THERMO:
            humidity = self._digits(reading.humidity, 2, field="humidity")
            msg[14] = pack_nibbles(humidity[0], humidity[1])

    def _moisture_level(self, moisture: int) -> int:
        """Index of the highest moisture level not above ``moisture`` (0-15)."""
        if self._strict and not 0 <= moisture <= 100:
            raise FieldRangeError("moisture", moisture, minimum=0, maximum=100)
        return max(bisect.bisect_right(SOIL_MOISTURE_MAP, moisture) - 1, 0)

    def __repr__(self) -> str:
        return f"Weather6in1Encoder(strict={self._strict}, phase={self._phase.name})"
