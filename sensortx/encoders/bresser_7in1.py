"""
Bresser 7-in-1 family encoder (weather station, air quality sensor).

Payload (26 bytes), shown before whitening:

    Byte   Weather sub-layout                   Air quality sub-layout
    0-1    digest of bytes 2-24 (see below)     (same)
    2-3    sensor ID, 16 bits                   (same)
    4      wind direction [hundreds | tens]     -
    5      [wind direction units | 0]           -
    6      [subtype | !startup << 3 | channel] ^ 0xAA
    7      wind gust [tens | units]             -
    8      [gust tenths | wind average tens]    -
    9      wind average [units | tenths]        -
    10-12  rain, six digits                     PM2.5, four digits (10 low .. 12 high)
    12-14  -                                    PM10, four digits (12 low .. 14 high)
    14     temperature [tens | units]           (PM10 last digit)
    15     [temperature tenths | battery]       [0 | battery]
    16     humidity [tens | units]              -
    17-19  illuminance in lx, six digits        -
    20     UV [tens | units]                    -
    21     [UV tenths | 0]                      -

The digest is LFSR-16 (gen 0x8810, key 0xBA95) XOR 0x6DF1, high byte first.
The battery nibble is ``(battery_ok ? 0 : 4) ^ 0xA``. Finally the whole
payload, digest included, is whitened with 0xAA.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sensortx.encoders.base import PayloadEncoder
from sensortx.models.reading import SensorSubtype
from sensortx.protocol.checksums import lfsr_digest16
from sensortx.protocol.constants import Protocol, ProtocolConstants
from sensortx.protocol.encoding import pack_nibbles, put_uint16_be, whiten

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading


class Weather7in1Encoder(PayloadEncoder):
    """
    Encoder for the Bresser 7-in-1 protocol.

    The AIR_PM subtype uses the particulate matter sub-layout, WEATHER the
    weather sub-layout. Stateless.
    """

    @property
    def protocol(self) -> Protocol:
        """Returns BRESSER_7IN1."""
        return Protocol.BRESSER_7IN1

    @property
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        """Weather stations and air quality sensors."""
        return frozenset({SensorSubtype.WEATHER, SensorSubtype.AIR_PM})

    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        put_uint16_be(msg, 2, reading.sensor_id & 0xFFFF)
        header = (reading.subtype << 4) | ((0 if reading.startup else 1) << 3) | (reading.channel & 0x07)
        msg[6] = header ^ ProtocolConstants.WHITENING_MASK

        if reading.subtype == SensorSubtype.AIR_PM:
            self._encode_air_quality(msg, reading)
        else:
            self._encode_weather(msg, reading)

        msg[15] |= (0 if reading.battery_ok else 4) ^ ProtocolConstants.NIBBLE_MASK

        digest = lfsr_digest16(
            msg[2:25],
            ProtocolConstants.LFSR_GENERATOR,
            ProtocolConstants.DIGEST_KEY_7IN1,
        )
        put_uint16_be(msg, 0, digest ^ ProtocolConstants.DIGEST_XOR_7IN1)

        whiten(msg, ProtocolConstants.WHITENING_MASK)

    def _encode_weather(self, msg: bytearray, reading: SensorReading) -> None:
        direction = self._digits(
            self._wind_direction(reading.wind_direction_deg), 3, field="wind_direction_deg"
        )
        msg[4] = pack_nibbles(direction[0], direction[1])
        msg[5] = pack_nibbles(direction[2], 0)

        gust = self._digits(reading.wind_gust, 3, 1, field="wind_gust")
        avg = self._digits(reading.wind_avg, 3, 1, field="wind_avg")
        msg[7] = pack_nibbles(gust[0], gust[1])
        msg[8] = pack_nibbles(gust[2], avg[0])
        msg[9] = pack_nibbles(avg[1], avg[2])

        rain = self._digits(reading.rain_mm, 6, 1, field="rain_mm")
        msg[10] = pack_nibbles(rain[0], rain[1])
        msg[11] = pack_nibbles(rain[2], rain[3])
        msg[12] = pack_nibbles(rain[4], rain[5])

        # Negative temperatures are sent with a +100 offset
        temp_c = self._temperature(reading.temp_c)
        if temp_c < 0:
            temp_c += 100
        temp = self._digits(temp_c, 3, 1, field="temp_c")
        msg[14] = pack_nibbles(temp[0], temp[1])
        msg[15] = pack_nibbles(temp[2], 0)

        humidity = self._digits(reading.humidity, 2, field="humidity")
        msg[16] = pack_nibbles(humidity[0], humidity[1])

        light = self._digits(reading.light_klx, 6, 3, field="light_klx")
        msg[17] = pack_nibbles(light[0], light[1])
        msg[18] = pack_nibbles(light[2], light[3])
        msg[19] = pack_nibbles(light[4], light[5])

        uv = self._digits(reading.uv, 3, 1, field="uv")
        msg[20] = pack_nibbles(uv[0], uv[1])
        msg[21] = pack_nibbles(uv[2], 0)

    def _encode_air_quality(self, msg: bytearray, reading: SensorReading) -> None:
        pm_2_5 = self._digits(reading.pm_2_5, 4, field="pm_2_5")
        msg[10] = pm_2_5[0]
        msg[11] = pack_nibbles(pm_2_5[1], pm_2_5[2])
        msg[12] = pack_nibbles(pm_2_5[3], 0)

        # PM10 starts in the low nibble of the byte PM2.5 ends in
        pm_10 = self._digits(reading.pm_10, 4, field="pm_10")
        msg[12] |= pm_10[0]
        msg[13] = pack_nibbles(pm_10[1], pm_10[2])
        msg[14] = pack_nibbles(pm_10[3], 0)
