"""
Bresser lightning sensor encoder.

Payload (10 bytes), shown before whitening:

    Byte   Content
    0-1    CRC-16 of bytes 2-8 (poly 0x1021, init 0) XOR 0x899E, high first
    2-3    sensor ID, 16 bits
    4      strike count [hundreds | tens]     (hundreds may exceed 9)
    5      [strike count units | battery low ? 8 : 0] ^ 0x0A
    6      [subtype | !startup << 3] ^ 0xAA
    7      distance to the last strike in km
    8-9    0

The whole payload is then whitened with 0xAA.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sensortx.encoders.base import PayloadEncoder
from sensortx.exceptions import FieldRangeError
from sensortx.models.reading import SensorSubtype
from sensortx.protocol.checksums import crc16
from sensortx.protocol.constants import Protocol, ProtocolConstants
from sensortx.protocol.encoding import pack_nibbles, put_uint16_be, whiten

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading

# The hundreds digit has a whole nibble to itself
MAX_STRIKE_COUNT = 1599


class LightningEncoder(PayloadEncoder):
    """Encoder for the Bresser lightning sensor protocol."""

    @property
    def protocol(self) -> Protocol:
        """Returns BRESSER_LIGHTNING."""
        return Protocol.BRESSER_LIGHTNING

    @property
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        return frozenset({SensorSubtype.LIGHTNING})

    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        put_uint16_be(msg, 2, reading.sensor_id & 0xFFFF)

        count = reading.strike_count
        if self._strict and not 0 <= count <= MAX_STRIKE_COUNT:
            raise FieldRangeError("strike_count", count, minimum=0, maximum=MAX_STRIKE_COUNT)
        count = abs(count)
        msg[4] = pack_nibbles(count // 100, (count // 10) % 10)
        msg[5] = pack_nibbles(count % 10, 0 if reading.battery_ok else 8) ^ ProtocolConstants.NIBBLE_MASK

        header = (SensorSubtype.LIGHTNING << 4) | ((0 if reading.startup else 1) << 3)
        msg[6] = header ^ ProtocolConstants.WHITENING_MASK
        msg[7] = self._unsigned(reading.distance_km, 8, field="distance_km")

        crc = crc16(msg[2:9], ProtocolConstants.CRC_POLYNOMIAL, ProtocolConstants.CRC_INIT)
        put_uint16_be(msg, 0, crc ^ ProtocolConstants.CRC_XOR_LIGHTNING)

        whiten(msg, ProtocolConstants.WHITENING_MASK)
