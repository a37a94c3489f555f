"""
Bresser water leakage sensor encoder.

Payload (10 bytes):

    Byte   Content
    0-1    CRC-16 of bytes 2-6 (poly 0x1021, init 0), high byte first
    2-5    sensor ID, 32 bits, MSB first
    6      [subtype | startup ? 0 : 8 | channel]
    7      (battery ok ? 0x30 : 0) | (alarm ? 8 : 4)
    8-9    0

Unlike the other Bresser protocols no whitening is applied. The CRC
parameters and the missing whitening have not been confirmed against a
real receiver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sensortx.encoders.base import PayloadEncoder
from sensortx.models.reading import SensorSubtype
from sensortx.protocol.checksums import crc16
from sensortx.protocol.constants import Protocol, ProtocolConstants
from sensortx.protocol.encoding import put_uint16_be, put_uint32_be

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading


class LeakageEncoder(PayloadEncoder):
    """Encoder for the Bresser water leakage sensor protocol."""

    @property
    def protocol(self) -> Protocol:
        """Returns BRESSER_LEAKAGE."""
        return Protocol.BRESSER_LEAKAGE

    @property
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        return frozenset({SensorSubtype.LEAKAGE})

    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        put_uint32_be(msg, 2, reading.sensor_id)
        msg[6] = (SensorSubtype.LEAKAGE << 4) | (0 if reading.startup else 8) | (reading.channel & 0x07)
        msg[7] = (0x30 if reading.battery_ok else 0x00) | (0x08 if reading.alarm else 0x04)

        crc = crc16(msg[2:7], ProtocolConstants.CRC_POLYNOMIAL, ProtocolConstants.CRC_INIT)
        put_uint16_be(msg, 0, crc)
