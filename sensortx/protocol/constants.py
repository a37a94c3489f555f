"""
Bresser sensor radio protocol identifiers and constants.

Wire constants (whitening masks, digest keys, final XOR values) were
recovered by third-party reverse engineering of the Bresser 868 MHz sensors.
They are opaque: receivers expect exactly these values.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Protocol(IntEnum):
    """
    Over-the-air protocol variants that can be emulated.

    Values follow the encoder enumeration of the Bresser SensorTransmitter
    firmware and are used to select the active encoder.
    """

    BRESSER_5IN1 = 0
    """Bresser 5-in-1 weather station, 26-byte payload."""

    BRESSER_6IN1 = 1
    """Bresser 6-in-1 family (weather, soil, pool, thermo-hygro), 18 bytes."""

    BRESSER_7IN1 = 2
    """Bresser 7-in-1 family (weather, particulate matter), 26 bytes."""

    BRESSER_LEAKAGE = 3
    """Bresser water leakage sensor, 10 bytes."""

    BRESSER_LIGHTNING = 4
    """Bresser lightning sensor, 10 bytes."""

    @classmethod
    def parse(cls, value: Protocol | int | str) -> Protocol:
        """
        Resolve a protocol from an enum member, integer or name.

        Names are case-insensitive and the ``BRESSER_`` prefix is optional,
        so ``"6in1"``, ``"Bresser_6in1"`` and ``1`` all give BRESSER_6IN1.

        Raises:
            ValueError: If the value does not name a protocol.
        """
        if isinstance(value, Protocol):
            return value
        if isinstance(value, int):
            return cls(value)

        name = value.strip().upper().replace("-", "_")
        if not name.startswith("BRESSER_"):
            name = "BRESSER_" + name
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown protocol: {value!r}") from None


class ProtocolConstants:
    """
    Protocol constants.

    Contains framing bytes, payload sizes, integrity-code parameters,
    whitening masks and transmitter defaults.
    """

    # ===== Framing =====

    PREAMBLE: Final[bytes] = bytes([0xAA, 0xAA, 0xAA, 0xAA])
    """Bit-synchronisation preamble sent ahead of every payload."""

    SYNC_WORD: Final[bytes] = bytes([0x2D, 0xD4])
    """Syncword following the preamble."""

    FRAME_PREFIX_LENGTH: Final[int] = 6
    """Preamble plus syncword length in bytes."""

    # ===== Payload Sizes =====

    SIZE_5IN1: Final[int] = 26
    SIZE_6IN1: Final[int] = 18
    SIZE_7IN1: Final[int] = 26
    SIZE_LIGHTNING: Final[int] = 10
    SIZE_LEAKAGE: Final[int] = 10

    # ===== Integrity Codes =====

    LFSR_GENERATOR: Final[int] = 0x8810
    """Generator polynomial of the keyed LFSR digest (6-in-1, 7-in-1)."""

    DIGEST_KEY_6IN1: Final[int] = 0x5412
    """LFSR digest key for 6-in-1 payloads."""

    DIGEST_KEY_7IN1: Final[int] = 0xBA95
    """LFSR digest key for 7-in-1 payloads."""

    DIGEST_XOR_7IN1: Final[int] = 0x6DF1
    """Final XOR applied to the 7-in-1 digest."""

    CRC_POLYNOMIAL: Final[int] = 0x1021
    """CRC-16 polynomial (lightning, leakage)."""

    CRC_INIT: Final[int] = 0x0000
    """CRC-16 initial value (lightning, leakage)."""

    CRC_XOR_LIGHTNING: Final[int] = 0x899E
    """Final XOR applied to the lightning CRC."""

    # ===== Whitening Masks =====

    WHITENING_MASK: Final[int] = 0xAA
    """Byte mask applied to whole 7-in-1 and lightning payloads."""

    NIBBLE_MASK: Final[int] = 0x0A
    """Low-nibble part of the whitening mask used on single flag nibbles."""

    # ===== Transmitter Defaults =====

    DEFAULT_TX_INTERVAL: Final[float] = 30.0
    """Default interval between transmissions in seconds."""

    DEFAULT_BAUD_RATE: Final[int] = 115200
    """Default baud rate of the serial link to the radio bridge."""

    DEFAULT_WRITE_TIMEOUT: Final[float] = 5.0
    """Default timeout for handing a frame to the radio bridge."""


PAYLOAD_SIZES: Final[dict[Protocol, int]] = {
    Protocol.BRESSER_5IN1: ProtocolConstants.SIZE_5IN1,
    Protocol.BRESSER_6IN1: ProtocolConstants.SIZE_6IN1,
    Protocol.BRESSER_7IN1: ProtocolConstants.SIZE_7IN1,
    Protocol.BRESSER_LEAKAGE: ProtocolConstants.SIZE_LEAKAGE,
    Protocol.BRESSER_LIGHTNING: ProtocolConstants.SIZE_LIGHTNING,
}
"""Fixed payload size per protocol."""

SOIL_MOISTURE_MAP: Final[tuple[int, ...]] = (
    0, 7, 13, 20, 27, 33, 40, 47, 53, 60, 67, 73, 80, 87, 93, 99,
)
"""Soil moisture percentages of the 16 levels reported by soil sensors."""

WIND_DIRECTION_STEP: Final[float] = 22.5
"""Width of one 5-in-1 wind direction sector in degrees."""

WIND_DIRECTION_MAX: Final[float] = 360.0
"""Largest wind direction accepted in strict mode (same as 0 degrees)."""

TEMPERATURE_LIMIT: Final[float] = 99.9
"""Largest temperature magnitude a three-digit, one-decimal field carries."""
