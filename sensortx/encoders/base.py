"""
Payload encoder strategy interface.

Each protocol variant (5-in-1, 6-in-1, 7-in-1, lightning, leakage) has one
encoder strategy that turns a SensorReading into the fixed-size payload the
protocol's receivers expect. Encoders are registered with the
EncoderSelector and looked up by Protocol.

The shared encode() flow:
1. Reject unsupported subtypes: log a warning, return an empty payload
2. Allocate a zeroed buffer of the protocol's payload size
3. Let the strategy fill in fields, integrity codes and whitening
4. Return an immutable copy owned by the caller
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sensortx.exceptions import FieldRangeError
from sensortx.protocol.constants import PAYLOAD_SIZES, TEMPERATURE_LIMIT, WIND_DIRECTION_MAX
from sensortx.protocol.encoding import bytes_to_hex, decimal_digits, fit_unsigned

if TYPE_CHECKING:
    from sensortx.models.reading import SensorReading, SensorSubtype
    from sensortx.protocol.constants import Protocol

# Module logger
logger = logging.getLogger(__name__)


class PayloadEncoder(ABC):
    """
    Abstract base class for protocol payload encoders.

    Implementations should:
    1. Define the protocol and supported_subtypes properties
    2. Implement _encode_into() to write every field of the payload

    Attributes:
        strict: Whether out-of-range values raise FieldRangeError (True)
            or are wrapped to the field width (False).
    """

    def __init__(self, *, strict: bool = True) -> None:
        """
        Initialize the encoder.

        Args:
            strict: Raise FieldRangeError for values that do not fit their
                wire field instead of wrapping them.
        """
        self._strict = strict

    @property
    @abstractmethod
    def protocol(self) -> Protocol:
        """
        The protocol this encoder produces.

        Returns:
            Protocol enum value.
        """
        ...

    @property
    @abstractmethod
    def supported_subtypes(self) -> frozenset[SensorSubtype]:
        """Sensor subtypes this protocol can carry."""
        ...

    @property
    def payload_size(self) -> int:
        """Fixed payload size in bytes."""
        return PAYLOAD_SIZES[self.protocol]

    @property
    def strict(self) -> bool:
        """Whether out-of-range values raise instead of wrapping."""
        return self._strict

    def encode(self, reading: SensorReading) -> bytes:
        """
        Encode a reading into a payload.

        Args:
            reading: Sensor sample to encode.

        Returns:
            Payload of ``payload_size`` bytes, or ``b""`` if the reading's
            subtype is not supported by this protocol.

        Raises:
            FieldRangeError: In strict mode, if a value does not fit its field.
        """
        if reading.subtype not in self.supported_subtypes:
            logger.warning(
                "%s: unsupported sensor subtype %s, no payload generated",
                self.protocol.name,
                reading.subtype.name,
            )
            return b""

        msg = bytearray(self.payload_size)
        self._encode_into(msg, reading)

        logger.debug("%s payload: %s", self.protocol.name, bytes_to_hex(msg))
        return bytes(msg)

    @abstractmethod
    def _encode_into(self, msg: bytearray, reading: SensorReading) -> None:
        """
        Write all payload fields into a zeroed buffer.

        Args:
            msg: Zeroed buffer of ``payload_size`` bytes.
            reading: Sensor sample with a supported subtype.
        """
        ...

    def _digits(
        self,
        value: float,
        digits: int,
        decimals: int = 0,
        *,
        field: str,
    ) -> tuple[int, ...]:
        """Decimal digits of a field, honouring the encoder's range policy."""
        return decimal_digits(value, digits, decimals, field=field, strict=self._strict)

    def _unsigned(self, value: int, bits: int, *, field: str) -> int:
        """Binary field value, honouring the encoder's range policy."""
        return fit_unsigned(value, bits, field=field, strict=self._strict)

    def _temperature(self, temp_c: float) -> float:
        """
        Temperature rounded to 0.1 °C, checked against the signed field range.

        Sign and digits must both be taken from this value: rounding first
        keeps e.g. -0.04 (sent as 0.0) and -0.05 (sent as -0.1) consistent.

        Raises:
            FieldRangeError: If the value is not finite, or in strict mode
                when it rounds outside -99.9..99.9.
        """
        if not math.isfinite(temp_c):
            raise FieldRangeError("temp_c", temp_c, minimum=-TEMPERATURE_LIMIT, maximum=TEMPERATURE_LIMIT)
        rounded = round(temp_c, 1)
        if self._strict and abs(rounded) > TEMPERATURE_LIMIT:
            raise FieldRangeError("temp_c", temp_c, minimum=-TEMPERATURE_LIMIT, maximum=TEMPERATURE_LIMIT)
        # Adding 0.0 turns -0.0 into 0.0
        return rounded + 0.0

    def _wind_direction(self, direction: float) -> float:
        """
        Wind direction in degrees, checked against 0..360 in strict mode.

        Raises:
            FieldRangeError: If the value is not finite, or in strict mode
                when it is outside 0..360.
        """
        if not math.isfinite(direction) or (
            self._strict and not 0 <= direction <= WIND_DIRECTION_MAX
        ):
            raise FieldRangeError(
                "wind_direction_deg", direction, minimum=0, maximum=WIND_DIRECTION_MAX
            )
        return direction

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strict={self._strict})"
