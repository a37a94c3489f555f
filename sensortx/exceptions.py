"""
Exception hierarchy for sensortx.

All exceptions inherit from SensorTxError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Encoding errors (value ranges, payload sizes) are distinct from I/O errors
2. Range errors carry the offending field and its allowed bounds
3. Parse errors keep the raw input for debugging
4. An unsupported sensor subtype is NOT an exception: encoders return an
   empty payload and log a warning instead
"""

from __future__ import annotations


class SensorTxError(Exception):
    """
    Base exception for all sensortx errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all sensortx errors with a single except clause.
    """

    pass


class ProtocolError(SensorTxError):
    """
    Protocol-level error.

    Raised when a payload cannot be built to the wire format, such as:
    - A measurement that does not fit its digit/nibble field
    - A raw payload of the wrong size for the selected protocol
    """

    pass


class FieldRangeError(ProtocolError, ValueError):
    """
    Measurement value outside the range its wire field can carry.

    Raised by encoders in strict mode (the default) instead of silently
    wrapping digits. Also a ValueError so generic validation code catches it.
    """

    def __init__(
        self,
        field: str,
        value: float,
        *,
        minimum: float | None = None,
        maximum: float | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Value {value!r} out of range for field '{field}'")

    def __str__(self) -> str:
        base = super().__str__()
        if self.minimum is not None and self.maximum is not None:
            return f"{base} (allowed {self.minimum:g}..{self.maximum:g})"
        return base


class PayloadError(ProtocolError):
    """
    Payload size mismatch.

    Raised when a pre-built payload does not have the fixed size of the
    protocol it is sent with.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected {self.expected} bytes, got {self.received})"
        return base


class ParseError(SensorTxError):
    """
    Sensor reading input could not be parsed.

    Raised when JSON or hex input cannot be turned into a SensorReading
    or payload, typically due to:
    - Malformed JSON
    - Missing or mistyped fields
    - Invalid hex characters
    """

    def __init__(
        self,
        message: str,
        *,
        raw_data: str | None = None,
    ) -> None:
        super().__init__(message)
        self.raw_data = raw_data

    def __str__(self) -> str:
        base = super().__str__()
        if self.raw_data:
            # Truncate raw data for display
            display_data = self.raw_data[:40] + "..." if len(self.raw_data) > 40 else self.raw_data
            return f"{base} data={display_data}"
        return base


class TransportError(SensorTxError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Serial port errors
    - Writing to a closed link
    - Radio bridge communication failures
    """

    pass


class TimeoutError(SensorTxError):  # noqa: A001 - intentionally shadows builtin
    """
    Transport timeout.

    Raised when a frame cannot be handed to the radio link within the
    configured write timeout.
    """

    def __init__(
        self,
        message: str = "Transport timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base
