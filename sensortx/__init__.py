"""
sensortx - Python library for emulating Bresser 868 MHz weather sensors.

Encodes sensor readings into the exact payloads that Bresser 5-in-1,
6-in-1, 7-in-1, lightning and leakage receivers accept, frames them and
sends them through an async radio transport.

Example:
    >>> from sensortx import SensorReading, SensorTransmitter
    >>> from sensortx.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     transport = AsyncSerialTransport("/dev/ttyUSB0")
    ...     async with SensorTransmitter(transport, "5in1") as transmitter:
    ...         await transmitter.transmit(SensorReading(sensor_id=255, temp_c=12.3))
"""

from sensortx.encoders import (
    EncoderSelector,
    LeakageEncoder,
    LightningEncoder,
    PayloadEncoder,
    ReportPhase,
    Weather5in1Encoder,
    Weather6in1Encoder,
    Weather7in1Encoder,
    create_default_selector,
)
from sensortx.exceptions import (
    FieldRangeError,
    ParseError,
    PayloadError,
    ProtocolError,
    SensorTxError,
    TimeoutError,
    TransportError,
)
from sensortx.models.reading import SensorReading, SensorSubtype
from sensortx.protocol.constants import Protocol, ProtocolConstants
from sensortx.transmitter import SensorTransmitter, TransmitterState
from sensortx.transport import AbstractTransport, AsyncSerialTransport, MockTransport

__version__ = "0.1.0"
__all__ = [
    # Transmitter
    "SensorTransmitter",
    "TransmitterState",
    # Models
    "SensorReading",
    "SensorSubtype",
    "Protocol",
    "ProtocolConstants",
    # Encoders
    "PayloadEncoder",
    "Weather5in1Encoder",
    "Weather6in1Encoder",
    "Weather7in1Encoder",
    "LightningEncoder",
    "LeakageEncoder",
    "ReportPhase",
    "EncoderSelector",
    "create_default_selector",
    # Exceptions
    "SensorTxError",
    "ProtocolError",
    "FieldRangeError",
    "PayloadError",
    "ParseError",
    "TransportError",
    "TimeoutError",
    # Transport
    "AbstractTransport",
    "AsyncSerialTransport",
    "MockTransport",
    # Version
    "__version__",
]
