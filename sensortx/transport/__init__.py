"""
Transport layer for the radio link.

Available transports:
- AsyncSerialTransport: Async serial port using pyserial-asyncio
- MockTransport: Mock transport for testing without hardware

Example:
    >>> from sensortx.transport import AsyncSerialTransport
    >>> async with AsyncSerialTransport("/dev/ttyUSB0") as transport:
    ...     await transport.write(frame)
"""

from sensortx.transport.abc import AbstractTransport
from sensortx.transport.mock import MockTransport
from sensortx.transport.serial_async import AsyncSerialTransport

__all__ = [
    "AbstractTransport",
    "AsyncSerialTransport",
    "MockTransport",
]
