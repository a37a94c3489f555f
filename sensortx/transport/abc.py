"""
Abstract transport interface for the radio link.

A transport hands framed payloads to whatever puts them on air, typically
a serial-attached radio bridge that forwards every frame verbatim. The
link is write-only: emulated sensors never receive.

The transport layer is responsible for:
- Opening/closing the physical connection
- Writing framed payloads

Implementations:
- AsyncSerialTransport: pyserial-asyncio based serial port
- MockTransport: For testing without hardware
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for radio link transports.

    Transports support async context manager protocol for safe resource
    management:

        async with AsyncSerialTransport("/dev/ttyUSB0") as transport:
            await transport.write(frame)

    Attributes:
        is_open: Whether the transport connection is currently open.
        port_name: Identifier for the transport (e.g., serial port name).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """Get the transport identifier (e.g., "/dev/ttyUSB0", "COM3")."""
        ...

    @abstractmethod
    async def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the transport connection.

        Safe to call multiple times. After closing, the transport can be
        reopened with open().
        """
        ...

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Write one complete frame (preamble, syncword and payload).

        Args:
            data: Bytes to send.

        Raises:
            TransportError: If the transport is not open or write fails.
            TimeoutError: If the frame could not be handed off in time.
        """
        ...

    async def __aenter__(self) -> AbstractTransport:
        """Async context manager entry - opens the transport."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes the transport."""
        await self.close()
