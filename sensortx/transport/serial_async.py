"""
Async serial transport using pyserial-asyncio.

Sends frames to a serial-attached radio bridge, which transmits each frame
it receives verbatim on 868 MHz.

Serial Configuration:
- Baud rate: 115200 (default)
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None

Example:
    >>> transport = AsyncSerialTransport("/dev/ttyUSB0")
    >>> async with transport:
    ...     await transport.write(frame)
"""

from __future__ import annotations

import asyncio
import logging

import serial
import serial_asyncio

from sensortx.exceptions import TimeoutError, TransportError
from sensortx.protocol.constants import ProtocolConstants
from sensortx.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class AsyncSerialTransport(AbstractTransport):
    """
    Async serial transport using pyserial-asyncio.

    Attributes:
        port_name: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
        is_open: Whether the port is currently open.

    Example:
        >>> transport = AsyncSerialTransport("/dev/ttyUSB0", baudrate=115200)
        >>> await transport.open()
        >>> try:
        ...     await transport.write(frame)
        ... finally:
        ...     await transport.close()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        write_timeout: float = ProtocolConstants.DEFAULT_WRITE_TIMEOUT,
    ) -> None:
        """
        Initialize the async serial transport.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
            baudrate: Baud rate (default: 115200).
            write_timeout: Seconds allowed for a frame to drain (default: 5.0).
        """
        self._port = port
        self._baudrate = baudrate
        self._write_timeout = write_timeout
        self._writer: asyncio.StreamWriter | None = None

    @property
    def is_open(self) -> bool:
        """Check if the serial port is currently open."""
        return self._writer is not None and not self._writer.is_closing()

    @property
    def port_name(self) -> str:
        """Get the serial port path."""
        return self._port

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    @property
    def write_timeout(self) -> float:
        """Get the write timeout in seconds."""
        return self._write_timeout

    async def open(self) -> None:
        """
        Open the serial port connection (8N1, no flow control).

        Raises:
            TransportError: If the port cannot be opened.
        """
        if self.is_open:
            return

        try:
            _, self._writer = await serial_asyncio.open_serial_connection(
                url=self._port,
                baudrate=self._baudrate,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                bytesize=serial.EIGHTBITS,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open serial port {self._port}: {e}") from e
        except OSError as e:
            raise TransportError(f"OS error opening {self._port}: {e}") from e

        logger.info("Opened %s at %d baud", self._port, self._baudrate)

    async def close(self) -> None:
        """
        Close the serial port connection.

        Safe to call multiple times.
        """
        if self._writer is not None:
            self._writer.close()
            try:
                await self._writer.wait_closed()
            except (OSError, serial.SerialException) as e:
                logger.debug("Error while closing %s: %s", self._port, e)
            logger.info("Closed %s", self._port)

        self._writer = None

    async def write(self, data: bytes) -> None:
        """
        Write a frame to the serial port and wait until it has drained.

        Raises:
            TransportError: If the port is not open or write fails.
            TimeoutError: If the frame does not drain within write_timeout.
        """
        if not self.is_open:
            raise TransportError("Serial port is not open")

        try:
            self._writer.write(data)
            await asyncio.wait_for(self._writer.drain(), timeout=self._write_timeout)
        except asyncio.TimeoutError:
            raise TimeoutError(
                f"Timeout writing {len(data)} bytes to {self._port}",
                timeout_seconds=self._write_timeout,
            ) from None
        except (OSError, serial.SerialException) as e:
            raise TransportError(f"Write failed: {e}") from e

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"AsyncSerialTransport({self._port!r}, baudrate={self._baudrate}, {status})"
