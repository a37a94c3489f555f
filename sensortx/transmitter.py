"""
Sensor transmitter.

Ties the pieces together: a SensorReading is encoded with the active
protocol's encoder, framed with the preamble and syncword, and written to
the radio transport.

States:
    CLOSED -> open() / async with -> IDLE
    IDLE -> transmit() -> TRANSMITTING -> IDLE
    IDLE -> close() -> CLOSED

Example:
    >>> from sensortx import SensorTransmitter, SensorReading, Protocol
    >>> from sensortx.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     transport = AsyncSerialTransport("/dev/ttyUSB0")
    ...     async with SensorTransmitter(transport, Protocol.BRESSER_6IN1) as tx:
    ...         await tx.run(readings, interval=30)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from enum import Enum, auto
from typing import TYPE_CHECKING

from sensortx.encoders.selector import create_default_selector
from sensortx.exceptions import PayloadError
from sensortx.protocol.constants import PAYLOAD_SIZES, Protocol, ProtocolConstants
from sensortx.protocol.encoding import bytes_to_hex
from sensortx.protocol.framing import frame_payload

if TYPE_CHECKING:
    from types import TracebackType

    from sensortx.encoders.selector import EncoderSelector
    from sensortx.models.reading import SensorReading
    from sensortx.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class TransmitterState(Enum):
    """Sensor transmitter states."""

    CLOSED = auto()
    """Transport not open."""

    IDLE = auto()
    """Transport open, waiting for the next reading."""

    TRANSMITTING = auto()
    """A frame is being handed to the transport."""


class SensorTransmitter:
    """
    Emulated sensor: encodes readings and sends them as radio frames.

    Attributes:
        protocol: Active over-the-air protocol.
        state: Current transmitter state.
        frames_sent: Number of frames written since creation.
        transport: The underlying transport layer.

    Example:
        >>> transmitter = SensorTransmitter(MockTransport(), "6in1")
        >>> async with transmitter:
        ...     frame = await transmitter.transmit(reading)
    """

    def __init__(
        self,
        transport: AbstractTransport,
        protocol: Protocol | int | str = Protocol.BRESSER_5IN1,
        *,
        selector: EncoderSelector | None = None,
        interval: float = ProtocolConstants.DEFAULT_TX_INTERVAL,
        strict: bool = True,
    ) -> None:
        """
        Initialize the transmitter.

        Args:
            transport: Transport layer for the radio link.
            protocol: Protocol to emulate; anything Protocol.parse accepts.
            selector: Encoder selector; a default one with all built-in
                encoders is created if omitted.
            interval: Default seconds between transmissions in run().
            strict: Range policy for the default selector's encoders.
                Ignored when a selector is given.
        """
        self._transport = transport
        self._protocol = Protocol.parse(protocol)
        self._selector = selector if selector is not None else create_default_selector(strict=strict)
        self._interval = interval
        self._transmitting = False
        self._frames_sent = 0

    @property
    def protocol(self) -> Protocol:
        """Get the active protocol."""
        return self._protocol

    @property
    def state(self) -> TransmitterState:
        """Get the current transmitter state."""
        if self._transmitting:
            return TransmitterState.TRANSMITTING
        if self._transport.is_open:
            return TransmitterState.IDLE
        return TransmitterState.CLOSED

    @property
    def frames_sent(self) -> int:
        """Get the number of frames written so far."""
        return self._frames_sent

    @property
    def interval(self) -> float:
        """Get the default transmit interval in seconds."""
        return self._interval

    @property
    def selector(self) -> EncoderSelector:
        """Get the encoder selector."""
        return self._selector

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    def select_protocol(self, protocol: Protocol | int | str) -> Protocol:
        """
        Switch the emulated protocol.

        Args:
            protocol: Enum member, integer value or name ("7in1", "lightning").

        Returns:
            The newly active protocol.

        Raises:
            ValueError: If the value does not name a protocol.
        """
        self._protocol = Protocol.parse(protocol)
        logger.info("Selected protocol %s", self._protocol.name)
        return self._protocol

    async def open(self) -> None:
        """Open the transport if it is not open yet."""
        if not self._transport.is_open:
            await self._transport.open()

    async def close(self) -> None:
        """Close the transport."""
        if self._transport.is_open:
            await self._transport.close()

    async def transmit(self, reading: SensorReading) -> bytes:
        """
        Encode, frame and send one reading.

        Args:
            reading: Sensor sample to send.

        Returns:
            The frame written, or ``b""`` if the active encoder produced no
            payload (unsupported subtype); nothing is sent in that case.

        Raises:
            FieldRangeError: If a value does not fit its field (strict mode).
            TransportError: If the transport write fails.
            TimeoutError: If the transport times out.
        """
        payload = self._selector.encode(self._protocol, reading)
        if not payload:
            logger.warning("No payload for %r with %s, nothing sent", reading, self._protocol.name)
            return b""
        return await self._send(payload)

    async def transmit_raw(self, payload: bytes) -> bytes:
        """
        Frame and send a pre-built payload.

        Raises:
            PayloadError: If the payload size does not match the active
                protocol.
        """
        expected = PAYLOAD_SIZES[self._protocol]
        if len(payload) != expected:
            raise PayloadError(
                f"Wrong payload size for {self._protocol.name}",
                expected=expected,
                received=len(payload),
            )
        return await self._send(bytes(payload))

    async def run(
        self,
        readings: Iterable[SensorReading] | AsyncIterable[SensorReading],
        *,
        interval: float | None = None,
        count: int | None = None,
    ) -> int:
        """
        Transmit readings one after another.

        Waits ``interval`` seconds between consecutive readings, like a real
        sensor's transmit cycle.

        Args:
            readings: Sync or async iterable of readings.
            interval: Seconds between transmissions; defaults to the
                transmitter's interval.
            count: Stop after this many frames have been sent.

        Returns:
            Number of frames sent.
        """
        delay = self._interval if interval is None else interval
        sent = 0
        first = True
        if count is not None and count <= 0:
            return sent

        async for reading in _aiter(readings):
            if not first:
                await asyncio.sleep(delay)
            first = False

            if await self.transmit(reading):
                sent += 1
                if count is not None and sent >= count:
                    break

        logger.info("Transmit loop finished after %d frame(s)", sent)
        return sent

    async def _send(self, payload: bytes) -> bytes:
        frame = frame_payload(payload)
        await self.open()

        self._transmitting = True
        try:
            await self._transport.write(frame)
        finally:
            self._transmitting = False

        self._frames_sent += 1
        logger.info(
            "Sent %s frame #%d on %s: %s",
            self._protocol.name,
            self._frames_sent,
            self._transport.port_name,
            bytes_to_hex(payload),
        )
        return frame

    async def __aenter__(self) -> SensorTransmitter:
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

    def __repr__(self) -> str:
        return (
            f"SensorTransmitter(protocol={self._protocol.name}, "
            f"state={self.state.name}, frames={self._frames_sent})"
        )


async def _aiter(
    readings: Iterable[SensorReading] | AsyncIterable[SensorReading],
) -> AsyncIterator[SensorReading]:
    """Iterate sync and async iterables alike."""
    if isinstance(readings, AsyncIterable):
        async for reading in readings:
            yield reading
    else:
        for reading in readings:
            yield reading
