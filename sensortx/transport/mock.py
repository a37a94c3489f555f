"""
Mock transport for testing.

Records every frame written so tests can check what would have been
sent on air without a radio attached.

Example:
    >>> from sensortx.transport import MockTransport
    >>> from sensortx import SensorTransmitter
    >>>
    >>> mock = MockTransport()
    >>> async with SensorTransmitter(mock) as transmitter:
    ...     await transmitter.transmit(reading)
    >>> mock.last_written[:6].hex()
    'aaaaaaaa2dd4'
"""

from __future__ import annotations

from sensortx.exceptions import TransportError
from sensortx.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    Attributes:
        written_data: List of all frames written to the transport.

    Example:
        >>> mock = MockTransport()
        >>> async with mock:
        ...     await mock.write(b"test")
        >>> mock.written_data
        [b'test']
    """

    def __init__(self, port_name: str = "mock://radio") -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock transport.
        """
        self._port_name = port_name
        self._is_open = False
        self._written_data: list[bytes] = []

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def port_name(self) -> str:
        """Get the mock port name."""
        return self._port_name

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    def clear(self) -> None:
        """Clear the written data history."""
        self._written_data.clear()

    async def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    async def close(self) -> None:
        """Close the mock transport."""
        self._is_open = False

    async def write(self, data: bytes) -> None:
        """
        Record a frame.

        Raises:
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")
        self._written_data.append(bytes(data))

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected.hex()}, got {actual.hex()}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert the number of write operations.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Expected {expected} writes, got {actual}")

    def __repr__(self) -> str:
        status = "open" if self._is_open else "closed"
        return f"MockTransport({self._port_name!r}, {status}, writes={len(self._written_data)})"
