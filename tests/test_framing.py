"""Tests for preamble/syncword framing."""

import pytest

from sensortx.protocol.constants import ProtocolConstants
from sensortx.protocol.framing import frame_payload, write_preamble


class TestWritePreamble:
    """Tests for write_preamble."""

    def test_writes_prefix(self):
        """Test the exact prefix bytes and returned length."""
        buffer = bytearray(6)
        assert write_preamble(buffer) == 6
        assert buffer == bytearray([0xAA, 0xAA, 0xAA, 0xAA, 0x2D, 0xD4])

    def test_offset(self):
        """Test writing at an offset leaves other bytes untouched."""
        buffer = bytearray([0x11] * 8)
        write_preamble(buffer, 2)
        assert buffer[:2] == bytearray([0x11, 0x11])
        assert buffer[2:] == bytearray(ProtocolConstants.PREAMBLE + ProtocolConstants.SYNC_WORD)

    def test_buffer_too_small(self):
        """Test that a short buffer raises ValueError."""
        with pytest.raises(ValueError):
            write_preamble(bytearray(5))


class TestFramePayload:
    """Tests for frame_payload."""

    def test_prepends_prefix(self):
        """Test that the payload follows the 6-byte prefix."""
        frame = frame_payload(b"\x01\x02")
        assert frame == bytes.fromhex("aaaaaaaa2dd40102")

    def test_length(self):
        """Test frame length for a 26-byte payload."""
        assert len(frame_payload(bytes(26))) == 32

    def test_returns_bytes(self):
        """Test that a bytearray payload gives an immutable frame."""
        assert isinstance(frame_payload(bytearray(10)), bytes)
