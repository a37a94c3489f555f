"""
Frame prefix for Bresser sensor transmissions.

Every payload goes on air behind the same 6-byte prefix:

    AA AA AA AA 2D D4 <payload...>

The 4-byte preamble lets the receiver lock its bit clock and the 2-byte
syncword marks the payload start. The prefix is the same for all protocols.
"""

from __future__ import annotations

from sensortx.protocol.constants import ProtocolConstants


def write_preamble(buffer: bytearray, offset: int = 0) -> int:
    """
    Write the preamble and syncword into ``buffer`` at ``offset``.

    Args:
        buffer: Destination buffer with room for the 6-byte prefix.
        offset: Position of the first preamble byte.

    Returns:
        Number of bytes written (always 6).

    Raises:
        ValueError: If the buffer is too small.
    """
    length = ProtocolConstants.FRAME_PREFIX_LENGTH
    if offset < 0 or len(buffer) < offset + length:
        raise ValueError(
            f"Buffer of {len(buffer)} bytes cannot hold frame prefix at offset {offset}"
        )

    buffer[offset:offset + length] = ProtocolConstants.PREAMBLE + ProtocolConstants.SYNC_WORD
    return length


def frame_payload(payload: bytes | bytearray) -> bytes:
    """
    Prepend the preamble and syncword to a payload.

    Example:
        >>> frame_payload(b"\\x01").hex()
        'aaaaaaaa2dd401'
    """
    frame = bytearray(ProtocolConstants.FRAME_PREFIX_LENGTH + len(payload))
    prefix_length = write_preamble(frame)
    frame[prefix_length:] = payload
    return bytes(frame)
