"""
Integrity codes used by the Bresser sensor protocols.

Four primitives cover all protocol variants:
- CRC-16, MSB first, configurable polynomial and initial value (lightning, leakage)
- Keyed LFSR-16 digest (6-in-1, 7-in-1)
- Plain additive byte sum (6-in-1 checksum byte)
- Set-bit count (5-in-1 checksum byte)

All functions are pure and accept any bytes-like object or sequence of
byte values.
"""

from __future__ import annotations

from collections.abc import Iterable


def crc16(message: Iterable[int], polynomial: int, init: int = 0x0000) -> int:
    """
    Calculate a bitwise CRC-16 over the message.

    Each byte is XORed into the top of the 16-bit remainder and shifted out
    MSB first, one polynomial-conditional shift per bit. No reflection and
    no final XOR.

    Args:
        message: Bytes to checksum.
        polynomial: Generator polynomial (e.g. 0x1021).
        init: Initial remainder.

    Returns:
        16-bit CRC value.

    Example:
        >>> hex(crc16(b"123456789", 0x1021))
        '0x31c3'
    """
    remainder = init & 0xFFFF
    for byte in message:
        remainder ^= (byte & 0xFF) << 8
        for _ in range(8):
            if remainder & 0x8000:
                remainder = ((remainder << 1) ^ polynomial) & 0xFFFF
            else:
                remainder = (remainder << 1) & 0xFFFF
    return remainder


def lfsr_digest16(message: Iterable[int], generator: int, key: int) -> int:
    """
    Calculate the keyed LFSR-16 digest over the message.

    For every message bit, MSB first, the current key is XORed into the
    running sum when the bit is set; the key is then rolled right by one,
    XORing in the generator when the dropped bit was 1.

    Args:
        message: Bytes to digest.
        generator: LFSR generator polynomial (e.g. 0x8810).
        key: Initial key.

    Returns:
        16-bit digest value.

    Example:
        >>> hex(lfsr_digest16(b"\\x80", 0x8810, 0x5412))
        '0x5412'
    """
    digest = 0
    key &= 0xFFFF
    for byte in message:
        for bit in range(7, -1, -1):
            if (byte >> bit) & 1:
                digest ^= key
            if key & 1:
                key = (key >> 1) ^ generator
            else:
                key >>= 1
    return digest & 0xFFFF


def add_bytes(message: Iterable[int]) -> int:
    """
    Sum the byte values of the message.

    No modular reduction is applied; callers reduce as the protocol
    requires, e.g. ``0xFF - (add_bytes(data) & 0xFF)``.

    Example:
        >>> add_bytes(b"\\xff\\xff")
        510
    """
    return sum(message)


def count_set_bits(message: Iterable[int]) -> int:
    """
    Count the bits set across all bytes of the message.

    Example:
        >>> count_set_bits(b"\\x13\\x80")
        4
    """
    return sum(bin(byte & 0xFF).count("1") for byte in message)
