"""
Digit, nibble and byte-level encoding utilities.

Bresser payloads carry most measurements as decimal digits packed two per
byte (BCD), taken from the value's fixed-point representation. Digits are
produced with C-style ``%0W.Pf`` formatting so rounding is identical to the
printf-based firmware the receivers were validated against.

For example, a rain total of 123.4 mm in a 4-digit, 1-decimal field:
- ``"%05.1f" % 123.4`` gives ``"123.4"``
- dropping the point gives digits ``(1, 2, 3, 4)``

Range policy: in strict mode a value that needs more digits than the field
has (or is negative) raises FieldRangeError. Otherwise the low-order digits
are kept and negative values are encoded by magnitude.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from sensortx.exceptions import FieldRangeError, ParseError


def decimal_digits(
    value: float,
    digits: int,
    decimals: int = 0,
    *,
    field: str,
    strict: bool = True,
) -> tuple[int, ...]:
    """
    Split a non-negative value into a fixed number of decimal digits.

    Args:
        value: Value to encode.
        digits: Total number of digits in the field.
        decimals: How many of those digits follow the decimal point.
        field: Field name used in error messages.
        strict: Raise on overflow instead of wrapping.

    Returns:
        Tuple of ``digits`` integers (0-9), most significant first.

    Raises:
        FieldRangeError: If the value is not finite, or in strict mode
            when it is negative or needs more than ``digits`` digits.

    Example:
        >>> decimal_digits(2.2, 3, 1, field="wind_avg")
        (0, 2, 2)
        >>> decimal_digits(123.4, 4, 1, field="rain_mm")
        (1, 2, 3, 4)
    """
    maximum = (10**digits - 1) / 10**decimals
    if not math.isfinite(value):
        raise FieldRangeError(field, value, minimum=0, maximum=maximum)

    if value < 0:
        if strict:
            raise FieldRangeError(field, value, minimum=0, maximum=maximum)
        value = -value

    width = digits + 1 if decimals else digits
    text = ("%0*.*f" % (width, decimals, value)).replace(".", "")

    if len(text) > digits:
        if strict:
            raise FieldRangeError(field, value, minimum=0, maximum=maximum)
        text = text[-digits:]

    return tuple(int(char) for char in text)


def fit_unsigned(value: int, bits: int, *, field: str, strict: bool = True) -> int:
    """
    Fit an integer into an unsigned binary field of ``bits`` bits.

    Raises:
        FieldRangeError: In strict mode, if the value does not fit.

    Example:
        >>> fit_unsigned(0x123, 12, field="wind_gust")
        291
        >>> fit_unsigned(0x1234, 12, field="wind_gust", strict=False)
        564
    """
    limit = (1 << bits) - 1
    if strict and not 0 <= value <= limit:
        raise FieldRangeError(field, value, minimum=0, maximum=limit)
    return value & limit


def pack_nibbles(high: int, low: int) -> int:
    """
    Pack two 4-bit values into one byte.

    Example:
        >>> hex(pack_nibbles(4, 4))
        '0x44'
    """
    return ((high & 0x0F) << 4) | (low & 0x0F)


def invert_bytes(buffer: bytearray, start: int, end: int) -> None:
    """Bitwise-invert ``buffer[start:end]`` in place."""
    for i in range(start, end):
        buffer[i] ^= 0xFF


def whiten(buffer: bytearray, mask: int) -> None:
    """XOR every byte of the buffer with ``mask`` in place."""
    for i in range(len(buffer)):
        buffer[i] ^= mask


def put_uint16_be(buffer: bytearray, offset: int, value: int) -> None:
    """Write a 16-bit value, high byte first."""
    buffer[offset] = (value >> 8) & 0xFF
    buffer[offset + 1] = value & 0xFF


def put_uint32_be(buffer: bytearray, offset: int, value: int) -> None:
    """Write a 32-bit value, most significant byte first."""
    buffer[offset:offset + 4] = (value & 0xFFFFFFFF).to_bytes(4, "big")


def hex_to_bytes(hex_string: str | bytes) -> bytes:
    """
    Convert a hex string to bytes.

    Whitespace between bytes is allowed, so payload dumps like
    ``"EA EC 7F"`` can be pasted directly.

    Raises:
        ParseError: If the string is not valid hex.

    Example:
        >>> hex_to_bytes("8F 12 34")
        b'\\x8f\\x124'
    """
    if isinstance(hex_string, bytes):
        hex_string = hex_string.decode("ascii", errors="replace")

    try:
        return bytes.fromhex(hex_string)
    except ValueError as e:
        raise ParseError(f"Invalid hex data: {e}", raw_data=hex_string) from e


def bytes_to_hex(data: Iterable[int], sep: str = " ") -> str:
    """
    Convert bytes to an uppercase hex string.

    Example:
        >>> bytes_to_hex(b"\\x8f\\x124")
        '8F 12 34'
        >>> bytes_to_hex(b"\\x8f\\x124", sep="")
        '8F1234'
    """
    return sep.join(f"{byte:02X}" for byte in data)
