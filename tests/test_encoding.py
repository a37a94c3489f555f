"""Tests for digit, nibble and byte encoding utilities."""

import math

import pytest

from sensortx.exceptions import FieldRangeError, ParseError
from sensortx.protocol.encoding import (
    bytes_to_hex,
    decimal_digits,
    fit_unsigned,
    hex_to_bytes,
    invert_bytes,
    pack_nibbles,
    put_uint16_be,
    put_uint32_be,
    whiten,
)


class TestDecimalDigits:
    """Tests for decimal digit extraction."""

    @pytest.mark.parametrize(
        "value,digits,decimals,expected",
        [
            (2.2, 3, 1, (0, 2, 2)),
            (12.3, 3, 1, (1, 2, 3)),
            (123.4, 4, 1, (1, 2, 3, 4)),
            (123.4, 6, 1, (0, 0, 1, 2, 3, 4)),
            (44, 2, 0, (4, 4)),
            (7, 2, 0, (0, 7)),
            (111.1, 3, 0, (1, 1, 1)),
            (1.234, 6, 3, (0, 0, 1, 2, 3, 4)),
            (0, 3, 1, (0, 0, 0)),
        ],
    )
    def test_digits(self, value, digits, decimals, expected):
        """Test digit extraction for typical field shapes."""
        assert decimal_digits(value, digits, decimals, field="x") == expected

    def test_rounds_like_printf(self):
        """Test that values are rounded to the field's decimals."""
        assert decimal_digits(3.36, 3, 1, field="x") == (0, 3, 4)
        assert decimal_digits(99.4, 2, field="x") == (9, 9)

    def test_overflow_strict_raises(self):
        """Test that a value needing more digits raises in strict mode."""
        with pytest.raises(FieldRangeError) as exc_info:
            decimal_digits(100, 2, field="humidity")
        assert exc_info.value.field == "humidity"
        assert exc_info.value.maximum == 99

    def test_rounding_overflow_strict_raises(self):
        """Test that rounding up past the field width raises."""
        with pytest.raises(FieldRangeError):
            decimal_digits(99.96, 3, 1, field="wind_gust")

    def test_overflow_wraps_when_not_strict(self):
        """Test that low-order digits are kept in wrap mode."""
        assert decimal_digits(123, 2, field="humidity", strict=False) == (2, 3)
        assert decimal_digits(12345.6, 5, 1, field="rain_mm", strict=False) == (2, 3, 4, 5, 6)

    def test_negative_strict_raises(self):
        """Test that negative values raise in strict mode."""
        with pytest.raises(FieldRangeError):
            decimal_digits(-1.5, 3, 1, field="wind_avg")

    def test_negative_uses_magnitude_when_not_strict(self):
        """Test that negative values are encoded by magnitude in wrap mode."""
        assert decimal_digits(-1.5, 3, 1, field="wind_avg", strict=False) == (0, 1, 5)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_always_raises(self, value):
        """Test that NaN and infinities raise in both modes."""
        with pytest.raises(FieldRangeError):
            decimal_digits(value, 3, 1, field="temp_c")
        with pytest.raises(FieldRangeError):
            decimal_digits(value, 3, 1, field="temp_c", strict=False)

    def test_range_error_is_value_error(self):
        """Test that FieldRangeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            decimal_digits(1000, 3, field="x")

    def test_range_error_message(self):
        """Test the range error message names field and bounds."""
        with pytest.raises(FieldRangeError) as exc_info:
            decimal_digits(100, 2, field="humidity")
        assert "humidity" in str(exc_info.value)
        assert "0..99" in str(exc_info.value)


class TestFitUnsigned:
    """Tests for binary field fitting."""

    def test_in_range(self):
        """Test values inside the field width."""
        assert fit_unsigned(0xFFF, 12, field="x") == 0xFFF

    def test_overflow_strict_raises(self):
        """Test overflow in strict mode."""
        with pytest.raises(FieldRangeError):
            fit_unsigned(0x1000, 12, field="x")

    def test_negative_strict_raises(self):
        """Test negative values in strict mode."""
        with pytest.raises(FieldRangeError):
            fit_unsigned(-1, 8, field="x")

    def test_masks_when_not_strict(self):
        """Test masking in wrap mode."""
        assert fit_unsigned(0x1234, 12, field="x", strict=False) == 0x234
        assert fit_unsigned(300, 8, field="x", strict=False) == 44


class TestByteHelpers:
    """Tests for nibble packing, inversion and whitening."""

    def test_pack_nibbles(self):
        """Test packing two nibbles."""
        assert pack_nibbles(4, 4) == 0x44
        assert pack_nibbles(0xA, 0x5) == 0xA5

    def test_pack_nibbles_masks(self):
        """Test that out-of-range nibbles are masked."""
        assert pack_nibbles(0x1F, 0x12) == 0xF2

    def test_invert_bytes_range(self):
        """Test that only the half-open range is inverted."""
        buffer = bytearray([0x00, 0x0F, 0xF0, 0x55])
        invert_bytes(buffer, 1, 3)
        assert buffer == bytearray([0x00, 0xF0, 0x0F, 0x55])

    def test_whiten_twice_restores(self):
        """Test that whitening is its own inverse."""
        original = bytes(range(26))
        buffer = bytearray(original)
        whiten(buffer, 0xAA)
        assert buffer[0] == 0xAA
        whiten(buffer, 0xAA)
        assert bytes(buffer) == original

    def test_put_uint16_be(self):
        """Test big-endian 16-bit writes."""
        buffer = bytearray(4)
        put_uint16_be(buffer, 1, 0xBEEF)
        assert buffer == bytearray([0x00, 0xBE, 0xEF, 0x00])

    def test_put_uint32_be(self):
        """Test big-endian 32-bit writes."""
        buffer = bytearray(6)
        put_uint32_be(buffer, 2, 0x12345678)
        assert buffer == bytearray([0, 0, 0x12, 0x34, 0x56, 0x78])


class TestHexConversion:
    """Tests for hex string conversion."""

    def test_hex_to_bytes_with_spaces(self):
        """Test that spaced dumps are accepted."""
        assert hex_to_bytes("EA EC 7F") == bytes([0xEA, 0xEC, 0x7F])

    def test_hex_to_bytes_from_bytes(self):
        """Test that bytes input is decoded as ASCII."""
        assert hex_to_bytes(b"0aff") == bytes([0x0A, 0xFF])

    def test_hex_to_bytes_invalid(self):
        """Test that invalid hex raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            hex_to_bytes("ZZ")
        assert exc_info.value.raw_data == "ZZ"

    def test_bytes_to_hex(self):
        """Test uppercase spaced output."""
        assert bytes_to_hex(b"\x8f\x12\x34") == "8F 12 34"
        assert bytes_to_hex(b"\x8f\x12\x34", sep="") == "8F1234"
