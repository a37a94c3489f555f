"""
Protocol layer for Bresser sensor emulation.

This module contains the low-level protocol handling:
- Protocol identifiers and wire constants
- Integrity codes (CRC-16, LFSR digest, byte sum, bit count)
- Digit/nibble packing, inversion and whitening utilities
- Preamble/syncword framing
"""

from sensortx.protocol.checksums import add_bytes, count_set_bits, crc16, lfsr_digest16
from sensortx.protocol.constants import (
    PAYLOAD_SIZES,
    SOIL_MOISTURE_MAP,
    Protocol,
    ProtocolConstants,
)
from sensortx.protocol.encoding import (
    bytes_to_hex,
    decimal_digits,
    fit_unsigned,
    hex_to_bytes,
    invert_bytes,
    pack_nibbles,
    whiten,
)
from sensortx.protocol.framing import frame_payload, write_preamble

__all__ = [
    # Constants
    "Protocol",
    "ProtocolConstants",
    "PAYLOAD_SIZES",
    "SOIL_MOISTURE_MAP",
    # Checksums
    "crc16",
    "lfsr_digest16",
    "add_bytes",
    "count_set_bits",
    # Encoding
    "decimal_digits",
    "fit_unsigned",
    "pack_nibbles",
    "invert_bytes",
    "whiten",
    "hex_to_bytes",
    "bytes_to_hex",
    # Framing
    "write_preamble",
    "frame_payload",
]
