"""
Sensor reading input parsers.

Readings arrive as JSON objects, one per line when read from a console or
file, with keys matching the SensorReading field names:

    {"sensor_id": 255, "subtype": "weather", "temp_c": 12.3, "humidity": 44}

Pre-built payloads can be supplied as hex dumps instead, in which case
only their size is checked against the target protocol.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from sensortx.exceptions import ParseError, PayloadError
from sensortx.models.reading import SensorReading
from sensortx.protocol.constants import PAYLOAD_SIZES, Protocol
from sensortx.protocol.encoding import hex_to_bytes

# Module logger
logger = logging.getLogger(__name__)


def parse_reading(text: str | bytes) -> SensorReading:
    """
    Parse one JSON object into a SensorReading.

    Args:
        text: JSON object text.

    Returns:
        Validated reading.

    Raises:
        ParseError: If the JSON is malformed or a field is missing/invalid.

    Example:
        >>> reading = parse_reading('{"sensor_id": 255, "temp_c": 12.3}')
        >>> reading.temp_c
        12.3
    """
    try:
        return SensorReading.from_json(text)
    except ValidationError as e:
        raw = text.decode("utf-8", errors="replace") if isinstance(text, bytes) else text
        raise ParseError(f"Invalid sensor reading: {e.error_count()} error(s)", raw_data=raw) from e


def iter_readings(
    lines: Iterable[str | bytes],
    *,
    skip_invalid: bool = True,
) -> Iterator[SensorReading]:
    """
    Parse readings from JSON lines.

    Blank lines are ignored.

    Args:
        lines: Iterable of JSON lines (e.g. an open text file).
        skip_invalid: Log and skip lines that fail to parse instead of
            raising.

    Yields:
        One SensorReading per valid line.

    Raises:
        ParseError: For an invalid line when ``skip_invalid`` is False.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_reading(line)
        except ParseError as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping line %d: %s", line_number, e)


def parse_raw_payload(hex_text: str | bytes, protocol: Protocol | int | str) -> bytes:
    """
    Decode a hex payload dump and check its size.

    Args:
        hex_text: Hex string, spaces between bytes allowed.
        protocol: Protocol the payload is meant for.

    Returns:
        Payload bytes.

    Raises:
        ParseError: If the text is not valid hex.
        PayloadError: If the payload size does not match the protocol.
    """
    protocol = Protocol.parse(protocol)
    payload = hex_to_bytes(hex_text)
    expected = PAYLOAD_SIZES[protocol]
    if len(payload) != expected:
        raise PayloadError(
            f"Wrong payload size for {protocol.name}",
            expected=expected,
            received=len(payload),
        )
    return payload
