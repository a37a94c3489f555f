"""
Input parsers.

Turn JSON text into SensorReading instances, or hex dumps into raw
payloads.
"""

from sensortx.parsers.reading_parser import iter_readings, parse_raw_payload, parse_reading

__all__ = [
    "iter_readings",
    "parse_raw_payload",
    "parse_reading",
]
