"""
Data models for emulated sensor readings.

- SensorSubtype: wire values of the sensor subtype nibble
- SensorReading: immutable input to every encoder
"""

from sensortx.models.reading import SensorReading, SensorSubtype

__all__ = [
    "SensorReading",
    "SensorSubtype",
]
