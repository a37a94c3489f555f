"""
Pydantic models for emulated sensor readings.

A SensorReading is one logical sample handed to an encoder. It is built by
the front end (JSON input, programmatic synthesis, test vectors) once per
transmission cycle and is never modified afterwards.

Design principles:
- Models are frozen (immutable)
- Only types are validated here; whether a value fits a given wire field is
  decided by the encoder, which knows the field widths
- Field names match the JSON keys accepted by the reading parser
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SensorSubtype(IntEnum):
    """
    Sensor capability class, as carried in the subtype nibble on air.

    Values are the wire values used by the Bresser protocols and their
    third-party receivers.
    """

    WEATHER0 = 0
    """Weather station reporting with the 5-in-1 subtype value."""

    WEATHER = 1
    """Weather station (wind, rain, temperature, humidity, UV, light)."""

    THERMO_HYGRO = 2
    """Thermo-/hygrometer."""

    POOL_THERMO = 3
    """Pool thermometer (temperature only)."""

    SOIL = 4
    """Soil temperature and moisture sensor."""

    LEAKAGE = 5
    """Water leakage sensor."""

    AIR_PM = 8
    """Air quality sensor (PM2.5 / PM10)."""

    LIGHTNING = 9
    """Lightning sensor."""


class SensorReading(BaseModel):
    """
    One logical sensor sample.

    Which measurement fields are used depends on the protocol and subtype;
    unused fields keep their zero defaults.

    Example:
        >>> reading = SensorReading(
        ...     sensor_id=255,
        ...     subtype=SensorSubtype.WEATHER,
        ...     temp_c=12.3,
        ...     humidity=44,
        ... )
        >>> reading.battery_ok
        True
    """

    model_config = ConfigDict(frozen=True)

    sensor_id: int = Field(ge=0, le=0xFFFFFFFF, description="Sensor ID (8/16/32 bits used per protocol)")
    subtype: SensorSubtype = Field(default=SensorSubtype.WEATHER, description="Sensor subtype")
    channel: int = Field(default=0, ge=0, le=7, description="Channel number")
    startup: bool = Field(default=False, description="True during the first hour after power-on")
    battery_ok: bool = Field(default=True, description="Battery state")

    # Weather / thermo-hygro / soil / pool
    temp_c: float = Field(default=0.0, description="Temperature in °C")
    humidity: int = Field(default=0, description="Relative humidity in %")
    wind_gust: float = Field(default=0.0, description="Wind gust speed in m/s")
    wind_avg: float = Field(default=0.0, description="Average wind speed in m/s")
    wind_direction_deg: float = Field(default=0.0, description="Wind direction in degrees")
    rain_mm: float = Field(default=0.0, description="Rain accumulation in mm")
    uv: float = Field(default=0.0, description="UV index")
    light_klx: float = Field(default=0.0, description="Illuminance in klx")
    moisture: int = Field(default=0, description="Soil moisture in %")

    # Air quality
    pm_2_5: int = Field(default=0, description="PM2.5 concentration in µg/m³")
    pm_10: int = Field(default=0, description="PM10 concentration in µg/m³")

    # Lightning
    strike_count: int = Field(default=0, description="Lightning strike counter")
    distance_km: int = Field(default=0, description="Distance to last strike in km")

    # Leakage
    alarm: bool = Field(default=False, description="Leakage alarm active")

    @field_validator("subtype", mode="before")
    @classmethod
    def parse_subtype_name(cls, v: Any) -> Any:
        """Accept subtype names such as "weather" or "SOIL"."""
        if not isinstance(v, str):
            return v
        name = v.strip()
        if name.isdigit():
            return int(name)
        try:
            return SensorSubtype[name.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown sensor subtype: {v!r}") from None

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` representation."""
        return self.model_dump()

    def to_json(self) -> str:
        """Return a compact JSON string."""
        return self.model_dump_json()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SensorReading:
        """Construct a ``SensorReading`` from a plain dict."""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, text: str | bytes) -> SensorReading:
        """Construct a ``SensorReading`` from a JSON object string."""
        return cls.model_validate_json(text)

    def __repr__(self) -> str:
        return (
            f"SensorReading(id=0x{self.sensor_id:X}, subtype={self.subtype.name}, "
            f"ch={self.channel})"
        )
