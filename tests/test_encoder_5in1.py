"""Tests for the Bresser 5-in-1 encoder."""

import pytest

from sensortx.encoders.bresser_5in1 import Weather5in1Encoder
from sensortx.exceptions import FieldRangeError
from sensortx.models.reading import SensorReading, SensorSubtype
from sensortx.protocol.checksums import count_set_bits

# Captured 5-in-1 frame from a real station
REFERENCE_FRAME = bytes.fromhex(
    "EA EC 7F EB 5F EE EF FA FE 76 BB FA FF 15 13 80 14 A0 11 10 05 01 89 44 05 00"
)


def decode_5in1(msg: bytes) -> dict:
    """Receiver-side decoding of a 5-in-1 payload."""
    for i in range(13):
        assert msg[i] ^ 0xFF == msg[i + 13], f"mirror mismatch at byte {i}"
    assert count_set_bits(msg[14:26]) == msg[13]

    sign = -1 if msg[25] & 0x0F else 1
    return {
        "sensor_id": msg[14],
        "subtype": msg[15] & 0x0F,
        "startup": not (msg[15] & 0x80),
        "battery_ok": not (msg[25] & 0x80),
        "wind_gust": (((msg[17] & 0x0F) << 8) | msg[16]) / 10,
        "wind_direction_deg": (msg[17] >> 4) * 22.5,
        "wind_avg": (msg[19] & 0x0F) * 10 + (msg[18] >> 4) + (msg[18] & 0x0F) / 10,
        "temp_c": sign * ((msg[21] & 0x0F) * 10 + (msg[20] >> 4) + (msg[20] & 0x0F) / 10),
        "humidity": (msg[22] >> 4) * 10 + (msg[22] & 0x0F),
        "rain_mm": (msg[24] >> 4) * 100 + (msg[24] & 0x0F) * 10 + (msg[23] >> 4) + (msg[23] & 0x0F) / 10,
    }


@pytest.fixture
def encoder():
    """Create a strict 5-in-1 encoder."""
    return Weather5in1Encoder()


@pytest.fixture
def reading():
    """Weather reading used throughout the 5-in-1 tests."""
    return SensorReading(
        sensor_id=255,
        subtype=SensorSubtype.WEATHER,
        channel=0,
        startup=False,
        battery_ok=True,
        temp_c=12.3,
        humidity=44,
        wind_gust=3.3,
        wind_avg=2.2,
        wind_direction_deg=111.1,
        rain_mm=123.4,
    )


class TestWeather5in1Encoder:
    """Tests for Weather5in1Encoder payload layout."""

    def test_payload_size(self, encoder, reading):
        """Test the fixed payload size."""
        assert len(encoder.encode(reading)) == 26
        assert encoder.payload_size == 26

    def test_exact_payload(self, encoder, reading):
        """Test the full payload for a typical weather reading."""
        expected = bytes.fromhex(
            "E4 00 7E DE AF DD FF DC FE BB CB ED FF "
            "1B FF 81 21 50 22 00 23 01 44 34 12 00"
        )
        assert encoder.encode(reading) == expected

    def test_mirror_and_bit_count(self, encoder, reading):
        """Test the inverted mirror and the bit-count checksum."""
        payload = encoder.encode(reading)
        assert all(payload[i] == payload[i + 13] ^ 0xFF for i in range(13))
        assert payload[13] == count_set_bits(payload[14:])

    def test_roundtrip(self, encoder, reading):
        """Test that a receiver decodes the reading back."""
        decoded = decode_5in1(encoder.encode(reading))
        assert decoded["sensor_id"] == 255
        assert decoded["subtype"] == SensorSubtype.WEATHER
        assert decoded["startup"] is False
        assert decoded["battery_ok"] is True
        assert decoded["humidity"] == 44
        assert decoded["temp_c"] == pytest.approx(12.3, abs=0.1)
        assert decoded["wind_gust"] == pytest.approx(3.3, abs=0.1)
        assert decoded["wind_avg"] == pytest.approx(2.2, abs=0.1)
        assert decoded["rain_mm"] == pytest.approx(123.4, abs=0.1)
        assert abs(decoded["wind_direction_deg"] - 111.1) <= 11.25

    def test_roundtrip_negative_temperature_and_flags(self, encoder):
        """Test sign, startup and battery flags."""
        reading = SensorReading(
            sensor_id=0x1234,
            subtype=SensorSubtype.WEATHER0,
            startup=True,
            battery_ok=False,
            temp_c=-7.8,
            humidity=91,
        )
        payload = encoder.encode(reading)
        decoded = decode_5in1(payload)
        assert decoded["sensor_id"] == 0x34
        assert decoded["subtype"] == SensorSubtype.WEATHER0
        assert decoded["startup"] is True
        assert decoded["battery_ok"] is False
        assert decoded["temp_c"] == pytest.approx(-7.8, abs=0.1)
        assert payload[25] == 0x81

    def test_idempotent(self, encoder, reading):
        """Test that encoding twice gives identical payloads."""
        assert encoder.encode(reading) == encoder.encode(reading)

    @pytest.mark.parametrize(
        "direction,sector",
        [(0.0, 0), (11.2, 0), (11.3, 1), (180.0, 8), (348.7, 15), (355.0, 0), (359.9, 0)],
    )
    def test_direction_sector(self, encoder, direction, sector):
        """Test rounding of the wind direction to 16 sectors."""
        payload = encoder.encode(SensorReading(sensor_id=1, wind_direction_deg=direction))
        assert payload[17] >> 4 == sector

    @pytest.mark.parametrize("direction", [-10.0, 360.1, 400.0])
    def test_direction_out_of_range_strict(self, encoder, direction):
        """Test that directions outside 0..360 raise instead of wrapping."""
        with pytest.raises(FieldRangeError) as exc_info:
            encoder.encode(SensorReading(sensor_id=1, wind_direction_deg=direction))
        assert exc_info.value.field == "wind_direction_deg"
        assert exc_info.value.minimum == 0
        assert exc_info.value.maximum == 360

    def test_direction_wraps_when_not_strict(self):
        """Test that 405 degrees lands in sector 2 in wrap mode."""
        encoder = Weather5in1Encoder(strict=False)
        payload = encoder.encode(SensorReading(sensor_id=1, wind_direction_deg=405.0))
        assert payload[17] >> 4 == 2

    @pytest.mark.parametrize(
        "temp_c,byte20,sign",
        [(-0.04, 0x00, 0), (-0.01, 0x00, 0), (-0.05, 0x01, 1), (-0.06, 0x01, 1)],
    )
    def test_temperature_just_below_zero(self, encoder, temp_c, byte20, sign):
        """Test that the sign nibble follows the value rounded to 0.1 °C."""
        payload = encoder.encode(SensorReading(sensor_id=1, temp_c=temp_c))
        assert payload[20] == byte20
        assert payload[21] == 0x00
        assert payload[25] & 0x0F == sign

    def test_temperature_range_is_signed(self, encoder):
        """Test that a cold overflow reports the negative bound."""
        with pytest.raises(FieldRangeError) as exc_info:
            encoder.encode(SensorReading(sensor_id=1, temp_c=-150.0))
        assert exc_info.value.minimum == -99.9
        assert exc_info.value.maximum == 99.9

    def test_wind_gust_binary(self, encoder):
        """Test the 12-bit binary gust field."""
        payload = encoder.encode(SensorReading(sensor_id=1, wind_gust=40.9))
        assert payload[16] == 0x99
        assert payload[17] & 0x0F == 0x01

    def test_unsupported_subtype(self, encoder, caplog):
        """Test that an unsupported subtype gives an empty payload and a warning."""
        reading = SensorReading(sensor_id=1, subtype=SensorSubtype.SOIL)
        with caplog.at_level("WARNING"):
            assert encoder.encode(reading) == b""
        assert "unsupported sensor subtype" in caplog.text

    def test_humidity_overflow_strict(self, encoder):
        """Test that humidity above 99 raises in strict mode."""
        with pytest.raises(FieldRangeError) as exc_info:
            encoder.encode(SensorReading(sensor_id=1, humidity=100))
        assert exc_info.value.field == "humidity"

    def test_rain_overflow_wraps_when_not_strict(self):
        """Test that rain above 999.9 mm keeps its low digits in wrap mode."""
        encoder = Weather5in1Encoder(strict=False)
        payload = encoder.encode(SensorReading(sensor_id=1, rain_mm=1234.5))
        assert payload[24] == 0x23
        assert payload[23] == 0x45


class TestReferenceFrame:
    """Tests against a captured 5-in-1 frame."""

    def test_reference_frame_integrity(self):
        """Test the captured frame's mirror and bit count."""
        assert len(REFERENCE_FRAME) == 26
        decoded = decode_5in1(REFERENCE_FRAME)
        assert decoded["sensor_id"] == 0x13
        assert decoded["humidity"] == 89

    def test_reencode_reference_frame(self, encoder):
        """Test that re-encoding the decoded frame reproduces its fields."""
        decoded = decode_5in1(REFERENCE_FRAME)
        reading = SensorReading(
            sensor_id=decoded["sensor_id"],
            subtype=decoded["subtype"],
            startup=decoded["startup"],
            battery_ok=decoded["battery_ok"],
            temp_c=decoded["temp_c"],
            humidity=decoded["humidity"],
            wind_gust=decoded["wind_gust"],
            wind_avg=decoded["wind_avg"],
            wind_direction_deg=decoded["wind_direction_deg"],
            rain_mm=decoded["rain_mm"],
        )
        payload = encoder.encode(reading)
        for index in range(14, 26):
            if index == 19:
                # Captured frame carries an extra bit in the unused high nibble
                assert payload[index] == REFERENCE_FRAME[index] & 0x0F
            else:
                assert payload[index] == REFERENCE_FRAME[index], f"byte {index}"
