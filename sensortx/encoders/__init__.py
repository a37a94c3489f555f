"""
Protocol payload encoders.

One PayloadEncoder strategy per over-the-air protocol, plus the
EncoderSelector that picks the active one.
"""

from sensortx.encoders.base import PayloadEncoder
from sensortx.encoders.bresser_5in1 import Weather5in1Encoder
from sensortx.encoders.bresser_6in1 import ReportPhase, Weather6in1Encoder
from sensortx.encoders.bresser_7in1 import Weather7in1Encoder
from sensortx.encoders.leakage import LeakageEncoder
from sensortx.encoders.lightning import LightningEncoder
from sensortx.encoders.selector import EncoderSelector, create_default_selector

__all__ = [
    "EncoderSelector",
    "LeakageEncoder",
    "LightningEncoder",
    "PayloadEncoder",
    "ReportPhase",
    "Weather5in1Encoder",
    "Weather6in1Encoder",
    "Weather7in1Encoder",
    "create_default_selector",
]
