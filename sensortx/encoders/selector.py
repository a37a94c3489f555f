"""
Encoder selector.

Maps a Protocol to the PayloadEncoder that produces it. The transmitter
(or any other caller) selects the active protocol and asks the selector to
encode readings with it.

Architecture:
    EncoderSelector
        └── PayloadEncoder (interface)
            ├── Weather5in1Encoder
            ├── Weather6in1Encoder (stateful)
            ├── Weather7in1Encoder
            ├── LightningEncoder
            └── LeakageEncoder
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sensortx.encoders.base import PayloadEncoder
    from sensortx.models.reading import SensorReading
    from sensortx.protocol.constants import Protocol

# Module logger
logger = logging.getLogger(__name__)


class EncoderSelector:
    """
    Registry of payload encoders keyed by Protocol.

    If no encoder is registered for a protocol, get() returns None and
    encode() returns an empty payload.

    Example:
        >>> selector = EncoderSelector()
        >>> selector.register(Weather5in1Encoder())
        >>> payload = selector.encode(Protocol.BRESSER_5IN1, reading)
    """

    def __init__(self) -> None:
        """Initialize empty selector."""
        self._encoders: dict[Protocol, PayloadEncoder] = {}

    def register(self, encoder: PayloadEncoder) -> None:
        """
        Register an encoder.

        Args:
            encoder: Encoder instance to register.

        Note:
            Replaces any existing encoder for the same protocol.
        """
        self._encoders[encoder.protocol] = encoder

    def get(self, protocol: Protocol) -> PayloadEncoder | None:
        """
        Get the encoder for a protocol.

        Args:
            protocol: The protocol to look up.

        Returns:
            Encoder if registered, None otherwise.
        """
        return self._encoders.get(protocol)

    def has(self, protocol: Protocol) -> bool:
        """Check if an encoder is registered."""
        return protocol in self._encoders

    @property
    def registered_protocols(self) -> frozenset[Protocol]:
        """Get all protocols with a registered encoder."""
        return frozenset(self._encoders.keys())

    def unregister(self, protocol: Protocol) -> bool:
        """
        Remove an encoder registration.

        Returns:
            True if an encoder was removed, False if none was registered.
        """
        if protocol in self._encoders:
            del self._encoders[protocol]
            return True
        return False

    def clear(self) -> None:
        """Remove all registered encoders."""
        self._encoders.clear()

    def encode(self, protocol: Protocol, reading: SensorReading) -> bytes:
        """
        Encode a reading with the encoder registered for ``protocol``.

        Returns:
            The payload, or ``b""`` if no encoder is registered or the
            encoder does not support the reading's subtype.
        """
        encoder = self._encoders.get(protocol)
        if encoder is None:
            logger.warning("No encoder registered for protocol %r", protocol)
            return b""
        return encoder.encode(reading)

    def __repr__(self) -> str:
        names = ", ".join(sorted(p.name for p in self._encoders))
        return f"EncoderSelector({names})"


def create_default_selector(*, strict: bool = True) -> EncoderSelector:
    """
    Create a new selector with all built-in encoders registered.

    Each call creates fresh encoder instances, so every selector owns its
    own 6-in-1 report phase.

    Args:
        strict: Range policy passed to every encoder.

    Returns:
        EncoderSelector for all five protocols.
    """
    from sensortx.encoders.bresser_5in1 import Weather5in1Encoder
    from sensortx.encoders.bresser_6in1 import Weather6in1Encoder
    from sensortx.encoders.bresser_7in1 import Weather7in1Encoder
    from sensortx.encoders.leakage import LeakageEncoder
    from sensortx.encoders.lightning import LightningEncoder

    selector = EncoderSelector()
    for encoder_cls in (
        Weather5in1Encoder,
        Weather6in1Encoder,
        Weather7in1Encoder,
        LeakageEncoder,
        LightningEncoder,
    ):
        selector.register(encoder_cls(strict=strict))
    return selector
