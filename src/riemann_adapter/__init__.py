"""
Riemann Event Adapter

Normalizes loosely-typed telemetry events into strictly-typed wire events for
a Riemann-style monitoring backend.
"""

from .normalization import (
    Symbol,
    RawEvent,
    Attribute,
    WireEvent,
    WireMessage,
    EventNormalizer,
    UnsupportedValueError,
    normalize_attributes,
    normalize_event,
)

__version__ = '0.1.0'

__all__ = [
    'Symbol',
    'RawEvent',
    'Attribute',
    'WireEvent',
    'WireMessage',
    'EventNormalizer',
    'UnsupportedValueError',
    'normalize_attributes',
    'normalize_event',
]
