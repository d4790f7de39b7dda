"""
Event Normalization Module

Turns loosely-typed upstream events into strictly-typed wire events for a
Riemann-style monitoring backend.

Features:
- Symbol-to-string escaping of event fields
- Attribute and tag coercion to plain strings
- Reverse mapping of wire events to source field names
- Message envelopes for transports
"""

from .errors import NormalizationError, UnsupportedValueError
from .schema import Symbol, SourceEvent, RawEvent, Attribute, WireEvent, WireMessage
from .field_mapper import FieldMapper, EVENT_MAPPING, METRIC_MAPPING
from .normalizer import (
    EventNormalizer,
    normalize_attributes,
    normalize_event,
    normalize_metric,
    normalize_tags,
    read_event,
    make_message,
)

__all__ = [
    'NormalizationError',
    'UnsupportedValueError',
    'Symbol',
    'SourceEvent',
    'RawEvent',
    'Attribute',
    'WireEvent',
    'WireMessage',
    'FieldMapper',
    'EVENT_MAPPING',
    'METRIC_MAPPING',
    'EventNormalizer',
    'normalize_attributes',
    'normalize_event',
    'normalize_metric',
    'normalize_tags',
    'read_event',
    'make_message',
]
