from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional
import logging

from .errors import UnsupportedValueError
from .field_mapper import EVENT_MAPPING, FieldMapper
from .schema import Attribute, SourceEvent, WireEvent, WireMessage


_defaultMapper = FieldMapper()

STRING_FIELDS = ('host', 'service', 'state', 'description')
NUMERIC_FIELDS = ('time', 'ttl', 'metric')


def normalize_attributes(mapping: Any, mapper: Optional[FieldMapper] = None) -> List[Attribute]:
    """
    Convert an attribute mapping into ordered (key, value) string pairs.

    Accepts a mapping or a list of (key, value) pairs, so already
    normalized attributes can be fed back in unchanged. Order follows the
    input's iteration order and no entry is dropped.

    Raises:
        UnsupportedValueError: If the input is not a mapping or list of pairs,
            or a key or value has no textual form
    """
    mapper = mapper or _defaultMapper

    if not mapping:
        return []

    if isinstance(mapping, Mapping):
        pairs = list(mapping.items())
    elif isinstance(mapping, (list, tuple)) and all(
            isinstance(pair, tuple) and len(pair) == 2 for pair in mapping):
        pairs = mapping
    else:
        raise UnsupportedValueError(mapping, 'attributes')

    return [
        Attribute(mapper.textualForm(k, 'attributes'), mapper.textualForm(v, 'attributes'))
        for k, v in pairs
    ]


def normalize_tags(tags: Optional[Iterable[Any]], mapper: Optional[FieldMapper] = None) -> List[str]:
    mapper = mapper or _defaultMapper

    if not tags:
        return []

    # A bare string or a mapping is not a sequence of tags
    if isinstance(tags, (str, bytes, Mapping)):
        raise UnsupportedValueError(tags, 'tags')

    return [mapper.textualForm(tag, 'tags') for tag in tags]


def _checkWireTypes(event: WireEvent) -> WireEvent:
    for name in STRING_FIELDS:
        value = getattr(event, name)
        if value is not None and not isinstance(value, str):
            raise UnsupportedValueError(value, name)

    for name in NUMERIC_FIELDS:
        value = getattr(event, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise UnsupportedValueError(value, name)

    return event


def _buildWireEvent(sourceEvent: Any, mapper: FieldMapper, kind: str) -> WireEvent:
    mapped = mapper.mapFields(sourceEvent, mapper.getMapping(kind))

    if 'service' not in mapped:
        service = mapper.escapeField(getattr(sourceEvent, 'service', None))
        # Only a real string or symbol counts as a service fallback
        if isinstance(service, str):
            mapped['service'] = service

    event = WireEvent(
        attributes=normalize_attributes(sourceEvent.attributes, mapper),
        tags=normalize_tags(sourceEvent.tags, mapper),
        **mapped
    )

    return _checkWireTypes(event)


def normalize_event(sourceEvent: SourceEvent, mapper: Optional[FieldMapper] = None) -> WireEvent:
    """
    Build a wire event from a source event.

    Symbolic identifiers in host, service, state and description are
    replaced by their text, ``key`` becomes the service and ``value`` the
    metric. Absent fields stay absent. Errors raised by the source event
    itself propagate untouched.

    Raises:
        UnsupportedValueError: If a field cannot be represented on the wire
    """
    return _buildWireEvent(sourceEvent, mapper or _defaultMapper, 'event')


def normalize_metric(sourceMetric: Any, mapper: Optional[FieldMapper] = None) -> WireEvent:
    # Metrics only carry key, value, host and time besides tags and attributes
    return _buildWireEvent(sourceMetric, mapper or _defaultMapper, 'metric')


def read_event(event: WireEvent) -> Dict[str, Any]:
    """Map a wire event back to source field names, omitting absent fields."""
    data: Dict[str, Any] = {}

    if event.attributes:
        data['attributes'] = {attr.key: attr.value for attr in event.attributes}

    if event.tags:
        data['tags'] = list(event.tags)

    if event.time is not None:
        data['time'] = datetime.fromtimestamp(event.time, tz=timezone.utc)

    for sourceField, wireField in EVENT_MAPPING:
        if sourceField == 'time':
            continue
        value = getattr(event, wireField)
        if value is not None:
            data[sourceField] = value

    return data


def make_message(events: Iterable[Any], mapper: Optional[FieldMapper] = None) -> WireMessage:
    wireEvents = [
        e if isinstance(e, WireEvent) else normalize_event(e, mapper)
        for e in events
    ]
    return WireMessage(events=wireEvents)


class EventNormalizer:

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.fieldMapper = FieldMapper(config.get('scalar_policy', 'convert'))

    def normalize(self, sourceEvent: SourceEvent) -> WireEvent:
        event = normalize_event(sourceEvent, self.fieldMapper)
        self.logger.debug(f"Normalized event for service {event.service!r} on host {event.host!r}")
        return event

    def normalizeMetric(self, sourceMetric: Any) -> WireEvent:
        return normalize_metric(sourceMetric, self.fieldMapper)

    def normalizeAttributes(self, mapping: Any) -> List[Attribute]:
        return normalize_attributes(mapping, self.fieldMapper)

    def makeMessage(self, events: Iterable[Any]) -> WireMessage:
        return make_message(events, self.fieldMapper)
