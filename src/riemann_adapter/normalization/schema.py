from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Protocol, Sequence, Union


@dataclass(frozen=True)
class Symbol:
    # Interned-name-like identifier. Never equal to the plain string it names.
    name: str

    def __str__(self) -> str:
        return self.name


SymbolicIdentifier = Union[Symbol, Enum]
Scalar = Union[str, SymbolicIdentifier, int, float, None]


def isSymbolic(value: Any) -> bool:
    return isinstance(value, (Symbol, Enum))


def symbolText(value: SymbolicIdentifier) -> str:
    """Text carried by a symbolic identifier."""
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value.value, str):
        return value.value
    return value.name


class SourceEvent(Protocol):
    """
    Capabilities an upstream event must expose to be normalized.

    Any attribute may hold a string, a symbolic identifier, a number or None.
    ``time`` may additionally hold a datetime. ``service`` is optional: it is
    only read when ``key`` is absent, and only a string or symbolic
    identifier found there is used.
    """
    host: Scalar
    service: Scalar
    state: Scalar
    description: Scalar
    time: Union[Scalar, datetime]
    ttl: Scalar
    tags: Sequence[Any]
    attributes: Dict[Any, Any]
    key: Scalar
    value: Scalar


@dataclass
class RawEvent:
    # Plain implementation of SourceEvent, used for file and test input
    host: Scalar = None
    service: Scalar = None
    state: Scalar = None
    description: Scalar = None
    time: Union[Scalar, datetime] = None
    ttl: Scalar = None
    tags: List[Any] = field(default_factory=list)
    attributes: Dict[Any, Any] = field(default_factory=dict)
    key: Scalar = None
    value: Scalar = None

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> 'RawEvent':
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if kwargs.get('tags') is None:
            kwargs['tags'] = []
        if kwargs.get('attributes') is None:
            kwargs['attributes'] = {}
        return cls(**kwargs)


class Attribute(NamedTuple):
    key: str
    value: str


@dataclass
class WireEvent:
    host: Optional[str] = None
    service: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    time: Optional[Union[int, float]] = None
    ttl: Optional[Union[int, float]] = None
    metric: Optional[Union[int, float]] = None
    tags: List[str] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)

    def toDict(self) -> Dict[str, Any]:
        """
        Convert to a dict keyed by the backend's field names.

        Absent scalars are left out. The metric is also written to the
        backend's typed slot, ``metric_sint64`` or ``metric_d``.
        """
        data: Dict[str, Any] = {}

        for name in ('host', 'service', 'state', 'description', 'time', 'ttl'):
            value = getattr(self, name)
            if value is not None:
                data[name] = value

        if self.metric is not None:
            data['metric'] = self.metric
            if isinstance(self.metric, int):
                data['metric_sint64'] = self.metric
            else:
                data['metric_d'] = float(self.metric)

        data['tags'] = list(self.tags)
        data['attributes'] = [
            {'key': attr.key, 'value': attr.value} for attr in self.attributes
        ]
        return data

    def validate(self) -> bool:
        scalars = [getattr(self, f.name) for f in fields(self)
                   if f.name not in ('tags', 'attributes')]
        if any(isSymbolic(v) for v in scalars):
            return False
        if any(isSymbolic(t) for t in self.tags):
            return False
        for attr in self.attributes:
            if not isinstance(attr.key, str) or not isinstance(attr.value, str):
                return False
        return True


@dataclass
class WireMessage:
    # Envelope handed to transports
    events: List[WireEvent] = field(default_factory=list)
    ok: Optional[bool] = None
    error: Optional[str] = None
    query: Optional[str] = None

    def toDict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'events': [e.toDict() for e in self.events]}
        if self.ok is not None:
            data['ok'] = self.ok
        if self.error is not None:
            data['error'] = self.error
        if self.query is not None:
            data['query'] = {'string': self.query}
        return data
