from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import logging

from .errors import UnsupportedValueError
from .schema import isSymbolic, symbolText


# (source attribute, wire field), applied in order
EVENT_MAPPING: List[Tuple[str, str]] = [
    ('key', 'service'),
    ('value', 'metric'),
    ('host', 'host'),
    ('state', 'state'),
    ('description', 'description'),
    ('ttl', 'ttl'),
    ('time', 'time'),
]

METRIC_MAPPING: List[Tuple[str, str]] = [
    ('key', 'service'),
    ('value', 'metric'),
    ('host', 'host'),
    ('time', 'time'),
]

SCALAR_POLICIES = ('convert', 'reject')


class FieldMapper:

    def __init__(self, scalarPolicy: str = 'convert'):
        if scalarPolicy not in SCALAR_POLICIES:
            raise ValueError(
                f"Unknown scalar policy '{scalarPolicy}', expected one of {SCALAR_POLICIES}"
            )
        self.scalarPolicy = scalarPolicy
        self.logger = logging.getLogger(self.__class__.__name__)

    def textualForm(self, value: Any, field: Optional[str] = None) -> str:
        """
        Convert an attribute key, attribute value or tag to a plain string.

        Args:
            value: Input scalar
            field: Name used in the error message

        Returns:
            The string itself, or the text of a symbolic identifier.
            Numbers and booleans are written out under the ``convert``
            policy.

        Raises:
            UnsupportedValueError: If the value has no textual conversion rule
        """
        if isSymbolic(value):
            return symbolText(value)
        if isinstance(value, str):
            return value

        if isinstance(value, (bool, int, float)) and self.scalarPolicy == 'convert':
            if isinstance(value, bool):
                return 'true' if value else 'false'
            return str(value)

        raise UnsupportedValueError(value, field)

    def escapeField(self, value: Any) -> Any:
        # Only symbols are rewritten; anything else is left for the caller to check
        if value is None:
            return None
        if isSymbolic(value):
            return symbolText(value)
        return value

    def writeTime(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return int(value.timestamp())
        return value

    def mapFields(
        self,
        sourceEvent: Any,
        mapping: List[Tuple[str, str]]
    ) -> Dict[str, Any]:
        mappedData = {}

        for sourceField, wireField in mapping:
            value = getattr(sourceEvent, sourceField)

            if sourceField == 'time':
                value = self.writeTime(value)
            else:
                value = self.escapeField(value)

            if value is not None:
                mappedData[wireField] = value

        return mappedData

    def getMapping(self, kind: str) -> List[Tuple[str, str]]:
        mappingMap = {
            'event': EVENT_MAPPING,
            'metric': METRIC_MAPPING,
        }

        return mappingMap.get(kind, [])
