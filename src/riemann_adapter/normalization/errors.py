# Errors raised by the normalization layer.

from typing import Any, Optional


class NormalizationError(Exception):
    """Base class for events that cannot be turned into wire events."""


class UnsupportedValueError(NormalizationError, TypeError):
    # Raised when a value has no textual or wire conversion rule.

    def __init__(self, value: Any, field: Optional[str] = None):
        self.value = value
        self.field = field
        where = f" in field '{field}'" if field else ""
        super().__init__(
            f"Unsupported value type {type(value).__name__}{where}: {value!r}"
        )
