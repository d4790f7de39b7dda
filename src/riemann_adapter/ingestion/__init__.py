"""
Event Ingestion Module

Upstream collaborators that supply source events to the adapter.
"""

from .base import BaseEventSource
from .file_source import FileEventSource

__all__ = [
    'BaseEventSource',
    'FileEventSource',
]
