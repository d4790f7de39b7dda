# Transport Module
# Hands normalized wire messages to the monitoring backend.


from .base import EventTransport
from .channels import StdoutTransport, WebhookTransport, createTransport

__all__ = [
    'EventTransport',
    'StdoutTransport',
    'WebhookTransport',
    'createTransport',
]
