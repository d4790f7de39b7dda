#Implements transports that hand wire messages to the backend.

from typing import Any, Dict
import json

import click
import requests

from .base import EventTransport
from ..normalization.schema import WireMessage


class StdoutTransport(EventTransport):
    # Writes one JSON document per message, used for dry runs

    def send(self, message: WireMessage) -> bool:
        click.echo(json.dumps(message.toDict(), sort_keys=True))
        return True


class WebhookTransport(EventTransport):

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.url = config.get('url')
        self.method = config.get('method', 'POST')
        self.headers = config.get('headers', {})
        self.timeout = config.get('timeout', 10)

        if not self.url:
            raise ValueError("Webhook transport requires 'url'")

    def send(self, message: WireMessage) -> bool:
        try:
            response = requests.request(
                method=self.method,
                url=self.url,
                json=message.toDict(),
                headers=self.headers,
                timeout=self.timeout
            )
            response.raise_for_status()

            self.logger.info(f"Sent {len(message.events)} event(s) to {self.url}")
            return True

        except requests.RequestException as e:
            self.logger.error(f"Error sending to webhook: {e}")
            return False


TRANSPORTS = {
    'stdout': StdoutTransport,
    'webhook': WebhookTransport,
}


def createTransport(config: Dict[str, Any]) -> EventTransport:
    transportType = config.get('type', 'stdout')
    transportClass = TRANSPORTS.get(transportType)

    if transportClass is None:
        raise ValueError(f"Unknown transport type: {transportType}")

    return transportClass(config)
