"""
Riemann Event Adapter

Reads upstream events, normalizes them into wire events and hands them to a
transport.
"""

import sys
import logging
from typing import Any, Dict, Optional

import click

from .utils.config_loader import ConfigLoader
from .utils.logger import setup_logging
from .utils.metrics import MetricsCollector
from .ingestion.file_source import FileEventSource
from .normalization.errors import NormalizationError
from .normalization.normalizer import EventNormalizer
from .transport.channels import createTransport


class AdapterPipeline:
    """
    Coordinates:
    1. Reading source events
    2. Normalization into wire events
    3. Sending one message per event to the transport
    """

    def __init__(self, config_path: str, inputPath: Optional[str] = None, dryRun: bool = False):
        """
        Args:
            config_path: Path to configuration file
            inputPath: Event file overriding ``source.path``
            dryRun: Print messages to stdout instead of the configured transport

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config validation fails
        """
        self.configLoader = ConfigLoader(config_path)
        self.config = self.configLoader.load()

        setup_logging(self.config)
        self.logger = logging.getLogger(self.__class__.__name__)

        if not self.configLoader.validate():
            raise ValueError(f"Invalid configuration: {config_path}")

        sourceConfig = dict(self.config['source'])
        if inputPath:
            sourceConfig['path'] = inputPath

        transportConfig = {'type': 'stdout'} if dryRun else self.config['transport']

        self.metrics = MetricsCollector()
        self.source = FileEventSource(sourceConfig)
        self.normalizer = EventNormalizer(self.config['normalization'])
        self.transport = createTransport(transportConfig)

        if not self.source.validateConfig():
            raise ValueError("Invalid source configuration")

        self.logger.info("Pipeline initialized")

    def runOnce(self) -> Dict[str, Any]:
        self.logger.info("Starting adapter run...")
        self.metrics.reset()

        try:
            for sourceEvent in self.source.fetchEvents():
                self.metrics.recordEventRead()

                try:
                    wireEvent = self.normalizer.normalize(sourceEvent)
                except NormalizationError as e:
                    # Data-quality defect in the upstream event
                    self.logger.warning(f"Rejected event: {e}")
                    self.metrics.recordEventRejected(getattr(e, 'field', None))
                    continue

                self.metrics.recordEventNormalized()

                if self.transport.send(self.normalizer.makeMessage([wireEvent])):
                    self.metrics.recordEventSent()
                else:
                    self.metrics.recordSendFailure()

            self.logger.info("Adapter run completed")

        finally:
            self.transport.close()
            self.metrics.logMetrics()

        return self.metrics.getMetrics()

    def getStatus(self) -> dict:
        return {
            'source': self.source.getStatus(),
            'transport': self.transport.__class__.__name__,
            'metrics': self.metrics.getMetrics()
        }


@click.command()
@click.option(
    '--config',
    default='config/config.yaml',
    help='Path to configuration file'
)
@click.option(
    '--input',
    'inputPath',
    default=None,
    help='Event file to read, overrides source.path'
)
@click.option(
    '--dry-run',
    is_flag=True,
    help='Print wire messages to stdout instead of sending them'
)
def cli(config, inputPath, dry_run):
    """Normalize upstream events into Riemann wire events."""

    try:
        pipeline = AdapterPipeline(config, inputPath=inputPath, dryRun=dry_run)
        results = pipeline.runOnce()
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(0)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if results['events']['rejected'] or results['send_failures']:
        sys.exit(1)


if __name__ == '__main__':
    cli()
