from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
import json

from dateutil import parser

from .base import BaseEventSource
from ..normalization.schema import RawEvent


class FileEventSource(BaseEventSource):
    """
    Reads source events from a JSON or JSON-lines file.

    A ``.json`` file holds a list of event objects, any other suffix is read
    as one object per line. Files are decoded as UTF-8; a JSON-lines file
    skips lines that are not valid UTF-8. String timestamps are parsed into
    datetimes.
    """

    def getRequiredFields(self) -> List[str]:
        return ['path']

    def testConnection(self) -> bool:
        return Path(self.config.get('path', '')).is_file()

    def fetchEvents(self) -> Iterator[RawEvent]:
        path = Path(self.config['path'])

        if not path.exists():
            raise FileNotFoundError(f"Event file not found: {path}")

        self.logger.info(f"Reading events from {path}")

        if path.suffix == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
            if not isinstance(records, list):
                raise ValueError(f"Expected a list of events in {path}")
            for record in records:
                event = self._toEvent(record)
                if event is not None:
                    yield event
        else:
            with open(path, 'rb') as f:
                for lineNumber, rawLine in enumerate(f, start=1):
                    try:
                        line = rawLine.decode('utf-8').strip()
                    except UnicodeDecodeError as e:
                        self.logger.warning(f"Skipping undecodable line {lineNumber} in {path}: {e}")
                        continue
                    if not line:
                        continue
                    try:
                        record = json.loads(line)
                    except json.JSONDecodeError as e:
                        self.logger.warning(f"Skipping malformed line {lineNumber} in {path}: {e}")
                        continue
                    event = self._toEvent(record)
                    if event is not None:
                        yield event

        self.lastReadTime = datetime.utcnow()

    def _toEvent(self, record: Any) -> Optional[RawEvent]:
        if not isinstance(record, dict):
            self.logger.warning(f"Skipping non-object event record: {record!r}")
            return None

        data: Dict[str, Any] = dict(record)
        eventTime = data.get('time')
        if isinstance(eventTime, str):
            try:
                data['time'] = parser.parse(eventTime)
            except (ValueError, OverflowError) as e:
                self.logger.warning(f"Failed to parse timestamp '{eventTime}': {e}")

        return RawEvent.fromDict(data)
