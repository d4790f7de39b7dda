import logging
import sys
from pathlib import Path
from typing import Dict, Any
import json
from datetime import datetime, timezone


TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
TEXT_DATEFMT = '%Y-%m-%d %H:%M:%S'


class JSONFormatter(logging.Formatter):
    # One JSON object per record

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(config: Dict[str, Any]) -> None:
    logging_config = config.get('logging', {})

    log_level = logging_config.get('level', 'INFO')
    # stderr keeps stdout free for the dry-run transport
    log_output = logging_config.get('output', 'stderr')  # file, stderr, or both

    if logging_config.get('format', 'text') == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handlers = []
    if log_output in ['file', 'both']:
        log_path = Path(logging_config.get('file_path', 'logs/riemann_adapter.log'))
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))
    if log_output in ['stderr', 'both']:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers = []
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
