# Base event source class

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional
from datetime import datetime
import logging

from ..normalization.schema import SourceEvent


class BaseEventSource(ABC):
    def __init__(self, config: Dict[str, Any]):

        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.lastReadTime: Optional[datetime] = None

    @abstractmethod
    def fetchEvents(self) -> Iterator[SourceEvent]:
        pass

    @abstractmethod
    def testConnection(self) -> bool:
        pass

    def validateConfig(self) -> bool:
        requiredFields = self.getRequiredFields()
        missingFields = [field for field in requiredFields if field not in self.config]

        if missingFields:
            self.logger.error(f"Missing required configuration fields: {missingFields}")
            return False

        return True

    @abstractmethod
    def getRequiredFields(self) -> List[str]:
        pass

    def getStatus(self) -> Dict[str, Any]:
        return {
            'source': self.__class__.__name__,
            'lastReadTime': self.lastReadTime,
            'configValid': self.validateConfig(),
            'connected': self.testConnection()
        }
