from abc import ABC, abstractmethod
from typing import Any, Dict
import logging

from ..normalization.schema import WireMessage


class EventTransport(ABC): #Base class for wire event transports.

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def send(self, message: WireMessage) -> bool:
        pass

    def close(self) -> None:
        pass
