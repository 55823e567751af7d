from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from hayagriva.utils.logger import get_logger


class BaseAgent(ABC):
    """
    Base class for all agents.
    Provides a logger named after the agent class.
    """

    def __init__(self) -> None:
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def run(self, **kwargs: Any) -> Any:
        ...
