"""Abstract base class for job board API clients."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.schemas import RequestDescriptor


class JobBoardClient(ABC):
    """Base class that every job board client must implement."""

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'reed')."""

    @abstractmethod
    async def get_json(self, descriptor: RequestDescriptor) -> Any:
        """Perform one GET for the descriptor and return the decoded JSON body.

        Transport failures propagate unchanged; callers do not retry.
        """
