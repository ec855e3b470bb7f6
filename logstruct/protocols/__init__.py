"""
Protocols (interfaces) for logstruct components.

This module defines abstract contracts that implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional
from logstruct.models import WordInfo

__all__ = [
    'TokenSourceProtocol',
    'ProgressSinkProtocol',
]


class TokenSourceProtocol(ABC):
    """Protocol for per-line token sources."""

    @abstractmethod
    def next_token(self) -> Optional[WordInfo]:
        """
        Return the next token of the line.

        Returns:
            WordInfo, or None once the line is exhausted
        """
        pass


class ProgressSinkProtocol(ABC):
    """Protocol for progress reporting. Must never influence results."""

    @abstractmethod
    def report(self, label: str) -> None:
        """Record one processed unit of the phase named label."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Emit the final count of the running phase."""
        pass
