from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceItem:
    """One identifier tag recorded before a step runs"""
    run_id: str
    step_id: str
    base_context: str
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def tag(self) -> str:
        return f"{self.base_context}_{self.step_id}" if self.base_context else self.step_id


class TraceSink(ABC):
    """Receives (run id, step identifier, base context) tuples for log correlation"""

    @abstractmethod
    def add_context_item(self, run_id: str, step_id: str, base_context: str) -> None:
        """Record that ``step_id`` is about to run"""
        pass


class LoggingTraceSink(TraceSink):
    """Writes one log line per tagged step"""

    def __init__(self, logger_name: Optional[str] = None):
        self.logger = logging.getLogger(logger_name) if logger_name else logger

    def add_context_item(self, run_id: str, step_id: str, base_context: str) -> None:
        item = TraceItem(run_id, step_id, base_context)
        self.logger.info(f"[{run_id}] testIdentifier={item.tag}")


class RecordingTraceSink(TraceSink):
    """Keeps every tagged step in order, optionally forwarding to another sink"""

    def __init__(self, forward: Optional[TraceSink] = None):
        self.items: List[TraceItem] = []
        self.forward = forward

    def add_context_item(self, run_id: str, step_id: str, base_context: str) -> None:
        self.items.append(TraceItem(run_id, step_id, base_context))
        if self.forward is not None:
            self.forward.add_context_item(run_id, step_id, base_context)

    @property
    def step_ids(self) -> List[str]:
        return [item.step_id for item in self.items]
