from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime


class StepStatus(Enum):
    """Status of a single step"""
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    SKIPPED = "skipped"


class RunStatus(Enum):
    """Status of a scenario run"""
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"


@dataclass
class StepOutcome:
    """Result of executing one step"""
    identifier: str
    title: str
    status: StepStatus
    scenario: str = ""
    phase: str = "step"
    value: Any = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    actual: Any = None
    expected: Any = None
    screenshot: Optional[str] = None
    start_time: datetime = None
    end_time: datetime = None

    def __post_init__(self):
        if self.start_time is None:
            self.start_time = datetime.now()
        if self.end_time is None:
            self.end_time = self.start_time

    @property
    def duration(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def failed(self) -> bool:
        return self.status in (StepStatus.FAILED, StepStatus.ERRORED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identifier': self.identifier,
            'title': self.title,
            'scenario': self.scenario,
            'phase': self.phase,
            'status': self.status.value,
            'error': self.error,
            'error_kind': self.error_kind,
            'actual': _jsonable(self.actual),
            'expected': _jsonable(self.expected),
            'screenshot': self.screenshot,
            'start_time': self.start_time.isoformat(),
            'end_time': self.end_time.isoformat(),
            'duration': self.duration,
        }


@dataclass
class RunResult:
    """Standard result of one scenario run"""
    run_id: str
    scenario: str
    base_context: str = ""
    status: RunStatus = RunStatus.PASSED
    outcomes: List[StepOutcome] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    error: Optional[str] = None
    start_time: datetime = None
    end_time: datetime = None

    def __post_init__(self):
        if self.start_time is None:
            self.start_time = datetime.now()

    @property
    def passed(self) -> bool:
        return self.status == RunStatus.PASSED

    def failed_steps(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.failed]

    def outcome(self, identifier: str) -> Optional[StepOutcome]:
        for o in self.outcomes:
            if o.identifier == identifier:
                return o
        return None

    def summary(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in StepStatus}
        for o in self.outcomes:
            counts[o.status.value] += 1
        counts['total'] = len(self.outcomes)
        return counts

    def to_dict(self) -> Dict[str, Any]:
        end_time = self.end_time or datetime.now()
        return {
            'run_id': self.run_id,
            'scenario': self.scenario,
            'base_context': self.base_context,
            'status': self.status.value,
            'error': self.error,
            'summary': self.summary(),
            'steps': [o.to_dict() for o in self.outcomes],
            'trace': list(self.trace),
            'start_time': self.start_time.isoformat(),
            'end_time': end_time.isoformat(),
        }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return str(value)
