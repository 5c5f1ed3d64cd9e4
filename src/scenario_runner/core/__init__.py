from .base import (
    StepStatus,
    RunStatus,
    StepOutcome,
    RunResult,
)
from .config import ConfigManager
from .exceptions import (
    ScenarioRunnerError,
    ConfigurationError,
    ScenarioDefinitionError,
    PreconditionError,
    SessionError,
    ContextKeyError,
    StepAssertionError,
)

__all__ = [
    # Result types
    "StepStatus",
    "RunStatus",
    "StepOutcome",
    "RunResult",

    # Configuration
    "ConfigManager",

    # Exceptions
    "ScenarioRunnerError",
    "ConfigurationError",
    "ScenarioDefinitionError",
    "PreconditionError",
    "SessionError",
    "ContextKeyError",
    "StepAssertionError",
]
