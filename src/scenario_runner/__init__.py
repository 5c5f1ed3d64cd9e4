"""
Scenario Runner - browser-driven scenario tests for web storefronts
"""

__version__ = "0.1.0"
__author__ = "Scenario Runner Contributors"

from .core import RunResult, RunStatus, StepOutcome, StepStatus, ConfigManager
from .executor import (
    ScenarioEngine,
    Scenario,
    Step,
    SortCase,
    SortDirection,
    ContextStore,
    SessionManager,
    SessionConfig,
    sort_steps,
)


__all__ = [
    "RunResult",
    "RunStatus",
    "StepOutcome",
    "StepStatus",
    "ConfigManager",
    "ScenarioEngine",
    "Scenario",
    "Step",
    "SortCase",
    "SortDirection",
    "ContextStore",
    "SessionManager",
    "SessionConfig",
    "sort_steps",
]
