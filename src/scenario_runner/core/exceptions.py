from typing import Any


class ScenarioRunnerError(Exception):
    """Base exception for Scenario Runner"""
    pass


class ConfigurationError(ScenarioRunnerError):
    """Configuration-related errors"""
    pass


class ScenarioDefinitionError(ScenarioRunnerError):
    """Malformed scenario tree (duplicate step identifiers, bad children)"""
    pass


class PreconditionError(ScenarioRunnerError):
    """The application under test is not in the state a step expects"""
    pass


class SessionError(ScenarioRunnerError):
    """Browser session could not be opened or closed"""
    pass


class ContextKeyError(ScenarioRunnerError, KeyError):
    """Key not present in the run context store"""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Context key not found: {self.key!r}"


class StepAssertionError(ScenarioRunnerError, AssertionError):
    """Actual value did not match the expected one"""

    def __init__(self, message: str, actual: Any = None, expected: Any = None):
        super().__init__(message)
        self.actual = actual
        self.expected = expected
