from .engine import ScenarioEngine, EngineConfig
from .scenario import Scenario, Step, SortCase, SortDirection, sort_steps, step
from .context_store import ContextStore
from .session import Session, SessionManager, SessionConfig
from .tracing import TraceSink, LoggingTraceSink, RecordingTraceSink, TraceItem
from .ordering import sort_values, parse_price, same_order
from .assertions import equal_to, contains, within, is_true
from .report_collector import ReportCollector

__all__ = [
    'ScenarioEngine',
    'EngineConfig',
    'Scenario',
    'Step',
    'SortCase',
    'SortDirection',
    'sort_steps',
    'step',
    'ContextStore',
    'Session',
    'SessionManager',
    'SessionConfig',
    'TraceSink',
    'LoggingTraceSink',
    'RecordingTraceSink',
    'TraceItem',
    'sort_values',
    'parse_price',
    'same_order',
    'equal_to',
    'contains',
    'within',
    'is_true',
    'ReportCollector',
]
