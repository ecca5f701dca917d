"""Runner module - Test execution and result tracking."""

from .aggregator import Summary, summarize
from .executor import (
    EngineBusyError,
    EngineEvent,
    EnginePhase,
    EngineSnapshot,
    EngineState,
    EventKind,
    ExecutionEngine,
)
from .results import ResultStatus, ResultStore, TestResult, grade

__all__ = [
    "EngineBusyError",
    "EngineEvent",
    "EnginePhase",
    "EngineSnapshot",
    "EngineState",
    "EventKind",
    "ExecutionEngine",
    "ResultStatus",
    "ResultStore",
    "Summary",
    "TestResult",
    "grade",
    "summarize",
]
