"""Execution engine - runs test cases against the payment API.

Coordinates the per-case flow:
1. Record a running result
2. Send the payload (HTTP)
3. Grade the response against the case expectations
4. Record the terminal result

Batches run strictly one case at a time, in catalog order, with a fixed
pause between requests.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from ..catalog.schema import TestCase, TestCatalog
from ..config import HarnessConfig
from ..transport.http_client import Outcome, PaymentApiClient, Responded, TransportFailed
from .aggregator import Summary, summarize
from .results import ResultStatus, ResultStore, TestResult, grade

logger = logging.getLogger(__name__)


class EngineBusyError(RuntimeError):
    """Raised when an operation conflicts with a run in progress."""


class EnginePhase(str, Enum):
    """What the engine is doing right now."""
    IDLE = "idle"
    SINGLE = "single"
    BATCH = "batch"


@dataclass
class EngineState:
    """Run flags shared by every operation of one engine."""
    active_id: Optional[int] = None
    batch_running: bool = False

    @property
    def phase(self) -> EnginePhase:
        if self.batch_running:
            return EnginePhase.BATCH
        if self.active_id is not None:
            return EnginePhase.SINGLE
        return EnginePhase.IDLE


class EventKind(str, Enum):
    RESULT = "result"
    BATCH_STARTED = "batch_started"
    BATCH_FINISHED = "batch_finished"
    CLEARED = "cleared"


@dataclass(frozen=True)
class EngineEvent:
    """Change notification delivered to subscribers."""
    kind: EventKind
    case_id: Optional[int] = None
    result: Optional[TestResult] = None


@dataclass(frozen=True)
class EngineSnapshot:
    """Point-in-time view of the engine for presentation code."""
    results: dict[int, TestResult]
    summary: Summary
    active_id: Optional[int]
    batch_running: bool


Listener = Callable[[EngineEvent], None]


class ExecutionEngine:
    """Runs catalog cases through the API client and tracks their results.

    All state lives on the instance: the result store and the run flags.
    Only one case may be in flight at a time; conflicting calls raise
    EngineBusyError instead of queueing.
    """

    def __init__(
        self,
        catalog: TestCatalog,
        client: PaymentApiClient,
        config: Optional[HarnessConfig] = None,
        store: Optional[ResultStore] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize execution engine.

        Args:
            catalog: Cases available to run.
            client: Transport used for every request.
            config: Harness configuration (inter-call delay).
            store: Result store to write into. A fresh one by default.
            sleep: Delay function used between batch requests.
        """
        self.catalog = catalog
        self.client = client
        self.config = config or HarnessConfig()
        self.store = store if store is not None else ResultStore()
        self.state = EngineState()
        self._sleep = sleep
        self._listeners: list[Listener] = []

    # Operations

    def run_single(self, case: Union[TestCase, int]) -> TestResult:
        """Run one case and return its terminal result.

        Raises:
            EngineBusyError: If a case or a batch is already running.
            KeyError: If an id is not in the catalog.
        """
        case = self._resolve(case)
        self._require_idle(f"run case {case.id}")
        return self._execute(case)

    def run_all(self) -> list[TestResult]:
        """Run every catalog case once, in catalog order."""
        return self._run_batch(list(self.catalog))

    def run_category(self, category: str) -> list[TestResult]:
        """Run the cases of one category, in catalog order."""
        return self._run_batch(self.catalog.by_category(category))

    def run_ids(self, case_ids: Sequence[int]) -> list[TestResult]:
        """Run a selection of cases. They execute in catalog order."""
        return self._run_batch(self.catalog.select(list(case_ids)))

    def clear_results(self) -> None:
        """Forget all results.

        Raises:
            EngineBusyError: If anything is running.
        """
        self._require_idle("clear results")
        self.store.clear()
        logger.info("Results cleared")
        self._emit(EngineEvent(kind=EventKind.CLEARED))

    # Read side

    def summary(self) -> Summary:
        return summarize(self.catalog, self.store)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            results=self.store.get_all(),
            summary=self.summary(),
            active_id=self.state.active_id,
            batch_running=self.state.batch_running,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Internals

    def _run_batch(self, cases: list[TestCase]) -> list[TestResult]:
        self._require_idle("start a batch run")
        self.state.batch_running = True
        logger.info("Batch started: %d cases", len(cases))
        self._emit(EngineEvent(kind=EventKind.BATCH_STARTED))

        results: list[TestResult] = []
        try:
            for index, case in enumerate(cases):
                if index > 0:
                    self._sleep(self.config.inter_call_delay)
                results.append(self._execute(case))
        finally:
            self.state.batch_running = False
            logger.info("Batch finished: %d of %d cases run", len(results), len(cases))
            self._emit(EngineEvent(kind=EventKind.BATCH_FINISHED))

        return results

    def _execute(self, case: TestCase) -> TestResult:
        self.store.set(case.id, TestResult.running())
        self.state.active_id = case.id
        logger.debug("Running case %d: %s", case.id, case.name)

        try:
            self._emit(EngineEvent(kind=EventKind.RESULT, case_id=case.id, result=self.store.get(case.id)))
            try:
                outcome = self.client.execute(case.payload)
            except Exception as e:
                logger.exception("Client raised while running case %d", case.id)
                outcome = TransportFailed(message=f"Unexpected error: {type(e).__name__}: {e}")
            result = self._classify(case, outcome)
            self.store.set(case.id, result)
        finally:
            current = self.store.get(case.id)
            if current is not None and current.status == ResultStatus.RUNNING:
                self.store.set(case.id, TestResult.failed("Run interrupted"))
            self.state.active_id = None

        self._log_result(case, result)
        self._emit(EngineEvent(kind=EventKind.RESULT, case_id=case.id, result=result))
        return result

    @staticmethod
    def _classify(case: TestCase, outcome: Outcome) -> TestResult:
        if isinstance(outcome, Responded):
            return TestResult.complete(
                passed=grade(case, outcome.http_status, outcome.body),
                response=outcome.body,
                status_code=outcome.http_status,
            )
        return TestResult.failed(outcome.message)

    def _resolve(self, case: Union[TestCase, int]) -> TestCase:
        if isinstance(case, TestCase):
            return case
        return self.catalog.get(case)

    def _require_idle(self, action: str) -> None:
        phase = self.state.phase
        if phase == EnginePhase.BATCH:
            raise EngineBusyError(f"Cannot {action}: a batch run is in progress")
        if phase == EnginePhase.SINGLE:
            raise EngineBusyError(
                f"Cannot {action}: case {self.state.active_id} is running"
            )

    def _emit(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    @staticmethod
    def _log_result(case: TestCase, result: TestResult) -> None:
        if result.status == ResultStatus.ERROR:
            logger.warning("Case %d (%s) errored: %s", case.id, case.name, result.error)
        elif result.passed:
            logger.info("Case %d (%s) passed", case.id, case.name)
        else:
            logger.info(
                "Case %d (%s) failed: expected %s/%s, got %s/%s",
                case.id, case.name,
                case.expected_status, case.expected_code,
                result.status_code, result.response_code,
            )
