"""State machine that drives one coordinator operation.

A flow moves through named states as each step reports a ``StepOutcome``:

    IDLE -> GUARD_CHECKED -> PERSISTED -> CATALOGUE_SYNCED -> REPARENT_SYNCED
         -> NOTIFIED_REVALIDATION -> DONE

Operations visit the subset of states that apply to them, in their own order
(an update reconciles countries before persisting the city). A HARD_FAIL from
any step moves the flow to FAILED, which absorbs every later transition.
SOFT_FAIL outcomes are kept as warnings and do not stop the flow.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from sitecms.application.dto.operation_result import OperationResult
from sitecms.domain.errors import SyncError
from sitecms.domain.value_objects.step_outcome import StepOutcome

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    IDLE = "idle"
    GUARD_CHECKED = "guard_checked"
    PERSISTED = "persisted"
    CATALOGUE_SYNCED = "catalogue_synced"
    REPARENT_SYNCED = "reparent_synced"
    NOTIFIED_REVALIDATION = "notified_revalidation"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = (FlowState.DONE, FlowState.FAILED)


class FlowClosedError(RuntimeError):
    """Raised when a step is reported to a flow that already finished."""


@dataclass
class SyncFlow:
    operation: str
    subject: str
    state: FlowState = FlowState.IDLE
    history: List[FlowState] = field(default_factory=lambda: [FlowState.IDLE])
    warnings: List[str] = field(default_factory=list)
    failure: Optional[SyncError] = None

    @property
    def failed(self) -> bool:
        return self.state is FlowState.FAILED

    def check(self, outcome: StepOutcome) -> bool:
        """Apply an outcome without moving to a new state.

        Returns False once the flow has failed.
        """
        if self.state in TERMINAL_STATES:
            raise FlowClosedError(f"{self.operation} flow for {self.subject} is already {self.state.value}")

        if outcome.is_hard_fail:
            self.failure = outcome.error
            self._move(FlowState.FAILED)
            logger.error(f"{self.operation} {self.subject} failed: {outcome.error}")
            return False

        if outcome.is_soft_fail:
            self.warnings.append(outcome.error.message)
            logger.warning(f"{self.operation} {self.subject}: {outcome.error}")

        return True

    def advance(self, target: FlowState, outcome: Optional[StepOutcome] = None) -> bool:
        """Apply an outcome and, unless it was a hard failure, move to ``target``."""
        if not self.check(outcome or StepOutcome.ok()):
            return False
        self._move(target)
        return True

    def result(self, data: Any = None, failed_data: Any = None) -> OperationResult:
        """Close the flow and build the caller-facing result."""
        if self.failed:
            return OperationResult(data=failed_data, error=self.failure, warnings=list(self.warnings))

        self._move(FlowState.DONE)
        logger.info(f"{self.operation} {self.subject} done via {' -> '.join(s.value for s in self.history)}")
        return OperationResult(data=data, warnings=list(self.warnings))

    def _move(self, target: FlowState) -> None:
        self.state = target
        self.history.append(target)
