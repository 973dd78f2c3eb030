# mision_nlp/controller.py

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from .errors import GENERIC_ERROR_MESSAGE, AppError, ParseError, ValidationError
from .exercises import Exercise
from .models import TabInputs
from .schema import SchemaDescriptor

logger = logging.getLogger(__name__)


class AnalysisClient(Protocol):
    async def submit(self, instruction: str, schema: SchemaDescriptor) -> Any: ...


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class TabUIState:
    inputs: TabInputs
    phase: Phase = Phase.IDLE
    loading: bool = False
    result: Optional[str] = None
    chart: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class RequestToken:
    """Identifies one dispatched analysis. Only the newest token may apply its outcome."""
    generation: int


class TabController:
    """
    Drives one tab: validate -> build prompt -> call -> format -> display.

    State is replaced wholesale on every transition, so `result` and
    `error` are never observed set together. `clear()` bumps the request
    generation; a call that was in flight at that moment still completes,
    but its outcome is discarded.
    """

    def __init__(self, exercise: Exercise, client: AnalysisClient):
        self.exercise = exercise
        self.client = client
        self._generation = 0
        self.state = TabUIState(inputs=exercise.default_inputs)

    # --- Input handling ---
    def edit(self, **changes) -> None:
        inputs = self.state.inputs.with_changes(**changes)
        phase = self.state.phase if self.state.loading else Phase.IDLE
        self.state = replace(self.state, inputs=inputs, phase=phase)

    def load_example(self, label: str) -> None:
        self.edit(**self.exercise.example(label))

    def clear(self) -> None:
        self._generation += 1
        self.state = TabUIState(inputs=self.exercise.default_inputs)

    def is_current(self, token: RequestToken) -> bool:
        return token.generation == self._generation

    # --- Analysis ---
    async def analyze(self) -> None:
        if self.state.loading:
            logger.debug(f"[{self.exercise.key}] analyze ignored: a request is already pending.")
            return

        inputs = self.state.inputs
        self.state = replace(self.state, phase=Phase.VALIDATING)
        try:
            self.exercise.validate(inputs)
        except ValidationError as e:
            self.state = replace(self.state, phase=Phase.IDLE, result=None, chart=None, error=e.user_message)
            return

        self._generation += 1
        token = RequestToken(self._generation)
        self.state = replace(self.state, phase=Phase.PENDING, loading=True, result=None, chart=None, error=None)

        try:
            report, chart = await self._run(inputs)
        except AppError as e:
            logger.warning(f"[{self.exercise.key}] analysis failed: {type(e).__name__}: {e}")
            self._apply(token, Phase.FAILED, error=e.user_message)
        except Exception as e:
            logger.error(f"[{self.exercise.key}] unexpected error during analysis: {e}", exc_info=True)
            self._apply(token, Phase.FAILED, error=GENERIC_ERROR_MESSAGE)
        else:
            self._apply(token, Phase.SUCCESS, result=report, chart=chart)

    async def _run(self, inputs: TabInputs):
        request = self.exercise.build_request(inputs)
        raw = await self.client.submit(request.instruction_text, request.expected_schema)
        try:
            parsed = self.exercise.result_model.model_validate(raw)
        except PydanticValidationError as e:
            logger.error(f"[{self.exercise.key}] response does not match the expected shape: {e}")
            raise ParseError(f"schema mismatch: {e.error_count()} error(s)") from e
        report = self.exercise.formatter(parsed, inputs)
        chart = self.exercise.chart_builder(parsed, inputs) if self.exercise.chart_builder else None
        return report, chart

    def _apply(self, token: RequestToken, phase: Phase, result: Optional[str] = None,
               chart: Any = None, error: Optional[str] = None) -> None:
        if not self.is_current(token):
            logger.info(f"[{self.exercise.key}] discarding stale response (generation {token.generation}).")
            return
        self.state = replace(self.state, phase=phase, loading=False, result=result, chart=chart, error=error)
