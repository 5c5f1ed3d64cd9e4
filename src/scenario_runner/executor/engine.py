import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union
import logging

from ..core.base import RunResult, RunStatus, StepOutcome, StepStatus
from ..core.exceptions import SessionError
from .context_store import ContextStore
from .scenario import Scenario, Step
from .session import SessionManager
from .tracing import LoggingTraceSink, TraceSink

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Configuration for the Scenario Engine"""
    screenshot_on_failure: bool = True
    screenshot_dir: str = "screenshots"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass
class _RunState:
    result: RunResult
    context: ContextStore
    session: Any
    fatal: bool = False
    first_error: Optional[str] = field(default=None)


class ScenarioEngine:
    """
    Executes a scenario tree step by step against one browser session

    Children run strictly in declared order. The first failing step stops
    its remaining siblings; the enclosing scenario still runs its teardown
    when its setup completed, then reports failure to its parent, which
    does the same, up to the root. A session failure is fatal: nothing
    else runs, the session is still released.
    """

    def __init__(
            self,
            session_manager: Optional[SessionManager] = None,
            trace_sink: Optional[TraceSink] = None,
            config: Optional[Union[Dict, EngineConfig]] = None,
    ):
        if isinstance(config, dict):
            config = EngineConfig.from_dict(config)
        self.config = config or EngineConfig()
        self.session_manager = session_manager or SessionManager()
        self.trace_sink = trace_sink or LoggingTraceSink()

    async def run(self, scenario: Scenario, session: Any = None) -> RunResult:
        """Run a scenario tree, opening a session unless one is given"""
        scenario.validate()

        result = RunResult(
            run_id=uuid.uuid4().hex[:8],
            scenario=scenario.name,
            base_context=scenario.base_context or scenario.name,
        )
        state = _RunState(result=result, context=ContextStore(), session=session)
        logger.info(f"[{result.run_id}] Running scenario: {scenario.name}")

        try:
            if session is not None:
                await self._run_scenario(scenario, state, result.base_context, ())
            else:
                async with self.session_manager.session() as opened:
                    state.session = opened
                    await self._run_scenario(scenario, state, result.base_context, ())

        except SessionError as e:
            logger.error(f"[{result.run_id}] Session failure: {e}")
            state.fatal = True
            state.first_error = state.first_error or str(e)

        finally:
            state.context.clear()
            result.end_time = datetime.now()

        if state.fatal:
            result.status = RunStatus.ERRORED
        elif result.failed_steps():
            result.status = RunStatus.FAILED
        result.error = state.first_error

        logger.info(
            f"[{result.run_id}] Scenario '{scenario.name}' {result.status.value} "
            f"in {(result.end_time - result.start_time).total_seconds():.1f}s"
        )
        return result

    async def _run_scenario(self, scenario: Scenario, state: _RunState, base_context: str, path: tuple) -> bool:
        base_context = scenario.base_context or base_context
        path = path + (scenario.name,)
        trace = state.result.trace
        trace.append(f"enter:{scenario.name}")

        ok = True
        set_up = True
        if scenario.setup is not None:
            outcome = await self._run_step(scenario.setup, state, base_context, path, "setup")
            set_up = ok = not outcome.failed

        if ok:
            for index, child in enumerate(scenario.children):
                if isinstance(child, Scenario):
                    child_ok = await self._run_scenario(child, state, base_context, path)
                else:
                    child_ok = not (await self._run_step(child, state, base_context, path, "step")).failed

                if not child_ok:
                    ok = False
                    self._skip(scenario.children[index + 1:], state, path)
                    break
        else:
            self._skip(scenario.children, state, path)

        if scenario.teardown is not None:
            if set_up and not state.fatal:
                outcome = await self._run_step(scenario.teardown, state, base_context, path, "teardown")
                ok = ok and not outcome.failed
            else:
                self._record_skip(scenario.teardown, state, path, "teardown")

        trace.append(f"exit:{scenario.name}:{'passed' if ok else 'failed'}")
        return ok

    async def _run_step(self, step: Step, state: _RunState, base_context: str, path: tuple, phase: str) -> StepOutcome:
        result = state.result
        outcome = await step.execute(
            state.context,
            state.session,
            sink=self.trace_sink,
            run_id=result.run_id,
            base_context=base_context,
        )
        outcome.scenario = " > ".join(path)
        outcome.phase = phase
        result.outcomes.append(outcome)
        result.trace.append(f"{phase}:{step.identifier}:{outcome.status.value}")

        if outcome.failed:
            logger.error(f"[{result.run_id}] ✗ {step.title} ({step.identifier}): {outcome.error}")
            state.first_error = state.first_error or f"{step.identifier}: {outcome.error}"
            if outcome.status == StepStatus.ERRORED:
                state.fatal = True
            elif self.config.screenshot_on_failure:
                outcome.screenshot = await self._take_screenshot(state.session, result.run_id, step.identifier)
        else:
            logger.info(f"[{result.run_id}] ✓ {step.title}")

        return outcome

    def _skip(self, nodes: Iterable[Union[Step, Scenario]], state: _RunState, path: tuple) -> None:
        for node in nodes:
            if isinstance(node, Scenario):
                for skipped in node.iter_steps():
                    self._record_skip(skipped, state, path + (node.name,), "step")
            else:
                self._record_skip(node, state, path, "step")

    @staticmethod
    def _record_skip(step: Step, state: _RunState, path: tuple, phase: str) -> None:
        state.result.outcomes.append(StepOutcome(
            identifier=step.identifier,
            title=step.title,
            status=StepStatus.SKIPPED,
            scenario=" > ".join(path),
            phase=phase,
        ))
        state.result.trace.append(f"skip:{step.identifier}")

    async def _take_screenshot(self, session: Any, run_id: str, identifier: str) -> Optional[str]:
        page = getattr(session, 'page', None)
        if page is None:
            return None

        screenshot_dir = Path(self.config.screenshot_dir)
        screenshot_dir.mkdir(parents=True, exist_ok=True)
        path = screenshot_dir / f"{run_id}_{identifier}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png"
        try:
            await page.screenshot(path=str(path))
        except Exception as e:
            logger.warning(f"Could not take screenshot for '{identifier}': {e}")
            return None
        return str(path)
