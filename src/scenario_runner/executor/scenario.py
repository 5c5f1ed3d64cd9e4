import inspect
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Iterator, List, Optional, Sequence, Union
import logging

from ..core.base import StepOutcome, StepStatus
from ..core.exceptions import ScenarioDefinitionError, SessionError, StepAssertionError
from .assertions import Matcher
from .context_store import ContextStore
from .ordering import same_order, sort_values
from .tracing import TraceSink

logger = logging.getLogger(__name__)

# action(context, session) -> value, sync or async
Action = Callable[[ContextStore, Any], Union[Any, Awaitable[Any]]]


@dataclass
class Step:
    """Represents one reportable action plus its check"""
    identifier: str
    title: str
    action: Action
    check: Optional[Matcher] = None
    # Overrides the enclosing scenario's base context when tagging
    base_context: str = ""

    async def execute(
            self,
            context: ContextStore,
            session: Any,
            sink: Optional[TraceSink] = None,
            run_id: str = "",
            base_context: str = "",
    ) -> StepOutcome:
        """Tag the step, run its action, then its check"""
        if sink is not None:
            sink.add_context_item(run_id, self.identifier, self.base_context or base_context)

        outcome = StepOutcome(
            identifier=self.identifier,
            title=self.title,
            status=StepStatus.PASSED,
        )

        try:
            value = self.action(context, session)
            if inspect.isawaitable(value):
                value = await value
            outcome.value = value

            if self.check is not None:
                self.check(value)

        except StepAssertionError as e:
            outcome.status = StepStatus.FAILED
            outcome.error = str(e)
            outcome.error_kind = type(e).__name__
            outcome.actual = e.actual
            outcome.expected = e.expected

        except SessionError as e:
            outcome.status = StepStatus.ERRORED
            outcome.error = str(e)
            outcome.error_kind = type(e).__name__

        except Exception as e:
            logger.debug(f"Step '{self.identifier}' raised", exc_info=True)
            outcome.status = StepStatus.FAILED
            outcome.error = str(e) or repr(e)
            outcome.error_kind = type(e).__name__

        finally:
            outcome.end_time = datetime.now()

        return outcome


@dataclass
class Scenario:
    """Ordered group of steps and sub-scenarios with optional setup/teardown"""
    name: str
    children: List[Union[Step, "Scenario"]] = field(default_factory=list)
    setup: Optional[Step] = None
    teardown: Optional[Step] = None
    base_context: Optional[str] = None

    def add(self, *nodes: Union[Step, "Scenario"]) -> "Scenario":
        for node in nodes:
            if not isinstance(node, (Step, Scenario)):
                raise ScenarioDefinitionError(
                    f"Scenario '{self.name}' child must be a Step or Scenario, got {type(node).__name__}"
                )
            self.children.append(node)
        return self

    def iter_steps(self) -> Iterator[Step]:
        """All steps of the tree in declaration order (setup, children, teardown)"""
        if self.setup is not None:
            yield self.setup
        for child in self.children:
            if isinstance(child, Scenario):
                yield from child.iter_steps()
            else:
                yield child
        if self.teardown is not None:
            yield self.teardown

    def validate(self) -> None:
        """Reject malformed children and identifiers used twice in one tree"""
        seen = set()
        self._validate_children()
        for step in self.iter_steps():
            if not step.identifier:
                raise ScenarioDefinitionError(f"Step '{step.title}' has no identifier")
            if step.identifier in seen:
                raise ScenarioDefinitionError(f"Duplicate step identifier: {step.identifier}")
            seen.add(step.identifier)

    def _validate_children(self) -> None:
        for child in self.children:
            if isinstance(child, Scenario):
                child._validate_children()
            elif not isinstance(child, Step):
                raise ScenarioDefinitionError(
                    f"Scenario '{self.name}' child must be a Step or Scenario, got {type(child).__name__}"
                )


def step(identifier: str, title: str, check: Optional[Matcher] = None):
    """Decorator turning an action function into a Step"""

    def decorator(func: Action) -> Step:
        return Step(identifier=identifier, title=title, action=func, check=check)

    return decorator


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortCase:
    """One row of a table-driven sort check"""
    identifier: str
    label: str
    attribute: str
    sort_by: str
    direction: SortDirection = SortDirection.ASC

    def expected(self, before: Sequence[str], ordering: Callable[[Iterable[str]], List[str]] = sort_values) -> List[str]:
        ordered = list(ordering(before))
        if self.direction == SortDirection.DESC:
            ordered.reverse()
        return ordered


# read_values(session, attribute) -> list of displayed values
ReadValues = Callable[[Any, str], Awaitable[List[str]]]
# apply_sort(session, sort_by) -> None
ApplySort = Callable[[Any, str], Awaitable[Any]]


def sort_steps(
        cases: Iterable[SortCase],
        read_values: ReadValues,
        apply_sort: ApplySort,
        ordering: Callable[[Iterable[str]], List[str]] = sort_values,
        count_key: Optional[str] = None,
) -> List[Step]:
    """
    Expand sort cases into one step each

    Every step reads the attribute across all listed entities, triggers
    the sort, reads the attribute again and compares it with the first
    read passed through ``ordering`` (reversed for descending cases).
    Values tied on the sort key may come back in any order.

    An empty read fails the step. With ``count_key`` the number of values
    read must also match the count stored under that key in the context.
    """
    return [_sort_step(case, read_values, apply_sort, ordering, count_key) for case in cases]


def _sort_step(case: SortCase, read_values: ReadValues, apply_sort: ApplySort, ordering, count_key) -> Step:
    async def action(context: ContextStore, session: Any) -> List[str]:
        before = list(await read_values(session, case.attribute))
        if not before:
            raise StepAssertionError(f"No '{case.attribute}' values listed before sorting by '{case.label}'")
        if count_key is not None and len(before) != context.get(count_key):
            raise StepAssertionError(
                f"Listed {len(before)} values of '{case.attribute}', expected {context.get(count_key)}",
                actual=len(before),
                expected=context.get(count_key),
            )

        await apply_sort(session, case.sort_by)
        after = list(await read_values(session, case.attribute))

        expected = case.expected(before, ordering)
        if not same_order(after, expected):
            raise StepAssertionError(
                f"List not sorted by '{case.label}': expected {expected!r}, got {after!r}",
                actual=after,
                expected=expected,
            )
        return after

    return Step(
        identifier=case.identifier,
        title=f"should sort by '{case.label}'",
        action=action,
    )
