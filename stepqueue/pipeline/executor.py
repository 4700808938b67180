"""Pipeline execution.

``execute`` folds the steps of a pipeline, in the order they were added, into
a changes map and stops at the first failing step.

Two failure channels exist and report the same ``Failure`` shape:

1. Pre-validation: before anything runs, the whole step list is scanned for
   ``Fail`` steps and invalid ``Check`` candidates. The first one found is
   reported with empty changes, wherever it sits in the list.
2. Mid-execution: a run step returns ``Err``. The changes reported are the
   results of the steps before it; later steps never run.

A run step returning anything other than ``Ok``/``Err`` is a caller bug and
raises ``InvalidStepResultError``. Exceptions raised inside a step propagate
unchanged. Nothing is rolled back.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional

from loguru import logger

from stepqueue.errors import InvalidStepResultError, StepResolutionError
from stepqueue.pipeline.inspection import write_inspection
from stepqueue.pipeline.operations import Check, Fail, Inspect, Operation, Put, Run, Step
from stepqueue.pipeline.results import Err, Failure, Ok, PipelineResult, StepOutcome, Success
from stepqueue.tracing import get_tracer, init_tracing, safe_set_span_attributes

if TYPE_CHECKING:
    from stepqueue.pipeline.builder import Pipeline


def find_invalid_step(steps: List[Step]) -> Optional[Failure]:
    """Return the pre-validation failure for the first invalid step, if any."""
    for name, operation in steps:
        if isinstance(operation, Fail):
            return Failure(name=name, error=operation.error, changes={})
        if isinstance(operation, Check) and not operation.valid:
            return Failure(name=name, error=operation.candidate, changes={})
    return None


def apply_operation(name: Hashable, operation: Operation, changes: Dict[Hashable, Any]) -> StepOutcome:
    """Run one non-inspect step against the changes so far."""
    if isinstance(operation, Put):
        return Ok(operation.value)

    if isinstance(operation, Check):
        return Ok(operation.candidate)

    if isinstance(operation, Run):
        try:
            outcome = operation.call.invoke(dict(changes))
        except StepResolutionError as e:
            logger.error(f"Pipeline step {name!r} could not be resolved: {e}")
            raise

        if isinstance(outcome, (Ok, Err)):
            return outcome

        logger.error(f"Pipeline step {name!r} returned an unsupported value: {outcome!r}")
        raise InvalidStepResultError(name, outcome)

    # Fail steps are caught by pre-validation and never reach the fold.
    raise TypeError(f"Unsupported operation for step {name!r}: {operation!r}")


def execute(pipeline: "Pipeline") -> PipelineResult:
    """Execute every step of ``pipeline`` in declaration order.

    Args:
        pipeline: The pipeline to run. It is not modified and can be
            executed again.

    Returns:
        ``Success(changes)`` when every step succeeded, otherwise
        ``Failure(name, error, changes_before_that_step)``.

    Raises:
        InvalidStepResultError: A run step returned neither Ok nor Err.
        StepResolutionError: A deferred run target could not be resolved.
    """
    init_tracing()
    tracer = get_tracer("stepqueue.pipeline")
    steps = pipeline.to_list()
    # Inspect steps are observation points, not executed steps
    total = sum(1 for _, operation in steps if not isinstance(operation, Inspect))

    with tracer.start_as_current_span("pipeline.exec") as exec_span:
        safe_set_span_attributes(exec_span, {"pipeline.steps": total})

        invalid = find_invalid_step(steps)
        if invalid is not None:
            logger.info(f"Pipeline rejected before execution at step {invalid.name!r}")
            safe_set_span_attributes(
                exec_span,
                {"pipeline.success": False, "pipeline.failed_step": invalid.name, "pipeline.prevalidation": True},
            )
            return invalid

        changes: Dict[Hashable, Any] = {}
        index = 0

        for name, operation in steps:
            if isinstance(operation, Inspect):
                write_inspection(changes, operation.options)
                continue

            index += 1
            with tracer.start_as_current_span("pipeline.step") as step_span:
                safe_set_span_attributes(
                    step_span,
                    {"step.name": name, "step.tag": operation.tag, "step.index": index},
                )
                outcome = apply_operation(name, operation, changes)
                safe_set_span_attributes(step_span, {"step.success": isinstance(outcome, Ok)})

            if isinstance(outcome, Err):
                logger.info(f"Pipeline halted at step {name!r} ({index}/{total})")
                safe_set_span_attributes(exec_span, {"pipeline.success": False, "pipeline.failed_step": name})
                return Failure(name=name, error=outcome.error, changes=changes)

            changes[name] = outcome.value
            logger.debug(f"Pipeline step {name!r} applied ({index}/{total})")

        safe_set_span_attributes(exec_span, {"pipeline.success": True})
        return Success(changes=changes)
