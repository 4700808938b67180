"""Pipeline builder.

A ``Pipeline`` is an immutable, ordered list of named steps. Every add
method returns a new pipeline and leaves the receiver untouched, so a
partially built pipeline can be shared and extended in different ways.

Example:
    >>> from stepqueue import new, Ok
    >>> result = (
    ...     new()
    ...     .put("params", {"id": 1})
    ...     .run("read", lambda changes: Ok(changes["params"]["id"]))
    ...     .exec()
    ... )
    >>> result.changes
    {'params': {'id': 1}, 'read': 1}

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Hashable, List, Optional, Sequence, Tuple

from stepqueue.errors import DuplicateStepError
from stepqueue.pipeline.inspection import build_inspect_options
from stepqueue.pipeline.operations import (
    Check,
    DeferredCall,
    DirectCall,
    Fail,
    Inspect,
    Operation,
    Put,
    Run,
    Step,
)
from stepqueue.pipeline.results import PipelineResult


@dataclass(frozen=True, repr=False)
class Pipeline:
    """Ordered, uniquely named steps to execute as a unit."""

    steps: Tuple[Step, ...] = ()
    names: FrozenSet[Hashable] = frozenset()

    def put(self, name: Hashable, value: Any) -> "Pipeline":
        """Store ``value`` under ``name`` in the changes so far."""
        return self._add(name, Put(value))

    def run(
        self,
        name: Hashable,
        target: Any,
        method: Optional[str] = None,
        args: Sequence[Any] = (),
    ) -> "Pipeline":
        """Add a computation over the changes so far.

        Two forms are accepted:

        - ``run(name, func)``: ``func(changes)`` is called.
        - ``run(name, target, method, args)``: ``getattr(target, method)(changes, *args)``
          is called, with ``target`` resolved when the step runs. A string
          target is imported as a module path.

        The callable must return ``Ok(value)`` or ``Err(error)``.

        Raises:
            TypeError: When ``func`` is not callable, ``method`` is not an
                identifier string or ``args`` is not a list or tuple.
        """
        if method is None:
            if args:
                raise TypeError("run step args require a method name")
            return self._add(name, Run(DirectCall(target)))
        return self._add(name, Run(DeferredCall(target, method, args)))

    def inspect(self, only: Any = None, **options: Any) -> "Pipeline":
        """Print the changes so far when execution reaches this point.

        Inspect steps take no name and store no result, so any number of them
        can be added.

        Args:
            only: A name or collection of names to restrict the view to
            **options: label, width, depth, stream

        Raises:
            ValueError: On unknown or badly typed options.
        """
        opts = build_inspect_options(only, **options)
        return Pipeline(steps=self.steps + (Step(None, Inspect(opts)),), names=self.names)

    def fail(self, name: Hashable, error: Any) -> "Pipeline":
        """Add a step already known to fail with ``error``.

        The pipeline reports ``Failure(name, error, {})`` without running any step.
        """
        return self._add(name, Fail(error))

    def check(self, name: Hashable, candidate: Any) -> "Pipeline":
        """Add a changeset-like value with a boolean ``valid`` flag.

        An invalid candidate fails the pipeline before any step runs, with the
        candidate as the error. A valid one is stored under ``name``.
        """
        return self._add(name, Check(candidate))

    def to_list(self) -> List[Step]:
        """Steps as ``(name, operation)`` pairs in the order they were added.

        Always go through this accessor rather than the dataclass fields.
        """
        return list(self.steps)

    def exec(self) -> PipelineResult:
        from stepqueue.pipeline.executor import execute

        return execute(self)

    def _add(self, name: Hashable, operation: Operation) -> "Pipeline":
        # None marks inspect steps in to_list()
        if name is None:
            raise ValueError("step name cannot be None")
        if name in self.names:
            raise DuplicateStepError(name, self)
        return Pipeline(steps=self.steps + (Step(name, operation),), names=self.names | {name})

    def __bool__(self) -> bool:
        # An empty pipeline is still a valid pipeline
        return True

    def __len__(self) -> int:
        return len(self.steps)

    def __repr__(self) -> str:
        inner = ", ".join(f"({name!r}, {operation!r})" for name, operation in self.steps)
        return f"Pipeline([{inner}])"


def new() -> Pipeline:
    """Return an empty pipeline."""
    return Pipeline()
