"""Operation variants stored in a pipeline.

A step is a ``(name, operation)`` pair. The operation is one of:

- ``Put``: inject a literal value
- ``Run``: call a ``DirectCall`` or ``DeferredCall`` with the changes so far
- ``Inspect``: print the changes so far, store nothing
- ``Fail``: a failure known before execution starts
- ``Check``: a changeset-like value whose validity flag is checked before
  execution starts

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType, ModuleType
from typing import Any, Callable, ClassVar, Dict, Hashable, NamedTuple, Optional, Tuple, Union

from stepqueue.errors import StepResolutionError


@dataclass(frozen=True)
class DirectCall:
    """A unary callable invoked as ``func(changes)``."""

    func: Callable[[Dict[Hashable, Any]], Any]

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise TypeError(f"run step expects a callable, got: {self.func!r}")

    def invoke(self, changes: Dict[Hashable, Any]) -> Any:
        return self.func(changes)


@dataclass(frozen=True)
class DeferredCall:
    """A late-bound ``target.method(changes, *args)`` reference.

    ``target`` may be a module, class or any object. A string target is
    treated as a dotted module path and imported when the step runs, so the
    module does not have to be loaded while the pipeline is being built.
    """

    target: Union[ModuleType, type, str, Any]
    method: str
    args: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.method, str) or not self.method.isidentifier():
            raise TypeError(f"run step method must be an identifier string, got: {self.method!r}")
        if not isinstance(self.args, (list, tuple)):
            raise TypeError(f"run step args must be a list or tuple, got: {self.args!r}")
        # Normalize to a tuple so the operation stays immutable
        object.__setattr__(self, "args", tuple(self.args))

    def resolve(self) -> Callable[..., Any]:
        target = self.target
        if isinstance(target, str):
            try:
                target = importlib.import_module(target)
            except ImportError as e:
                raise StepResolutionError(f"Failed to import run step target {self.target!r}: {e}") from e

        func = getattr(target, self.method, None)
        if func is None or not callable(func):
            raise StepResolutionError(f"{self.target!r} has no callable attribute {self.method!r}")
        return func

    def invoke(self, changes: Dict[Hashable, Any]) -> Any:
        return self.resolve()(changes, *self.args)


StepCallable = Union[DirectCall, DeferredCall]


@dataclass(frozen=True)
class Put:
    value: Any
    tag: ClassVar[str] = "put"


@dataclass(frozen=True)
class Run:
    call: StepCallable
    tag: ClassVar[str] = "run"


@dataclass(frozen=True)
class Inspect:
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    tag: ClassVar[str] = "inspect"


@dataclass(frozen=True)
class Fail:
    error: Any
    tag: ClassVar[str] = "fail"


@dataclass(frozen=True)
class Check:
    candidate: Any
    tag: ClassVar[str] = "check"

    def __post_init__(self) -> None:
        if not isinstance(validity_flag(self.candidate), bool):
            raise TypeError(
                f"check step expects a value with a boolean 'valid' flag, got: {self.candidate!r}"
            )

    @property
    def valid(self) -> bool:
        return bool(validity_flag(self.candidate))


Operation = Union[Put, Run, Inspect, Fail, Check]


class Step(NamedTuple):
    name: Optional[Hashable]
    operation: Operation


def validity_flag(candidate: Any) -> Any:
    """Return the ``valid`` flag of a changeset-like value, or None."""
    if isinstance(candidate, Mapping):
        return candidate.get("valid")
    return getattr(candidate, "valid", None)
