"""Step outcomes and execution results.

``Ok``/``Err`` are what a run step hands back to the engine. ``Success``/
``Failure`` are what ``execute`` hands back to the caller.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Union


@dataclass(frozen=True)
class Ok:
    """Successful step outcome carrying the value stored under the step name."""

    value: Any = None


@dataclass(frozen=True)
class Err:
    """Failed step outcome carrying the error value reported to the caller."""

    error: Any = None


StepOutcome = Union[Ok, Err]


@dataclass(frozen=True)
class Success:
    """Every step ran; ``changes`` maps each step name to its result."""

    changes: Dict[Hashable, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "changes": dict(self.changes),
        }


@dataclass(frozen=True)
class Failure:
    """Execution halted at step ``name``.

    ``changes`` holds the results accumulated before that step ran. It is
    always empty when the failure was found by pre-validation.
    """

    name: Hashable
    error: Any
    changes: Dict[Hashable, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "name": self.name,
            "error": self.error,
            "changes": dict(self.changes),
        }


PipelineResult = Union[Success, Failure]
