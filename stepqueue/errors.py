"""
Pipeline Errors
===============
Exceptions for programming mistakes made while building or running a
pipeline.

Domain failures (a step returning ``Err`` or a pre-resolved failure) are
never raised; they come back as a ``Failure`` result. The classes below
cover caller bugs only.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""


class PipelineError(Exception):
    """Base class for pipeline programming errors."""


class DuplicateStepError(PipelineError, ValueError):
    """A step name was added twice to the same pipeline."""

    def __init__(self, name, pipeline):
        self.name = name
        self.pipeline = pipeline
        super().__init__(f"{name!r} is already a member of the pipeline:\n{pipeline!r}")


class InvalidStepResultError(PipelineError, TypeError):
    """A run step returned something other than ``Ok`` or ``Err``."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(
            f"expected pipeline step {name!r} to return either Ok(value) or Err(error), got: {value!r}"
        )


class StepResolutionError(PipelineError, LookupError):
    """A deferred step target or method could not be resolved."""
