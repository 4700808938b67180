"""
stepqueue
=========
Build a named, ordered list of operations and execute it as a unit.

    >>> from stepqueue import new, Ok, Err
    >>> new().put("init", 1).run("double", lambda c: Ok(c["init"] * 2)).exec()
    Success(changes={'init': 1, 'double': 2})

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from stepqueue.errors import (
    DuplicateStepError,
    InvalidStepResultError,
    PipelineError,
    StepResolutionError,
)
from stepqueue.pipeline.builder import Pipeline, new
from stepqueue.pipeline.executor import execute
from stepqueue.pipeline.operations import (
    Check,
    DeferredCall,
    DirectCall,
    Fail,
    Inspect,
    Put,
    Run,
    Step,
)
from stepqueue.pipeline.results import Err, Failure, Ok, Success

__version__ = "0.1.0"

__all__ = [
    # Building
    "Pipeline",
    "new",
    "Step",
    "Put",
    "Run",
    "Inspect",
    "Fail",
    "Check",
    "DirectCall",
    "DeferredCall",
    # Execution
    "execute",
    "Ok",
    "Err",
    "Success",
    "Failure",
    # Exceptions
    "PipelineError",
    "DuplicateStepError",
    "InvalidStepResultError",
    "StepResolutionError",
]
