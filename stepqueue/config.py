"""
Centralized Configuration
=========================
Centralized configuration values and constants for stepqueue.

This module provides:
- Inspect output defaults
- Tracing settings
- Environment variable defaults

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass(frozen=True)
class InspectConfig:
    """Defaults for inspect steps."""

    # Line width handed to pprint
    WIDTH: int = int(os.getenv("STEPQUEUE_INSPECT_WIDTH", "80"))

    # "stderr" or "stdout"
    STREAM: str = os.getenv("STEPQUEUE_INSPECT_STREAM", "stderr").strip().lower()


@dataclass(frozen=True)
class TracingConfig:
    """Tracing configuration."""

    SERVICE_NAME: str = "stepqueue"
    OTLP_ENDPOINT: str = os.getenv("OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
    ENABLED: bool = os.getenv("ENABLE_TRACING", "false").lower() == "true"


# Global singleton instances
INSPECT = InspectConfig()
TRACING = TracingConfig()


def get_inspect_stream(name: Optional[str] = None) -> TextIO:
    """Resolve a stream name to the current ``sys`` stream.

    Resolution happens on every call so redirected or captured streams are
    honoured.

    Args:
        name: 'stdout' or 'stderr'; defaults to INSPECT.STREAM

    Returns:
        The matching text stream

    Raises:
        ValueError: When the name is not recognized
    """
    key = (name or INSPECT.STREAM).strip().lower()
    if key == "stdout":
        return sys.stdout
    if key == "stderr":
        return sys.stderr
    raise ValueError(f"Unknown inspect stream: {name!r} (expected 'stdout' or 'stderr')")
