"""Inspect steps: option handling and the printed view of the changes so far.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import pprint
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Mapping, Optional

from stepqueue.config import INSPECT, get_inspect_stream
from stepqueue.utils.schema_validation import validate_inspect_options


def build_inspect_options(only: Any = None, **options: Any) -> Mapping[str, Any]:
    """Validate inspect keyword options and return a read-only copy.

    Raises:
        ValueError: On unknown option keys or badly typed values.
    """
    payload: Dict[str, Any] = dict(options)
    if only is not None:
        # Collections are frozen so the stored step cannot change later
        payload["only"] = frozenset(only) if isinstance(only, (list, set)) else only
    validate_inspect_options(payload)

    stream = payload.get("stream")
    if stream is not None and not callable(getattr(stream, "write", None)):
        raise ValueError(f"Validation failed at 'stream': {stream!r} is not writable")
    return MappingProxyType(payload)


def wrap_names(only: Any) -> List[Hashable]:
    """Normalize ``only`` to a list of names.

    Lists and sets hold several names. Anything else, tuples and strings
    included, is a single name.
    """
    if only is None:
        return []
    if isinstance(only, (list, set, frozenset)):
        return list(only)
    return [only]


def select_changes(changes: Mapping[Hashable, Any], only: Any = None) -> Dict[Hashable, Any]:
    """Copy of ``changes``, restricted to the names in ``only`` when given."""
    if only is None:
        return dict(changes)
    names = set(wrap_names(only))
    return {name: value for name, value in changes.items() if name in names}


def format_changes(changes: Mapping[Hashable, Any], options: Optional[Mapping[str, Any]] = None) -> str:
    opts = options or {}
    view = select_changes(changes, opts.get("only"))
    text = pprint.pformat(
        view,
        width=opts.get("width") or INSPECT.WIDTH,
        depth=opts.get("depth"),
        sort_dicts=False,
    )
    label = opts.get("label")
    if label:
        text = f"{label}: {text}"
    return text + "\n"


def write_inspection(changes: Mapping[Hashable, Any], options: Optional[Mapping[str, Any]] = None) -> str:
    """Write the formatted view to the configured stream and return it."""
    opts = options or {}
    text = format_changes(changes, opts)
    stream = opts.get("stream")
    if stream is None:
        stream = get_inspect_stream()
    stream.write(text)
    flush = getattr(stream, "flush", None)
    if callable(flush):
        flush()
    return text
