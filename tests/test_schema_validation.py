from __future__ import annotations

import pytest

from stepqueue.utils.schema_validation import validate_against_schema, validate_inspect_options


@pytest.mark.unit
def test_inspect_options_schema_accepts_empty_and_full_options():
    validate_inspect_options({})
    validate_inspect_options({"only": object(), "label": "l", "width": 10, "depth": 2, "stream": object()})


@pytest.mark.unit
def test_inspect_options_schema_error_names_the_path():
    with pytest.raises(ValueError, match="Validation failed at 'width'"):
        validate_inspect_options({"width": -1})


@pytest.mark.unit
def test_unknown_schema_raises():
    with pytest.raises(FileNotFoundError):
        validate_against_schema({}, "missing.schema.json")


@pytest.mark.unit
def test_schema_path_cannot_escape_directory():
    with pytest.raises(ValueError):
        validate_against_schema({}, "../config.py")
