from __future__ import annotations

from types import SimpleNamespace

import pytest

from stepqueue import Check, DeferredCall, DirectCall, Ok, StepResolutionError
from stepqueue.pipeline.operations import validity_flag


@pytest.mark.unit
def test_direct_call_invokes_with_changes():
    call = DirectCall(lambda changes: Ok(changes["x"] + 1))
    assert call.invoke({"x": 1}) == Ok(2)


@pytest.mark.unit
def test_deferred_call_appends_args_after_changes():
    target = SimpleNamespace(join=lambda changes, a, b: Ok((changes, a, b)))
    call = DeferredCall(target, "join", [1, 2])

    assert call.args == (1, 2)
    assert call.invoke({"x": 0}) == Ok(({"x": 0}, 1, 2))


@pytest.mark.unit
def test_deferred_call_resolves_module_path():
    call = DeferredCall("operator", "itemgetter", ())
    assert callable(call.resolve())


@pytest.mark.unit
@pytest.mark.parametrize("method", [None, 3, "not an identifier"])
def test_deferred_call_rejects_bad_method(method):
    with pytest.raises(TypeError):
        DeferredCall(SimpleNamespace(), method, ())


@pytest.mark.unit
def test_deferred_call_rejects_non_sequence_args():
    with pytest.raises(TypeError):
        DeferredCall(SimpleNamespace(), "go", "abc")


@pytest.mark.unit
def test_deferred_call_rejects_non_callable_attribute():
    call = DeferredCall(SimpleNamespace(go=1), "go", ())
    with pytest.raises(StepResolutionError):
        call.resolve()


@pytest.mark.unit
def test_validity_flag_reads_attribute_or_key():
    assert validity_flag(SimpleNamespace(valid=False)) is False
    assert validity_flag({"valid": True}) is True
    assert validity_flag(object()) is None


@pytest.mark.unit
def test_check_requires_boolean_flag():
    assert Check({"valid": True}).valid is True
    assert Check(SimpleNamespace(valid=False)).valid is False
    with pytest.raises(TypeError):
        Check({"valid": "yes"})
