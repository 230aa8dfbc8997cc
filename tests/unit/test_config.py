from __future__ import annotations

import pytest

from strme import AllocationFailureError, allocation_limit, concatenate, copy, reverse
from strme.config import MAX_ALLOCATION_ENV, current_policy, policy_from_environment
from strme.errors import ConfigurationError, InvalidArgumentError


@pytest.mark.unit
def test_environment_policy_defaults_to_unlimited():
    assert policy_from_environment().max_bytes is None
    assert current_policy().permits(10**9)


@pytest.mark.unit
def test_environment_policy_is_read(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(MAX_ALLOCATION_ENV, " 4 ")
    assert policy_from_environment().max_bytes == 4
    assert copy("abc").storage == b"abc\x00"
    with pytest.raises(AllocationFailureError):
        copy("abcd")


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["lots", "-1", "1.5"])
def test_bad_environment_values(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv(MAX_ALLOCATION_ENV, raw)
    with pytest.raises(ConfigurationError) as excinfo:
        policy_from_environment()
    assert excinfo.value.kind == "Configuration"
    with pytest.raises(ConfigurationError):
        copy("x")


@pytest.mark.unit
def test_scoped_limit_overrides_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(MAX_ALLOCATION_ENV, "1")
    with allocation_limit(None):
        assert reverse("hello").content == b"olleh"
    with allocation_limit(6):
        assert concatenate("ab", "cde").content == b"abcde"
        with pytest.raises(AllocationFailureError) as excinfo:
            concatenate("abc", "def")
    assert excinfo.value.requested == 7
    assert excinfo.value.operation == "concatenate"
    assert isinstance(excinfo.value, MemoryError)


@pytest.mark.unit
def test_scoped_limit_is_restored():
    with allocation_limit(0):
        assert current_policy().max_bytes == 0
    assert current_policy().max_bytes is None


@pytest.mark.unit
def test_scoped_limit_validation():
    with pytest.raises(InvalidArgumentError):
        with allocation_limit(-1):
            pass
    with pytest.raises(InvalidArgumentError):
        with allocation_limit("10"):
            pass
