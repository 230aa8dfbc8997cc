from __future__ import annotations

import pytest

from strme import (
    CString,
    InvalidArgumentError,
    NullInputError,
    concatenate,
    concatenate_bounded,
    reverse,
    swap,
)


@pytest.mark.unit
def test_concatenate():
    result = concatenate("foo", "bar")
    assert result.storage == b"foobar\x00"
    assert concatenate("", "").storage == b"\x00"
    assert concatenate(b"ab\x00zz", "cd").storage == b"abcd\x00"


@pytest.mark.unit
def test_concatenate_rejects_none():
    with pytest.raises(NullInputError):
        concatenate(None, "x")
    with pytest.raises(NullInputError):
        concatenate("x", None)


@pytest.mark.unit
def test_concatenate_bounded_appends_prefix_of_first_argument():
    assert concatenate_bounded("world", "hello ", 3).storage == b"hello wor\x00"
    assert concatenate_bounded("wo", "hello ", 10).storage == b"hello wo\x00"
    assert concatenate_bounded("world", "hello", 0).storage == b"hello\x00"


@pytest.mark.unit
def test_concatenate_bounded_leaves_inputs_untouched():
    head = CString.from_content("abc")
    tail = bytearray(b"xyz")
    result = concatenate_bounded(tail, head, 2)
    assert result.content == b"abcxy"
    assert head.storage == b"abc\x00"
    assert tail == bytearray(b"xyz")


@pytest.mark.unit
def test_concatenate_bounded_errors():
    with pytest.raises(InvalidArgumentError):
        concatenate_bounded("a", "b", -2)
    with pytest.raises(NullInputError):
        concatenate_bounded(None, "b", 1)
    with pytest.raises(NullInputError):
        concatenate_bounded("a", None, 1)


@pytest.mark.unit
def test_swap_exchanges_contents():
    a = CString.from_content("first")
    b = CString.from_content("second")
    a, b = swap(a, b)
    assert a.content == b"second"
    assert b.content == b"first"


@pytest.mark.unit
def test_swap_returns_fresh_values_and_rejects_none():
    original = CString.from_content("x")
    first, second = swap(original, "y")
    assert second == original
    assert second is not original
    with pytest.raises(NullInputError):
        swap(None, "y")
    with pytest.raises(NullInputError):
        swap("x", None)


@pytest.mark.unit
def test_reverse():
    assert reverse("hello").storage == b"olleh\x00"
    assert reverse("").storage == b"\x00"
    assert reverse("a").storage == b"a\x00"


@pytest.mark.unit
def test_reverse_does_not_modify_input():
    source = bytearray(b"abc")
    reverse(source)
    assert source == bytearray(b"abc")


@pytest.mark.unit
def test_reverse_rejects_none():
    with pytest.raises(NullInputError):
        reverse(None)


@pytest.mark.unit
def test_concatenate_bounded_reports_null_before_bad_size():
    with pytest.raises(NullInputError):
        concatenate_bounded(None, "b", -1)
    with pytest.raises(NullInputError):
        concatenate_bounded("a", None, -1)
