"""
Tests for typed JSON accessors.
"""

from __future__ import annotations

import pytest

from xchain_client.core.exceptions import JsonShapeError
from xchain_client.core.json_shape import as_list, as_object, require, require_number


def test_as_object_and_list():
    assert as_object({"a": 1}) == {"a": 1}
    assert as_list([1]) == [1]
    with pytest.raises(JsonShapeError, match="expected object, got array"):
        as_object([1])
    with pytest.raises(JsonShapeError, match="expected array, got null"):
        as_list(None, where="accounts")


def test_require_present_null_is_returned():
    assert require({"a": None}, "a") is None


def test_require_missing_key():
    with pytest.raises(JsonShapeError, match="missing key 'b'"):
        require({"a": 1}, "b")


def test_require_number():
    assert require_number({"size": 250}, "size") == 250
    assert require_number({"fee": 0.5}, "fee") == 0.5
    with pytest.raises(JsonShapeError, match="expected number, got string"):
        require_number({"size": "250"}, "size")
    with pytest.raises(JsonShapeError, match="expected number, got boolean"):
        require_number({"size": True}, "size")
