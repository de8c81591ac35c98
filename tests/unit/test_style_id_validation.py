from __future__ import annotations

import pytest

from numerator.exceptions import InvalidRequestError, ensure_style_id


@pytest.mark.parametrize(("value", "expected"), [(7, 7), ("42", 42), (" 10468 ", 10468)])
def test_accepts_positive_integers(value: object, expected: int) -> None:
    assert ensure_style_id(value) == expected


@pytest.mark.parametrize(
    "value", [None, True, 0, -1, "", "abc", "1.5", "²", "١٢", 3.0]
)
def test_rejects_everything_else(value: object) -> None:
    with pytest.raises(InvalidRequestError):
        ensure_style_id(value)
