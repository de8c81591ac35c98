from __future__ import annotations

import pytest

from numerator.exceptions import StyleDataError
from numerator.stylecode.stylecode_allocator import (
    allocate_style_code,
    build_prefix,
    max_sequence,
    parse_sequence,
)
from numerator.stylecode.stylecode_models import Reference
from tests.helpers.styles import PREFIX, make_peers, make_style


def test_prefix_uppercases_brand_and_season_but_not_category() -> None:
    style = make_style(
        brand=Reference(id=1, code="lcw", name="LC Waikiki"),
        season=Reference(id=2, code="W", name="winter 24"),
        category=Reference(id=3, code="tShirt", name="T-Shirt"),
    )

    assert build_prefix(style) == "LWINT0tSh"


def test_prefix_too_short_is_rejected() -> None:
    style = make_style(season=Reference(id=2, code="W", name="FW"))

    with pytest.raises(StyleDataError):
        build_prefix(style)


def test_prefix_with_empty_brand_is_rejected() -> None:
    style = make_style(brand=Reference(id=1, code="", name="No code"))

    with pytest.raises(StyleDataError):
        allocate_style_code(style, [])


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (f"{PREFIX}001", 1),
        (f"{PREFIX}042", 42),
        (f"{PREFIX}1234", 1234),
        (f"{PREFIX}12A", 12),
        (f"{PREFIX}ABC", None),
        (PREFIX, None),
        ("SHORT", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_sequence(code: str | None, expected: int | None) -> None:
    assert parse_sequence(code) == expected


def test_max_sequence_ignores_missing_and_malformed_codes() -> None:
    peers = make_peers(f"{PREFIX}001", None, f"{PREFIX}XYZ", "tiny", f"{PREFIX}007")

    assert max_sequence(peers) == 7
    assert max_sequence([]) == 0


def test_next_code_follows_highest_sequence() -> None:
    style = make_style()
    peers = make_peers(f"{PREFIX}001", f"{PREFIX}003", f"{PREFIX}002", None)

    allocation = allocate_style_code(style, peers)

    assert allocation is not None
    assert allocation.style_code == f"{PREFIX}004"
    assert allocation.pattern_spec_number == f"{PREFIX}004"


def test_first_style_in_partition_gets_001() -> None:
    allocation = allocate_style_code(make_style(), [])

    assert allocation is not None
    assert allocation.style_code == f"{PREFIX}001"


def test_sequence_grows_past_three_digits() -> None:
    allocation = allocate_style_code(make_style(), make_peers(f"{PREFIX}999"))

    assert allocation is not None
    assert allocation.style_code == f"{PREFIX}1000"


def test_style_holding_max_sequence_is_skipped() -> None:
    style = make_style(style_id=2001, style_code=f"{PREFIX}003")
    peers = make_peers(f"{PREFIX}001", f"{PREFIX}003", f"{PREFIX}002", start_id=2000)

    assert allocate_style_code(style, peers) is None
    assert allocate_style_code(style, peers) is None


def test_style_with_lower_sequence_gets_renumbered() -> None:
    style = make_style(style_id=2000, style_code=f"{PREFIX}001")
    peers = make_peers(f"{PREFIX}001", f"{PREFIX}003")

    allocation = allocate_style_code(style, peers)

    assert allocation is not None
    assert allocation.style_code == f"{PREFIX}004"


def test_style_with_garbage_code_in_empty_partition_gets_001() -> None:
    style = make_style(style_code="legacy")

    allocation = allocate_style_code(style, make_peers("legacy"))

    assert allocation is not None
    assert allocation.style_code == f"{PREFIX}001"


def test_pattern_spec_number_override() -> None:
    allocation = allocate_style_code(make_style(), [], pattern_spec_number="PSN-1")

    assert allocation is not None
    assert allocation.pattern_spec_number == "PSN-1"
