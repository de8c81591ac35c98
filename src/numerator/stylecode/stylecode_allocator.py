"""Pure StyleCode sequence allocation.

Format: ``{Brand.Code[0]}{Season.Name[0:4]}0{Category.Code[0:3]}{Sequence}``.
The first nine characters are fixed for a partition; everything after them is
the sequence number, zero padded to at least three digits.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..exceptions import StyleDataError
from .stylecode_models import PeerStyle, StyleCodeAllocation, StyleRecord

logger = logging.getLogger(__name__)

FIXED_PREFIX_LENGTH = 9
SEQUENCE_MIN_WIDTH = 3
SEPARATOR = "0"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def build_prefix(style: StyleRecord) -> str:
    """Return the fixed nine character prefix for ``style``."""

    brand_char = style.brand.code[:1].upper()
    season_code = style.season.name[:4].upper()
    category_code = style.category.code[:3]
    prefix = f"{brand_char}{season_code}{SEPARATOR}{category_code}"
    if len(prefix) != FIXED_PREFIX_LENGTH:
        raise StyleDataError(
            f"Cannot build StyleCode prefix for StyleId {style.style_id}: "
            f"brand={style.brand.code!r} season={style.season.name!r} "
            f"category={style.category.code!r}"
        )
    return prefix


def parse_sequence(style_code: str | None) -> int | None:
    """Extract the sequence number following the fixed prefix.

    Codes not longer than the prefix, or whose suffix does not start with an
    integer, yield ``None``. Trailing non-digits after the number are ignored.
    """

    if not style_code or len(style_code) <= FIXED_PREFIX_LENGTH:
        return None
    match = _LEADING_INT.match(style_code[FIXED_PREFIX_LENGTH:])
    if match is None:
        return None
    return int(match.group(1))


def max_sequence(peers: Iterable[PeerStyle]) -> int:
    highest = 0
    for peer in peers:
        sequence = parse_sequence(peer.style_code)
        if sequence is not None and sequence > highest:
            highest = sequence
    return highest


def allocate_style_code(
    style: StyleRecord,
    similar_styles: Iterable[PeerStyle],
    *,
    pattern_spec_number: str | None = None,
) -> StyleCodeAllocation | None:
    """Compute the next StyleCode for ``style`` within its partition.

    Returns ``None`` when the style already carries the highest sequence of the
    partition, so a retried assignment does not burn another number.
    """

    prefix = build_prefix(style)
    highest = max_sequence(similar_styles)

    current = parse_sequence(style.style_code)
    if current is not None and current == highest:
        logger.info(
            "stylecode.allocate.skipped",
            extra={"style_id": style.style_id, "style_code": style.style_code, "sequence": current},
        )
        return None

    next_sequence = highest + 1
    style_code = f"{prefix}{next_sequence:0{SEQUENCE_MIN_WIDTH}d}"
    logger.info(
        "stylecode.allocate.generated",
        extra={
            "style_id": style.style_id,
            "max_sequence": highest,
            "next_sequence": next_sequence,
            "style_code": style_code,
        },
    )
    return StyleCodeAllocation(
        style_code=style_code,
        pattern_spec_number=pattern_spec_number or style_code,
    )


__all__ = [
    "FIXED_PREFIX_LENGTH",
    "SEQUENCE_MIN_WIDTH",
    "allocate_style_code",
    "build_prefix",
    "max_sequence",
    "parse_sequence",
]
