"""Display ordering for each side of the book.

Buy: market orders priced at zero first, then highest price first.
Sell: lowest price first; a zero-priced sell sorts first without special casing.
Ties fall through to ``compare_common``: larger quantity first, then the
preferred venue, then venue code.
"""

from collections.abc import Iterable
from functools import cmp_to_key, partial

from consolidated_book.models.enums import Side
from consolidated_book.models.level import Level

DEFAULT_PREFERRED_VENUE = "XEQT"


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def compare_common(
    lhs: Level,
    rhs: Level,
    preferred_venue: str = DEFAULT_PREFERRED_VENUE,
    legacy_venue_tiebreak: bool = False,
) -> int:
    """Tie-break for levels at the same price.

    With ``legacy_venue_tiebreak`` the venue step returns 1 when lhs sorts
    lexicographically before rhs and 0 otherwise, matching the historical
    display. That result is not antisymmetric, so the stable sort leaves
    such venues in storage order.
    """
    result = rhs.quantity - lhs.quantity
    if result != 0:
        return _sign(result)

    if lhs.venue == preferred_venue:
        return -1
    if rhs.venue == preferred_venue:
        return 1

    if legacy_venue_tiebreak:
        return int(lhs.venue < rhs.venue)
    return (lhs.venue > rhs.venue) - (lhs.venue < rhs.venue)


def compare_buy(lhs: Level, rhs: Level, **common) -> int:
    # The BID marker is a very high price so it already sorts first here.
    if lhs.price == 0 and rhs.price == 0:
        return compare_common(lhs, rhs, **common)
    if lhs.price == 0:
        return -1
    if rhs.price == 0:
        return 1

    result = _sign(rhs.price - lhs.price)
    if result == 0:
        result = compare_common(lhs, rhs, **common)
    return result


def compare_sell(lhs: Level, rhs: Level, **common) -> int:
    result = _sign(lhs.price - rhs.price)
    if result == 0:
        result = compare_common(lhs, rhs, **common)
    return result


def sort_side(
    levels: Iterable[Level],
    side: Side,
    preferred_venue: str = DEFAULT_PREFERRED_VENUE,
    legacy_venue_tiebreak: bool = False,
) -> list[Level]:
    """Return the levels of one side in display order (best first)."""
    compare = compare_buy if side == Side.BUY else compare_sell
    key = cmp_to_key(
        partial(
            compare,
            preferred_venue=preferred_venue,
            legacy_venue_tiebreak=legacy_venue_tiebreak,
        )
    )
    return sorted(levels, key=key)
