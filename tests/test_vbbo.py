"""Tests for VBBO: cumulative quantity and weighted price per row."""

from consolidated_book.book.vbbo import compute_vbbo

from factories import make_level


class TestComputeVbbo:
    def test_no_market_order(self, prices):
        levels = [make_level(100.0, 10, venue="A"), make_level(99.0, 10, venue="B")]
        rows = compute_vbbo(levels, prices)

        assert [row.cumulative_quantity for row in rows] == [10, 20]
        assert rows[0].vbbo == 100.0
        assert rows[1].vbbo == 99.5

    def test_rows_after_bid_marker_are_unknown(self, prices):
        levels = [
            make_level(100.0, 10, venue="A"),
            make_level(prices.bid, 5, venue="B"),
            make_level(99.0, 10, venue="C"),
            make_level(98.0, 10, venue="D"),
        ]
        rows = compute_vbbo(levels, prices)

        assert rows[0].vbbo == 100.0
        assert rows[1].vbbo == prices.bid
        assert rows[2].vbbo == prices.unknown_bid
        assert rows[3].vbbo == prices.unknown_bid
        assert rows[3].cumulative_quantity == 35

    def test_offer_marker_first(self, prices):
        levels = [make_level(prices.offer, 5, venue="A"), make_level(101.0, 5, venue="B")]
        rows = compute_vbbo(levels, prices)

        assert rows[0].vbbo == prices.offer
        assert rows[1].vbbo == prices.unknown_offer

    def test_does_not_mutate_levels(self, prices):
        level = make_level(100.0, 10)
        compute_vbbo([level], prices)
        assert level.cumulative_quantity == 0

    def test_fresh_state_each_call(self, prices):
        compute_vbbo([make_level(prices.bid, 1)], prices)
        rows = compute_vbbo([make_level(100.0, 10)], prices)
        assert rows[0].vbbo == 100.0

    def test_empty(self, prices):
        assert compute_vbbo([], prices) == []
