"""Tests for the feed replayer and command line entry point."""

import io
import json

from consolidated_book.__main__ import main
from consolidated_book.book.view import BookView
from consolidated_book.models.enums import Side
from consolidated_book.replay import FeedReplayer, PrintingDisplay


def _lines(*records) -> list[str]:
    return [record if isinstance(record, str) else json.dumps(record) for record in records]


def _update(depth, side, quantity, price, venue="XLON") -> dict:
    return {
        "op": "update",
        "depth_level": depth,
        "side": side,
        "quantity": quantity,
        "price": price,
        "venue": venue,
    }


class TestFeedReplayer:
    def test_applies_updates_and_quotes(self, book):
        out = io.StringIO()
        replayer = FeedReplayer(book, PrintingDisplay(out))
        stats = replayer.replay(_lines(
            _update(0, "Buy", 10, 100.0),
            _update(1, "Buy", 10, 99.0),
            {"op": "redisplay"},
            {"op": "vwap", "label": "V15", "quantity": 15},
        ))

        assert stats.applied == 4
        assert stats.skipped == 0
        assert stats.redisplays == 1
        assert stats.quotes[0].buy_side.price == "99.6667"
        assert "--- 2 row(s) ---" in out.getvalue()

    def test_skips_bad_records(self, book):
        replayer = FeedReplayer(book, PrintingDisplay(io.StringIO()))
        stats = replayer.replay(_lines(
            "not json {",
            {"op": "teleport"},
            _update(0, "Buy", "many", 100.0),
            {"op": "update", "side": "Buy"},
            {"op": "vwap", "label": 5, "quantity": 10},
            {"op": "redisplay", "consolidated": "false"},
            "",
            "# comment",
            _update(0, "Sell", 1, 101.0),
        ))

        assert stats.applied == 1
        assert stats.skipped == 6
        assert stats.quotes == []
        assert stats.redisplays == 0
        assert book.store.count(Side.SELL) == 1

    def test_redisplay_consolidated_flag_must_be_boolean(self, book):
        out = io.StringIO()
        replayer = FeedReplayer(book, PrintingDisplay(out))
        records = [_update(depth, "Buy", 1, 100.0 - depth) for depth in range(8)]
        stats = replayer.replay(_lines(
            *records,
            {"op": "redisplay", "consolidated": "false"},
            {"op": "redisplay", "consolidated": False},
        ))

        assert stats.skipped == 1
        assert stats.redisplays == 1
        assert out.getvalue().count("--- 8 row(s) ---") == 1
        assert "--- 5 row(s) ---" not in out.getvalue()

    def test_reset_op(self, book):
        replayer = FeedReplayer(book, PrintingDisplay(io.StringIO()))
        replayer.replay(_lines(_update(0, "Buy", 1, 1.0), {"op": "reset"}))
        assert len(book.store) == 0

    def test_finish_redisplays_in_configured_mode(self):
        book = BookView()
        out = io.StringIO()
        replayer = FeedReplayer(book, PrintingDisplay(out), consolidated=True)
        stats = replayer.replay(_lines(
            _update(0, "Buy", 5, 10.0, venue="XLON"),
            _update(0, "Buy", 3, 10.0, venue="XPAR"),
        ))
        replayer.finish(stats)

        assert stats.redisplays == 1
        assert "--- 1 row(s) ---" in out.getvalue()
        assert book.snapshot(Side.BUY)[0].level.quantity == 8


class TestMain:
    def test_replays_file_and_prints_vwap(self, tmp_path, capsys):
        feed = tmp_path / "feed.jsonl"
        feed.write_text("\n".join(_lines(
            _update(0, "Buy", 10, 100.0),
            _update(0, "Sell", 10, 101.0),
        )))

        assert main([str(feed), "--vwap", "V5=5"]) == 0

        out = capsys.readouterr().out
        assert "--- 1 row(s) ---" in out
        quote = json.loads(out.strip().splitlines()[-1])
        assert quote["label"] == "V5"
        assert quote["buy_side"]["price"] == "100.0000"

    def test_exit_code_reflects_skipped_records(self, tmp_path):
        feed = tmp_path / "feed.jsonl"
        feed.write_text('{"op": "bogus"}\n')
        assert main([str(feed)]) == 1
