"""Unit tests for host day metadata."""

import datetime as dt
from unittest.mock import MagicMock

import pytest

from rvstay.models import DayMeta, DaySignal, day_meta_id
from rvstay.services.day_meta import DayMetaService

DAY = dt.date(2025, 7, 4)


@pytest.fixture
def mock_db() -> MagicMock:
    db = MagicMock()
    db.put_item.return_value = True
    return db


class TestDayMetaModel:
    def test_composite_id(self) -> None:
        assert day_meta_id("LST-1", "2025-07-04") == "LST-1__2025-07-04"
        assert DayMeta(listing_id="LST-1", date=DAY).meta_id == "LST-1__2025-07-04"

    def test_empty_default(self) -> None:
        meta = DayMeta(listing_id="LST-1", date=DAY)
        assert meta.is_empty
        assert not meta.blocked
        assert meta.signal is DaySignal.NONE

    def test_from_item_drops_reason_when_not_blocked(self) -> None:
        meta = DayMeta.from_item(
            {"listing_id": "LST-1", "date": "2025-07-04", "blocked": False, "block_reason": "stale"}
        )
        assert meta.block_reason == ""

    def test_from_item_unknown_signal(self) -> None:
        meta = DayMeta.from_item({"listing_id": "LST-1", "date": "2025-07-04", "signal": "festival"})
        assert meta.signal is DaySignal.NONE

    def test_signal_labels(self) -> None:
        assert DaySignal.HIGH.label == "High Demand"
        assert DaySignal.PRIVATE.label == "Private Use"
        assert DaySignal.NONE.label == "None"


class TestSaveMeta:
    def test_reason_discarded_when_not_blocked(self, mock_db: MagicMock) -> None:
        meta = DayMetaService(mock_db).save_meta("LST-1", DAY, blocked=False, reason="Family visit")

        assert meta.block_reason == ""
        _, item = mock_db.put_item.call_args.args
        assert item["block_reason"] == ""

    def test_full_record_written(self, mock_db: MagicMock) -> None:
        meta = DayMetaService(mock_db).save_meta(
            "LST-1", DAY, blocked=True, reason="  Repairs ", signal=DaySignal.MAINTENANCE, note=" fix gate "
        )

        table, item = mock_db.put_item.call_args.args
        assert table == "day-meta"
        assert item["meta_id"] == "LST-1__2025-07-04"
        assert item["date"] == "2025-07-04"
        assert item["blocked"] is True
        assert item["block_reason"] == "Repairs"
        assert item["signal"] == "maintenance"
        assert item["note"] == "fix gate"
        assert "updated_at" in item
        assert meta.updated_at is not None

    def test_long_text_stored_as_given(self, mock_db: MagicMock) -> None:
        reason = "r" * 450
        note = "n" * 2000

        meta = DayMetaService(mock_db).save_meta("LST-1", DAY, blocked=True, reason=reason, note=note)

        assert meta.block_reason == reason
        assert meta.note == note

    def test_save_is_a_full_replace(self, mock_db: MagicMock) -> None:
        service = DayMetaService(mock_db)
        service.save_meta("LST-1", DAY, blocked=True, reason="Repairs", note="first")
        service.save_meta("LST-1", DAY, blocked=False)

        _, item = mock_db.put_item.call_args.args
        assert item["note"] == ""
        assert item["block_reason"] == ""
        assert item["blocked"] is False


class TestReadMeta:
    def test_get_missing_is_default(self, mock_db: MagicMock) -> None:
        mock_db.get_item.return_value = None

        meta = DayMetaService(mock_db).get_meta("LST-1", DAY)

        assert meta.is_empty
        assert mock_db.get_item.call_args.args[1] == {"meta_id": "LST-1__2025-07-04"}

    def test_get_stored(self, mock_db: MagicMock) -> None:
        mock_db.get_item.return_value = {
            "meta_id": "LST-1__2025-07-04",
            "listing_id": "LST-1",
            "date": "2025-07-04",
            "blocked": True,
            "block_reason": "Holiday",
            "signal": "high",
        }

        meta = DayMetaService(mock_db).get_meta("LST-1", DAY)

        assert meta.blocked
        assert meta.block_reason == "Holiday"
        assert meta.signal is DaySignal.HIGH

    def test_list_month_queries_each_listing(self, mock_db: MagicMock) -> None:
        mock_db.query.side_effect = [
            [{"listing_id": "LST-1", "date": "2025-07-04", "blocked": True}],
            [{"listing_id": "LST-2", "date": "2025-07-20", "signal": "flex"}],
        ]

        result = DayMetaService(mock_db).list_month(["LST-1", "LST-2"], dt.date(2025, 7, 15))

        assert set(result) == {"LST-1__2025-07-04", "LST-2__2025-07-20"}
        assert result["LST-2__2025-07-20"].signal is DaySignal.FLEX
        assert mock_db.query.call_count == 2
        assert mock_db.query.call_args.kwargs["index_name"] == "listing_id-index"

    def test_list_month_no_listings(self, mock_db: MagicMock) -> None:
        assert DayMetaService(mock_db).list_month([], DAY) == {}
        mock_db.query.assert_not_called()
