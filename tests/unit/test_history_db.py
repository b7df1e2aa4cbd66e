"""Unit tests for the SQLite history store."""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from photostudio.core.errors import PersistenceError
from photostudio.core.history_db import HistoryDB, HistoryRecord


def _create(db: HistoryDB, name: str = "Kim", **overrides) -> int:
    values = {
        "dealer": "마이스터모터스",
        "showroom": "강남대치",
        "image_front": "data:image/png;base64,AAA=",
        "image_side": "data:image/png;base64,BBB=",
        "image_full": "data:image/png;base64,CCC=",
        "background_type": "solid",
    }
    values.update(overrides)
    created_at = values.pop("created_at", None)
    return db.create(name, created_at=created_at, **values)


class TestSchema:
    """Tests for database initialisation."""

    def test_creates_database_file(self, temp_dir):
        db = HistoryDB(temp_dir / "nested" / "history.db")
        assert db.db_path.exists()

    def test_history_table_and_index(self, history_db):
        conn = sqlite3.connect(history_db.db_path)
        try:
            names = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type IN ('table', 'index')")
            }
        finally:
            conn.close()
        assert "history" in names
        assert "idx_history_created_at" in names

    def test_reopening_keeps_records(self, history_db):
        _create(history_db)
        reopened = HistoryDB(history_db.db_path)
        assert reopened.count() == 1

    def test_unusable_path_raises(self, temp_dir):
        """A directory where the database file should be can't be opened."""
        (temp_dir / "history.db").mkdir()
        with pytest.raises(PersistenceError):
            HistoryDB(temp_dir / "history.db")


class TestCreateAndList:
    """Tests for create() and list_records()."""

    def test_empty_store_lists_nothing(self, history_db):
        assert history_db.list_records() == []
        assert history_db.count() == 0

    def test_created_record_is_listed(self, history_db):
        record_id = _create(history_db, "Kim")

        records = history_db.list_records()
        assert len(records) == 1
        record = records[0]
        assert isinstance(record, HistoryRecord)
        assert record.id == record_id
        assert record.name == "Kim"
        assert record.dealer == "마이스터모터스"
        assert record.showroom == "강남대치"
        assert record.image_front == "data:image/png;base64,AAA="
        assert record.image_side == "data:image/png;base64,BBB="
        assert record.image_full == "data:image/png;base64,CCC="
        assert record.background_type == "solid"
        assert record.created_at

    def test_ids_increase(self, history_db):
        first = _create(history_db, "A")
        second = _create(history_db, "B")
        assert second > first

    def test_newest_first(self, history_db):
        now = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
        _create(history_db, "oldest", created_at=now - timedelta(days=2))
        _create(history_db, "newest", created_at=now)
        _create(history_db, "middle", created_at=now - timedelta(days=1))

        names = [record.name for record in history_db.list_records()]
        assert names == ["newest", "middle", "oldest"]

    def test_same_timestamp_orders_by_id(self, history_db):
        stamp = "2025-03-01 12:00:00"
        _create(history_db, "first", created_at=stamp)
        _create(history_db, "second", created_at=stamp)

        names = [record.name for record in history_db.list_records()]
        assert names == ["second", "first"]

    def test_explicit_timestamp_normalised_to_utc(self, history_db):
        kst = timezone(timedelta(hours=9))
        _create(history_db, created_at=datetime(2025, 3, 1, 9, 0, 0, tzinfo=kst))
        _create(history_db)
        assert history_db.list_records()[-1].created_at == "2025-03-01 00:00:00"

    def test_iso_string_timestamp_normalised(self, history_db):
        """ISO strings sort by time, not by their separator character."""
        _create(history_db, "morning", created_at="2025-01-01T00:00:00")
        _create(history_db, "night", created_at="2025-01-01 23:59:59")
        _create(history_db, "offset", created_at="2025-01-02T09:30:00+09:00")

        records = history_db.list_records()
        assert [record.name for record in records] == ["offset", "night", "morning"]
        assert records[0].created_at == "2025-01-02 00:30:00"
        assert records[2].created_at == "2025-01-01 00:00:00"

    def test_invalid_timestamp_string_rejected(self, history_db):
        with pytest.raises(ValueError):
            _create(history_db, created_at="yesterday")
        assert history_db.count() == 0

    def test_images_are_optional(self, history_db):
        record_id = _create(
            history_db, image_front=None, image_side=None, image_full=None, background_type=None
        )
        record = history_db.list_records()[0]
        assert record.id == record_id
        assert record.image_front is None
        assert record.background_type is None

    @pytest.mark.parametrize("missing", ["name", "dealer", "showroom"])
    def test_missing_required_field_raises(self, history_db, missing):
        values = {"name": "Kim", "dealer": "지엔비", "showroom": "대구"}
        values[missing] = None
        with pytest.raises(PersistenceError):
            history_db.create(
                values["name"], values["dealer"], values["showroom"], None, None, None, "solid"
            )
        assert history_db.count() == 0

    def test_to_dict_uses_wire_field_names(self, history_db):
        _create(history_db)
        data = history_db.list_records()[0].to_dict()
        assert set(data) == {
            "id",
            "name",
            "dealer",
            "showroom",
            "image_front",
            "image_side",
            "image_full",
            "background_type",
            "created_at",
        }


class TestDelete:
    """Tests for delete_by_id()."""

    def test_delete_existing_then_missing(self, history_db):
        record_id = _create(history_db)
        assert history_db.delete_by_id(record_id) is True
        assert history_db.delete_by_id(record_id) is False
        assert history_db.list_records() == []

    def test_delete_unknown_id(self, history_db):
        assert history_db.delete_by_id(999999) is False

    def test_delete_leaves_other_records(self, history_db):
        keep = _create(history_db, "keep")
        drop = _create(history_db, "drop")
        history_db.delete_by_id(drop)
        assert [record.id for record in history_db.list_records()] == [keep]


class TestCount:
    """Tests for count()."""

    def test_count_tracks_inserts(self, history_db):
        _create(history_db)
        _create(history_db)
        assert history_db.count() == 2
