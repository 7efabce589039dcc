import os
import sys
import json
import sqlite3
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import KeyValueRepository
from models import LedgerEntry, ProgressionState
from persistence import STORAGE_KEY, MalformedBackupError, PersistenceAdapter
from progression_store import ProgressionStore
from session_draft import DraftEditor


class PersistenceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = "test_persistence.db"
        if os.path.exists(self.db_path):
            os.remove(self.db_path)
        self.repo = KeyValueRepository(self.db_path)
        self.adapter = PersistenceAdapter(self.repo)
        self.store = ProgressionStore()
        self.base = self.store.initial("2024-05-01")

    def tearDown(self) -> None:
        if os.path.exists(self.db_path):
            os.remove(self.db_path)

    def _busy_state(self) -> ProgressionState:
        draft = DraftEditor.toggle_item(self.base.today, 0)
        state = self.store.commit(self.base.model_copy(update={"today": draft}), "2024-05-02")
        draft = DraftEditor.add_extra(state.today, now_ms=42)
        draft = DraftEditor.rename_extra(draft, 0, "Hip Thrust")
        draft = DraftEditor.update_extra_field(draft, 0, "weight", 62.5)
        draft = DraftEditor.toggle_extra(draft, 0)
        draft = DraftEditor.update_leg_ext_field(draft, "reps", 12)
        draft = DraftEditor.set_run_meters(draft, 1200.5)
        return state.model_copy(update={"today": draft})

    def test_storage_key_is_versioned(self) -> None:
        self.assertEqual(STORAGE_KEY, "xp_tracker_full_v3")
        self.assertEqual(self.adapter.key, STORAGE_KEY)

    def test_round_trip(self) -> None:
        state = self._busy_state()
        self.adapter.save(state)
        self.assertEqual(self.adapter.load(), state)
        rows = self.repo.fetch_all("SELECT key FROM kv_store;")
        self.assertEqual(rows, [(STORAGE_KEY,)])

    def test_saved_payload_schema(self) -> None:
        self.adapter.save(self._busy_state())
        data = json.loads(self.repo.get_bytes(STORAGE_KEY).decode("utf-8"))
        self.assertEqual(set(data), {"totalXP", "notes", "today"})
        self.assertEqual(data["totalXP"], 360)
        self.assertEqual(
            set(data["today"]), {"date", "items", "extras", "legExt", "runMeters"}
        )
        self.assertEqual(data["notes"][0]["xp"], 360)

    def test_load_absent(self) -> None:
        self.assertIsNone(self.adapter.load())

    def test_load_garbage(self) -> None:
        self.repo.set_bytes(STORAGE_KEY, b"{not json")
        self.assertIsNone(self.adapter.load())
        self.repo.set_bytes(STORAGE_KEY, b"\xff\xfe")
        self.assertIsNone(self.adapter.load())
        self.repo.set_bytes(STORAGE_KEY, b"[1, 2]")
        self.assertIsNone(self.adapter.load())
        self.repo.set_bytes(STORAGE_KEY, b'{"unrelated": true}')
        self.assertIsNone(self.adapter.load())

    def test_load_partial(self) -> None:
        self.repo.set_bytes(STORAGE_KEY, b'{"totalXP": 42}')
        state = self.adapter.load(self.base)
        self.assertEqual(state.total_xp, 42)
        self.assertEqual(state.notes, ())
        self.assertEqual(state.today, self.base.today)

    def test_load_ignores_bad_fields(self) -> None:
        today = self.base.today.to_json_dict()
        today["items"] = today["items"][:3]
        payload = {
            "totalXP": True,
            "notes": [{"date": "2024-01-01", "xp": 10, "memo": "ok"}],
            "today": today,
        }
        self.repo.set_bytes(STORAGE_KEY, json.dumps(payload).encode("utf-8"))
        state = self.adapter.load(self.base)
        self.assertEqual(state.total_xp, 0)
        self.assertEqual(state.notes, (LedgerEntry(date="2024-01-01", xp=10, memo="ok"),))
        self.assertEqual(state.today, self.base.today)

    def test_negative_total_round_trip(self) -> None:
        state = self.store.override_total_xp(self._busy_state(), -100)
        self.adapter.save(state)
        self.assertEqual(self.adapter.load(self.base), state)
        self.repo.set_bytes(STORAGE_KEY, b'{"totalXP": Infinity}')
        self.assertIsNone(self.adapter.load(self.base))

    def test_load_keeps_good_notes(self) -> None:
        payload = {
            "notes": [
                {"date": "2024-01-02", "xp": 1000, "memo": "good"},
                {"date": "2024-01-01", "xp": -40, "memo": "legacy"},
                "junk",
                {"date": "2023-12-31", "xp": 5},
            ]
        }
        self.repo.set_bytes(STORAGE_KEY, json.dumps(payload).encode("utf-8"))
        state = self.adapter.load(self.base)
        self.assertEqual(
            state.notes,
            (
                LedgerEntry(date="2024-01-02", xp=1000, memo="good"),
                LedgerEntry(date="2023-12-31", xp=5, memo=""),
            ),
        )

    def test_load_all_notes_bad(self) -> None:
        self.repo.set_bytes(STORAGE_KEY, b'{"notes": [{"xp": -1}]}')
        self.assertIsNone(self.adapter.load(self.base))
        self.repo.set_bytes(STORAGE_KEY, b'{"notes": []}')
        self.assertEqual(self.adapter.load(self._busy_state()).notes, ())

    def test_load_wrong_types(self) -> None:
        payload = {"totalXP": "100", "notes": {"a": 1}, "today": [], "x": 1}
        self.repo.set_bytes(STORAGE_KEY, json.dumps(payload).encode("utf-8"))
        self.assertIsNone(self.adapter.load(self.base))

    def test_load_legacy_today(self) -> None:
        today = self.base.today.to_json_dict()
        for item in today["items"]:
            item["defaultWeight"] = item["weight"]
            item["defaultReps"] = item["reps"]
            item["defaultSets"] = item["sets"]
        today["runMeters"] = None
        self.repo.set_bytes(STORAGE_KEY, json.dumps({"today": today}).encode("utf-8"))
        state = self.adapter.load(self.base)
        self.assertEqual(state.today, self.base.today)

    def test_export(self) -> None:
        state = self._busy_state()
        blob = self.adapter.export_blob(state)
        text = blob.decode("utf-8")
        self.assertIn('\n  "totalXP": 360', text)
        self.assertEqual(json.loads(text), state.to_json_dict())
        self.assertEqual(self.adapter.export_filename(state), "xp-backup-2024-05-02.json")

    def test_import_round_trip(self) -> None:
        state = self._busy_state()
        blob = self.adapter.export_blob(state)
        self.assertEqual(self.adapter.import_blob(blob, self.base), state)

    def test_import_total_only(self) -> None:
        state = self._busy_state()
        new = self.adapter.import_blob(b'{"totalXP": 500}', state)
        self.assertEqual(new.total_xp, 500)
        self.assertEqual(new.notes, state.notes)
        self.assertEqual(new.today, state.today)

    def test_import_mixed_notes(self) -> None:
        blob = json.dumps(
            {
                "totalXP": 900,
                "notes": [
                    {"date": "2024-02-02", "xp": 1000, "memo": "kept"},
                    {"date": "2024-02-01", "xp": -40, "memo": "dropped"},
                ],
            }
        ).encode("utf-8")
        new = self.adapter.import_blob(blob, self._busy_state())
        self.assertEqual(new.total_xp, 900)
        self.assertEqual(new.notes, (LedgerEntry(date="2024-02-02", xp=1000, memo="kept"),))

    def test_import_malformed(self) -> None:
        with self.assertRaises(MalformedBackupError):
            self.adapter.import_blob(b"{oops", self.base)
        with self.assertRaises(MalformedBackupError):
            self.adapter.import_blob(b'"just a string"', self.base)
        self.assertTrue(issubclass(MalformedBackupError, ValueError))


class KeyValueRepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = "test_kv.db"
        if os.path.exists(self.db_path):
            os.remove(self.db_path)
        self.repo = KeyValueRepository(self.db_path)

    def tearDown(self) -> None:
        if os.path.exists(self.db_path):
            os.remove(self.db_path)

    def test_set_get_overwrite(self) -> None:
        self.assertIsNone(self.repo.get_bytes("a"))
        self.repo.set_bytes("a", b"one")
        self.repo.set_bytes("a", "二".encode("utf-8"))
        self.assertEqual(self.repo.get_bytes("a").decode("utf-8"), "二")
        self.repo.set_bytes("b", b"two")
        rows = self.repo.fetch_all("SELECT key FROM kv_store ORDER BY key;")
        self.assertEqual(rows, [("a",), ("b",)])

    def test_upgrades_old_table(self) -> None:
        os.remove(self.db_path)
        conn = sqlite3.connect(self.db_path)
        conn.execute("CREATE TABLE kv_store (key TEXT PRIMARY KEY, value BLOB NOT NULL);")
        conn.execute("INSERT INTO kv_store (key, value) VALUES ('old', ?);", (b"kept",))
        conn.commit()
        conn.close()
        repo = KeyValueRepository(self.db_path)
        self.assertEqual(repo.get_bytes("old"), b"kept")
        cols = [r[1] for r in repo.fetch_all("PRAGMA table_info(kv_store);")]
        self.assertEqual(cols, ["key", "value", "updated_at"])

    def test_persists_across_instances(self) -> None:
        self.repo.set_bytes("k", b"v")
        self.assertEqual(KeyValueRepository(self.db_path).get_bytes("k"), b"v")


if __name__ == "__main__":
    unittest.main()
