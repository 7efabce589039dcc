import os
import sys
import unittest

from pydantic import ValidationError

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from exercise_catalog import BASE_KEYS
from localization import Translator
from models import SessionDraft
from session_draft import CallerIndexError, DraftEditor


class DraftEditorTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.draft = DraftEditor.create("2024-05-01")

    def test_create_defaults(self) -> None:
        d = self.draft
        self.assertEqual(d.date, "2024-05-01")
        self.assertEqual(tuple(i.key for i in d.items), BASE_KEYS)
        self.assertEqual(d.items[0].name, "Chest Press")
        self.assertEqual((d.items[0].weight, d.items[0].reps, d.items[0].sets), (36, 10, 2))
        self.assertEqual((d.items[4].weight, d.items[4].reps), (45, 15))
        self.assertFalse(any(i.done for i in d.items))
        self.assertEqual(d.extras, ())
        self.assertEqual((d.leg_ext.weight, d.leg_ext.reps, d.leg_ext.sets), (73, 10, 2))
        self.assertFalse(d.leg_ext.done)
        self.assertEqual(d.run_meters, 0)

    def test_create_uses_today(self) -> None:
        self.assertEqual(DraftEditor.create().date, DraftEditor.today())

    def test_create_translated(self) -> None:
        d = DraftEditor.create("2024-05-01", Translator("ja"))
        self.assertEqual(d.items[0].name, "チェストプレス")
        self.assertEqual(d.items[0].key, "chest")

    def test_toggle_returns_new_draft(self) -> None:
        toggled = DraftEditor.toggle_item(self.draft, 2)
        self.assertTrue(toggled.items[2].done)
        self.assertFalse(self.draft.items[2].done)
        self.assertFalse(DraftEditor.toggle_item(toggled, 2).items[2].done)
        self.assertEqual(DraftEditor.toggle_item(toggled, 2), self.draft)

    def test_toggle_leg_ext(self) -> None:
        toggled = DraftEditor.toggle_leg_ext(self.draft)
        self.assertTrue(toggled.leg_ext.done)
        self.assertFalse(self.draft.leg_ext.done)

    def test_out_of_range(self) -> None:
        with self.assertRaises(CallerIndexError):
            DraftEditor.toggle_item(self.draft, 6)
        with self.assertRaises(CallerIndexError):
            DraftEditor.toggle_item(self.draft, -1)
        with self.assertRaises(CallerIndexError):
            DraftEditor.toggle_extra(self.draft, 0)
        with self.assertRaises(CallerIndexError):
            DraftEditor.update_item_field(self.draft, 10, "weight", 1)
        with self.assertRaises(CallerIndexError):
            DraftEditor.update_extra_field(self.draft, 0, "weight", 1)
        with self.assertRaises(IndexError):
            DraftEditor.rename_extra(self.draft, 0, "x")

    def test_update_fields(self) -> None:
        d = DraftEditor.update_item_field(self.draft, 0, "weight", 40)
        d = DraftEditor.update_item_field(d, 0, "reps", "12")
        d = DraftEditor.update_item_field(d, 0, "sets", -1)
        self.assertEqual((d.items[0].weight, d.items[0].reps, d.items[0].sets), (40, 12, -1))
        self.assertEqual(self.draft.items[0].weight, 36)

    def test_update_coerces_garbage_to_zero(self) -> None:
        d = DraftEditor.update_item_field(self.draft, 1, "weight", "heavy")
        self.assertEqual(d.items[1].weight, 0)

    def test_update_invalid_field(self) -> None:
        with self.assertRaises(ValueError):
            DraftEditor.update_item_field(self.draft, 0, "done", 1)
        with self.assertRaises(ValueError):
            DraftEditor.update_leg_ext_field(self.draft, "name", 1)

    def test_leg_ext_fields(self) -> None:
        d = DraftEditor.update_leg_ext_field(self.draft, "weight", 80)
        self.assertEqual(d.leg_ext.weight, 80)
        self.assertEqual(self.draft.leg_ext.weight, 73)

    def test_add_extra(self) -> None:
        d = DraftEditor.add_extra(self.draft, now_ms=1700000000000)
        self.assertEqual(len(d.extras), 1)
        ex = d.extras[0]
        self.assertEqual(ex.key, "ex_1700000000000")
        self.assertEqual(ex.name, "Extra Exercise")
        self.assertEqual((ex.weight, ex.reps, ex.sets, ex.done), (20, 10, 2, False))
        self.assertEqual(self.draft.extras, ())

    def test_extra_keys_unique(self) -> None:
        d = self.draft
        for _ in range(3):
            d = DraftEditor.add_extra(d, now_ms=5)
        keys = [e.key for e in d.extras]
        self.assertEqual(keys, ["ex_5", "ex_5_1", "ex_5_2"])

    def test_edit_extra(self) -> None:
        d = DraftEditor.add_extra(self.draft, now_ms=1)
        d = DraftEditor.add_extra(d, now_ms=2)
        d = DraftEditor.update_extra_field(d, 1, "weight", 30)
        d = DraftEditor.rename_extra(d, 1, "Cable Fly")
        d = DraftEditor.toggle_extra(d, 1)
        self.assertEqual(d.extras[1].weight, 30)
        self.assertEqual(d.extras[1].name, "Cable Fly")
        self.assertTrue(d.extras[1].done)
        self.assertFalse(d.extras[0].done)
        self.assertEqual([e.key for e in d.extras], ["ex_1", "ex_2"])

    def test_run_meters(self) -> None:
        self.assertEqual(DraftEditor.set_run_meters(self.draft, 2500).run_meters, 2500)
        self.assertEqual(DraftEditor.set_run_meters(self.draft, -5).run_meters, 0)
        self.assertEqual(DraftEditor.set_run_meters(self.draft, "nope").run_meters, 0)

    def test_draft_is_frozen(self) -> None:
        with self.assertRaises(ValidationError):
            self.draft.date = "2000-01-01"

    def test_draft_requires_base_items(self) -> None:
        data = self.draft.to_json_dict()
        data["items"] = data["items"][:5]
        with self.assertRaises(ValidationError):
            SessionDraft.model_validate(data)
        data = self.draft.to_json_dict()
        data["items"][0], data["items"][1] = data["items"][1], data["items"][0]
        with self.assertRaises(ValidationError):
            SessionDraft.model_validate(data)

    def test_draft_rejects_duplicate_extra_keys(self) -> None:
        d = DraftEditor.add_extra(self.draft, now_ms=1)
        data = d.to_json_dict()
        data["extras"].append(dict(data["extras"][0]))
        with self.assertRaises(ValidationError):
            SessionDraft.model_validate(data)


if __name__ == "__main__":
    unittest.main()
