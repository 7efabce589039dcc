import json
import math

import structlog
from pydantic import ValidationError

from db import KeyValueRepository
from models import LedgerEntry, ProgressionState, SessionDraft
from session_draft import DraftEditor

logger = structlog.get_logger(__name__)

SCHEMA_VERSION = 3
STORAGE_KEY = f"xp_tracker_full_v{SCHEMA_VERSION}"


class MalformedBackupError(ValueError):
    """A backup file could not be parsed as a progression payload."""


class PersistenceAdapter:
    """Reads and writes the whole progression state as one JSON document.

    Payloads are merged field by field: ``totalXP``, ``notes`` and ``today``
    are each checked on their own and only replace the current value when
    they have the expected shape, so older or partial documents still load.
    """

    def __init__(self, store: KeyValueRepository, key: str = STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    @staticmethod
    def payload(state: ProgressionState) -> dict:
        return state.to_json_dict()

    def save(self, state: ProgressionState) -> None:
        data = json.dumps(self.payload(state), ensure_ascii=False)
        self.store.set_bytes(self.key, data.encode("utf-8"))
        logger.debug("state_saved", key=self.key, total_xp=state.total_xp)

    def load(self, base: ProgressionState | None = None) -> ProgressionState | None:
        """Return the stored state, or ``None`` when nothing usable is stored."""
        raw = self.store.get_bytes(self.key)
        if raw is None:
            return None
        try:
            obj = self._parse(raw)
        except MalformedBackupError as e:
            logger.warning("persisted_state_malformed", key=self.key, reason=str(e))
            return None
        if base is None:
            base = ProgressionState(today=DraftEditor.create())
        state, applied = self.merge(base, obj)
        if not applied:
            logger.warning("persisted_state_malformed", key=self.key, reason="no usable fields")
            return None
        logger.info("state_loaded", key=self.key, fields=applied)
        return state

    def export_blob(self, state: ProgressionState) -> bytes:
        data = json.dumps(self.payload(state), ensure_ascii=False, indent=2)
        return data.encode("utf-8")

    @staticmethod
    def export_filename(state: ProgressionState) -> str:
        return f"xp-backup-{state.today.date}.json"

    def import_blob(self, blob: bytes, base: ProgressionState) -> ProgressionState:
        """Merge a backup into ``base``; raise MalformedBackupError if unreadable."""
        obj = self._parse(blob)
        state, applied = self.merge(base, obj)
        logger.info("backup_imported", fields=applied)
        return state

    @staticmethod
    def _parse(raw: bytes | str) -> dict:
        try:
            text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
            obj = json.loads(text)
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedBackupError(f"invalid JSON: {e}") from e
        if not isinstance(obj, dict):
            raise MalformedBackupError("backup must be a JSON object")
        return obj

    @staticmethod
    def _valid_total(value) -> bool:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return math.isfinite(value)

    @staticmethod
    def _valid_notes(notes: list) -> tuple[LedgerEntry, ...]:
        """Validate ledger entries one at a time, dropping the malformed ones."""
        kept = []
        skipped = []
        for i, raw in enumerate(notes):
            try:
                kept.append(LedgerEntry.model_validate(raw))
            except ValidationError:
                skipped.append(i)
        if skipped:
            logger.warning("notes_skipped", skipped=skipped, kept=len(kept))
        return tuple(kept)

    @classmethod
    def merge(cls, base: ProgressionState, obj: dict) -> tuple[ProgressionState, list[str]]:
        """Apply each well-shaped top-level field of ``obj`` onto ``base``."""
        update = {}
        total = obj.get("totalXP")
        if cls._valid_total(total):
            update["total_xp"] = total
        notes = obj.get("notes")
        if isinstance(notes, list):
            kept = cls._valid_notes(notes)
            if kept or not notes:
                update["notes"] = kept
        today = obj.get("today")
        if isinstance(today, dict):
            try:
                update["today"] = SessionDraft.model_validate(today)
            except ValidationError:
                logger.warning("today_rejected")
        return base.model_copy(update=update), list(update)
