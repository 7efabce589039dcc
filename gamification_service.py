import structlog

from algorithms import LevelResolver, LevelTable
from db import KeyValueRepository
from exercise_catalog import TitleCatalog
from localization import Translator
from models import LedgerEntry, LevelStatus, ProgressionState, ScoreBreakdown, SessionDraft
from persistence import PersistenceAdapter
from progression_store import ProgressionStore
from session_draft import DraftEditor
from settings_schema import SettingsSchema, load_settings

logger = structlog.get_logger(__name__)


class GamificationService:
    """Owns the live progression state and saves it after every change."""

    def __init__(
        self,
        persistence: PersistenceAdapter,
        store: ProgressionStore | None = None,
    ) -> None:
        self.persistence = persistence
        self.store = store or ProgressionStore()
        self.state = self._load()

    @classmethod
    def from_settings(
        cls, db_path: str = "xp_tracker.db", settings: SettingsSchema | None = None
    ) -> "GamificationService":
        settings = settings or SettingsSchema()
        translate = Translator(settings.language)
        table = LevelTable(settings.level_start, settings.level_growth, settings.level_count)
        store = ProgressionStore(
            resolver=LevelResolver(table),
            titles=TitleCatalog(translate=translate),
            translate=translate,
        )
        adapter = PersistenceAdapter(KeyValueRepository(db_path), settings.storage_key)
        return cls(adapter, store)

    @classmethod
    def from_paths(
        cls, db_path: str = "xp_tracker.db", yaml_path: str = "settings.yaml"
    ) -> "GamificationService":
        return cls.from_settings(db_path, load_settings(yaml_path))

    def _load(self) -> ProgressionState:
        fresh = self.store.initial()
        loaded = self.persistence.load(fresh)
        if loaded is None:
            logger.info("state_defaulted", key=self.persistence.key)
            return fresh
        return loaded

    def _apply(self, state: ProgressionState) -> ProgressionState:
        self.state = state
        self.persistence.save(state)
        return state

    def _edit(self, draft: SessionDraft) -> SessionDraft:
        self._apply(self.state.model_copy(update={"today": draft}))
        return draft

    @property
    def today(self) -> SessionDraft:
        return self.state.today

    @property
    def notes(self) -> tuple[LedgerEntry, ...]:
        return self.state.notes

    def breakdown(self) -> ScoreBreakdown:
        return self.store.breakdown(self.state)

    def status(self) -> LevelStatus:
        return self.store.status(self.state)

    def toggle_item(self, index: int) -> SessionDraft:
        return self._edit(DraftEditor.toggle_item(self.today, index))

    def toggle_extra(self, index: int) -> SessionDraft:
        return self._edit(DraftEditor.toggle_extra(self.today, index))

    def toggle_leg_ext(self) -> SessionDraft:
        return self._edit(DraftEditor.toggle_leg_ext(self.today))

    def update_item(self, index: int, field: str, value) -> SessionDraft:
        return self._edit(DraftEditor.update_item_field(self.today, index, field, value))

    def update_extra(self, index: int, field: str, value) -> SessionDraft:
        return self._edit(DraftEditor.update_extra_field(self.today, index, field, value))

    def rename_extra(self, index: int, name: str) -> SessionDraft:
        return self._edit(DraftEditor.rename_extra(self.today, index, name))

    def update_leg_ext(self, field: str, value) -> SessionDraft:
        return self._edit(DraftEditor.update_leg_ext_field(self.today, field, value))

    def add_extra(self) -> SessionDraft:
        return self._edit(DraftEditor.add_extra(self.today, translate=self.store.translate))

    def set_run_meters(self, meters) -> SessionDraft:
        return self._edit(DraftEditor.set_run_meters(self.today, meters))

    def commit(self) -> LedgerEntry:
        state = self._apply(self.store.commit(self.state))
        entry = state.notes[0]
        logger.info("session_committed", date=entry.date, xp=entry.xp, total_xp=state.total_xp)
        return entry

    def reset_today(self) -> SessionDraft:
        state = self._apply(self.store.reset_today(self.state))
        logger.info("today_reset", date=state.today.date)
        return state.today

    def hard_reset(self, confirmed: bool) -> ProgressionState:
        if not confirmed:
            raise ValueError("hard reset requires confirmation")
        logger.warning("hard_reset", previous_total_xp=self.state.total_xp, notes=len(self.notes))
        return self._apply(self.store.hard_reset(self.state))

    def override_total_xp(self, value) -> ProgressionState:
        state = self._apply(self.store.override_total_xp(self.state, value))
        logger.info("total_xp_overridden", total_xp=state.total_xp)
        return state

    def export_backup(self) -> tuple[str, bytes]:
        return (
            self.persistence.export_filename(self.state),
            self.persistence.export_blob(self.state),
        )

    def import_backup(self, blob: bytes) -> ProgressionState:
        try:
            state = self.persistence.import_blob(blob, self.state)
        except ValueError:
            logger.warning("backup_rejected", size=len(blob))
            raise
        return self._apply(state)
