from algorithms import LevelResolver, MathTools
from exercise_catalog import TitleCatalog
from localization import MEMO_TEMPLATE, Translator, translator
from models import LedgerEntry, LevelStatus, ProgressionState, ScoreBreakdown
from scoring import ScoringEngine
from session_draft import DraftEditor


class ProgressionStore:
    """State transitions of the cumulative progression.

    Methods take a :class:`ProgressionState` and return a new one. Saving is
    left to the caller.
    """

    def __init__(
        self,
        scoring: ScoringEngine | None = None,
        resolver: LevelResolver | None = None,
        titles: TitleCatalog | None = None,
        translate: Translator | None = None,
    ) -> None:
        self.translate = translate or translator
        self.scoring = scoring or ScoringEngine()
        self.resolver = resolver or LevelResolver()
        self.titles = titles or TitleCatalog(translate=self.translate)

    def initial(self, date: str | None = None) -> ProgressionState:
        return ProgressionState(
            total_xp=0, notes=(), today=DraftEditor.create(date, self.translate)
        )

    def breakdown(self, state: ProgressionState) -> ScoreBreakdown:
        return self.scoring.score(state.today)

    def memo(self, calc: ScoreBreakdown) -> str:
        template = self.translate.gettext(MEMO_TEMPLATE)
        return template.format(
            mult=f"{calc.mult:.2f}",
            missing=calc.missing,
            added=calc.added,
            run=MathTools.pretty(calc.run_xp),
        )

    def commit(self, state: ProgressionState, date: str | None = None) -> ProgressionState:
        calc = self.breakdown(state)
        awarded = max(0, calc.final_xp)
        entry = LedgerEntry(date=state.today.date, xp=awarded, memo=self.memo(calc))
        return ProgressionState(
            total_xp=state.total_xp + awarded,
            notes=(entry,) + state.notes,
            today=DraftEditor.create(date, self.translate),
        )

    def reset_today(self, state: ProgressionState, date: str | None = None) -> ProgressionState:
        return state.model_copy(update={"today": DraftEditor.create(date, self.translate)})

    def hard_reset(self, state: ProgressionState, date: str | None = None) -> ProgressionState:
        return self.initial(date)

    @staticmethod
    def override_total_xp(state: ProgressionState, value) -> ProgressionState:
        return state.model_copy(update={"total_xp": MathTools.to_number(value)})

    def status(self, state: ProgressionState) -> LevelStatus:
        info = self.resolver.resolve(state.total_xp)
        if info.to_next == 0:
            progress = 100.0
        else:
            progress = MathTools.clamp(info.into / info.to_next * 100, 0.0, 100.0)
        return LevelStatus(
            total_xp=state.total_xp,
            level=info.level,
            into=info.into,
            to_next=info.to_next,
            remaining=max(0, info.to_next - info.into),
            progress=progress,
            title=self.titles.title_for(info.level),
        )
