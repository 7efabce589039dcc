from typing import Iterable

from algorithms import MathTools
from exercise_catalog import BASE_EXERCISES
from models import ScoreBreakdown, SessionDraft


class ScoringEngine:
    """Turns a session draft into its XP breakdown.

    The breakdown is derived from the draft on every call and holds no
    reference to it, so callers re-score after each edit.
    """

    # each missing base item costs, and each bonus earns, one tenth
    STEPS_PER_UNIT: int = 10
    MULT_MIN: float = 0.5
    MULT_MAX: float = 1.5

    def __init__(self, base_count: int = len(BASE_EXERCISES)) -> None:
        self.base_count = base_count

    @staticmethod
    def _done_volume(entries: Iterable) -> float:
        return sum(
            MathTools.volume(e.weight, e.reps, e.sets) for e in entries if e.done
        )

    @classmethod
    def multiplier(cls, missing: int, added: int) -> float:
        """Penalty/bonus factor, clamped to [MULT_MIN, MULT_MAX]."""
        steps = cls.STEPS_PER_UNIT - missing + added
        mult = steps / cls.STEPS_PER_UNIT
        return MathTools.clamp(mult, cls.MULT_MIN, cls.MULT_MAX)

    def score(self, draft: SessionDraft) -> ScoreBreakdown:
        base_sum = self._done_volume(draft.items)
        extras_sum = self._done_volume(draft.extras)
        leg = draft.leg_ext
        leg_ext_xp = MathTools.volume(leg.weight, leg.reps, leg.sets) if leg.done else 0
        run_xp = max(0, MathTools.to_number(draft.run_meters))

        done_items = sum(1 for i in draft.items if i.done)
        missing = max(0, self.base_count - done_items)
        added = (
            sum(1 for e in draft.extras if e.done)
            + (1 if leg.done else 0)
            + (1 if run_xp > 0 else 0)
        )
        mult = self.multiplier(missing, added)
        raw = base_sum + extras_sum + leg_ext_xp + run_xp
        return ScoreBreakdown(
            base_sum=base_sum,
            extras_sum=extras_sum,
            leg_ext_xp=leg_ext_xp,
            run_xp=run_xp,
            missing=missing,
            added=added,
            mult=mult,
            raw_xp=raw,
            final_xp=MathTools.round_half_up(raw * mult),
        )
