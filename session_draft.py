import datetime
import time

from algorithms import MathTools
from exercise_catalog import (
    BASE_EXERCISES,
    EXTRA_DEFAULT_NAME,
    EXTRA_DEFAULT_REPS,
    EXTRA_DEFAULT_SETS,
    EXTRA_DEFAULT_WEIGHT,
)
from localization import Translator
from models import BonusLegExtension, ExtraItem, SessionDraft, SessionItem

NUMERIC_FIELDS = ("weight", "reps", "sets")


class CallerIndexError(IndexError):
    """An edit addressed an entry that does not exist in the draft."""


class DraftEditor:
    """Value-semantics edits of a session draft.

    Every operation returns a new :class:`SessionDraft`; the input draft is
    never modified.
    """

    @staticmethod
    def today() -> str:
        return datetime.date.today().isoformat()

    @classmethod
    def create(
        cls, date: str | None = None, translate: Translator | None = None
    ) -> SessionDraft:
        name = translate.gettext if translate else str
        items = tuple(
            SessionItem(
                key=t.key,
                name=name(t.name),
                weight=t.default_weight,
                reps=t.default_reps,
                sets=t.default_sets,
                done=False,
            )
            for t in BASE_EXERCISES
        )
        return SessionDraft(
            date=date or cls.today(),
            items=items,
            extras=(),
            leg_ext=BonusLegExtension(),
            run_meters=0,
        )

    @staticmethod
    def _check_index(entries: tuple, index: int, what: str) -> None:
        if not 0 <= index < len(entries):
            raise CallerIndexError(f"{what} index {index} out of range")

    @staticmethod
    def _check_field(field: str, allowed: tuple[str, ...] = NUMERIC_FIELDS) -> None:
        if field not in allowed:
            raise ValueError(f"invalid field: {field}")

    @staticmethod
    def _replace(entries: tuple, index: int, **changes) -> tuple:
        return tuple(
            e.model_copy(update=changes) if i == index else e
            for i, e in enumerate(entries)
        )

    @classmethod
    def toggle_item(cls, draft: SessionDraft, index: int) -> SessionDraft:
        cls._check_index(draft.items, index, "item")
        done = not draft.items[index].done
        return draft.model_copy(update={"items": cls._replace(draft.items, index, done=done)})

    @classmethod
    def toggle_extra(cls, draft: SessionDraft, index: int) -> SessionDraft:
        cls._check_index(draft.extras, index, "extra")
        done = not draft.extras[index].done
        return draft.model_copy(
            update={"extras": cls._replace(draft.extras, index, done=done)}
        )

    @staticmethod
    def toggle_leg_ext(draft: SessionDraft) -> SessionDraft:
        leg = draft.leg_ext.model_copy(update={"done": not draft.leg_ext.done})
        return draft.model_copy(update={"leg_ext": leg})

    @classmethod
    def update_item_field(
        cls, draft: SessionDraft, index: int, field: str, value
    ) -> SessionDraft:
        cls._check_index(draft.items, index, "item")
        cls._check_field(field)
        items = cls._replace(draft.items, index, **{field: MathTools.to_number(value)})
        return draft.model_copy(update={"items": items})

    @classmethod
    def update_extra_field(
        cls, draft: SessionDraft, index: int, field: str, value
    ) -> SessionDraft:
        cls._check_index(draft.extras, index, "extra")
        cls._check_field(field)
        extras = cls._replace(draft.extras, index, **{field: MathTools.to_number(value)})
        return draft.model_copy(update={"extras": extras})

    @classmethod
    def rename_extra(cls, draft: SessionDraft, index: int, name: str) -> SessionDraft:
        cls._check_index(draft.extras, index, "extra")
        extras = cls._replace(draft.extras, index, name=str(name))
        return draft.model_copy(update={"extras": extras})

    @classmethod
    def update_leg_ext_field(cls, draft: SessionDraft, field: str, value) -> SessionDraft:
        cls._check_field(field)
        leg = draft.leg_ext.model_copy(update={field: MathTools.to_number(value)})
        return draft.model_copy(update={"leg_ext": leg})

    @staticmethod
    def new_extra_key(draft: SessionDraft, now_ms: int | None = None) -> str:
        """Return ``ex_<ms>``, suffixed when that key is already taken."""
        stamp = now_ms if now_ms is not None else int(time.time() * 1000)
        taken = {e.key for e in draft.extras}
        key = f"ex_{stamp}"
        n = 1
        while key in taken:
            key = f"ex_{stamp}_{n}"
            n += 1
        return key

    @classmethod
    def add_extra(
        cls,
        draft: SessionDraft,
        now_ms: int | None = None,
        translate: Translator | None = None,
    ) -> SessionDraft:
        name = translate.gettext(EXTRA_DEFAULT_NAME) if translate else EXTRA_DEFAULT_NAME
        extra = ExtraItem(
            key=cls.new_extra_key(draft, now_ms),
            name=name,
            weight=EXTRA_DEFAULT_WEIGHT,
            reps=EXTRA_DEFAULT_REPS,
            sets=EXTRA_DEFAULT_SETS,
            done=False,
        )
        return draft.model_copy(update={"extras": draft.extras + (extra,)})

    @staticmethod
    def set_run_meters(draft: SessionDraft, meters) -> SessionDraft:
        return draft.model_copy(
            update={"run_meters": max(0, MathTools.to_number(meters))}
        )
