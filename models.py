from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from algorithms import MathTools

Number = Union[int, float]


class FrozenModel(BaseModel):
    """Immutable model serialized with the camelCase names of the JSON payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ExerciseTemplate(FrozenModel):
    key: str
    name: str
    default_weight: Number = Field(alias="defaultWeight")
    default_reps: Number = Field(alias="defaultReps")
    default_sets: Number = Field(alias="defaultSets")


class Lift(FrozenModel):
    """Common weight/reps/sets/done fields of every scored entry."""

    weight: Number = 0
    reps: Number = 0
    sets: Number = 0
    done: bool = False

    @field_validator("weight", "reps", "sets", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        return MathTools.to_number(value)


class SessionItem(Lift):
    key: str
    name: str


class ExtraItem(Lift):
    key: str
    name: str


class BonusLegExtension(Lift):
    weight: Number = 73
    reps: Number = 10
    sets: Number = 2


class SessionDraft(FrozenModel):
    date: str
    items: tuple[SessionItem, ...]
    extras: tuple[ExtraItem, ...] = ()
    leg_ext: BonusLegExtension = Field(default_factory=BonusLegExtension, alias="legExt")
    run_meters: Number = Field(0, alias="runMeters")

    @field_validator("run_meters", mode="before")
    @classmethod
    def _coerce_run(cls, value):
        return max(0, MathTools.to_number(value))

    @model_validator(mode="after")
    def _check_keys(self) -> "SessionDraft":
        from exercise_catalog import BASE_KEYS

        if tuple(i.key for i in self.items) != BASE_KEYS:
            raise ValueError("items must follow the base exercise list")
        keys = [e.key for e in self.extras]
        if len(keys) != len(set(keys)):
            raise ValueError("extra keys must be unique")
        return self


class LedgerEntry(FrozenModel):
    date: str
    xp: int = Field(ge=0)
    memo: str = ""


class ProgressionState(FrozenModel):
    total_xp: Number = Field(0, alias="totalXP")
    notes: tuple[LedgerEntry, ...] = ()
    today: SessionDraft


class ScoreBreakdown(FrozenModel):
    base_sum: Number = Field(alias="baseSum")
    extras_sum: Number = Field(alias="extrasSum")
    leg_ext_xp: Number = Field(alias="legExtXP")
    run_xp: Number = Field(alias="runXP")
    missing: int
    added: int
    mult: float
    raw_xp: Number = Field(alias="rawXP")
    final_xp: int = Field(alias="finalXP")


class LevelStatus(FrozenModel):
    total_xp: Number = Field(alias="totalXP")
    level: int
    into: Number
    to_next: Number = Field(alias="toNext")
    remaining: Number
    progress: float
    title: str
