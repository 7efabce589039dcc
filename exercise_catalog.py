from localization import Translator, translator
from models import ExerciseTemplate

BASE_EXERCISES: tuple[ExerciseTemplate, ...] = (
    ExerciseTemplate(key="chest", name="Chest Press", default_weight=36, default_reps=10, default_sets=2),
    ExerciseTemplate(key="row", name="Seated Row", default_weight=39, default_reps=10, default_sets=2),
    ExerciseTemplate(key="lat", name="Lat Pulldown", default_weight=45, default_reps=10, default_sets=2),
    ExerciseTemplate(key="leg", name="Leg Press", default_weight=100, default_reps=10, default_sets=2),
    ExerciseTemplate(key="crun", name="Abdominal Crunch", default_weight=45, default_reps=15, default_sets=2),
    ExerciseTemplate(key="curl", name="Arm Curl", default_weight=32, default_reps=10, default_sets=2),
)
BASE_KEYS: tuple[str, ...] = tuple(e.key for e in BASE_EXERCISES)

EXTRA_DEFAULT_NAME = "Extra Exercise"
EXTRA_DEFAULT_WEIGHT = 20
EXTRA_DEFAULT_REPS = 10
EXTRA_DEFAULT_SETS = 2

TITLES: tuple[str, ...] = (
    "Gym Apprentice",
    "Novice Protein Drinker",
    "Push-It Beginner",
    "Set Craftsman",
    "Heavy Weight Hopeful",
    "Routine Guardian",
    "Self-Aware Muscle",
    "Gym Resident",
    "Bicep Storyteller",
    "Captive of Soreness",
    "Messenger of the Split",
    "Seeker of Failure",
    "Incline Explorer",
    "Form Police",
    "Hypertrophy Seeker",
    "Sage of Strict Form",
    "Body-Building Revolutionary",
    "Demon of the Cut",
    "Caretaker",
    "Avatar of the Bulk",
    "High-Protein Evangelist",
    "Magician",
    "Alchemist",
    "Whey Judge",
    "Muscle Philosopher",
    "Master of Form Forging",
    "Traveler of Explosive Gains",
    "Pump Summoner",
    "Drop Set Champion",
    "Superset Dancer",
    "Bard of Range of Motion",
    "Connoisseur of the Squeeze",
    "Sage Between Sets",
    "Ruler of Muscle Fibers",
    "Forger of Dense Physiques",
    "Conqueror of the Machines",
    "Pilgrim of Training",
    "Rep Wizard",
    "Muscle Architect",
    "One Who Speaks With Weights",
    "Limit Breaker",
    "Prophet of Iron and Sweat",
    "Sage of Weights",
    "Training Titan",
    "Legend of Transformation",
    "Guardian of Strength",
    "Revolutionary of the Iron Game",
    "Evangelist of Progress Logs",
    "Overlord of Set Counts",
    "Muscle Emperor",
)


class TitleCatalog:
    """Flavor titles by level; levels past the end keep the last title."""

    def __init__(
        self, titles: tuple[str, ...] = TITLES, translate: Translator | None = None
    ) -> None:
        if not titles:
            raise ValueError("title catalog must not be empty")
        self.titles = titles
        self.translate = translate or translator

    def index_for(self, level: int) -> int:
        return min(max(level - 1, 0), len(self.titles) - 1)

    def title_for(self, level: int) -> str:
        return self.translate.gettext(self.titles[self.index_for(level)])
