from typing import NamedTuple

from .math_tools import MathTools


class LevelInfo(NamedTuple):
    """Position of a cumulative XP total on the level curve."""

    level: int
    into: float
    to_next: float


class LevelTable:
    """Precomputed XP needed to advance from each level to the next."""

    DEFAULT_START: int = 1200
    DEFAULT_GROWTH: float = 1.11
    DEFAULT_LEVELS: int = 50

    def __init__(
        self,
        start: float = DEFAULT_START,
        growth: float = DEFAULT_GROWTH,
        level_count: int = DEFAULT_LEVELS,
    ) -> None:
        if level_count < 2:
            raise ValueError("level_count must be at least 2")
        if start <= 0 or growth <= 0:
            raise ValueError("start and growth must be positive")
        self.start = start
        self.growth = growth
        self.level_count = level_count
        self._needs = self._build(start, growth, level_count)

    @staticmethod
    def _build(start: float, growth: float, level_count: int) -> tuple[int, ...]:
        needs = []
        need = start
        for _ in range(level_count - 1):
            needs.append(MathTools.round_half_up(need))
            need *= growth
        return tuple(needs)

    @property
    def thresholds(self) -> tuple[int, ...]:
        return self._needs

    def __len__(self) -> int:
        return len(self._needs)

    def __getitem__(self, idx: int) -> int:
        return self._needs[idx]

    def __iter__(self):
        return iter(self._needs)


class LevelResolver:
    """Greedy mapping from cumulative XP to the current level."""

    def __init__(self, table: LevelTable | None = None) -> None:
        self.table = table if table is not None else DEFAULT_LEVEL_TABLE

    def resolve(self, total_xp: float) -> LevelInfo:
        """Return level, XP into that level and XP the level requires.

        Thresholds are consumed in order while the remainder covers them.
        Once the whole table is consumed the player is past the tracked
        range and ``into``/``to_next`` are both zero.
        """
        level = 1
        rest = total_xp
        for need in self.table:
            if rest >= need:
                rest -= need
                level += 1
            else:
                return LevelInfo(level=level, into=rest, to_next=need)
        return LevelInfo(level=len(self.table) + 2, into=0, to_next=0)


DEFAULT_LEVEL_TABLE = LevelTable()
