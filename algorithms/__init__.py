from .math_tools import MathTools
from .level_table import LevelTable, LevelResolver, LevelInfo, DEFAULT_LEVEL_TABLE

__all__ = ["MathTools", "LevelTable", "LevelResolver", "LevelInfo", "DEFAULT_LEVEL_TABLE"]
